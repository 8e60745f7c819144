"""
Scheduler base classes
Abstract job and the APScheduler wrapper that runs them
"""

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from apscheduler.job import Job
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from storelink.monitoring import get_logger, global_metrics
from storelink.storage.base import BaseStore

logger = get_logger(__name__)

MAX_HISTORY = 100


class JobStatus(str, Enum):
    """Job status"""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class JobResult:
    """Job execution result"""

    def __init__(
        self,
        job_id: str,
        status: JobStatus,
        started_at: datetime,
        completed_at: Optional[datetime] = None,
        error: Optional[str] = None,
        statistics: Optional[Dict[str, Any]] = None,
    ):
        self.job_id = job_id
        self.status = status
        self.started_at = started_at
        self.completed_at = completed_at
        self.error = error
        self.statistics = statistics or {}
        self.duration = (completed_at - started_at).total_seconds() if completed_at else None

    @property
    def success(self) -> bool:
        return self.status == JobStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job_id,
            "status": self.status.value,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration": self.duration,
            "error": self.error,
            "statistics": self.statistics,
        }


class BaseJob(ABC):
    """Base job"""

    def __init__(self, job_id: str, name: str, store: BaseStore, timeout: int = 3600):
        self.job_id = job_id
        self.name = name
        self.store = store
        self.timeout = timeout
        self.is_running = False
        self._lock = asyncio.Lock()

    @abstractmethod
    async def execute(self) -> Dict[str, Any]:
        """Do the work, returns statistics"""
        pass

    async def run(self) -> JobResult:
        """Run once with a timeout, skipping when already running"""
        async with self._lock:
            if self.is_running:
                logger.warning("Job is already running", job=self.name)
                return JobResult(
                    job_id=self.job_id,
                    status=JobStatus.CANCELLED,
                    started_at=datetime.now(),
                    error="Job is already running",
                )
            self.is_running = True

        started_at = datetime.now()
        try:
            logger.info("Job started", job=self.name)
            statistics = await asyncio.wait_for(self.execute(), timeout=self.timeout)
            logger.info("Job completed", job=self.name, **statistics)
            return JobResult(
                job_id=self.job_id,
                status=JobStatus.COMPLETED,
                started_at=started_at,
                completed_at=datetime.now(),
                statistics=statistics,
            )

        except asyncio.TimeoutError:
            logger.error("Job timed out", job=self.name, timeout=self.timeout)
            error = f"Job timed out ({self.timeout}s)"

        except Exception as e:
            logger.exception("Job failed", job=self.name)
            error = str(e)

        finally:
            self.is_running = False

        return JobResult(
            job_id=self.job_id,
            status=JobStatus.FAILED,
            started_at=started_at,
            completed_at=datetime.now(),
            error=error,
        )


class BaseScheduler:
    """APScheduler wrapper"""

    def __init__(self, timezone: str = "UTC"):
        self.scheduler = AsyncIOScheduler(
            timezone=timezone,
            job_defaults={"coalesce": True, "max_instances": 1, "misfire_grace_time": 300},
        )
        self.jobs: Dict[str, BaseJob] = {}
        self.job_history: List[JobResult] = []
        self.is_running = False

    def add_job(self, job: BaseJob, trigger: str, **trigger_args) -> Job:
        """
        Schedule a job

        Args:
            job: Job to run
            trigger: only "interval" is supported
            **trigger_args: Trigger arguments (minutes=..., hours=...)

        Raises:
            ValueError: Unsupported trigger
        """
        if trigger != "interval":
            raise ValueError(f"Unsupported trigger: {trigger}")
        trigger_obj = IntervalTrigger(**trigger_args)

        scheduled_job = self.scheduler.add_job(
            func=self._run_job,
            trigger=trigger_obj,
            args=[job],
            id=job.job_id,
            name=job.name,
            replace_existing=True,
        )

        self.jobs[job.job_id] = job
        logger.info("Job scheduled", job=job.name, trigger=str(trigger_obj))

        return scheduled_job

    async def _run_job(self, job: BaseJob) -> JobResult:
        """Job handler"""
        global_metrics.increment(f"scheduler.{job.job_id}.started")
        result = await job.run()

        if result.success:
            global_metrics.increment(f"scheduler.{job.job_id}.success")
        else:
            global_metrics.increment(f"scheduler.{job.job_id}.failed")

        self.job_history.append(result)
        del self.job_history[:-MAX_HISTORY]
        return result

    async def run_now(self, job_id: str) -> Optional[JobResult]:
        """Run a registered job immediately"""
        job = self.jobs.get(job_id)
        if job is None:
            logger.error("Job not found", job_id=job_id)
            return None
        return await self._run_job(job)

    def start(self):
        """Start the scheduler"""
        if not self.is_running:
            self.scheduler.start()
            self.is_running = True
            logger.info("Scheduler started", jobs=len(self.jobs))

    def shutdown(self, wait: bool = False):
        """Stop the scheduler"""
        if self.is_running:
            self.scheduler.shutdown(wait=wait)
            self.is_running = False
            logger.info("Scheduler stopped")

    def get_job_info(self, job_id: str) -> Optional[Dict[str, Any]]:
        job = self.scheduler.get_job(job_id)
        if not job:
            return None

        next_run = getattr(job, "next_run_time", None)
        return {
            "id": job.id,
            "name": job.name,
            "next_run_time": next_run.isoformat() if next_run else None,
            "trigger": str(job.trigger),
        }

    def get_schedule_summary(self) -> Dict[str, Any]:
        """Schedule summary for the health endpoint"""
        return {
            "is_running": self.is_running,
            "total_jobs": len(self.jobs),
            "jobs": [info for info in (self.get_job_info(job_id) for job_id in self.jobs) if info],
            "last_results": [result.to_dict() for result in self.job_history[-5:]],
        }
