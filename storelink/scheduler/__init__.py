"""
Scheduler
Periodic background jobs
"""

from .base import BaseJob, BaseScheduler, JobResult, JobStatus
from .main import MainScheduler

__all__ = ["BaseJob", "BaseScheduler", "JobStatus", "JobResult", "MainScheduler"]
