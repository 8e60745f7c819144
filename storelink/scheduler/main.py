"""
Main scheduler
"""

from typing import Optional

from storelink.config import Settings
from storelink.marketplaces.ricardo import RicardoPublisher
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

from .base import BaseScheduler
from .jobs import RicardoStockSyncJob

logger = get_logger(__name__)


class MainScheduler(BaseScheduler):
    """Scheduler with the application jobs"""

    def __init__(self, store: BaseStore, settings: Settings):
        super().__init__(timezone=settings.scheduler_timezone)
        self.store = store
        self.settings = settings
        self.publisher: Optional[RicardoPublisher] = None
        self._setup_jobs()

    def _setup_jobs(self):
        """Job setup"""
        ricardo = self.settings.ricardo

        if ricardo.enable_stock_sync:
            if not ricardo.has_credentials():
                logger.warning("ricardo.ch stock sync enabled without credentials, job not scheduled")
            else:
                self.publisher = RicardoPublisher(self.store, ricardo)
                self.add_job(
                    RicardoStockSyncJob(self.store, self.publisher),
                    "interval",
                    minutes=ricardo.stock_sync_interval_minutes,
                )

        logger.info("Scheduler configured", jobs=len(self.jobs))

    async def close(self):
        """Stop jobs and release clients"""
        self.shutdown()
        if self.publisher is not None:
            await self.publisher.close()
