"""
Scheduled jobs
"""

from storelink.scheduler.jobs.stock_sync_job import RicardoStockSyncJob

__all__ = ["RicardoStockSyncJob"]
