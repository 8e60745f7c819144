"""
ricardo.ch stock sync job
Pushes the current store stock to every active ricardo.ch article
"""

from typing import Any, Dict

from storelink.marketplaces.base import MarketplaceType
from storelink.marketplaces.ricardo import RicardoPublisher
from storelink.monitoring import get_logger
from storelink.scheduler.base import BaseJob
from storelink.storage.base import BaseStore

logger = get_logger(__name__)


class RicardoStockSyncJob(BaseJob):
    """Stock sync for ricardo.ch articles"""

    JOB_ID = "ricardo_stock_sync"

    def __init__(self, store: BaseStore, publisher: RicardoPublisher):
        super().__init__(self.JOB_ID, "ricardo.ch stock sync", store)
        self.publisher = publisher

    async def execute(self) -> Dict[str, Any]:
        stats = {"checked": 0, "updated": 0, "failed": 0, "skipped": 0}

        listings = await self.store.list_marketplace_listings(MarketplaceType.RICARDO.value, active_only=True)
        for listing in listings:
            stats["checked"] += 1

            product = await self.store.get_product(listing.product_id)
            if product is None:
                logger.warning(
                    "Listed product no longer exists",
                    product_id=listing.product_id,
                    article_id=listing.article_id,
                )
                stats["skipped"] += 1
                continue

            quantity = max(product.stock_quantity, 0)
            if quantity == listing.quantity:
                continue

            if await self.publisher.update_stock(listing.article_id, quantity):
                stats["updated"] += 1
            else:
                stats["failed"] += 1

        return stats
