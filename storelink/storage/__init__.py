"""Storage package"""

from storelink.storage.base import (
    BaseStore,
    CartStore,
    CatalogStore,
    CheckoutStore,
    CustomerStore,
    MarketplaceListingStore,
    OrderStore,
)
from storelink.storage.demo import seed_demo_data
from storelink.storage.memory import MemoryStore

__all__ = [
    "BaseStore",
    "CartStore",
    "CatalogStore",
    "CheckoutStore",
    "CustomerStore",
    "MarketplaceListingStore",
    "MemoryStore",
    "OrderStore",
    "seed_demo_data",
]
