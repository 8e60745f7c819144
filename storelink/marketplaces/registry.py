"""
Publisher registry
"""

from typing import Dict, List, Type

from pydantic_settings import BaseSettings

from storelink.marketplaces.base import BasePublisher, MarketplaceType
from storelink.storage.base import BaseStore


class PublisherRegistry:
    """Publisher registry for marketplaces"""

    def __init__(self):
        self._publishers: Dict[str, Type[BasePublisher]] = {}
        self._register_defaults()

    def _register_defaults(self):
        """Register default publishers"""
        from storelink.marketplaces.ricardo import RicardoPublisher

        self._publishers[MarketplaceType.RICARDO.value] = RicardoPublisher

    def register(self, name: str, publisher_class: Type[BasePublisher]):
        """Register a publisher"""
        self._publishers[name] = publisher_class

    def get_publisher(self, name: str, store: BaseStore, config: BaseSettings) -> BasePublisher:
        """Get publisher instance"""
        if name not in self._publishers:
            raise ValueError(f"Unknown publisher: {name}")
        publisher_class = self._publishers[name]
        return publisher_class(store=store, config=config)

    def list_publishers(self) -> List[str]:
        """List registered publishers"""
        return list(self._publishers.keys())


# Global instance
publisher_registry = PublisherRegistry()
