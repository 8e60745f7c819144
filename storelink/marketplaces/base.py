"""
Marketplace publisher interface
"""

import abc
from enum import Enum
from typing import Any, Optional

from pydantic_settings import BaseSettings

from storelink.storage.base import BaseStore


class MarketplaceType(str, Enum):
    RICARDO = "ricardo"


class BasePublisher(abc.ABC):
    """
    Base class of every marketplace publisher.
    Publishes store products as articles and keeps their stock in sync.
    """

    def __init__(self, marketplace_type: MarketplaceType, store: BaseStore, config: BaseSettings):
        self.marketplace_type = marketplace_type
        self.store = store
        self.config = config

    @abc.abstractmethod
    async def publish_product(self, product_id: str, category_id: Optional[int] = None) -> Any:
        """
        Publish a store product as a marketplace article.
        Returns a result object carrying the article ID or the error.
        """
        pass

    @abc.abstractmethod
    async def update_stock(self, article_id: int, quantity: int) -> bool:
        """
        Update the available quantity of a published article.
        """
        pass

    @abc.abstractmethod
    async def close_article(self, article_id: int) -> bool:
        """
        Close a published article.
        """
        pass

    async def close(self):
        """Release network resources"""
        pass
