"""
Marketplace publishers
"""

from .base import BasePublisher, MarketplaceType
from .registry import PublisherRegistry, publisher_registry

__all__ = [
    "BasePublisher",
    "MarketplaceType",
    "PublisherRegistry",
    "publisher_registry",
]
