"""
ricardo.ch integration
"""

from .client import RicardoApiClient, RicardoApiError
from .publisher import PublishProductResult, RicardoPublisher

__all__ = [
    "RicardoApiClient",
    "RicardoApiError",
    "RicardoPublisher",
    "PublishProductResult",
]
