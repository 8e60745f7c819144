"""
Marketplace listing records
Links a store product to an article published on an external marketplace
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .product import utcnow


class MarketplaceListing(BaseModel):
    """Published article on a marketplace"""

    marketplace: str = Field(..., description="Marketplace name (ricardo, ...)")
    product_id: str
    article_id: int
    title: Optional[str] = None
    price: float = Field(default=0)
    quantity: int = Field(default=0)
    active: bool = Field(default=True)
    created_on_utc: datetime = Field(default_factory=utcnow)
    updated_on_utc: Optional[datetime] = None
