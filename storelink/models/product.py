"""
Catalog data models
Products and categories as provided by the store backend
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ManageInventoryMethod(int, Enum):
    """How stock is tracked for a product"""

    DONT_MANAGE_STOCK = 0
    MANAGE_STOCK = 1
    MANAGE_STOCK_BY_ATTRIBUTES = 2
    MANAGE_STOCK_BY_BUNDLE_PRODUCTS = 3


class ProductSorting(str, Enum):
    """Product sort orders"""

    POSITION = "position"
    NAME_ASC = "name_asc"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    CREATED_ON = "created_on"
    BEST_SELLERS = "best_sellers"
    ON_SALE = "on_sale"

    @classmethod
    def from_code(cls, code: int) -> "ProductSorting":
        """Numeric codes used by the admin search endpoint"""
        return {
            1: cls.NAME_ASC,
            2: cls.PRICE_ASC,
            3: cls.CREATED_ON,
            4: cls.BEST_SELLERS,
            5: cls.ON_SALE,
        }.get(code, cls.POSITION)

    @classmethod
    def from_name(cls, name: Optional[str]) -> "ProductSorting":
        """String values used by the mobile catalog"""
        return {
            "name": cls.NAME_ASC,
            "price": cls.PRICE_ASC,
            "price_desc": cls.PRICE_DESC,
            "newest": cls.CREATED_ON,
        }.get((name or "").lower(), cls.POSITION)


class ProductPicture(BaseModel):
    """Picture attached to a product"""

    picture_id: str = Field(..., description="Picture ID")
    display_order: int = Field(default=0)


class Product(BaseModel):
    """Store product"""

    id: str = Field(..., description="Product ID")
    name: Optional[str] = Field(None, description="Product name")
    short_description: Optional[str] = None
    full_description: Optional[str] = None
    sku: Optional[str] = None
    gtin: Optional[str] = None
    brand_id: Optional[str] = None
    vendor_id: Optional[str] = None

    # Pricing
    price: float = Field(default=0)
    old_price: float = Field(default=0)
    catalog_price: float = Field(default=0)

    # Inventory
    stock_quantity: int = Field(default=0)
    manage_inventory_method: ManageInventoryMethod = Field(default=ManageInventoryMethod.MANAGE_STOCK)

    # Visibility
    published: bool = Field(default=True)
    show_on_home_page: bool = Field(default=False)
    best_seller: bool = Field(default=False)
    mark_as_new: bool = Field(default=False)
    featured: bool = Field(default=False)
    visible_individually: bool = Field(default=True)
    display_order: int = Field(default=0)
    requires_shipping: bool = Field(default=True)

    # Relations
    category_ids: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    pictures: List[ProductPicture] = Field(default_factory=list)

    # Reviews
    approved_rating_sum: int = Field(default=0)
    approved_total_reviews: int = Field(default=0)

    created_on_utc: datetime = Field(default_factory=utcnow)
    updated_on_utc: Optional[datetime] = None

    @property
    def in_stock(self) -> bool:
        return (
            self.stock_quantity > 0
            or self.manage_inventory_method == ManageInventoryMethod.DONT_MANAGE_STOCK
        )

    @property
    def rating(self) -> Optional[float]:
        if self.approved_rating_sum > 0 and self.approved_total_reviews > 0:
            return self.approved_rating_sum / self.approved_total_reviews
        return None

    def ordered_pictures(self) -> List[ProductPicture]:
        return sorted(self.pictures, key=lambda p: p.display_order)


class Category(BaseModel):
    """Catalog category"""

    id: str
    name: str
    description: Optional[str] = None
    parent_category_id: Optional[str] = Field(default="")
    picture_id: Optional[str] = None
    published: bool = Field(default=True)
    show_on_home_page: bool = Field(default=False)
    include_in_menu: bool = Field(default=True)
    display_order: int = Field(default=0)
    created_on_utc: datetime = Field(default_factory=utcnow)
    updated_on_utc: Optional[datetime] = None

    @field_validator("parent_category_id", mode="before")
    @classmethod
    def normalize_parent(cls, v):
        return v or ""


class ProductSearchCriteria(BaseModel):
    """Filters for a product search"""

    keywords: Optional[str] = None
    search_descriptions: bool = False
    search_sku: bool = True
    sku_contains: bool = False
    search_product_tags: bool = False
    category_ids: Optional[List[str]] = None
    brand_id: Optional[str] = None
    vendor_id: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    show_on_home_page: Optional[bool] = None
    featured_products: Optional[bool] = None
    marked_as_new_only: bool = False
    visible_individually_only: bool = False
    show_hidden: bool = False
    order_by: ProductSorting = ProductSorting.POSITION
    page_index: int = Field(default=0, ge=0)
    page_size: int = Field(default=50, ge=1)
