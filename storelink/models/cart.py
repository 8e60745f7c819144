"""
Shopping cart and wishlist models
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .product import utcnow


class ShoppingCartType(str, Enum):
    SHOPPING_CART = "ShoppingCart"
    WISHLIST = "Wishlist"


class CartAttribute(BaseModel):
    key: str
    value: Optional[str] = None


class ShoppingCartItem(BaseModel):
    """Line in a cart or wishlist"""

    id: str
    customer_id: str
    store_id: Optional[str] = None
    product_id: str
    cart_type: ShoppingCartType = Field(default=ShoppingCartType.SHOPPING_CART)
    quantity: int = Field(default=1, ge=1)
    warehouse_id: Optional[str] = None
    attributes: List[CartAttribute] = Field(default_factory=list)
    entered_price: Optional[float] = None
    is_free_shipping: bool = Field(default=False)
    is_gift_voucher: bool = Field(default=False)
    is_ship_enabled: bool = Field(default=True)
    created_on_utc: datetime = Field(default_factory=utcnow)
    updated_on_utc: Optional[datetime] = None


class CartTotals(BaseModel):
    """Totals computed for a cart"""

    sub_total: float = 0
    sub_total_discount: float = 0
    shipping: Optional[float] = None
    is_free_shipping: bool = False
    tax: float = 0
    total: Optional[float] = None


class PaymentMethod(BaseModel):
    system_name: str
    friendly_name: str
    description: Optional[str] = None
    additional_fee: float = 0
    logo_url: Optional[str] = None


class ShippingOption(BaseModel):
    name: str
    description: Optional[str] = None
    rate: float = 0
    shipping_rate_provider_system_name: Optional[str] = None


class ShippingOptionsResult(BaseModel):
    shipping_options: List[ShippingOption] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class PlaceOrderResult(BaseModel):
    order_id: Optional[str] = None
    order_number: Optional[int] = None
    order_total: float = 0
    errors: List[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors and self.order_id is not None


def requires_shipping(items: List[ShoppingCartItem]) -> bool:
    return any(item.is_ship_enabled for item in items)


def attributes_dict(items: List[CartAttribute]) -> Dict[str, Optional[str]]:
    return {a.key: a.value for a in items}
