"""
Order data models
Orders, payments, shipments and merchandise returns
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .product import utcnow


class OrderStatus(int, Enum):
    """Order status (numeric codes of the store backend)"""

    PENDING = 10
    PROCESSING = 20
    COMPLETE = 30
    CANCELLED = 40


class PaymentStatus(str, Enum):
    """Payment status"""

    PENDING = "Pending"
    AUTHORIZED = "Authorized"
    PAID = "Paid"
    PARTIALLY_REFUNDED = "PartiallyRefunded"
    REFUNDED = "Refunded"
    VOIDED = "Voided"


class ShippingStatus(str, Enum):
    """Shipping status"""

    SHIPPING_NOT_REQUIRED = "ShippingNotRequired"
    PENDING = "Pending"
    PREPARED_TO_SHIP = "PreparedToShip"
    PARTIALLY_SHIPPED = "PartiallyShipped"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


class MerchandiseReturnStatus(str, Enum):
    """Merchandise return status"""

    PENDING = "Pending"
    RECEIVED = "Received"
    RETURN_AUTHORIZED = "ReturnAuthorized"
    ITEMS_REPAIRED = "ItemsRepaired"
    ITEMS_REFUNDED = "ItemsRefunded"
    REQUEST_REJECTED = "RequestRejected"
    CANCELLED = "Cancelled"


class OrderItem(BaseModel):
    """Ordered product line"""

    product_id: str
    quantity: int = Field(default=1)
    unit_price: float = Field(default=0)


class Order(BaseModel):
    """Customer order"""

    id: str
    order_guid: str = Field(default_factory=lambda: str(uuid.uuid4()))
    order_number: int
    customer_id: str
    customer_email: Optional[str] = None
    order_total: float = Field(default=0)
    order_status: OrderStatus = Field(default=OrderStatus.PENDING)
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)
    shipping_status: ShippingStatus = Field(default=ShippingStatus.PENDING)
    payment_method_system_name: Optional[str] = None
    shipping_method: Optional[str] = None
    order_comment: Optional[str] = None
    order_items: List[OrderItem] = Field(default_factory=list)
    customer_currency_code: str = Field(default="CHF")
    created_on_utc: datetime = Field(default_factory=utcnow)
    updated_on_utc: Optional[datetime] = None
    paid_date_utc: Optional[datetime] = None


class PaymentTransaction(BaseModel):
    """Payment transaction linked to an order by its GUID"""

    id: str
    order_guid: str
    order_id: Optional[str] = None
    amount: float = Field(default=0)
    status: PaymentStatus = Field(default=PaymentStatus.PENDING)
    authorization_transaction_id: Optional[str] = None
    created_on_utc: datetime = Field(default_factory=utcnow)


class Shipment(BaseModel):
    """Order shipment"""

    id: str
    shipment_number: int
    order_id: str
    tracking_number: Optional[str] = None
    total_weight: Optional[float] = None
    shipped_date_utc: Optional[datetime] = None
    delivery_date_utc: Optional[datetime] = None
    admin_comment: Optional[str] = None
    created_on_utc: datetime = Field(default_factory=utcnow)


class MerchandiseReturn(BaseModel):
    """Merchandise return request"""

    id: str
    return_number: int
    order_id: str
    customer_id: str
    customer_comments: Optional[str] = None
    staff_notes: Optional[str] = None
    status: MerchandiseReturnStatus = Field(default=MerchandiseReturnStatus.PENDING)
    pickup_date: Optional[datetime] = None
    created_on_utc: datetime = Field(default_factory=utcnow)
