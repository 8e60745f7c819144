"""
Customer data models
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from .product import utcnow


class Permission(str, Enum):
    """Back office permissions"""

    MANAGE_PRODUCTS = "ManageProducts"
    MANAGE_CATEGORIES = "ManageCategories"
    MANAGE_CUSTOMERS = "ManageCustomers"
    MANAGE_ORDERS = "ManageOrders"
    MANAGE_PLUGINS = "ManagePlugins"


class CustomerLoginResult(str, Enum):
    """Outcome of a credential check"""

    SUCCESSFUL = "Successful"
    WRONG_PASSWORD = "WrongPassword"
    NOT_REGISTERED = "NotRegistered"
    NOT_ACTIVE = "NotActive"
    DELETED = "Deleted"
    REQUIRES_TWO_FACTOR = "RequiresTwoFactor"
    LOCKED_OUT = "LockedOut"


class UserRegistrationType(str, Enum):
    """Registration policy of the store"""

    STANDARD = "Standard"
    EMAIL_VALIDATION = "EmailValidation"
    ADMIN_APPROVAL = "AdminApproval"
    DISABLED = "Disabled"


class Address(BaseModel):
    """Postal address"""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    country_id: Optional[str] = None
    country_name: Optional[str] = None
    state_province_id: Optional[str] = None
    state_province_name: Optional[str] = None
    city: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    zip_postal_code: Optional[str] = None
    phone_number: Optional[str] = None


class SelectedShippingOption(BaseModel):
    name: str
    shipping_rate_provider_system_name: Optional[str] = None


class Customer(BaseModel):
    """Store customer (also back office users)"""

    id: str
    customer_guid: str = Field(default_factory=lambda: str(uuid.uuid4()))
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    active: bool = Field(default=True)
    deleted: bool = Field(default=False)
    is_system_account: bool = Field(default=False)
    requires_two_factor: bool = Field(default=False)
    store_id: Optional[str] = None
    permissions: Set[Permission] = Field(default_factory=set)

    addresses: List[Address] = Field(default_factory=list)
    billing_address_id: Optional[str] = None
    shipping_address_id: Optional[str] = None

    # Checkout selections
    selected_payment_method: Optional[str] = None
    selected_shipping_option: Optional[SelectedShippingOption] = None
    use_loyalty_points: bool = Field(default=False)

    created_on_utc: datetime = Field(default_factory=utcnow)
    last_activity_date_utc: datetime = Field(default_factory=utcnow)

    def find_address(self, address_id: str) -> Optional[Address]:
        return next((a for a in self.addresses if a.id == address_id), None)

    @property
    def billing_address(self) -> Optional[Address]:
        return self.find_address(self.billing_address_id) if self.billing_address_id else None

    @property
    def shipping_address(self) -> Optional[Address]:
        return self.find_address(self.shipping_address_id) if self.shipping_address_id else None
