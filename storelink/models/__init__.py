"""
Domain models mirroring the store backend entities
"""

from .cart import (
    CartAttribute,
    CartTotals,
    PaymentMethod,
    PlaceOrderResult,
    ShippingOption,
    ShippingOptionsResult,
    ShoppingCartItem,
    ShoppingCartType,
    requires_shipping,
)
from .common import Page
from .listing import MarketplaceListing
from .customer import (
    Address,
    Customer,
    CustomerLoginResult,
    Permission,
    SelectedShippingOption,
    UserRegistrationType,
)
from .order import (
    MerchandiseReturn,
    MerchandiseReturnStatus,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    PaymentTransaction,
    Shipment,
    ShippingStatus,
)
from .product import (
    Category,
    ManageInventoryMethod,
    Product,
    ProductPicture,
    ProductSearchCriteria,
    ProductSorting,
)

__all__ = [
    "Address",
    "CartAttribute",
    "CartTotals",
    "Category",
    "Customer",
    "CustomerLoginResult",
    "ManageInventoryMethod",
    "MarketplaceListing",
    "MerchandiseReturn",
    "MerchandiseReturnStatus",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Page",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentTransaction",
    "Permission",
    "PlaceOrderResult",
    "Product",
    "ProductPicture",
    "ProductSearchCriteria",
    "ProductSorting",
    "SelectedShippingOption",
    "Shipment",
    "ShippingOption",
    "ShippingOptionsResult",
    "ShippingStatus",
    "ShoppingCartItem",
    "ShoppingCartType",
    "UserRegistrationType",
    "requires_shipping",
]
