"""
Store backend interface
Abstract async port over the catalog, customer, order, cart and checkout services
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from storelink.models import (
    Address,
    CartAttribute,
    CartTotals,
    Category,
    Customer,
    CustomerLoginResult,
    MarketplaceListing,
    MerchandiseReturn,
    Order,
    Page,
    PaymentMethod,
    PaymentTransaction,
    Permission,
    PlaceOrderResult,
    Product,
    ProductSearchCriteria,
    Shipment,
    ShippingOptionsResult,
    ShoppingCartItem,
    ShoppingCartType,
)


class CatalogStore(ABC):
    """Products, categories and pictures"""

    @abstractmethod
    async def search_products(self, criteria: ProductSearchCriteria) -> Page[Product]:
        """
        Search products

        Args:
            criteria: Filters, sort order and paging

        Returns:
            One page of matching products
        """
        pass

    @abstractmethod
    async def get_product(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    async def get_products_by_ids(self, product_ids: List[str]) -> List[Product]:
        """Products in the order of the given IDs, unknown IDs skipped"""
        pass

    @abstractmethod
    async def get_home_page_product_ids(self) -> List[str]:
        pass

    @abstractmethod
    async def get_best_seller_product_ids(self) -> List[str]:
        pass

    @abstractmethod
    async def list_categories(
        self, page_index: int = 0, page_size: int = 50, show_hidden: bool = False
    ) -> Page[Category]:
        pass

    @abstractmethod
    async def get_all_categories(self, show_hidden: bool = False) -> List[Category]:
        """All categories of every level"""
        pass

    @abstractmethod
    async def get_category(self, category_id: str) -> Optional[Category]:
        pass

    @abstractmethod
    async def get_picture_url(self, picture_id: str, size: int = 0) -> Optional[str]:
        """
        Public URL of a picture

        Args:
            picture_id: Picture ID
            size: Target size in pixels (0 keeps the original)

        Returns:
            URL or None when the picture does not exist
        """
        pass

    @abstractmethod
    async def get_default_picture_url(self, size: int = 0) -> str:
        pass


class CustomerStore(ABC):
    """Customers, credentials and permissions"""

    @abstractmethod
    async def list_customers(
        self,
        email: Optional[str] = None,
        username: Optional[str] = None,
        page_index: int = 0,
        page_size: int = 50,
    ) -> Page[Customer]:
        pass

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        pass

    @abstractmethod
    async def get_customer_by_email(self, email: str) -> Optional[Customer]:
        """Case insensitive lookup"""
        pass

    @abstractmethod
    async def login_customer(self, email: str, password: str) -> CustomerLoginResult:
        """
        Check customer credentials

        Args:
            email: Customer email
            password: Clear text password

        Returns:
            Login result
        """
        pass

    @abstractmethod
    async def register_customer(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        approved: bool = True,
    ) -> Customer:
        """
        Create a registered customer

        Args:
            email: Email, also used as username
            password: Clear text password
            first_name: First name
            last_name: Last name
            approved: Whether the account is active right away

        Returns:
            Created customer
        """
        pass

    @abstractmethod
    async def update_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def authorize(self, customer: Optional[Customer], permission: Permission) -> bool:
        """Whether the customer holds the permission"""
        pass


class OrderStore(ABC):
    """Orders, payments, shipments and merchandise returns"""

    @abstractmethod
    async def search_orders(
        self, customer_id: Optional[str] = None, page_index: int = 0, page_size: int = 2147483647
    ) -> Page[Order]:
        pass

    @abstractmethod
    async def get_order(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def get_payment_transaction(self, order_guid: str) -> Optional[PaymentTransaction]:
        pass

    @abstractmethod
    async def update_payment_transaction(self, transaction: PaymentTransaction) -> PaymentTransaction:
        pass

    @abstractmethod
    async def mark_order_as_paid(self, transaction: PaymentTransaction) -> Order:
        """
        Mark the order of a payment transaction as paid

        Args:
            transaction: Payment transaction of the order

        Returns:
            Updated order
        """
        pass

    @abstractmethod
    async def cancel_order(self, order: Order, notify_customer: bool = True) -> Order:
        pass

    @abstractmethod
    async def delete_order(self, order: Order) -> None:
        pass

    @abstractmethod
    async def list_shipments(self, page_index: int = 0, page_size: int = 2147483647) -> Page[Shipment]:
        pass

    @abstractmethod
    async def get_shipment(self, shipment_id: str) -> Optional[Shipment]:
        pass

    @abstractmethod
    async def get_shipments_by_order(self, order_id: str) -> List[Shipment]:
        pass

    @abstractmethod
    async def update_shipment(self, shipment: Shipment) -> Shipment:
        pass

    @abstractmethod
    async def ship(self, shipment: Shipment, notify_customer: bool = True) -> Shipment:
        """Set the shipped date and update the order shipping status"""
        pass

    @abstractmethod
    async def deliver(self, shipment: Shipment, notify_customer: bool = True) -> Shipment:
        """Set the delivery date and update the order shipping status"""
        pass

    @abstractmethod
    async def delete_shipment(self, shipment: Shipment) -> None:
        pass

    @abstractmethod
    async def search_merchandise_returns(
        self, customer_id: Optional[str] = None, page_index: int = 0, page_size: int = 2147483647
    ) -> Page[MerchandiseReturn]:
        pass

    @abstractmethod
    async def get_merchandise_return(self, return_id: str) -> Optional[MerchandiseReturn]:
        pass

    @abstractmethod
    async def update_merchandise_return(self, merchandise_return: MerchandiseReturn) -> MerchandiseReturn:
        pass

    @abstractmethod
    async def delete_merchandise_return(self, merchandise_return: MerchandiseReturn) -> None:
        pass


class CartStore(ABC):
    """Shopping carts and wishlists"""

    @abstractmethod
    async def get_cart(
        self, customer_id: str, cart_type: ShoppingCartType = ShoppingCartType.SHOPPING_CART
    ) -> List[ShoppingCartItem]:
        pass

    @abstractmethod
    async def add_to_cart(
        self,
        customer: Customer,
        product_id: str,
        cart_type: ShoppingCartType,
        warehouse_id: Optional[str] = None,
        attributes: Optional[List[CartAttribute]] = None,
        entered_price: Optional[float] = None,
        quantity: int = 1,
    ) -> Tuple[List[str], Optional[ShoppingCartItem]]:
        """
        Add a product to a cart or wishlist

        An existing line with the same product, warehouse and attributes
        gets its quantity increased.

        Args:
            customer: Cart owner
            product_id: Product ID
            cart_type: Shopping cart or wishlist
            warehouse_id: Warehouse ID
            attributes: Selected product attributes
            entered_price: Customer entered price
            quantity: Quantity to add

        Returns:
            (warnings, item) - item is None when there are warnings
        """
        pass

    @abstractmethod
    async def update_cart_item(self, customer: Customer, item_id: str, quantity: int) -> List[str]:
        """Change the quantity of a line, returns warnings"""
        pass

    @abstractmethod
    async def delete_cart_item(self, customer: Customer, item: ShoppingCartItem) -> None:
        pass

    @abstractmethod
    async def get_unit_price(self, item: ShoppingCartItem, product: Product) -> float:
        pass


class CheckoutStore(ABC):
    """Order totals, payment and shipping methods, order placement"""

    @abstractmethod
    async def get_cart_totals(self, items: List[ShoppingCartItem]) -> CartTotals:
        pass

    @abstractmethod
    async def get_active_payment_methods(
        self, customer: Customer, country_id: Optional[str] = None
    ) -> List[PaymentMethod]:
        pass

    @abstractmethod
    async def get_additional_handling_fee(
        self, items: List[ShoppingCartItem], payment_method_system_name: str
    ) -> float:
        pass

    @abstractmethod
    async def get_shipping_options(
        self, customer: Customer, items: List[ShoppingCartItem], address: Address
    ) -> ShippingOptionsResult:
        pass

    @abstractmethod
    async def place_order(self, customer: Customer, order_comment: Optional[str] = None) -> PlaceOrderResult:
        """
        Place an order from the customer's shopping cart

        Uses the payment method and shipping option selected on the customer.

        Args:
            customer: Ordering customer
            order_comment: Comment left by the customer

        Returns:
            Placement result with the order or the errors
        """
        pass


class MarketplaceListingStore(ABC):
    """Records of articles published on marketplaces"""

    @abstractmethod
    async def save_marketplace_listing(self, listing: MarketplaceListing) -> MarketplaceListing:
        pass

    @abstractmethod
    async def get_marketplace_listing(self, marketplace: str, article_id: int) -> Optional[MarketplaceListing]:
        pass

    @abstractmethod
    async def list_marketplace_listings(
        self, marketplace: Optional[str] = None, active_only: bool = True
    ) -> List[MarketplaceListing]:
        pass


class BaseStore(
    CatalogStore,
    CustomerStore,
    OrderStore,
    CartStore,
    CheckoutStore,
    MarketplaceListingStore,
):
    """Complete store backend"""
