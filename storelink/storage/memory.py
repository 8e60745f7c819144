"""
In-memory store backend
Implements the whole store port in process memory
"""

import asyncio
import hashlib
import secrets
import uuid
from typing import Dict, List, Optional, Tuple

from storelink.models import (
    Address,
    CartAttribute,
    CartTotals,
    Category,
    Customer,
    CustomerLoginResult,
    ManageInventoryMethod,
    MarketplaceListing,
    MerchandiseReturn,
    Order,
    OrderItem,
    OrderStatus,
    Page,
    PaymentMethod,
    PaymentStatus,
    PaymentTransaction,
    Permission,
    PlaceOrderResult,
    Product,
    ProductSearchCriteria,
    ProductSorting,
    Shipment,
    ShippingOption,
    ShippingOptionsResult,
    ShippingStatus,
    ShoppingCartItem,
    ShoppingCartType,
    requires_shipping,
)
from storelink.models.product import utcnow
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

logger = get_logger(__name__)

DEFAULT_PAYMENT_METHODS = [
    PaymentMethod(
        system_name="Payments.CashOnDelivery",
        friendly_name="Cash on delivery",
        description="Pay when the parcel arrives",
        additional_fee=0,
    ),
    PaymentMethod(
        system_name="Payments.BankTransfer",
        friendly_name="Bank transfer",
        description="Pay by bank transfer before shipping",
        additional_fee=0,
    ),
]


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Salted SHA-256 digest stored as salt$hex"""
    salt = salt or secrets.token_hex(8)
    digest = hashlib.sha256(f"{salt}{password}".encode("utf-8")).hexdigest()
    return f"{salt}${digest}"


def verify_password(password: str, stored: Optional[str]) -> bool:
    if not stored or "$" not in stored:
        return False
    salt, _ = stored.split("$", 1)
    return secrets.compare_digest(hash_password(password, salt), stored)


def _new_id() -> str:
    return uuid.uuid4().hex


class MemoryStore(BaseStore):
    """Store backend kept in process memory"""

    def __init__(
        self,
        store_id: str = "default",
        currency_code: str = "CHF",
        shipping_rate: float = 7.0,
        free_shipping_over: Optional[float] = 100.0,
        tax_rate: float = 0.081,
        payment_methods: Optional[List[PaymentMethod]] = None,
        picture_base_url: str = "/content/images/thumbs",
    ):
        self.store_id = store_id
        self.currency_code = currency_code
        self.shipping_rate = shipping_rate
        self.free_shipping_over = free_shipping_over
        self.tax_rate = tax_rate
        self.payment_methods = list(payment_methods if payment_methods is not None else DEFAULT_PAYMENT_METHODS)
        self.picture_base_url = picture_base_url.rstrip("/")

        self.products: Dict[str, Product] = {}
        self.categories: Dict[str, Category] = {}
        self.pictures: Dict[str, str] = {}
        self.customers: Dict[str, Customer] = {}
        self.orders: Dict[str, Order] = {}
        self.transactions: Dict[str, PaymentTransaction] = {}
        self.shipments: Dict[str, Shipment] = {}
        self.returns: Dict[str, MerchandiseReturn] = {}
        self.cart_items: Dict[str, ShoppingCartItem] = {}
        self.listings: Dict[Tuple[str, int], MarketplaceListing] = {}

        self._order_number = 0
        self._shipment_number = 0
        self._return_number = 0
        self._lock = asyncio.Lock()

    # Seeding helpers

    async def add_product(self, product: Product) -> Product:
        self.products[product.id] = product
        for picture in product.pictures:
            self.pictures.setdefault(picture.picture_id, f"{picture.picture_id}.jpeg")
        return product

    async def add_category(self, category: Category) -> Category:
        self.categories[category.id] = category
        return category

    async def add_customer(self, customer: Customer, password: Optional[str] = None) -> Customer:
        if password is not None:
            customer.password = hash_password(password)
        self.customers[customer.id] = customer
        return customer

    async def add_order(self, order: Order, transaction: Optional[PaymentTransaction] = None) -> Order:
        self.orders[order.id] = order
        self._order_number = max(self._order_number, order.order_number)
        if transaction is not None:
            self.transactions[transaction.order_guid] = transaction
        return order

    async def add_shipment(self, shipment: Shipment) -> Shipment:
        self.shipments[shipment.id] = shipment
        self._shipment_number = max(self._shipment_number, shipment.shipment_number)
        return shipment

    async def add_merchandise_return(self, merchandise_return: MerchandiseReturn) -> MerchandiseReturn:
        self.returns[merchandise_return.id] = merchandise_return
        self._return_number = max(self._return_number, merchandise_return.return_number)
        return merchandise_return

    # Catalog

    def _matches(self, product: Product, criteria: ProductSearchCriteria) -> bool:
        if not criteria.show_hidden and not product.published:
            return False
        if criteria.visible_individually_only and not product.visible_individually:
            return False
        if criteria.keywords:
            term = criteria.keywords.lower()
            found = term in (product.name or "").lower()
            if not found and criteria.search_descriptions:
                found = term in (product.short_description or "").lower() or term in (
                    product.full_description or ""
                ).lower()
            if not found and criteria.search_sku:
                sku = (product.sku or "").lower()
                found = term in sku if criteria.sku_contains else sku == term
            if not found and criteria.search_product_tags:
                found = any(term == tag.lower() for tag in product.tags)
            if not found:
                return False
        if criteria.category_ids and not set(criteria.category_ids) & set(product.category_ids):
            return False
        if criteria.brand_id and product.brand_id != criteria.brand_id:
            return False
        if criteria.vendor_id and product.vendor_id != criteria.vendor_id:
            return False
        if criteria.price_min is not None and product.price < criteria.price_min:
            return False
        if criteria.price_max is not None and product.price > criteria.price_max:
            return False
        if criteria.show_on_home_page is not None and product.show_on_home_page != criteria.show_on_home_page:
            return False
        if criteria.featured_products is not None and product.featured != criteria.featured_products:
            return False
        if criteria.marked_as_new_only and not product.mark_as_new:
            return False
        return True

    @staticmethod
    def _sorted(products: List[Product], order_by: ProductSorting) -> List[Product]:
        if order_by == ProductSorting.NAME_ASC:
            return sorted(products, key=lambda p: (p.name or "").lower())
        if order_by == ProductSorting.PRICE_ASC:
            return sorted(products, key=lambda p: p.price)
        if order_by == ProductSorting.PRICE_DESC:
            return sorted(products, key=lambda p: p.price, reverse=True)
        if order_by == ProductSorting.CREATED_ON:
            return sorted(products, key=lambda p: p.created_on_utc, reverse=True)
        if order_by == ProductSorting.BEST_SELLERS:
            return sorted(products, key=lambda p: (not p.best_seller, p.display_order))
        if order_by == ProductSorting.ON_SALE:
            return sorted(products, key=lambda p: (not p.old_price > p.price, p.display_order))
        return sorted(products, key=lambda p: (p.display_order, (p.name or "").lower()))

    async def search_products(self, criteria: ProductSearchCriteria) -> Page[Product]:
        found = [p for p in self.products.values() if self._matches(p, criteria)]
        found = self._sorted(found, criteria.order_by)
        return Page[Product].from_list(found, criteria.page_index, criteria.page_size)

    async def get_product(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    async def get_products_by_ids(self, product_ids: List[str]) -> List[Product]:
        return [self.products[pid] for pid in product_ids if pid in self.products]

    async def get_home_page_product_ids(self) -> List[str]:
        products = [p for p in self.products.values() if p.published and p.show_on_home_page]
        return [p.id for p in self._sorted(products, ProductSorting.POSITION)]

    async def get_best_seller_product_ids(self) -> List[str]:
        products = [p for p in self.products.values() if p.published and p.best_seller]
        return [p.id for p in self._sorted(products, ProductSorting.POSITION)]

    async def get_all_categories(self, show_hidden: bool = False) -> List[Category]:
        categories = [c for c in self.categories.values() if show_hidden or c.published]
        return sorted(categories, key=lambda c: (c.display_order, c.name.lower()))

    async def list_categories(
        self, page_index: int = 0, page_size: int = 50, show_hidden: bool = False
    ) -> Page[Category]:
        categories = await self.get_all_categories(show_hidden=show_hidden)
        return Page[Category].from_list(categories, page_index, page_size)

    async def get_category(self, category_id: str) -> Optional[Category]:
        return self.categories.get(category_id)

    async def get_picture_url(self, picture_id: str, size: int = 0) -> Optional[str]:
        if picture_id not in self.pictures:
            return None
        suffix = f"_{size}" if size else ""
        return f"{self.picture_base_url}/{picture_id}{suffix}.jpeg"

    async def get_default_picture_url(self, size: int = 0) -> str:
        suffix = f"_{size}" if size else ""
        return f"{self.picture_base_url}/default-image{suffix}.png"

    # Customers

    async def list_customers(
        self,
        email: Optional[str] = None,
        username: Optional[str] = None,
        page_index: int = 0,
        page_size: int = 50,
    ) -> Page[Customer]:
        customers = [c for c in self.customers.values() if not c.deleted]
        if email:
            customers = [c for c in customers if email.lower() in (c.email or "").lower()]
        if username:
            customers = [c for c in customers if username.lower() in (c.username or "").lower()]
        customers.sort(key=lambda c: c.created_on_utc, reverse=True)
        return Page[Customer].from_list(customers, page_index, page_size)

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self.customers.get(customer_id)

    async def get_customer_by_email(self, email: str) -> Optional[Customer]:
        if not email:
            return None
        email = email.strip().lower()
        return next((c for c in self.customers.values() if (c.email or "").lower() == email), None)

    async def login_customer(self, email: str, password: str) -> CustomerLoginResult:
        customer = await self.get_customer_by_email(email)
        if customer is None:
            return CustomerLoginResult.NOT_REGISTERED
        if customer.deleted:
            return CustomerLoginResult.DELETED
        if not customer.active:
            return CustomerLoginResult.NOT_ACTIVE
        if not verify_password(password, customer.password):
            logger.warning("Wrong password", customer_id=customer.id)
            return CustomerLoginResult.WRONG_PASSWORD
        if customer.requires_two_factor:
            return CustomerLoginResult.REQUIRES_TWO_FACTOR

        customer.last_activity_date_utc = utcnow()
        return CustomerLoginResult.SUCCESSFUL

    async def register_customer(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        approved: bool = True,
    ) -> Customer:
        async with self._lock:
            if await self.get_customer_by_email(email):
                raise ValueError(f"Email already registered: {email}")

            customer = Customer(
                id=_new_id(),
                email=email,
                username=email,
                password=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                active=approved,
                store_id=self.store_id,
            )
            self.customers[customer.id] = customer

        logger.info("Customer registered", customer_id=customer.id, approved=approved)
        return customer

    async def update_customer(self, customer: Customer) -> Customer:
        self.customers[customer.id] = customer
        return customer

    async def authorize(self, customer: Optional[Customer], permission: Permission) -> bool:
        if customer is None or not customer.active or customer.deleted:
            return False
        return permission in customer.permissions

    # Orders

    @staticmethod
    def _check_order_status(order: Order):
        paid = order.payment_status in (PaymentStatus.PAID, PaymentStatus.AUTHORIZED)
        if order.order_status == OrderStatus.PENDING and paid:
            order.order_status = OrderStatus.PROCESSING
        if (
            order.order_status == OrderStatus.PROCESSING
            and order.payment_status == PaymentStatus.PAID
            and order.shipping_status in (ShippingStatus.SHIPPING_NOT_REQUIRED, ShippingStatus.DELIVERED)
        ):
            order.order_status = OrderStatus.COMPLETE

    async def search_orders(
        self, customer_id: Optional[str] = None, page_index: int = 0, page_size: int = 2147483647
    ) -> Page[Order]:
        orders = [o for o in self.orders.values() if customer_id is None or o.customer_id == customer_id]
        orders.sort(key=lambda o: o.created_on_utc, reverse=True)
        return Page[Order].from_list(orders, page_index, page_size)

    async def get_order(self, order_id: str) -> Optional[Order]:
        return self.orders.get(order_id)

    async def get_payment_transaction(self, order_guid: str) -> Optional[PaymentTransaction]:
        return self.transactions.get(order_guid)

    async def update_payment_transaction(self, transaction: PaymentTransaction) -> PaymentTransaction:
        self.transactions[transaction.order_guid] = transaction
        return transaction

    async def mark_order_as_paid(self, transaction: PaymentTransaction) -> Order:
        order = next((o for o in self.orders.values() if o.order_guid == transaction.order_guid), None)
        if order is None:
            raise LookupError(f"No order for transaction {transaction.id}")

        transaction.status = PaymentStatus.PAID
        self.transactions[transaction.order_guid] = transaction

        order.payment_status = PaymentStatus.PAID
        order.paid_date_utc = utcnow()
        order.updated_on_utc = utcnow()
        self._check_order_status(order)

        logger.info("Order marked as paid", order_id=order.id)
        return order

    async def cancel_order(self, order: Order, notify_customer: bool = True) -> Order:
        if order.order_status == OrderStatus.CANCELLED:
            return order

        order.order_status = OrderStatus.CANCELLED
        order.updated_on_utc = utcnow()

        # Restock
        for line in order.order_items:
            product = self.products.get(line.product_id)
            if product and product.manage_inventory_method == ManageInventoryMethod.MANAGE_STOCK:
                product.stock_quantity += line.quantity

        logger.info("Order cancelled", order_id=order.id, notify_customer=notify_customer)
        return order

    async def delete_order(self, order: Order) -> None:
        self.orders.pop(order.id, None)
        self.transactions.pop(order.order_guid, None)
        for shipment in [s for s in self.shipments.values() if s.order_id == order.id]:
            self.shipments.pop(shipment.id, None)
        logger.info("Order deleted", order_id=order.id)

    async def list_shipments(self, page_index: int = 0, page_size: int = 2147483647) -> Page[Shipment]:
        shipments = sorted(self.shipments.values(), key=lambda s: s.created_on_utc, reverse=True)
        return Page[Shipment].from_list(shipments, page_index, page_size)

    async def get_shipment(self, shipment_id: str) -> Optional[Shipment]:
        return self.shipments.get(shipment_id)

    async def get_shipments_by_order(self, order_id: str) -> List[Shipment]:
        return sorted(
            (s for s in self.shipments.values() if s.order_id == order_id),
            key=lambda s: s.shipment_number,
        )

    async def update_shipment(self, shipment: Shipment) -> Shipment:
        self.shipments[shipment.id] = shipment
        return shipment

    async def ship(self, shipment: Shipment, notify_customer: bool = True) -> Shipment:
        shipment.shipped_date_utc = shipment.shipped_date_utc or utcnow()
        order = self.orders.get(shipment.order_id)
        if order is not None:
            order.shipping_status = ShippingStatus.SHIPPED
            order.updated_on_utc = utcnow()
        logger.info("Shipment shipped", shipment_id=shipment.id, notify_customer=notify_customer)
        return shipment

    async def deliver(self, shipment: Shipment, notify_customer: bool = True) -> Shipment:
        now = utcnow()
        shipment.shipped_date_utc = shipment.shipped_date_utc or now
        shipment.delivery_date_utc = now
        order = self.orders.get(shipment.order_id)
        if order is not None:
            order.shipping_status = ShippingStatus.DELIVERED
            order.updated_on_utc = now
            self._check_order_status(order)
        logger.info("Shipment delivered", shipment_id=shipment.id, notify_customer=notify_customer)
        return shipment

    async def delete_shipment(self, shipment: Shipment) -> None:
        self.shipments.pop(shipment.id, None)

    async def search_merchandise_returns(
        self, customer_id: Optional[str] = None, page_index: int = 0, page_size: int = 2147483647
    ) -> Page[MerchandiseReturn]:
        returns = [r for r in self.returns.values() if customer_id is None or r.customer_id == customer_id]
        returns.sort(key=lambda r: r.created_on_utc, reverse=True)
        return Page[MerchandiseReturn].from_list(returns, page_index, page_size)

    async def get_merchandise_return(self, return_id: str) -> Optional[MerchandiseReturn]:
        return self.returns.get(return_id)

    async def update_merchandise_return(self, merchandise_return: MerchandiseReturn) -> MerchandiseReturn:
        self.returns[merchandise_return.id] = merchandise_return
        return merchandise_return

    async def delete_merchandise_return(self, merchandise_return: MerchandiseReturn) -> None:
        self.returns.pop(merchandise_return.id, None)

    # Cart

    async def get_cart(
        self, customer_id: str, cart_type: ShoppingCartType = ShoppingCartType.SHOPPING_CART
    ) -> List[ShoppingCartItem]:
        items = [
            item
            for item in self.cart_items.values()
            if item.customer_id == customer_id and item.cart_type == cart_type
        ]
        return sorted(items, key=lambda i: i.created_on_utc)

    def _stock_warnings(self, product: Product, quantity: int, cart_type: ShoppingCartType) -> List[str]:
        warnings = []
        if not product.published:
            warnings.append("Product is not published")
        if quantity < 1:
            warnings.append("Quantity should be positive")
        if (
            cart_type == ShoppingCartType.SHOPPING_CART
            and product.manage_inventory_method == ManageInventoryMethod.MANAGE_STOCK
            and quantity > product.stock_quantity
        ):
            if product.stock_quantity <= 0:
                warnings.append("Out of stock")
            else:
                warnings.append(f"Your quantity exceeds stock on hand. The maximum quantity that can be added is {product.stock_quantity}")
        return warnings

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
        product = self.products.get(product_id)
        if product is None:
            return ["Product not found"], None

        attributes = attributes or []
        async with self._lock:
            existing = next(
                (
                    item
                    for item in await self.get_cart(customer.id, cart_type)
                    if item.product_id == product_id
                    and item.warehouse_id == warehouse_id
                    and item.attributes == attributes
                ),
                None,
            )
            new_quantity = quantity + (existing.quantity if existing else 0)

            warnings = self._stock_warnings(product, new_quantity, cart_type)
            if warnings:
                return warnings, None

            if existing is not None:
                existing.quantity = new_quantity
                existing.updated_on_utc = utcnow()
                return [], existing

            item = ShoppingCartItem(
                id=_new_id(),
                customer_id=customer.id,
                store_id=self.store_id,
                product_id=product_id,
                cart_type=cart_type,
                quantity=quantity,
                warehouse_id=warehouse_id,
                attributes=attributes,
                entered_price=entered_price,
                is_ship_enabled=product.requires_shipping,
            )
            self.cart_items[item.id] = item

        logger.debug("Added to cart", customer_id=customer.id, product_id=product_id, cart_type=cart_type.value)
        return [], item

    async def update_cart_item(self, customer: Customer, item_id: str, quantity: int) -> List[str]:
        item = self.cart_items.get(item_id)
        if item is None or item.customer_id != customer.id:
            return ["Shopping cart item not found"]

        product = self.products.get(item.product_id)
        if product is None:
            return ["Product not found"]

        warnings = self._stock_warnings(product, quantity, item.cart_type)
        if warnings:
            return warnings

        item.quantity = quantity
        item.updated_on_utc = utcnow()
        return []

    async def delete_cart_item(self, customer: Customer, item: ShoppingCartItem) -> None:
        stored = self.cart_items.get(item.id)
        if stored is not None and stored.customer_id == customer.id:
            del self.cart_items[item.id]

    async def get_unit_price(self, item: ShoppingCartItem, product: Product) -> float:
        if item.entered_price is not None:
            return item.entered_price
        return product.price

    # Checkout

    async def _sub_total(self, items: List[ShoppingCartItem]) -> float:
        total = 0.0
        for item in items:
            product = self.products.get(item.product_id)
            if product is None:
                continue
            total += await self.get_unit_price(item, product) * item.quantity
        return round(total, 2)

    def _is_free_shipping(self, items: List[ShoppingCartItem], sub_total: float) -> bool:
        if not requires_shipping(items):
            return True
        if all(item.is_free_shipping for item in items if item.is_ship_enabled):
            return True
        return self.free_shipping_over is not None and sub_total >= self.free_shipping_over

    async def get_cart_totals(self, items: List[ShoppingCartItem]) -> CartTotals:
        sub_total = await self._sub_total(items)
        free_shipping = self._is_free_shipping(items, sub_total)
        shipping = 0.0 if free_shipping else self.shipping_rate
        tax = round((sub_total + shipping) * self.tax_rate, 2)
        return CartTotals(
            sub_total=sub_total,
            sub_total_discount=0,
            shipping=shipping,
            is_free_shipping=free_shipping,
            tax=tax,
            total=round(sub_total + shipping + tax, 2),
        )

    async def get_active_payment_methods(
        self, customer: Customer, country_id: Optional[str] = None
    ) -> List[PaymentMethod]:
        return list(self.payment_methods)

    async def get_additional_handling_fee(
        self, items: List[ShoppingCartItem], payment_method_system_name: str
    ) -> float:
        method = next((m for m in self.payment_methods if m.system_name == payment_method_system_name), None)
        return method.additional_fee if method else 0.0

    async def get_shipping_options(
        self, customer: Customer, items: List[ShoppingCartItem], address: Address
    ) -> ShippingOptionsResult:
        if not address.country_id or not address.zip_postal_code:
            return ShippingOptionsResult(errors=["Shipping address is incomplete"])

        sub_total = await self._sub_total(items)
        rate = 0.0 if self._is_free_shipping(items, sub_total) else self.shipping_rate
        return ShippingOptionsResult(
            shipping_options=[
                ShippingOption(
                    name="Standard",
                    description="Delivery in 2-3 working days",
                    rate=rate,
                    shipping_rate_provider_system_name="Shipping.FixedRate",
                ),
                ShippingOption(
                    name="Express",
                    description="Next working day delivery",
                    rate=rate + self.shipping_rate,
                    shipping_rate_provider_system_name="Shipping.FixedRate",
                ),
            ]
        )

    async def place_order(self, customer: Customer, order_comment: Optional[str] = None) -> PlaceOrderResult:
        items = await self.get_cart(customer.id, ShoppingCartType.SHOPPING_CART)
        if not items:
            return PlaceOrderResult(errors=["Cart is empty"])
        if not customer.selected_payment_method:
            return PlaceOrderResult(errors=["Payment method is not selected"])

        ship = requires_shipping(items)
        if ship and customer.selected_shipping_option is None:
            return PlaceOrderResult(errors=["Shipping method is not selected"])

        errors = []
        lines = []
        for item in items:
            product = self.products.get(item.product_id)
            if product is None:
                errors.append(f"Product {item.product_id} not found")
                continue
            errors.extend(self._stock_warnings(product, item.quantity, ShoppingCartType.SHOPPING_CART))
            lines.append(OrderItem(
                product_id=product.id,
                quantity=item.quantity,
                unit_price=await self.get_unit_price(item, product),
            ))
        if errors:
            return PlaceOrderResult(errors=errors)

        totals = await self.get_cart_totals(items)
        if ship and customer.selected_shipping_option is not None:
            options = await self.get_shipping_options(customer, items, customer.shipping_address or Address())
            chosen = next(
                (o for o in options.shipping_options if o.name == customer.selected_shipping_option.name),
                None,
            )
            if chosen is not None:
                totals.shipping = chosen.rate
                totals.tax = round((totals.sub_total + chosen.rate) * self.tax_rate, 2)
                totals.total = round(totals.sub_total + chosen.rate + totals.tax, 2)
        fee = await self.get_additional_handling_fee(items, customer.selected_payment_method)
        order_total = round((totals.total or 0) + fee, 2)

        async with self._lock:
            self._order_number += 1
            order = Order(
                id=_new_id(),
                order_number=self._order_number,
                customer_id=customer.id,
                customer_email=customer.email,
                order_total=order_total,
                shipping_status=ShippingStatus.PENDING if ship else ShippingStatus.SHIPPING_NOT_REQUIRED,
                payment_method_system_name=customer.selected_payment_method,
                shipping_method=customer.selected_shipping_option.name if customer.selected_shipping_option else None,
                order_comment=order_comment,
                order_items=lines,
                customer_currency_code=self.currency_code,
            )
            self.orders[order.id] = order
            self.transactions[order.order_guid] = PaymentTransaction(
                id=_new_id(),
                order_guid=order.order_guid,
                order_id=order.id,
                amount=order_total,
            )

            for line in lines:
                product = self.products[line.product_id]
                if product.manage_inventory_method == ManageInventoryMethod.MANAGE_STOCK:
                    product.stock_quantity -= line.quantity

            for item in items:
                self.cart_items.pop(item.id, None)

            customer.selected_payment_method = None
            customer.selected_shipping_option = None
            customer.use_loyalty_points = False

        logger.info("Order placed", order_id=order.id, order_number=order.order_number, total=order_total)
        return PlaceOrderResult(order_id=order.id, order_number=order.order_number, order_total=order_total)

    # Marketplace listings

    async def save_marketplace_listing(self, listing: MarketplaceListing) -> MarketplaceListing:
        key = (listing.marketplace, listing.article_id)
        if key in self.listings:
            listing.updated_on_utc = utcnow()
        self.listings[key] = listing
        return listing

    async def get_marketplace_listing(self, marketplace: str, article_id: int) -> Optional[MarketplaceListing]:
        return self.listings.get((marketplace, article_id))

    async def list_marketplace_listings(
        self, marketplace: Optional[str] = None, active_only: bool = True
    ) -> List[MarketplaceListing]:
        return [
            listing
            for listing in self.listings.values()
            if (marketplace is None or listing.marketplace == marketplace)
            and (listing.active or not active_only)
        ]
