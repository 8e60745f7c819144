"""
Demo catalog for the in-memory store
"""

from storelink.models import (
    Address,
    Category,
    Customer,
    MerchandiseReturn,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    PaymentTransaction,
    Permission,
    Product,
    ProductPicture,
    Shipment,
    ShippingStatus,
)
from storelink.monitoring import get_logger
from storelink.storage.memory import MemoryStore

logger = get_logger(__name__)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"
CUSTOMER_EMAIL = "jean.dupont@example.com"
CUSTOMER_PASSWORD = "secret123"


async def seed_demo_data(store: MemoryStore) -> MemoryStore:
    """Fill the store with a small catalog, an admin and one customer with an order"""
    await store.add_category(Category(id="cat-home", name="Maison", display_order=1, show_on_home_page=True))
    await store.add_category(Category(id="cat-kitchen", name="Cuisine", parent_category_id="cat-home", display_order=1))
    await store.add_category(Category(id="cat-garden", name="Jardin", display_order=2))

    await store.add_product(Product(
        id="prod-1",
        name="Cafetière italienne",
        short_description="Cafetière en aluminium 6 tasses",
        full_description="<p>Cafetière <b>classique</b> pour plaques et gaz.</p>",
        sku="CAF-006",
        price=39.9,
        old_price=49.9,
        stock_quantity=25,
        show_on_home_page=True,
        best_seller=True,
        category_ids=["cat-kitchen"],
        pictures=[ProductPicture(picture_id="pic-1", display_order=0)],
    ))
    await store.add_product(Product(
        id="prod-2",
        name="Arrosoir 10 L",
        short_description="Arrosoir galvanisé",
        full_description="<p>Arrosoir robuste avec pomme amovible.</p>",
        sku="JAR-010",
        price=24.5,
        stock_quantity=12,
        mark_as_new=True,
        category_ids=["cat-garden"],
        pictures=[ProductPicture(picture_id="pic-2", display_order=0)],
    ))
    await store.add_product(Product(
        id="prod-3",
        name="Plaid en laine",
        short_description="Plaid 130 x 170 cm",
        sku="MAI-130",
        price=89.0,
        stock_quantity=0,
        category_ids=["cat-home"],
    ))

    await store.add_customer(
        Customer(
            id="cust-admin",
            email=ADMIN_EMAIL,
            username=ADMIN_EMAIL,
            first_name="Admin",
            last_name="Store",
            permissions=set(Permission),
            store_id=store.store_id,
        ),
        password=ADMIN_PASSWORD,
    )

    address = Address(
        id="addr-1",
        first_name="Jean",
        last_name="Dupont",
        email=CUSTOMER_EMAIL,
        country_id="CH",
        country_name="Switzerland",
        city="Lausanne",
        address1="Rue de Bourg 1",
        zip_postal_code="1003",
        phone_number="+41 21 000 00 00",
    )
    await store.add_customer(
        Customer(
            id="cust-1",
            email=CUSTOMER_EMAIL,
            username=CUSTOMER_EMAIL,
            first_name="Jean",
            last_name="Dupont",
            addresses=[address],
            store_id=store.store_id,
        ),
        password=CUSTOMER_PASSWORD,
    )

    order = Order(
        id="order-1",
        order_number=1,
        customer_id="cust-1",
        customer_email=CUSTOMER_EMAIL,
        order_total=46.9,
        order_status=OrderStatus.PROCESSING,
        payment_status=PaymentStatus.PAID,
        shipping_status=ShippingStatus.SHIPPED,
        payment_method_system_name="Payments.BankTransfer",
        shipping_method="Standard",
        order_items=[OrderItem(product_id="prod-1", quantity=1, unit_price=39.9)],
        customer_currency_code=store.currency_code,
    )
    await store.add_order(
        order,
        PaymentTransaction(
            id="txn-1",
            order_guid=order.order_guid,
            order_id=order.id,
            amount=order.order_total,
            status=PaymentStatus.PAID,
        ),
    )
    await store.add_shipment(Shipment(id="ship-1", shipment_number=1, order_id=order.id, tracking_number="99.00.123456.78901234"))
    await store.add_merchandise_return(MerchandiseReturn(
        id="ret-1",
        return_number=1,
        order_id=order.id,
        customer_id="cust-1",
        customer_comments="Poignée abîmée",
    ))

    logger.info(
        "Demo data seeded",
        products=len(store.products),
        categories=len(store.categories),
        customers=len(store.customers),
    )
    return store
