"""
In-memory store tests
"""

import pytest

from storelink.models import (
    CartAttribute,
    CustomerLoginResult,
    MarketplaceListing,
    OrderStatus,
    Permission,
    ProductSearchCriteria,
    ProductSorting,
    SelectedShippingOption,
    ShoppingCartType,
)
from storelink.storage.demo import ADMIN_EMAIL, CUSTOMER_EMAIL, CUSTOMER_PASSWORD
from storelink.storage.memory import hash_password, verify_password


class TestPasswords:
    def test_hash_is_salted(self):
        first = hash_password("secret")
        second = hash_password("secret")

        assert first != second
        assert verify_password("secret", first)
        assert verify_password("secret", second)

    def test_wrong_or_missing_hash(self):
        assert not verify_password("other", hash_password("secret"))
        assert not verify_password("secret", None)
        assert not verify_password("secret", "plain")


class TestCatalog:
    async def test_hidden_products(self, store):
        store.products["prod-2"].published = False

        visible = await store.search_products(ProductSearchCriteria())
        everything = await store.search_products(ProductSearchCriteria(show_hidden=True))

        assert visible.total_count == 2
        assert everything.total_count == 3

    async def test_paging(self, store):
        page = await store.search_products(
            ProductSearchCriteria(order_by=ProductSorting.PRICE_DESC, page_index=1, page_size=2)
        )

        assert [p.id for p in page.items] == ["prod-2"]
        assert page.total_count == 3
        assert page.has_next is False

    async def test_description_search(self, store):
        by_name = await store.search_products(ProductSearchCriteria(keywords="aluminium"))
        by_description = await store.search_products(
            ProductSearchCriteria(keywords="aluminium", search_descriptions=True)
        )

        assert by_name.total_count == 0
        assert [p.id for p in by_description.items] == ["prod-1"]

    async def test_home_page_and_best_sellers(self, store):
        assert await store.get_home_page_product_ids() == ["prod-1"]
        assert await store.get_best_seller_product_ids() == ["prod-1"]

    async def test_picture_urls(self, store):
        assert await store.get_picture_url("pic-1", 100) == "/content/images/thumbs/pic-1_100.jpeg"
        assert await store.get_picture_url("unknown", 100) is None
        assert await store.get_default_picture_url(100) == "/content/images/thumbs/default-image_100.png"


class TestCustomers:
    async def test_login(self, store):
        assert await store.login_customer(CUSTOMER_EMAIL.upper(), CUSTOMER_PASSWORD) == CustomerLoginResult.SUCCESSFUL
        assert await store.login_customer(CUSTOMER_EMAIL, "nope") == CustomerLoginResult.WRONG_PASSWORD
        assert await store.login_customer("ghost@example.com", "x") == CustomerLoginResult.NOT_REGISTERED

    async def test_inactive_customer(self, store):
        store.customers["cust-1"].active = False

        assert await store.login_customer(CUSTOMER_EMAIL, CUSTOMER_PASSWORD) == CustomerLoginResult.NOT_ACTIVE

    async def test_register_twice(self, store):
        customer = await store.register_customer("new@example.com", "pw123456", first_name="Anna")

        assert customer.first_name == "Anna"
        assert await store.login_customer("new@example.com", "pw123456") == CustomerLoginResult.SUCCESSFUL
        with pytest.raises(ValueError):
            await store.register_customer("NEW@example.com", "other")

    async def test_authorize(self, store):
        admin = await store.get_customer_by_email(ADMIN_EMAIL)
        customer = await store.get_customer("cust-1")

        assert await store.authorize(admin, Permission.MANAGE_ORDERS)
        assert not await store.authorize(customer, Permission.MANAGE_ORDERS)
        assert not await store.authorize(None, Permission.MANAGE_ORDERS)


class TestCart:
    async def test_same_line_is_merged(self, store):
        customer = store.customers["cust-1"]

        warnings, first = await store.add_to_cart(customer, "prod-1", ShoppingCartType.SHOPPING_CART, quantity=2)
        warnings, second = await store.add_to_cart(customer, "prod-1", ShoppingCartType.SHOPPING_CART, quantity=3)

        assert warnings == []
        assert second.id == first.id
        assert second.quantity == 5

    async def test_different_attributes_make_new_line(self, store):
        customer = store.customers["cust-1"]

        await store.add_to_cart(customer, "prod-1", ShoppingCartType.SHOPPING_CART)
        await store.add_to_cart(
            customer,
            "prod-1",
            ShoppingCartType.SHOPPING_CART,
            attributes=[CartAttribute(key="color", value="red")],
        )

        assert len(await store.get_cart(customer.id)) == 2

    async def test_out_of_stock(self, store):
        customer = store.customers["cust-1"]

        warnings, item = await store.add_to_cart(customer, "prod-3", ShoppingCartType.SHOPPING_CART)

        assert warnings == ["Out of stock"]
        assert item is None

    async def test_wishlist_ignores_stock(self, store):
        customer = store.customers["cust-1"]

        warnings, item = await store.add_to_cart(customer, "prod-3", ShoppingCartType.WISHLIST)

        assert warnings == []
        assert await store.get_cart(customer.id) == []
        assert await store.get_cart(customer.id, ShoppingCartType.WISHLIST) == [item]

    async def test_update_other_customers_item(self, store):
        _, item = await store.add_to_cart(store.customers["cust-1"], "prod-1", ShoppingCartType.SHOPPING_CART)

        warnings = await store.update_cart_item(store.customers["cust-admin"], item.id, 2)

        assert warnings == ["Shopping cart item not found"]

    async def test_free_shipping_threshold(self, store):
        customer = store.customers["cust-1"]
        _, item = await store.add_to_cart(customer, "prod-1", ShoppingCartType.SHOPPING_CART, quantity=3)

        totals = await store.get_cart_totals([item])

        assert totals.sub_total == pytest.approx(119.7)
        assert totals.is_free_shipping is True
        assert totals.shipping == 0
        assert totals.tax == pytest.approx(9.7)


class TestOrders:
    async def test_place_order_with_express_shipping(self, store):
        customer = store.customers["cust-1"]
        customer.shipping_address_id = "addr-1"
        customer.selected_payment_method = "Payments.BankTransfer"
        customer.selected_shipping_option = SelectedShippingOption(name="Express")
        await store.add_to_cart(customer, "prod-2", ShoppingCartType.SHOPPING_CART, quantity=2)

        result = await store.place_order(customer)

        assert result.success
        # 49.00 + 14.00 shipping + 8.1% tax
        assert result.order_total == pytest.approx(68.1)
        assert store.products["prod-2"].stock_quantity == 10
        assert customer.selected_payment_method is None

    async def test_place_order_without_payment_method(self, store):
        customer = store.customers["cust-1"]
        await store.add_to_cart(customer, "prod-1", ShoppingCartType.SHOPPING_CART)

        result = await store.place_order(customer)

        assert result.errors == ["Payment method is not selected"]

    async def test_cancel_twice_restocks_once(self, store):
        order = store.orders["order-1"]

        await store.cancel_order(order)
        await store.cancel_order(order)

        assert order.order_status == OrderStatus.CANCELLED
        assert store.products["prod-1"].stock_quantity == 26

    async def test_delete_order_removes_shipments(self, store):
        await store.delete_order(store.orders["order-1"])

        assert store.shipments == {}
        assert store.transactions == {}

    async def test_listings(self, store):
        await store.save_marketplace_listing(MarketplaceListing(marketplace="ricardo", product_id="prod-1", article_id=1))
        closed = MarketplaceListing(marketplace="ricardo", product_id="prod-2", article_id=2, active=False)
        await store.save_marketplace_listing(closed)

        assert [listing.article_id for listing in await store.list_marketplace_listings("ricardo")] == [1]
        assert len(await store.list_marketplace_listings(active_only=False)) == 2
