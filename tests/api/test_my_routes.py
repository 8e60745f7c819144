"""
Customer ("my") endpoint tests
"""

import pytest

from storelink.models import Customer, MerchandiseReturn, Order, Shipment, ShoppingCartItem, ShoppingCartType


@pytest.fixture
def other_customer_data(store):
    """A second customer owning an order, a shipment and a return"""
    store.customers["cust-2"] = Customer(id="cust-2", email="other@example.com")
    store.orders["order-2"] = Order(id="order-2", order_number=2, customer_id="cust-2")
    store.shipments["ship-2"] = Shipment(id="ship-2", shipment_number=2, order_id="order-2")
    store.returns["ret-2"] = MerchandiseReturn(id="ret-2", return_number=2, order_id="order-2", customer_id="cust-2")
    return store


def _fill_cart(store, product_id="prod-1", quantity=1):
    """Put a line in the demo customer's shopping cart"""
    customer = store.customers["cust-1"]
    item_id = f"item-{product_id}"
    store.cart_items[item_id] = ShoppingCartItem(
        id=item_id,
        customer_id=customer.id,
        product_id=product_id,
        cart_type=ShoppingCartType.SHOPPING_CART,
        quantity=quantity,
    )
    return customer


class TestMyOrders:
    def test_requires_customer_token(self, client, admin_headers):
        assert client.get("/api/my/orders").status_code == 401
        assert client.get("/api/my/orders", headers=admin_headers).status_code == 401

    def test_lists_only_own_orders(self, client, customer_headers, other_customer_data):
        response = client.get("/api/my/orders", headers=customer_headers)

        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == ["order-1"]

    def test_other_customer_order_is_not_found(self, client, customer_headers, other_customer_data):
        response = client.get("/api/my/orders/order-2", headers=customer_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    def test_get_own_order(self, client, customer_headers):
        body = client.get("/api/my/orders/order-1", headers=customer_headers).json()

        assert body["orderNumber"] == 1
        assert body["paymentStatus"] == "Paid"
        assert body["currencyCode"] == "CHF"


class TestMyShipmentsAndReturns:
    def test_shipments_follow_order_ownership(self, client, customer_headers, other_customer_data):
        listed = client.get("/api/my/shipments", headers=customer_headers).json()

        assert [shipment["id"] for shipment in listed] == ["ship-1"]
        assert client.get("/api/my/shipments/ship-1", headers=customer_headers).status_code == 200
        assert client.get("/api/my/shipments/ship-2", headers=customer_headers).status_code == 404

    def test_returns_are_scoped_to_customer(self, client, customer_headers, other_customer_data):
        listed = client.get("/api/my/returns", headers=customer_headers).json()

        assert [r["id"] for r in listed] == ["ret-1"]
        assert client.get("/api/my/returns/ret-2", headers=customer_headers).status_code == 404


class TestCheckout:
    def test_summary_with_empty_cart(self, client, customer_headers):
        response = client.get("/api/my/checkout", headers=customer_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Shopping cart is empty"}

    def test_summary_warns_about_missing_addresses(self, client, store, customer_headers):
        _fill_cart(store)

        response = client.get("/api/my/checkout", headers=customer_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["canPlaceOrder"] is False
        assert "Billing address is not set" in body["warnings"]
        assert "Shipping address is not set" in body["warnings"]
        assert body["cart"]["totalItems"] == 1
        assert body["totals"]["currencyCode"] == "CHF"
        assert len(body["availablePaymentMethods"]) == 2

    def test_summary_ready_to_place(self, client, store, customer_headers):
        _fill_cart(store)
        for kind in ("billing-address", "shipping-address"):
            response = client.post(f"/api/my/checkout/{kind}/addr-1", headers=customer_headers)
            assert response.status_code == 200

        body = client.get("/api/my/checkout", headers=customer_headers).json()

        assert body["warnings"] == []
        assert body["canPlaceOrder"] is True
        assert body["requiresShipping"] is True
        assert [o["name"] for o in body["availableShippingOptions"]] == ["Standard", "Express"]
        assert body["billingAddress"]["city"] == "Lausanne"
        assert body["totals"]["subTotal"] == pytest.approx(39.9)
        assert body["totals"]["shipping"] == pytest.approx(7.0)

    def test_unknown_address(self, client, customer_headers):
        response = client.post("/api/my/checkout/billing-address/nope", headers=customer_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Address not found"}

    def test_addresses(self, client, store, customer_headers):
        store.customers["cust-1"].billing_address_id = "addr-1"

        body = client.get("/api/my/checkout/addresses", headers=customer_headers).json()

        assert body["billingAddressId"] == "addr-1"
        assert body["shippingAddressId"] is None
        assert body["addresses"][0]["zipPostalCode"] == "1003"

    def test_place_order_requires_payment_method(self, client, customer_headers):
        response = client.post("/api/my/checkout", json={}, headers=customer_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == ["Payment method is required"]
        assert response.json()["success"] is False

    def test_place_order_requires_billing_address(self, client, store, customer_headers):
        _fill_cart(store)

        response = client.post(
            "/api/my/checkout",
            json={"paymentMethodSystemName": "Payments.BankTransfer"},
            headers=customer_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"] == ["Billing address is required"]

    def test_place_order(self, client, store, customer_headers):
        customer = _fill_cart(store)
        customer.billing_address_id = "addr-1"
        customer.shipping_address_id = "addr-1"

        response = client.post(
            "/api/my/checkout",
            json={
                "paymentMethodSystemName": "Payments.BankTransfer",
                "shippingOptionName": "Standard",
                "shippingRateProviderSystemName": "Shipping.FixedRate",
                "orderComment": "Please ring twice",
            },
            headers=customer_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["orderNumber"] == 2
        assert body["orderTotal"] == pytest.approx(50.7)

        order = store.orders[body["orderId"]]
        assert order.order_comment == "Please ring twice"
        assert order.shipping_method == "Standard"
        assert store.products["prod-1"].stock_quantity == 24
        assert store.cart_items == {}

    def test_place_order_over_stock(self, client, store, customer_headers):
        customer = _fill_cart(store, quantity=30)
        customer.billing_address_id = "addr-1"
        customer.shipping_address_id = "addr-1"

        response = client.post(
            "/api/my/checkout",
            json={"paymentMethodSystemName": "Payments.CashOnDelivery", "shippingOptionName": "Standard"},
            headers=customer_headers,
        )

        assert response.status_code == 400
        assert "maximum quantity" in response.json()["errors"][0]
