"""
Back office endpoint tests
"""

from storelink.models import OrderStatus, PaymentStatus, ShippingStatus


class TestAdminAuthentication:
    def test_missing_token_is_rejected(self, client):
        response = client.get("/api/admin/product")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_frontend_token_is_not_a_backend_token(self, client, customer_headers):
        response = client.get("/api/admin/product", headers=customer_headers)

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_customer_without_permission_is_forbidden(self, client, customer_backend_headers):
        response = client.get("/api/admin/product", headers=customer_backend_headers)

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}

    def test_disabled_backend_api(self, client, admin_headers, test_settings):
        test_settings.backend_api.enabled = False

        response = client.get("/api/admin/product", headers=admin_headers)

        assert response.status_code == 401
        assert response.json()["error"] == "API is disabled"


class TestAdminProducts:
    def test_list_includes_unpublished(self, client, store, admin_headers):
        store.products["prod-3"].published = False

        response = client.get("/api/admin/product", params={"pageSize": 10}, headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["totalCount"] == 3
        assert body["pageSize"] == 10
        assert {item["id"] for item in body["items"]} == {"prod-1", "prod-2", "prod-3"}
        assert "shortDescription" in body["items"][0]

    def test_search_by_keyword_echoes_criteria(self, client, admin_headers):
        response = client.get(
            "/api/admin/product/search",
            params={"keywords": "arrosoir", "orderBy": 2},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body["items"]] == ["prod-2"]
        assert body["searchCriteria"]["keywords"] == "arrosoir"
        assert body["searchCriteria"]["orderBy"] == 2

    def test_search_published_only_hides_unpublished(self, client, store, admin_headers):
        store.products["prod-1"].published = False

        published = client.get("/api/admin/product/search", headers=admin_headers).json()
        everything = client.get(
            "/api/admin/product/search", params={"publishedOnly": "false"}, headers=admin_headers
        ).json()

        assert "prod-1" not in {item["id"] for item in published["items"]}
        assert "prod-1" in {item["id"] for item in everything["items"]}

    def test_search_by_category_and_price(self, client, admin_headers):
        response = client.get(
            "/api/admin/product/search",
            params={"categoryIds": "cat-kitchen, cat-garden", "priceMax": 30},
            headers=admin_headers,
        )

        assert [item["id"] for item in response.json()["items"]] == ["prod-2"]

    def test_get_product(self, client, admin_headers):
        response = client.get("/api/admin/product/prod-1", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["sku"] == "CAF-006"
        assert body["stockQuantity"] == 25
        assert body["oldPrice"] == 49.9

    def test_unknown_product(self, client, admin_headers):
        response = client.get("/api/admin/product/missing", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}


class TestAdminCategoriesAndCustomers:
    def test_category_tree_is_trimmed(self, client, admin_headers):
        response = client.get("/api/admin/category/tree", headers=admin_headers)

        assert response.status_code == 200
        nodes = {node["id"]: node for node in response.json()}
        assert nodes["cat-kitchen"]["parentCategoryId"] == "cat-home"
        assert "description" not in nodes["cat-kitchen"]

    def test_list_categories(self, client, admin_headers):
        body = client.get("/api/admin/category", headers=admin_headers).json()

        assert body["totalCount"] == 3

    def test_customer_search_by_email(self, client, admin_headers):
        response = client.get("/api/admin/customer/search", params={"email": "dupont"}, headers=admin_headers)

        assert response.status_code == 200
        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["email"] == "jean.dupont@example.com"
        assert "createdOnUtc" not in items[0]

    def test_get_customer_hides_password(self, client, admin_headers):
        body = client.get("/api/admin/customer/cust-1", headers=admin_headers).json()

        assert body["id"] == "cust-1"
        assert "password" not in body


class TestAdminOrders:
    def test_list_orders(self, client, admin_headers):
        response = client.get("/api/admin/order", headers=admin_headers)

        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == ["order-1"]

    def test_mark_as_paid(self, client, store, admin_headers):
        order = store.orders["order-1"]
        order.payment_status = PaymentStatus.PENDING
        order.order_status = OrderStatus.PENDING

        response = client.post("/api/admin/order/order-1/MarkAsPaid", headers=admin_headers)

        assert response.status_code == 200
        assert order.payment_status == PaymentStatus.PAID
        assert order.order_status == OrderStatus.PROCESSING
        assert order.paid_date_utc is not None

    def test_mark_as_paid_without_transaction(self, client, store, admin_headers):
        store.transactions.clear()

        response = client.post("/api/admin/order/order-1/MarkAsPaid", headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "No payment transaction found for this order"}

    def test_mark_as_authorized_stamps_transaction(self, client, store, admin_headers):
        order = store.orders["order-1"]

        response = client.post("/api/admin/order/order-1/MarkAsAuthorized", headers=admin_headers)

        assert response.status_code == 200
        assert store.transactions[order.order_guid].authorization_transaction_id

    def test_cancel_restocks(self, client, store, admin_headers):
        response = client.post("/api/admin/order/order-1/Cancel", headers=admin_headers)

        assert response.status_code == 200
        assert store.orders["order-1"].order_status == OrderStatus.CANCELLED
        assert store.products["prod-1"].stock_quantity == 26

    def test_delete_order(self, client, store, admin_headers):
        response = client.delete("/api/admin/order/order-1", headers=admin_headers)

        assert response.status_code == 204
        assert "order-1" not in store.orders
        assert client.get("/api/admin/order/order-1", headers=admin_headers).status_code == 404


class TestAdminShipmentsAndReturns:
    def test_set_as_delivered_completes_order(self, client, store, admin_headers):
        response = client.post("/api/admin/shipment/ship-1/SetAsDelivered", headers=admin_headers)

        assert response.status_code == 200
        assert store.shipments["ship-1"].delivery_date_utc is not None
        order = store.orders["order-1"]
        assert order.shipping_status == ShippingStatus.DELIVERED
        assert order.order_status == OrderStatus.COMPLETE

    def test_set_tracking_number(self, client, store, admin_headers):
        response = client.post(
            "/api/admin/shipment/ship-1/SetTrackingNumber", json="TRACK-42", headers=admin_headers
        )

        assert response.status_code == 200
        assert store.shipments["ship-1"].tracking_number == "TRACK-42"

    def test_unknown_shipment(self, client, admin_headers):
        response = client.post("/api/admin/shipment/nope/SetAsShipped", headers=admin_headers)

        assert response.status_code == 404

    def test_update_return_status_and_notes(self, client, store, admin_headers):
        response = client.patch(
            "/api/admin/merchandisereturn/ret-1",
            json={"merchandiseReturnStatus": "Received", "staffNotes": "Parcel opened"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert store.returns["ret-1"].status.value == "Received"
        assert store.returns["ret-1"].staff_notes == "Parcel opened"

    def test_list_and_delete_returns(self, client, store, admin_headers):
        listed = client.get("/api/admin/merchandisereturn", headers=admin_headers).json()
        assert listed[0]["merchandiseReturnStatus"] == "Pending"

        response = client.delete("/api/admin/merchandisereturn/ret-1", headers=admin_headers)

        assert response.status_code == 204
        assert "ret-1" not in store.returns
