"""
Mobile app endpoint tests
"""

import base64

import jwt

from storelink.models import UserRegistrationType
from storelink.storage.demo import CUSTOMER_EMAIL, CUSTOMER_PASSWORD


def encode_password(password: str) -> str:
    return base64.b64encode(password.encode("utf-8")).decode("ascii")


class TestMobileAccount:
    def test_login_issues_customer_token(self, client, test_settings):
        response = client.post(
            "/api/mobile/account/login",
            json={"email": CUSTOMER_EMAIL, "password": encode_password(CUSTOMER_PASSWORD)},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["customerId"] == "cust-1"
        assert body["firstName"] == "Jean"

        claims = jwt.decode(body["token"], test_settings.frontend_api.secret_key, algorithms=["HS256"])
        assert claims["Email"] == CUSTOMER_EMAIL
        assert claims["CustomerId"] == "cust-1"
        assert claims["Guid"]

    def test_login_accepts_plain_password(self, client):
        response = client.post(
            "/api/mobile/account/login",
            json={"email": CUSTOMER_EMAIL, "password": CUSTOMER_PASSWORD},
        )

        assert response.status_code == 200

    def test_login_wrong_password(self, client):
        response = client.post(
            "/api/mobile/account/login",
            json={"email": CUSTOMER_EMAIL, "password": encode_password("nope-nope")},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_login_unknown_and_inactive_accounts(self, client, store):
        unknown = client.post("/api/mobile/account/login", json={"email": "x@example.com", "password": "secret"})
        store.customers["cust-1"].active = False
        inactive = client.post(
            "/api/mobile/account/login", json={"email": CUSTOMER_EMAIL, "password": CUSTOMER_PASSWORD}
        )

        assert unknown.json() == {"error": "Account not found"}
        assert inactive.json() == {"error": "Account is not active"}

    def test_login_validation(self, client):
        assert client.post("/api/mobile/account/login").json() == {"error": "Invalid request"}
        assert client.post("/api/mobile/account/login", json={"password": "x"}).json() == {"error": "Email is required"}
        assert client.post("/api/mobile/account/login", json={"email": "a@b.c"}).json() == {
            "error": "Password is required"
        }

    def test_register_standard(self, client, store):
        response = client.post(
            "/api/mobile/account/register",
            json={
                "email": "new@example.com",
                "password": encode_password("long-enough"),
                "firstName": "Anna",
                "lastName": "Muster",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["requiresActivation"] is False
        assert body["requiresApproval"] is False

        customer = store.customers[body["customerId"]]
        assert customer.active is True
        assert customer.first_name == "Anna"

    def test_register_with_admin_approval(self, client, store, test_settings):
        test_settings.user_registration_type = UserRegistrationType.ADMIN_APPROVAL

        body = client.post(
            "/api/mobile/account/register",
            json={"email": "pending@example.com", "password": "long-enough"},
        ).json()

        assert body["requiresApproval"] is True
        assert body["message"] == "Registration successful. Your account is pending approval."
        assert store.customers[body["customerId"]].active is False

    def test_register_disabled(self, client, test_settings):
        test_settings.user_registration_type = UserRegistrationType.DISABLED

        response = client.post(
            "/api/mobile/account/register", json={"email": "a@example.com", "password": "long-enough"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Registration is disabled"}

    def test_register_short_password_and_duplicate(self, client):
        short = client.post("/api/mobile/account/register", json={"email": "a@example.com", "password": "abc"})
        duplicate = client.post(
            "/api/mobile/account/register", json={"email": CUSTOMER_EMAIL.upper(), "password": "long-enough"}
        )

        assert short.status_code == 400
        assert short.json() == {"error": "Password must be at least 6 characters"}
        assert duplicate.status_code == 409
        assert duplicate.json() == {"error": "This email is already registered"}

    def test_check_email(self, client):
        taken = client.get("/api/mobile/account/check-email", params={"email": CUSTOMER_EMAIL})
        free = client.get("/api/mobile/account/check-email", params={"email": "free@example.com"})

        assert taken.json() == {"available": False}
        assert free.json() == {"available": True}
        assert client.get("/api/mobile/account/check-email").status_code == 400


class TestMobileCatalog:
    def test_featured_products(self, client):
        body = client.get("/api/mobile/catalog/featured").json()

        assert body["totalCount"] == 1
        item = body["items"][0]
        assert item["id"] == "prod-1"
        assert item["imageUrl"] == "/content/images/thumbs/pic-1_300.jpeg"
        assert item["isFeatured"] is True
        assert item["oldPrice"] == 49.9
        assert item["inStock"] is True

    def test_categories(self, client):
        body = client.get("/api/mobile/catalog/categories").json()

        assert body["totalCount"] == 3
        assert {item["name"] for item in body["items"]} == {"Maison", "Cuisine", "Jardin"}

    def test_category_products_include_subcategories(self, client):
        body = client.get("/api/mobile/catalog/categories/cat-home/products", params={"orderBy": "price"}).json()

        assert [item["id"] for item in body["items"]] == ["prod-1", "prod-3"]
        assert body["totalPages"] == 1
        assert body["pageSize"] == 20

    def test_search_matches_descriptions(self, client):
        body = client.get("/api/mobile/catalog/search", params={"q": "galvanisé"}).json()

        assert body["query"] == "galvanisé"
        assert [item["id"] for item in body["items"]] == ["prod-2"]

    def test_product_detail(self, client):
        body = client.get("/api/mobile/catalog/products/prod-1").json()

        assert body["images"] == ["/content/images/thumbs/pic-1_600.jpeg"]
        assert body["imageUrl"] == body["images"][0]
        assert body["stockQuantity"] == 25

    def test_product_detail_default_picture(self, client):
        body = client.get("/api/mobile/catalog/products/prod-3").json()

        assert body["images"] == []
        assert body["imageUrl"] == "/content/images/thumbs/default-image_600.png"
        assert body["inStock"] is False

    def test_unpublished_product_is_not_found(self, client, store):
        store.products["prod-1"].published = False

        assert client.get("/api/mobile/catalog/products/prod-1").status_code == 404

    def test_new_and_bestsellers(self, client):
        new = client.get("/api/mobile/catalog/new").json()
        best = client.get("/api/mobile/catalog/bestsellers").json()

        assert [item["id"] for item in new["items"]] == ["prod-2"]
        assert [item["id"] for item in best["items"]] == ["prod-1"]

    def test_store_settings(self, client):
        body = client.get("/api/mobile/store/settings").json()

        assert body["storeName"] == "Test Shop"
        assert body["currency"] == "CHF"


class TestMobileShoppingCart:
    def test_requires_token(self, client):
        assert client.get("/api/mobile/shoppingcart").status_code == 401

    def test_accepts_backend_and_frontend_tokens(self, client, customer_headers, customer_backend_headers):
        assert client.get("/api/mobile/shoppingcart", headers=customer_headers).status_code == 200
        assert client.get("/api/mobile/shoppingcart", headers=customer_backend_headers).status_code == 200

    def test_add_merges_identical_lines(self, client, customer_headers):
        first = client.post(
            "/api/mobile/shoppingcart", json={"productId": "prod-1", "quantity": 2}, headers=customer_headers
        )
        second = client.post(
            "/api/mobile/shoppingcart", json={"productId": "prod-1", "quantity": 1}, headers=customer_headers
        )

        assert first.status_code == 200
        assert first.json()["item"]["productImageUrl"] is None
        assert second.json()["item"]["quantity"] == 3

        cart = client.get("/api/mobile/shoppingcart", headers=customer_headers).json()
        assert len(cart["items"]) == 1
        assert cart["totalItems"] == 3
        assert cart["subTotal"] == 39.9 * 3
        assert cart["items"][0]["productImageUrl"] == "/content/images/thumbs/pic-1_100.jpeg"

    def test_add_out_of_stock(self, client, customer_headers):
        response = client.post("/api/mobile/shoppingcart", json={"productId": "prod-3"}, headers=customer_headers)

        assert response.status_code == 400
        assert response.json() == {"success": False, "warnings": ["Out of stock"], "item": None}

    def test_add_validation(self, client, customer_headers):
        missing = client.post("/api/mobile/shoppingcart", json={}, headers=customer_headers)
        unknown = client.post("/api/mobile/shoppingcart", json={"productId": "nope"}, headers=customer_headers)

        assert missing.json() == {"error": "ProductId is required"}
        assert unknown.status_code == 404

    def test_update_remove_and_count(self, client, customer_headers):
        item_id = client.post(
            "/api/mobile/shoppingcart", json={"productId": "prod-2"}, headers=customer_headers
        ).json()["item"]["id"]

        updated = client.put(f"/api/mobile/shoppingcart/{item_id}", json={"quantity": 4}, headers=customer_headers)
        too_many = client.put(f"/api/mobile/shoppingcart/{item_id}", json={"quantity": 99}, headers=customer_headers)
        count = client.get("/api/mobile/shoppingcart/count", headers=customer_headers).json()
        removed = client.delete(f"/api/mobile/shoppingcart/{item_id}", headers=customer_headers)

        assert updated.json()["item"]["quantity"] == 4
        assert too_many.status_code == 400
        assert count == {"itemCount": 1, "totalQuantity": 4}
        assert removed.json() == {"success": True, "message": "Item removed from cart"}
        assert client.delete(f"/api/mobile/shoppingcart/{item_id}", headers=customer_headers).status_code == 404

    def test_update_rejects_zero_quantity(self, client, customer_headers):
        response = client.put("/api/mobile/shoppingcart/any", json={"quantity": 0}, headers=customer_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Quantity must be at least 1"}

    def test_clear(self, client, store, customer_headers):
        client.post("/api/mobile/shoppingcart", json={"productId": "prod-1"}, headers=customer_headers)
        client.post("/api/mobile/shoppingcart", json={"productId": "prod-2"}, headers=customer_headers)

        response = client.delete("/api/mobile/shoppingcart", headers=customer_headers)

        assert response.json() == {"success": True, "message": "Cart cleared"}
        assert store.cart_items == {}


class TestMobileWishlist:
    def test_wishlist_ignores_stock(self, client, customer_headers):
        response = client.post("/api/mobile/wishlist", json={"productId": "prod-3"}, headers=customer_headers)

        assert response.status_code == 200
        assert client.get("/api/mobile/wishlist/count", headers=customer_headers).json() == {"itemCount": 1}

    def test_move_to_cart(self, client, customer_headers):
        item_id = client.post(
            "/api/mobile/wishlist", json={"productId": "prod-2", "quantity": 2}, headers=customer_headers
        ).json()["item"]["id"]

        response = client.post(f"/api/mobile/wishlist/{item_id}/move-to-cart", headers=customer_headers)

        assert response.status_code == 200
        assert response.json()["item"]["quantity"] == 2
        assert client.get("/api/mobile/wishlist/count", headers=customer_headers).json() == {"itemCount": 0}
        assert client.get("/api/mobile/shoppingcart/count", headers=customer_headers).json()["totalQuantity"] == 2

    def test_move_out_of_stock_product_keeps_wishlist_line(self, client, customer_headers):
        item_id = client.post(
            "/api/mobile/wishlist", json={"productId": "prod-3"}, headers=customer_headers
        ).json()["item"]["id"]

        response = client.post(f"/api/mobile/wishlist/{item_id}/move-to-cart", headers=customer_headers)

        assert response.status_code == 400
        assert response.json()["warnings"] == ["Out of stock"]
        assert client.get("/api/mobile/wishlist/count", headers=customer_headers).json() == {"itemCount": 1}

    def test_get_remove_and_clear(self, client, customer_headers):
        item_id = client.post(
            "/api/mobile/wishlist", json={"productId": "prod-1"}, headers=customer_headers
        ).json()["item"]["id"]
        client.post("/api/mobile/wishlist", json={"productId": "prod-2"}, headers=customer_headers)

        listed = client.get("/api/mobile/wishlist", headers=customer_headers).json()
        removed = client.delete(f"/api/mobile/wishlist/{item_id}", headers=customer_headers)
        cleared = client.delete("/api/mobile/wishlist", headers=customer_headers)

        assert listed["totalItems"] == 2
        assert listed["currencyCode"] == "CHF"
        assert removed.json() == {"success": True, "message": "Item removed from wishlist"}
        assert cleared.json() == {"success": True, "message": "Wishlist cleared"}
        assert client.get("/api/mobile/wishlist/count", headers=customer_headers).json() == {"itemCount": 0}
