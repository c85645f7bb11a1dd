"""Tests for the FastAPI HTTP surface."""

from decimal import Decimal

from .conftest import BOILER_ID, RADIATOR_ID, RETIRED_ID, THERMOSTAT_ID, UNKNOWN_ID

ADDRESS = {"street": "12 rue Didouche Mourad", "city": "Alger", "region_code": "16"}
GUEST_INFO = {
    "first_name": "Amina",
    "last_name": "Benali",
    "email": "amina@example.dz",
    "phone": "+213555123456",
}


def place_order(client, headers, *lines, **extra):
    body = {
        "items": [{"product_id": pid, "quantity": qty} for pid, qty in lines],
        "shipping_address": ADDRESS,
        **extra,
    }
    return client.post("/api/orders", json=body, headers=headers)


class TestHealthCheck:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestRegions:
    def test_list_regions(self, client):
        response = client.get("/api/regions")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["count"] == 58
        assert data["data"][0]["code"] == "01"

    def test_get_region(self, client):
        response = client.get("/api/regions/16")
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Alger"

    def test_unknown_region(self, client):
        response = client.get("/api/regions/99")
        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"]["kind"] == "REGION_NOT_FOUND"

    def test_shipping_cost(self, client):
        data = client.get("/api/regions/16/shipping-cost").json()
        assert Decimal(data["shipping_cost"]) == Decimal("400")
        assert data["is_fallback"] is False

    def test_shipping_cost_unknown_region_falls_back(self, client):
        response = client.get("/api/regions/99/shipping-cost")
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["shipping_cost"]) == Decimal("500")
        assert data["is_fallback"] is True

    def test_shipping_cost_with_subtotal(self, client):
        data = client.get("/api/regions/16/shipping-cost", params={"subtotal": "60000"}).json()
        assert Decimal(data["effective_shipping_cost"]) == Decimal("0")


class TestProducts:
    def test_availability(self, client):
        response = client.get(f"/api/products/{BOILER_ID}/availability", params={"quantity": 4})
        assert response.status_code == 200
        assert response.json()["available"] is True

    def test_availability_over_stock(self, client):
        data = client.get(f"/api/products/{BOILER_ID}/availability", params={"quantity": 5}).json()
        assert data["available"] is False
        assert data["current_stock"] == 4

    def test_availability_unknown_product(self, client):
        response = client.get(f"/api/products/{UNKNOWN_ID}/availability")
        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "PRODUCT_NOT_FOUND"


class TestCart:
    def test_requires_customer(self, client):
        response = client.get("/api/cart")
        assert response.status_code == 401
        assert response.json()["error"]["kind"] == "AUTHENTICATION_REQUIRED"

    def test_add_update_remove(self, client, customer_headers):
        response = client.post(
            "/api/cart/items",
            json={"product_id": RADIATOR_ID, "quantity": 2},
            headers=customer_headers,
        )
        assert response.status_code == 200
        assert Decimal(response.json()["total"]) == Decimal("2000")

        response = client.patch(
            f"/api/cart/items/{RADIATOR_ID}", json={"quantity": 5}, headers=customer_headers
        )
        assert Decimal(response.json()["total"]) == Decimal("5000")
        assert response.json()["item_count"] == 5

        response = client.patch(
            f"/api/cart/items/{RADIATOR_ID}", json={"quantity": 0}, headers=customer_headers
        )
        assert response.json()["items"] == []

    def test_add_inactive_product(self, client, customer_headers):
        response = client.post(
            "/api/cart/items",
            json={"product_id": RETIRED_ID, "quantity": 1},
            headers=customer_headers,
        )
        assert response.status_code == 404

    def test_add_rejects_zero_quantity(self, client, customer_headers):
        response = client.post(
            "/api/cart/items",
            json={"product_id": RADIATOR_ID, "quantity": 0},
            headers=customer_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["kind"] == "VALIDATION_ERROR"

    def test_replace_and_clear(self, client, customer_headers):
        response = client.put(
            "/api/cart",
            json={"items": [{"product_id": THERMOSTAT_ID, "quantity": 2}]},
            headers=customer_headers,
        )
        assert Decimal(response.json()["total"]) == Decimal("1300")

        response = client.delete("/api/cart", headers=customer_headers)
        assert response.json()["items"] == []

    def test_merge_is_idempotent(self, client, customer_headers):
        client.post(
            "/api/cart/items",
            json={"product_id": RADIATOR_ID, "quantity": 1},
            headers=customer_headers,
        )
        guest_cart = {"items": [{"product_id": RADIATOR_ID, "quantity": 2}]}

        first = client.post("/api/cart/merge", json=guest_cart, headers=customer_headers).json()
        second = client.post("/api/cart/merge", json=guest_cart, headers=customer_headers).json()

        assert first["items"][0]["quantity"] == 3
        assert second["items"] == first["items"]

    def test_merge_after_clearing_cart(self, client, customer_headers):
        guest_cart = {"items": [{"product_id": RADIATOR_ID, "quantity": 2}]}

        client.post("/api/cart/merge", json=guest_cart, headers=customer_headers)
        client.delete("/api/cart", headers=customer_headers)
        merged = client.post("/api/cart/merge", json=guest_cart, headers=customer_headers).json()

        assert merged["items"][0]["quantity"] == 2

    def test_retried_merge_id_is_not_reapplied(self, client, customer_headers):
        guest_cart = {"items": [{"product_id": RADIATOR_ID, "quantity": 2}], "merge_id": "login-7"}

        client.post("/api/cart/merge", json=guest_cart, headers=customer_headers)
        client.delete("/api/cart", headers=customer_headers)
        retried = client.post("/api/cart/merge", json=guest_cart, headers=customer_headers).json()

        assert retried["items"] == []

    def test_validate_cart(self, client):
        response = client.post(
            "/api/cart/validate",
            json={"items": [{"product_id": BOILER_ID, "quantity": 6}]},
        )
        data = response.json()
        assert data["valid"] is False
        assert data["errors"][0]["available_stock"] == 4


class TestPayments:
    def test_methods(self, client):
        data = client.get("/api/payments/methods").json()
        assert [m["id"] for m in data["data"]] == ["CASH_ON_DELIVERY"]

    def test_verify(self, client):
        response = client.get("/api/payments/verify/COD_1700000000000_abc123")
        assert response.status_code == 200
        assert response.json()["status"] == "PENDING_DELIVERY"

    def test_verify_unknown(self, client):
        response = client.get("/api/payments/verify/TXN_1")
        assert response.status_code == 404


class TestOrders:
    def test_create_order_ignores_client_prices(self, client, customer_headers):
        response = place_order(
            client,
            customer_headers,
            (BOILER_ID, 1),
            subtotal="999",
            total_amount="1399",
        )
        assert response.status_code == 201
        order = response.json()["order"]
        assert Decimal(order["subtotal"]) == Decimal("1200")
        assert Decimal(order["total_amount"]) == Decimal("1600")
        assert order["payment_reference"].startswith("COD_")

    def test_order_clears_cart(self, client, customer_headers):
        client.post(
            "/api/cart/items",
            json={"product_id": RADIATOR_ID, "quantity": 1},
            headers=customer_headers,
        )
        response = place_order(client, customer_headers, (RADIATOR_ID, 1))
        assert response.json()["order"]["cart_cleared"] is True
        assert client.get("/api/cart", headers=customer_headers).json()["items"] == []

    def test_order_requires_customer(self, client):
        response = place_order(client, {}, (RADIATOR_ID, 1))
        assert response.status_code == 401

    def test_insufficient_stock(self, client, customer_headers):
        response = place_order(client, customer_headers, (BOILER_ID, 10))
        assert response.status_code == 409
        error = response.json()["error"]
        assert error["kind"] == "INSUFFICIENT_STOCK"
        assert error["details"][0]["product_id"] == BOILER_ID

    def test_disabled_payment_method(self, client, customer_headers):
        response = place_order(
            client, customer_headers, (RADIATOR_ID, 1), payment_method="CREDIT_CARD"
        )
        assert response.status_code == 403
        assert response.json()["error"]["kind"] == "PAYMENT_METHOD_DISABLED"

    def test_empty_order(self, client, customer_headers):
        response = place_order(client, customer_headers)
        assert response.status_code == 400
        assert response.json()["error"]["details"][0]["field"] == "items"

    def test_guest_order(self, client):
        response = client.post(
            "/api/orders/guest",
            json={
                "items": [{"product_id": RADIATOR_ID, "quantity": 1}],
                "shipping_address": ADDRESS,
                "customer_info": GUEST_INFO,
            },
        )
        assert response.status_code == 201
        assert Decimal(response.json()["order"]["total_amount"]) == Decimal("1400")

    def test_guest_order_bad_phone(self, client):
        response = client.post(
            "/api/orders/guest",
            json={
                "items": [{"product_id": RADIATOR_ID, "quantity": 1}],
                "shipping_address": ADDRESS,
                "customer_info": {**GUEST_INFO, "phone": "123"},
            },
        )
        assert response.status_code == 400
        fields = [d["field"] for d in response.json()["error"]["details"]]
        assert fields == ["customer_info.phone"]

    def test_list_get_and_cancel(self, client, customer_headers):
        order_id = place_order(client, customer_headers, (BOILER_ID, 2)).json()["order"]["order_id"]

        listed = client.get("/api/orders", headers=customer_headers).json()
        assert listed["count"] == 1

        response = client.get(f"/api/orders/{order_id}", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "PENDING"

        other = client.get(f"/api/orders/{order_id}", headers={"X-Customer-Id": "cust-other"})
        assert other.status_code == 404

        response = client.post(
            f"/api/orders/{order_id}/cancel",
            json={"reason": "Erreur de commande"},
            headers=customer_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "CANCELLED"

        availability = client.get(f"/api/products/{BOILER_ID}/availability").json()
        assert availability["current_stock"] == 4

        again = client.post(f"/api/orders/{order_id}/cancel", headers=customer_headers)
        assert again.status_code == 409


class TestAdmin:
    def test_requires_admin_role(self, client, customer_headers):
        response = client.patch(
            f"/api/admin/orders/{UNKNOWN_ID}/status",
            json={"status": "CONFIRMED"},
            headers=customer_headers,
        )
        assert response.status_code == 403

    def test_status_transition(self, client, customer_headers, admin_headers):
        order_id = place_order(client, customer_headers, (RADIATOR_ID, 1)).json()["order"]["order_id"]

        response = client.patch(
            f"/api/admin/orders/{order_id}/status",
            json={"status": "CONFIRMED"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "CONFIRMED"

        response = client.patch(
            f"/api/admin/orders/{order_id}/status",
            json={"status": "PENDING"},
            headers=admin_headers,
        )
        assert response.status_code == 409
        assert response.json()["error"]["kind"] == "INVALID_STATUS_TRANSITION"

    def test_unknown_status_value(self, client, admin_headers):
        response = client.patch(
            f"/api/admin/orders/{UNKNOWN_ID}/status",
            json={"status": "SHIPPED"},
            headers=admin_headers,
        )
        assert response.status_code == 400
