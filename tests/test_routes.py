"""
Tests for HTTP routes with a fake backend behind the gateway.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.app.config import settings
from backend.app.main import app
from backend.app.services import backend_client, store_api
from backend.app.services.backend_client import BackendClient

from conftest import BASE_URL, SHOP, order_payload, request_json

OWNER = {"Authorization": "Bearer owner-token"}
CLIENT = {"X-Client-ID": "client-1"}
LATTE_KEY = "p-latte::v-large::a-shot"


@pytest.fixture
def client(monkeypatch, tmp_path, fake_backend):
    monkeypatch.setattr(settings, "DATABASE_PATH", tmp_path / "storefront.db")
    monkeypatch.setattr(settings, "API_ACCESS_TOKEN", "service-token")
    backend_client._backend_client = BackendClient(
        base_url=BASE_URL, transport=httpx.MockTransport(fake_backend.handler)
    )
    store_api.reset_api_sessions()
    with TestClient(app) as test_client:
        yield test_client
    store_api.reset_api_sessions()


def add_latte(client, quantity=1):
    return client.post(
        "/api/cart/shop-1/items",
        headers=CLIENT,
        json={"productId": "p-latte", "variantId": "v-large", "addonOptionIds": ["a-shot"], "quantity": quantity},
    )


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/api/health").json() == {"status": "healthy"}


class TestOwnerRoutes:

    def test_requires_bearer(self, client):
        response = client.get("/api/shops/shop-1")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_get_shop_forwards_token(self, client, fake_backend):
        response = client.get("/api/shops/shop-1", headers=OWNER)
        assert response.status_code == 200
        assert response.json()["acceptingOrders"] is True

        request = fake_backend.calls("GET", "/shops/shop-1")[0]
        assert request.headers["authorization"] == "Bearer owner-token"

    def test_backend_error_keeps_status(self, client):
        response = client.get("/api/shops/missing", headers=OWNER)
        assert response.status_code == 404
        assert response.json() == {"detail": "Not found"}

    def test_backend_unavailable(self, client, fake_backend):
        def broken(request):
            raise httpx.ConnectError("refused", request=request)

        fake_backend.add_handler("GET", "/users", broken)
        response = client.get("/api/users/", headers=OWNER)
        assert response.status_code == 503

    def test_delete_shop(self, client, fake_backend):
        fake_backend.add("DELETE", "/shops/shop-1", status=204)
        response = client.delete("/api/shops/shop-1", headers=OWNER)
        assert response.json() == {"message": "Shop deleted"}

    def test_unexpected_backend_payload(self, client, fake_backend):
        fake_backend.add("GET", "/shops/shop-2", {"id": "shop-2"})
        response = client.get("/api/shops/shop-2", headers=OWNER)
        assert response.status_code == 502
        assert "detail" in response.json()

    def test_shop_list_filters(self, client, fake_backend):
        fake_backend.add("GET", "/shops", [SHOP])
        response = client.get("/api/shops/?status=open&acceptingOrders=true", headers=OWNER)
        assert [s["id"] for s in response.json()] == ["shop-1"]

        params = fake_backend.calls("GET", "/shops")[0].url.params
        assert params["status"] == "open"
        assert params["acceptingOrders"] == "true"


class TestAdvanceOrder:

    def test_advances_to_next_status(self, client, fake_backend):
        fake_backend.add("GET", "/orders/order-1", order_payload(status="accepted"))
        fake_backend.add_handler(
            "PATCH", "/shops/shop-1/orders/order-1/status",
            lambda request: httpx.Response(200, json=order_payload(status=request_json(request)["nextStatus"])),
        )

        response = client.post("/api/shops/shop-1/orders/order-1/advance", headers=OWNER)
        assert response.status_code == 200
        assert response.json()["status"] == "ready_for_pickup"

    def test_status_changed_since_cached(self, client, fake_backend):
        fake_backend.add("GET", "/orders/order-1", order_payload(status="placed"))
        assert client.get("/api/orders/order-1", headers=OWNER).json()["status"] == "placed"

        # заказ отменили в другой сессии
        fake_backend.add("GET", "/orders/order-1", order_payload(status="cancelled"))
        response = client.post("/api/shops/shop-1/orders/order-1/advance", headers=OWNER)

        assert response.status_code == 409
        assert fake_backend.calls("PATCH", "/shops/shop-1/orders/order-1/status") == []
        assert client.get("/api/orders/order-1", headers=OWNER).json()["status"] == "cancelled"

    def test_terminal_order(self, client, fake_backend):
        fake_backend.add("GET", "/orders/order-1", order_payload(status="completed"))
        response = client.post("/api/shops/shop-1/orders/order-1/advance", headers=OWNER)
        assert response.status_code == 409
        assert fake_backend.calls("PATCH", "/shops/shop-1/orders/order-1/status") == []

    def test_order_of_another_shop(self, client, fake_backend):
        fake_backend.add("GET", "/orders/order-1", order_payload(shop_id="shop-2"))
        response = client.post("/api/shops/shop-1/orders/order-1/advance", headers=OWNER)
        assert response.status_code == 404


class TestStorefront:

    def test_storefront_uses_service_token(self, client, fake_backend):
        response = client.get("/api/storefront/shop-1")
        assert response.status_code == 200

        body = response.json()
        assert [c["id"] for c in body["categories"]] == ["bakery", "coffee"]
        assert body["categories"][1]["products"][0]["price"] == 4.2
        # часы не заданы - магазин открыт
        assert body["isOpen"] is True

        request = fake_backend.calls("GET", "/shops/shop-1/menu")[0]
        assert request.headers["authorization"] == "Bearer service-token"

    def test_closed_by_hours(self, client, fake_backend):
        fake_backend.add("GET", "/shops/shop-1/hours", {
            "timezone": "UTC",
            "weekly": {day: [{"opensAt": "00:00", "closesAt": "00:00", "isClosed": True}] for day in (
                "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
            )},
        })
        response = client.get("/api/storefront/shop-1")
        assert response.json()["isOpen"] is False

    def test_hours_with_seconds(self, client, fake_backend):
        fake_backend.add("GET", "/shops/shop-1/hours", {
            "timezone": "UTC",
            "weekly": {day: [{"opensAt": "00:00:00", "closesAt": "00:00:00"}] for day in (
                "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
            )},
        })
        response = client.get("/api/storefront/shop-1")
        assert response.status_code == 200
        assert response.json()["isOpen"] is True

    def test_unexpected_hours_payload(self, client, fake_backend):
        fake_backend.add("GET", "/shops/shop-1/hours", {"weekly": {}})
        response = client.get("/api/storefront/shop-1")
        assert response.status_code == 502
        assert "detail" in response.json()


class TestCart:

    def test_requires_client_id(self, client):
        response = client.get("/api/cart/shop-1")
        assert response.status_code == 400

    def test_add_prices_on_server(self, client):
        response = add_latte(client)
        assert response.status_code == 200

        body = response.json()
        assert body["items"][0]["key"] == LATTE_KEY
        assert body["items"][0]["price"] == 6.45
        assert body["total"] == 6.45

    def test_same_selection_merges(self, client):
        add_latte(client)
        body = add_latte(client, quantity=2).json()
        assert len(body["items"]) == 1
        assert body["count"] == 3

    def test_default_variant(self, client):
        body = client.post("/api/cart/shop-1/items", headers=CLIENT, json={"productId": "p-latte"}).json()
        assert body["items"][0]["variantId"] == "v-small"
        assert float(body["total"]) == 4.2

    def test_unknown_or_unavailable_product(self, client):
        for product_id in ("p-missing", "p-seasonal", "p-offmenu"):
            response = client.post("/api/cart/shop-1/items", headers=CLIENT, json={"productId": product_id})
            assert response.status_code == 404

    def test_invalid_selection(self, client):
        response = client.post("/api/cart/shop-1/items", headers=CLIENT, json={
            "productId": "p-latte",
            "addonOptionIds": ["a-shot", "a-oat", "a-syrup"],
        })
        assert response.status_code == 400

        response = client.post("/api/cart/shop-1/items", headers=CLIENT, json={
            "productId": "p-latte", "variantId": "v-huge",
        })
        assert response.status_code == 400

    def test_quantity_changes(self, client):
        add_latte(client)
        assert client.post(f"/api/cart/shop-1/items/{LATTE_KEY}/increment", headers=CLIENT).json()["count"] == 2
        assert client.post(
            f"/api/cart/shop-1/items/{LATTE_KEY}/decrement", headers=CLIENT, json={"by": 1}
        ).json()["count"] == 1

        body = client.patch(f"/api/cart/shop-1/items/{LATTE_KEY}", headers=CLIENT, json={"quantity": 0}).json()
        assert body["items"] == []

    def test_summary(self, client):
        add_latte(client, quantity=2)
        summary = client.get("/api/cart/shop-1/summary", headers=CLIENT).json()
        assert summary == {"count": 2, "total": 12.9, "lines": 1}

    def test_carts_are_per_client(self, client):
        add_latte(client)
        body = client.get("/api/cart/shop-1", headers={"X-Client-ID": "client-2"}).json()
        assert body["items"] == []

    def test_clear(self, client):
        add_latte(client)
        assert client.delete("/api/cart/shop-1", headers=CLIENT).json()["items"] == []


class TestCheckout:

    def test_empty_cart(self, client):
        response = client.post("/api/cart/shop-1/checkout", headers=CLIENT, json={"customerName": "Ann"})
        assert response.status_code == 400
        assert response.json() == {"detail": "Cart is empty."}

    def test_creates_order_and_clears_cart(self, client, fake_backend):
        fake_backend.add("POST", "/shops/shop-1/orders", order_payload())
        add_latte(client, quantity=2)

        response = client.post("/api/cart/shop-1/checkout", headers=CLIENT, json={
            "customerName": "Ann", "customerPhone": "+100",
        })
        assert response.status_code == 200
        assert response.json()["id"] == "order-1"

        sent = request_json(fake_backend.calls("POST", "/shops/shop-1/orders")[0])
        assert sent["userId"] == "client-1"
        assert sent["items"] == [{
            "productId": "p-latte",
            "productVariantId": "v-large",
            "quantity": 2,
            "addonOptionIds": ["a-shot"],
        }]

        assert client.get("/api/cart/shop-1", headers=CLIENT).json()["items"] == []

    def test_failed_order_keeps_cart(self, client, fake_backend):
        fake_backend.add("POST", "/shops/shop-1/orders", {"message": "Shop is closed"}, status=409)
        add_latte(client)

        response = client.post("/api/cart/shop-1/checkout", headers=CLIENT, json={"customerName": "Ann"})
        assert response.status_code == 409
        assert response.json() == {"detail": "Shop is closed"}
        assert len(client.get("/api/cart/shop-1", headers=CLIENT).json()["items"]) == 1
