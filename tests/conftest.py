"""
Общие фикстуры: меню магазина, фейковый бэкенд, временная база корзин.
"""

import copy
import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from backend.app.models.product import ShopMenu
from backend.app.services.backend_client import BackendClient
from backend.app.services.database import DatabaseService


BASE_URL = "http://backend.test/api"

SHOP = {
    "id": "shop-1",
    "name": "Mewmew Cafe",
    "slug": "mewmew",
    "status": "open",
    "acceptingOrders": True,
}

LATTE = {
    "id": "p-latte",
    "label": "Latte",
    "price": 4.0,
    "categories": ["Coffee"],
    "media": [{"url": "https://cdn.test/latte.jpg", "kind": "image"}],
    "variantGroups": [
        {
            "id": "vg-size",
            "label": "Size",
            "options": [
                {"id": "v-small", "label": "Small", "priceDelta": {"amount": 0}},
                {"id": "v-large", "label": "Large", "priceDelta": {"amount": 1.5}},
                {"id": "v-huge", "label": "Huge", "priceDelta": {"amount": 2.5}, "isAvailable": False},
            ],
        }
    ],
    "addonGroups": [
        {
            "id": "ag-extras",
            "label": "Extras",
            "maxSelectable": 2,
            "options": [
                {"id": "a-shot", "label": "Extra shot", "priceDelta": {"amount": 0.75}},
                {"id": "a-oat", "label": "Oat milk", "priceDelta": {"amount": 0.5}},
                {"id": "a-syrup", "label": "Syrup", "priceDelta": {"amount": 0.3}},
            ],
        }
    ],
}

MENU_PAYLOAD = {
    "shop": SHOP,
    "categories": [
        {"id": "Coffee", "name": "Кофе"},
        {"id": "bakery", "name": "Выпечка"},
    ],
    "products": [
        LATTE,
        {"id": "p-croissant", "label": "Croissant", "price": 3.0, "categories": ["bakery"]},
        {"id": "p-espresso", "label": "Espresso", "price": 2.5, "categories": ["coffee"]},
        {"id": "p-seasonal", "label": "Seasonal", "price": 5.0, "categories": ["coffee"]},
        {"id": "p-water", "label": "Water", "price": 1.0, "categories": []},
        {"id": "p-offmenu", "label": "Off menu", "price": 9.0, "categories": ["coffee"]},
    ],
    "productsInShop": [
        {"id": "e-latte", "productId": "p-latte", "shopId": "shop-1", "priceOverride": 4.2, "sortOrder": 2},
        {"id": "e-croissant", "productId": "p-croissant", "shopId": "shop-1", "sortOrder": 1},
        {"id": "e-espresso", "productId": "p-espresso", "shopId": "shop-1"},
        {"id": "e-seasonal", "productId": "p-seasonal", "shopId": "shop-1", "isAvailable": False, "sortOrder": 0},
        {"id": "e-water", "productId": "p-water", "shopId": "shop-1", "sortOrder": 3},
    ],
}


def menu_payload() -> Dict[str, Any]:
    return copy.deepcopy(MENU_PAYLOAD)


def make_menu() -> ShopMenu:
    return ShopMenu.model_validate(menu_payload())


def order_payload(
    order_id: str = "order-1",
    status: str = "placed",
    shop_id: str = "shop-1",
    items: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "id": order_id,
        "shopId": shop_id,
        "userId": "user-1",
        "status": status,
        "paymentStatus": "unpaid",
        "totalAmount": {"amount": 13.45, "currency": "USD"},
        "customerName": "Ann",
        "items": items if items is not None else [
            {
                "productId": "p-latte",
                "productVariantId": "v-large",
                "productNameSnapshot": "Latte",
                "finalUnitPrice": {"amount": 6.45, "currency": "USD"},
                "quantity": 2,
            },
            {
                "productId": "p-croissant",
                "productNameSnapshot": "Croissant",
                "finalUnitPrice": {"amount": 0.55, "currency": "USD"},
                "quantity": 1,
            },
        ],
    }


Responder = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Маршруты фейкового бэкенда по (метод, путь) с журналом запросов."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Responder] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, json_body: Any = None, status: int = 200) -> None:
        self.routes[(method, "/api" + path)] = lambda request: httpx.Response(status, json=json_body)

    def add_handler(self, method: str, path: str, responder: Responder) -> None:
        self.routes[(method, "/api" + path)] = responder

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == "/api" + path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404, json={"detail": "Not found"})
        return responder(request)


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture
def menu() -> ShopMenu:
    return make_menu()


@pytest.fixture
def latte(menu):
    return next(p for p in menu.products if p.id == "p-latte")


@pytest.fixture
def fake_backend() -> FakeBackend:
    fake = FakeBackend()
    fake.add("GET", "/shops/shop-1/menu", menu_payload())
    fake.add("GET", "/shops/shop-1", SHOP)
    return fake


@pytest.fixture
async def backend(fake_backend):
    client = BackendClient(base_url=BASE_URL, transport=httpx.MockTransport(fake_backend.handler))
    yield client
    await client.close()


@pytest.fixture
async def db(tmp_path):
    service = DatabaseService(db_path=tmp_path / "carts.db")
    await service.connect()
    await service.ensure_schema()
    yield service
    await service.disconnect()
