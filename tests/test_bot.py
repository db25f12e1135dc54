"""
Tests for bot keyboards, active shop state and customer middleware.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import Chat, Message, User

from backend.app.config import settings
from backend.app.models.cart import CartItemInput
from backend.app.models.order import Order
from backend.app.services.auth import AccessTokenStore
from backend.app.services.cart import Cart
from backend.app.services.menu import build_storefront
from backend.app.services.store_api import ApiSessions
from backend.bot.keyboards import (
    cart_keyboard,
    cart_text,
    categories_keyboard,
    orders_text,
    product_keyboard,
    storefront_text,
)
from backend.bot.middlewares import CustomerMiddleware, cart_owner_id
from backend.bot.shop_context import clear_active_shop, get_active_shop, set_active_shop

from conftest import order_payload


def callback_data(markup):
    return [b.callback_data for row in markup.inline_keyboard for b in row]


def long_cart():
    cart = Cart("shop-1")
    cart.add_item("shop-1", CartItemInput(
        id="p-" + "x" * 60, name="Long", price=Decimal("2.5"), quantity=2,
        variant_id="v-" + "y" * 40, addon_option_ids=["a-" + "z" * 40],
    ))
    cart.add_item("shop-1", CartItemInput(id="p-croissant", name="<Croissant>", price=Decimal("3")))
    return cart


class TestKeyboards:

    def test_categories(self, menu):
        storefront = build_storefront(menu)
        assert callback_data(categories_keyboard(storefront)) == ["cat:0", "cat:1", "cart"]
        assert "Выберите категорию" in storefront_text(storefront)

    def test_paused_shop_text(self, menu):
        storefront = build_storefront(menu)
        storefront.is_open = False
        assert "не принимает заказы" in storefront_text(storefront)

    def test_product_marks(self, latte):
        markup = product_keyboard(latte, "v-large", ["a-oat"], 3)
        texts = {b.callback_data: b.text for row in markup.inline_keyboard for b in row}

        assert texts["var:v-large"].startswith("🔘")
        assert texts["var:v-small"].startswith("⚪️")
        # недоступный вариант не показываем
        assert "var:v-huge" not in texts
        assert texts["addon:a-oat"].startswith("☑️")
        assert texts["addon:a-shot"].startswith("⬜️")
        assert texts["noop"] == "3"

    def test_cart_lines_by_index(self):
        cart = long_cart()
        data = callback_data(cart_keyboard(cart))

        assert "line:del:1" in data
        assert "cart:checkout" in data
        assert all(len(d.encode()) <= 64 for d in data)

    def test_cart_text(self):
        text = cart_text(long_cart())
        assert "&lt;Croissant&gt;" in text
        assert "Итого: $8.00" in text

    def test_empty_cart(self):
        cart = Cart("shop-1")
        assert "Корзина пуста" in cart_text(cart)
        assert callback_data(cart_keyboard(cart)) == ["catalog"]

    def test_orders_text(self):
        orders = [Order.model_validate(order_payload(status="ready_for_pickup"))]
        text = orders_text(orders)
        assert "$13.45" in text
        assert "Готов к выдаче" in text
        assert "Заказов пока нет" in orders_text([])


@pytest.fixture
def state():
    return FSMContext(storage=MemoryStorage(), key=StorageKey(bot_id=1, chat_id=1, user_id=1))


class TestActiveShop:

    async def test_default_shop(self, state, monkeypatch):
        monkeypatch.setattr(settings, "BOT_SHOP_ID", "")
        assert (await get_active_shop(state)).shop_id is None

        monkeypatch.setattr(settings, "BOT_SHOP_ID", "shop-default")
        assert (await get_active_shop(state)).shop_id == "shop-default"

    async def test_set_keeps_previous_slug(self, state):
        await set_active_shop(state, "shop-1", "mewmew")
        active = await set_active_shop(state, "shop-2")
        assert active.shop_id == "shop-2"
        assert active.slug == "mewmew"
        assert (await get_active_shop(state)).shop_id == "shop-2"

    async def test_clear(self, state, monkeypatch):
        monkeypatch.setattr(settings, "BOT_SHOP_ID", "")
        await set_active_shop(state, "shop-1")
        await clear_active_shop(state)
        assert (await get_active_shop(state)).shop_id is None


def message(chat_type="private"):
    return Message(
        message_id=1,
        date=datetime.now(),
        chat=Chat(id=10, type=chat_type),
        from_user=User(id=42, is_bot=False, first_name="Ann", last_name="Lee"),
        text="/start",
    )


class TestCustomerMiddleware:

    async def test_private_chat(self, backend):
        tokens = AccessTokenStore("bot-token")
        middleware = CustomerMiddleware(ApiSessions(backend), tokens)
        seen = {}

        async def handler(event, data):
            seen.update(data)
            return "handled"

        assert await middleware(handler, message(), {}) == "handled"
        assert seen["cart_owner"] == cart_owner_id(42) == "tg:42"
        assert seen["telegram_user"]["full_name"] == "Ann Lee"
        assert seen["api"].token == "bot-token"

    async def test_group_chat_ignored(self, backend):
        middleware = CustomerMiddleware(ApiSessions(backend), AccessTokenStore())
        called = []

        async def handler(event, data):
            called.append(event)

        assert await middleware(handler, message("group"), {}) is None
        assert called == []
