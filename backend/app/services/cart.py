"""
Корзина покупателя: строки по сигнатуре, хранение в разрезе магазина.
"""

import json
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Iterable

import aiosqlite
from pydantic import ValidationError

from ..config import settings
from ..models.cart import CartItem, CartItemInput, CartView
from .database import DatabaseService

logger = logging.getLogger(__name__)


def cart_key(shop_id: Optional[str] = None, prefix: Optional[str] = None) -> str:
    """
    Ключ хранилища корзины.

    С магазином: mewmew_cart_v1:<shopId>, без магазина: mewmew_cart_v1:global
    """
    base = prefix or settings.CART_STORAGE_PREFIX
    return f"{base}:{shop_id if shop_id else 'global'}"


def make_signature(
    product_id: str,
    variant_id: Optional[str] = None,
    addon_option_ids: Optional[Iterable[str]] = None,
) -> str:
    """Сигнатура строки: id::variant::addons (добавки отсортированы)."""
    addons = ",".join(sorted(addon_option_ids or []))
    return f"{product_id}::{variant_id or ''}::{addons}"


class Cart:
    """Состояние корзины и операции над ним (без ввода-вывода).

    Методы возвращают True, если состояние нужно сохранить.
    """

    def __init__(self, shop_id: Optional[str] = None, items: Optional[List[CartItem]] = None):
        self.shop_id = shop_id
        self.items: List[CartItem] = list(items or [])

    def load(self, shop_id: Optional[str], items: List[CartItem]) -> None:
        self.shop_id = shop_id
        self.items = list(items)

    def find(self, key: str) -> Optional[CartItem]:
        return next((it for it in self.items if it.key == key), None)

    def add_item(self, shop_id: Optional[str], item: CartItemInput) -> bool:
        # корзина другого магазина начинается с нуля
        if self.shop_id != shop_id:
            self.shop_id = shop_id
            self.items = []

        signature = make_signature(item.id, item.variant_id, item.addon_option_ids)
        quantity = item.quantity or 1
        existing = self.find(signature)
        if existing:
            existing.quantity += quantity
        else:
            self.items.append(CartItem(
                key=signature,
                id=item.id,
                name=item.name,
                image_url=item.image_url,
                price=item.price,
                quantity=quantity,
                variant_id=item.variant_id,
                addon_option_ids=item.addon_option_ids,
            ))
        return True

    def remove_item(self, key: str) -> bool:
        self.items = [it for it in self.items if it.key != key]
        return True

    def increment(self, key: str, by: int = 1) -> bool:
        item = self.find(key)
        if not item:
            return False
        item.quantity += by
        return True

    def decrement(self, key: str, by: int = 1) -> bool:
        item = self.find(key)
        if not item:
            return False
        item.quantity = max(0, item.quantity - by)
        if item.quantity == 0:
            self.remove_item(key)
        return True

    def set_quantity(self, key: str, quantity: int) -> bool:
        item = self.find(key)
        if not item:
            return False
        item.quantity = max(0, quantity)
        if item.quantity == 0:
            self.remove_item(key)
        return True

    def clear(self) -> bool:
        self.items = []
        return True

    @property
    def count(self) -> int:
        return sum(it.quantity for it in self.items)

    @property
    def total(self) -> Decimal:
        return sum((it.price * it.quantity for it in self.items), Decimal("0"))

    def view(self) -> CartView:
        return CartView(
            shop_id=self.shop_id,
            items=[it.model_copy() for it in self.items],
            count=self.count,
            total=self.total,
        )


class CartStorage:
    """Хранилище корзин: JSON список строк по (владелец, ключ)."""

    TABLE = "cart_storage"

    def __init__(self, db: DatabaseService):
        self.db = db

    async def read(self, owner_id: str, shop_id: Optional[str]) -> List[CartItem]:
        row = await self.db.fetch_one(
            f"SELECT value FROM {self.TABLE} WHERE owner_id = ? AND storage_key = ?",
            (owner_id, cart_key(shop_id)),
        )
        if not row:
            return []
        try:
            raw = json.loads(row["value"])
            return [CartItem.model_validate(it) for it in raw]
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"[CART] Unreadable cart {cart_key(shop_id)} for {owner_id}: {e}")
            return []

    async def write(self, owner_id: str, shop_id: Optional[str], items: List[CartItem]) -> None:
        value = json.dumps([it.model_dump(mode="json", by_alias=True) for it in items])
        await self.db.upsert(
            self.TABLE,
            {
                "owner_id": owner_id,
                "storage_key": cart_key(shop_id),
                "value": value,
                "updated_at": datetime.utcnow().isoformat(),
            },
            conflict=["owner_id", "storage_key"],
        )


class CartService:
    """Загружает корзину, применяет операцию и сохраняет результат."""

    def __init__(self, db: DatabaseService):
        self.storage = CartStorage(db)

    async def load(self, owner_id: str, shop_id: Optional[str]) -> Cart:
        items = await self.storage.read(owner_id, shop_id)
        return Cart(shop_id, items)

    async def _persist(self, owner_id: str, cart: Cart) -> None:
        try:
            await self.storage.write(owner_id, cart.shop_id, cart.items)
        except aiosqlite.Error as e:
            logger.error(f"[CART] Failed to persist cart {cart_key(cart.shop_id)} for {owner_id}: {e}")

    async def _apply(self, owner_id: str, shop_id: Optional[str], operation) -> Cart:
        cart = await self.load(owner_id, shop_id)
        if operation(cart):
            await self._persist(owner_id, cart)
        return cart

    async def add_item(self, owner_id: str, shop_id: Optional[str], item: CartItemInput) -> Cart:
        logger.info(f"[CART] add {item.id} x{item.quantity or 1} to {cart_key(shop_id)} ({owner_id})")
        return await self._apply(owner_id, shop_id, lambda cart: cart.add_item(shop_id, item))

    async def remove_item(self, owner_id: str, shop_id: Optional[str], key: str) -> Cart:
        return await self._apply(owner_id, shop_id, lambda cart: cart.remove_item(key))

    async def increment(self, owner_id: str, shop_id: Optional[str], key: str, by: int = 1) -> Cart:
        return await self._apply(owner_id, shop_id, lambda cart: cart.increment(key, by))

    async def decrement(self, owner_id: str, shop_id: Optional[str], key: str, by: int = 1) -> Cart:
        return await self._apply(owner_id, shop_id, lambda cart: cart.decrement(key, by))

    async def set_quantity(self, owner_id: str, shop_id: Optional[str], key: str, quantity: int) -> Cart:
        return await self._apply(owner_id, shop_id, lambda cart: cart.set_quantity(key, quantity))

    async def clear(self, owner_id: str, shop_id: Optional[str]) -> Cart:
        return await self._apply(owner_id, shop_id, lambda cart: cart.clear())
