"""
Обработчики корзины.
"""

import logging
from typing import Optional

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery

from backend.app.services.backend_client import ApiError
from backend.app.services.cart import CartService
from backend.app.services.order_flow import EmptyCartError, build_order_from_cart, order_total
from backend.app.services.pricing import format_money
from backend.app.services.store_api import StoreApi
from ..keyboards import cart_text, cart_keyboard
from ..shop_context import get_active_shop
from .catalog import NO_SHOP_TEXT

logger = logging.getLogger(__name__)

router = Router()


@router.message(Command("cart"))
async def cmd_cart(message: Message, state: FSMContext, cart_service: CartService, cart_owner: str):
    """Команда /cart."""
    shop = await get_active_shop(state)
    if not shop.shop_id:
        await message.answer(NO_SHOP_TEXT)
        return
    cart = await cart_service.load(cart_owner, shop.shop_id)
    await message.answer(cart_text(cart), reply_markup=cart_keyboard(cart))


@router.callback_query(F.data == "cart")
async def callback_cart(callback: CallbackQuery, state: FSMContext, cart_service: CartService, cart_owner: str):
    shop = await get_active_shop(state)
    if not shop.shop_id:
        await callback.answer("Магазин не выбран", show_alert=True)
        return
    cart = await cart_service.load(cart_owner, shop.shop_id)
    await callback.message.edit_text(cart_text(cart), reply_markup=cart_keyboard(cart))
    await callback.answer()


@router.callback_query(F.data.startswith("line:"))
async def change_line(callback: CallbackQuery, state: FSMContext, cart_service: CartService, cart_owner: str):
    """line:<inc|dec|del>:<индекс строки>"""
    shop = await get_active_shop(state)
    _, action, raw_index = callback.data.split(":", 2)

    cart = await cart_service.load(cart_owner, shop.shop_id)
    key: Optional[str] = None
    if raw_index.isdigit() and int(raw_index) < len(cart.items):
        key = cart.items[int(raw_index)].key
    if key is None:
        await callback.answer("Строка не найдена", show_alert=True)
        return

    if action == "inc":
        cart = await cart_service.increment(cart_owner, shop.shop_id, key)
    elif action == "dec":
        cart = await cart_service.decrement(cart_owner, shop.shop_id, key)
    elif action == "del":
        cart = await cart_service.remove_item(cart_owner, shop.shop_id, key)

    await callback.message.edit_text(cart_text(cart), reply_markup=cart_keyboard(cart))
    await callback.answer()


@router.callback_query(F.data == "cart:clear")
async def clear_cart(callback: CallbackQuery, state: FSMContext, cart_service: CartService, cart_owner: str):
    shop = await get_active_shop(state)
    cart = await cart_service.clear(cart_owner, shop.shop_id)
    await callback.message.edit_text(cart_text(cart), reply_markup=cart_keyboard(cart))
    await callback.answer("Корзина очищена")


@router.callback_query(F.data == "cart:checkout")
async def checkout(
    callback: CallbackQuery,
    state: FSMContext,
    api: StoreApi,
    cart_service: CartService,
    cart_owner: str,
):
    """Оформляет заказ; имя покупателя берётся из Telegram."""
    shop = await get_active_shop(state)
    cart = await cart_service.load(cart_owner, shop.shop_id)
    try:
        body = build_order_from_cart(
            cart,
            user_id=cart_owner,
            customer_name=callback.from_user.full_name or f"user_{callback.from_user.id}",
        )
        order = await api.orders.create_order(shop.shop_id, body)
    except EmptyCartError:
        await callback.answer("Корзина пуста", show_alert=True)
        return
    except ApiError as e:
        logger.warning(f"[BOT] Checkout failed for {cart_owner}: {e}")
        await callback.answer(f"Не удалось оформить заказ: {e.message}", show_alert=True)
        return

    await cart_service.clear(cart_owner, shop.shop_id)
    await callback.message.edit_text(
        f"<b>✅ Заказ оформлен</b>\n\n"
        f"Номер: #{order.id[:8]}\n"
        f"Сумма: {format_money(order_total(order) or order.total_amount.amount)}\n\n"
        f"Статус заказа: /orders"
    )
    await callback.answer()
