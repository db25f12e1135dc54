"""
Обработчики заказов.
"""

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery

from backend.app.services.backend_client import ApiError
from backend.app.services.store_api import StoreApi
from ..keyboards import orders_text
from ..shop_context import get_active_shop

router = Router()


async def _orders_text(state: FSMContext, api: StoreApi, cart_owner: str) -> str:
    shop = await get_active_shop(state)
    try:
        orders = await api.orders.list_orders(shop_id=shop.shop_id, user_id=cart_owner)
    except ApiError as e:
        return f"Не удалось загрузить заказы: {e.message}"
    return orders_text(orders)


@router.message(Command("orders"))
async def cmd_orders(message: Message, state: FSMContext, api: StoreApi, cart_owner: str):
    """Команда /orders."""
    await message.answer(await _orders_text(state, api, cart_owner))


@router.callback_query(F.data == "orders")
async def callback_orders(callback: CallbackQuery, state: FSMContext, api: StoreApi, cart_owner: str):
    await callback.message.edit_text(await _orders_text(state, api, cart_owner))
    await callback.answer()
