"""
Обработчик команды /start.
"""

from aiogram import Router
from aiogram.filters import CommandStart, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from backend.app.services.backend_client import ApiError
from backend.app.services.store_api import StoreApi
from ..keyboards import categories_keyboard, storefront_text
from ..shop_context import set_active_shop, get_active_shop
from .catalog import load_storefront, NO_SHOP_TEXT

router = Router()


@router.message(CommandStart())
async def cmd_start(message: Message, command: CommandObject, state: FSMContext, api: StoreApi):
    """/start [shop_id] - выбирает магазин и показывает его меню."""
    if command.args:
        await set_active_shop(state, command.args.strip())

    shop = await get_active_shop(state)
    if not shop.shop_id:
        await message.answer(NO_SHOP_TEXT)
        return

    try:
        menu, storefront = await load_storefront(api, shop.shop_id)
    except ApiError as e:
        await message.answer(f"Не удалось загрузить магазин: {e.message}")
        return

    # запоминаем slug магазина
    await set_active_shop(state, shop.shop_id, menu.shop.slug)
    await message.answer(storefront_text(storefront), reply_markup=categories_keyboard(storefront))
