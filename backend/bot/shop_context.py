"""
Активный магазин в диалоге с покупателем.
"""

from dataclasses import dataclass
from typing import Optional

from aiogram.fsm.context import FSMContext

from backend.app.config import settings


@dataclass
class ActiveShop:
    shop_id: Optional[str] = None
    slug: Optional[str] = None


async def set_active_shop(state: FSMContext, shop_id: str, slug: Optional[str] = None) -> ActiveShop:
    """Делает магазин активным; без slug остаётся прежний."""
    data = await state.get_data()
    slug = slug if slug is not None else data.get("active_shop_slug")
    await state.update_data(active_shop_id=shop_id, active_shop_slug=slug)
    return ActiveShop(shop_id, slug)


async def clear_active_shop(state: FSMContext) -> None:
    await state.update_data(active_shop_id=None, active_shop_slug=None)


async def get_active_shop(state: FSMContext) -> ActiveShop:
    """Активный магазин или магазин бота по умолчанию."""
    data = await state.get_data()
    shop_id = data.get("active_shop_id")
    if shop_id:
        return ActiveShop(shop_id, data.get("active_shop_slug"))
    return ActiveShop(settings.BOT_SHOP_ID or None, None)
