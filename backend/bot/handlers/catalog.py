"""
Обработчики каталога: категории, товары, карточка товара.
"""

import logging
from html import escape
from typing import Optional, Tuple

from aiogram import Router, F
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery

from backend.app.models.cart import CartItemInput
from backend.app.models.product import ShopMenu, Product, CatalogEntry
from backend.app.models.storefront import Storefront
from backend.app.services.backend_client import ApiError
from backend.app.services.cart import CartService
from backend.app.services.menu import build_storefront, find_product, find_catalog_entry
from backend.app.services.pricing import (
    SelectionError, compute_unit_price, default_variant_id, effective_base_price, validate_selection,
)
from backend.app.services.shop_hours import is_accepting_orders
from backend.app.services.store_api import StoreApi
from ..keyboards import (
    categories_keyboard, storefront_text, products_keyboard, product_text, product_keyboard,
)
from ..shop_context import get_active_shop

logger = logging.getLogger(__name__)

router = Router()

NO_SHOP_TEXT = "Магазин не выбран. Откройте ссылку магазина или отправьте /start &lt;id магазина&gt;."


async def load_storefront(api: StoreApi, shop_id: str) -> Tuple[ShopMenu, Storefront]:
    """Меню магазина и витрина (меню кэшируется в StoreApi)."""
    menu = await api.shops.get_shop_menu(shop_id)
    storefront = build_storefront(menu)
    try:
        hours = await api.shops.get_shop_hours(shop_id)
    except ApiError as e:
        if e.status_code != 404:
            raise
        hours = None
    storefront.is_open = is_accepting_orders(menu.shop, hours)
    return menu, storefront


async def _lookup(api: StoreApi, shop_id: str, product_id: str) -> Tuple[Optional[Product], Optional[CatalogEntry]]:
    menu = await api.shops.get_shop_menu(shop_id)
    return find_product(menu, product_id), find_catalog_entry(menu, product_id)


def _unit_price(product: Product, entry: CatalogEntry, selection: dict):
    return compute_unit_price(
        product,
        selection.get("variant_id"),
        selection.get("addons", []),
        base_price=effective_base_price(product, entry),
    )


async def _render_product(callback: CallbackQuery, product: Product, entry: CatalogEntry, selection: dict):
    await callback.message.edit_text(
        product_text(product, _unit_price(product, entry, selection), selection["quantity"]),
        reply_markup=product_keyboard(
            product, selection.get("variant_id"), selection.get("addons", []), selection["quantity"]
        ),
    )


@router.callback_query(F.data == "catalog")
async def show_catalog(callback: CallbackQuery, state: FSMContext, api: StoreApi):
    """Категории витрины."""
    shop = await get_active_shop(state)
    if not shop.shop_id:
        await callback.message.edit_text(NO_SHOP_TEXT)
        await callback.answer()
        return

    try:
        _, storefront = await load_storefront(api, shop.shop_id)
    except ApiError as e:
        await callback.answer(f"Не удалось загрузить меню: {e.message}", show_alert=True)
        return

    await callback.message.edit_text(storefront_text(storefront), reply_markup=categories_keyboard(storefront))
    await callback.answer()


@router.callback_query(F.data.startswith("cat:"))
async def show_category(callback: CallbackQuery, state: FSMContext, api: StoreApi):
    """Товары категории."""
    shop = await get_active_shop(state)
    if not shop.shop_id:
        await callback.answer("Магазин не выбран", show_alert=True)
        return
    try:
        index = int(callback.data.split(":", 1)[1])
        _, storefront = await load_storefront(api, shop.shop_id)
        category = storefront.categories[index]
    except (ValueError, IndexError, TypeError):
        await callback.answer("Категория не найдена", show_alert=True)
        return
    except ApiError as e:
        await callback.answer(f"Не удалось загрузить меню: {e.message}", show_alert=True)
        return

    await callback.message.edit_text(f"<b>{escape(category.name)}</b>", reply_markup=products_keyboard(category))
    await callback.answer()


@router.callback_query(F.data.startswith("prod:"))
async def show_product(callback: CallbackQuery, state: FSMContext, api: StoreApi):
    """Карточка товара с выбором по умолчанию."""
    shop = await get_active_shop(state)
    if not shop.shop_id:
        await callback.answer("Магазин не выбран", show_alert=True)
        return
    product_id = callback.data.split(":", 1)[1]
    try:
        product, entry = await _lookup(api, shop.shop_id, product_id)
    except ApiError as e:
        await callback.answer(f"Ошибка: {e.message}", show_alert=True)
        return
    if not product or not entry or not entry.is_available:
        await callback.answer("Товар недоступен", show_alert=True)
        return

    selection = {
        "product_id": product.id,
        "variant_id": default_variant_id(product),
        "addons": [],
        "quantity": 1,
    }
    await state.update_data(selection=selection)
    await _render_product(callback, product, entry, selection)
    await callback.answer()


async def _update_selection(callback: CallbackQuery, state: FSMContext, api: StoreApi, change) -> None:
    data = await state.get_data()
    selection = data.get("selection")
    if not selection:
        await callback.answer("Откройте товар заново", show_alert=True)
        return

    shop = await get_active_shop(state)
    try:
        product, entry = await _lookup(api, shop.shop_id, selection["product_id"])
    except ApiError as e:
        await callback.answer(f"Ошибка: {e.message}", show_alert=True)
        return
    if not product or not entry:
        await callback.answer("Товар недоступен", show_alert=True)
        return

    change(selection)
    await state.update_data(selection=selection)
    await _render_product(callback, product, entry, selection)
    await callback.answer()


@router.callback_query(F.data.startswith("var:"))
async def choose_variant(callback: CallbackQuery, state: FSMContext, api: StoreApi):
    variant_id = callback.data.split(":", 1)[1]

    def change(selection):
        selection["variant_id"] = variant_id

    await _update_selection(callback, state, api, change)


@router.callback_query(F.data.startswith("addon:"))
async def toggle_addon(callback: CallbackQuery, state: FSMContext, api: StoreApi):
    addon_id = callback.data.split(":", 1)[1]

    def change(selection):
        addons = selection.setdefault("addons", [])
        if addon_id in addons:
            addons.remove(addon_id)
        else:
            addons.append(addon_id)

    await _update_selection(callback, state, api, change)


@router.callback_query(F.data.in_({"qty:inc", "qty:dec"}))
async def change_quantity(callback: CallbackQuery, state: FSMContext, api: StoreApi):
    step = 1 if callback.data == "qty:inc" else -1

    def change(selection):
        selection["quantity"] = max(1, selection["quantity"] + step)

    await _update_selection(callback, state, api, change)


@router.callback_query(F.data == "add")
async def add_to_order(
    callback: CallbackQuery,
    state: FSMContext,
    api: StoreApi,
    cart_service: CartService,
    cart_owner: str,
):
    """Добавляет выбранный товар в корзину."""
    data = await state.get_data()
    selection = data.get("selection")
    shop = await get_active_shop(state)
    if not selection or not shop.shop_id:
        await callback.answer("Откройте товар заново", show_alert=True)
        return

    try:
        product, entry = await _lookup(api, shop.shop_id, selection["product_id"])
        if not product or not entry or not entry.is_available:
            await callback.answer("Товар недоступен", show_alert=True)
            return
        validate_selection(product, selection.get("variant_id"), selection.get("addons", []))
    except SelectionError as e:
        await callback.answer(str(e), show_alert=True)
        return
    except ApiError as e:
        await callback.answer(f"Ошибка: {e.message}", show_alert=True)
        return

    cart = await cart_service.add_item(cart_owner, shop.shop_id, CartItemInput(
        id=product.id,
        name=product.label,
        image_url=product.image_url,
        price=_unit_price(product, entry, selection),
        quantity=selection["quantity"],
        variant_id=selection.get("variant_id"),
        addon_option_ids=selection.get("addons") or None,
    ))
    logger.info(f"[BOT] {cart_owner} added {product.id} x{selection['quantity']}, cart count {cart.count}")
    await callback.answer(f"Добавлено в корзину. Товаров: {cart.count}")


@router.callback_query(F.data == "noop")
async def noop(callback: CallbackQuery):
    await callback.answer()
