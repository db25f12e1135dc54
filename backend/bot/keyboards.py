"""
Клавиатуры и тексты бота.
"""

from html import escape
from typing import List, Optional

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from backend.app.models.order import Order
from backend.app.models.product import Product
from backend.app.models.storefront import Storefront, StorefrontCategory
from backend.app.services.cart import Cart
from backend.app.services.pricing import format_money, line_total

STATUS_LABELS = {
    "placed": "🆕 Оформлен",
    "accepted": "👨‍🍳 Принят",
    "ready_for_pickup": "📦 Готов к выдаче",
    "completed": "✅ Выдан",
    "rejected": "❌ Отклонён",
    "cancelled": "🚫 Отменён",
}


def button(text: str, data: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=text, callback_data=data)


def categories_keyboard(storefront: Storefront) -> InlineKeyboardMarkup:
    rows = [
        [button(f"{category.name} ({len(category.products)})", f"cat:{index}")]
        for index, category in enumerate(storefront.categories)
    ]
    rows.append([button("🛒 Корзина", "cart")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def storefront_text(storefront: Storefront) -> str:
    text = f"<b>{escape(storefront.shop.name)}</b>\n\n"
    if storefront.is_open is False:
        text += "⏸ Сейчас магазин не принимает заказы.\n\n"
    if not storefront.categories:
        return text + "Меню пока пустое."
    return text + "Выберите категорию:"


def products_keyboard(category: StorefrontCategory) -> InlineKeyboardMarkup:
    rows = [
        [button(f"{product.label} · {format_money(product.price)}", f"prod:{product.id}")]
        for product in category.products
    ]
    rows.append([button("◀️ Назад", "catalog")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def product_text(product: Product, unit_price, quantity: int) -> str:
    lines = [f"<b>{escape(product.label)}</b>"]
    if product.description:
        lines.append(escape(product.description))
    if product.allergy_info:
        lines.append("Аллергены: " + escape(", ".join(product.allergy_info)))
    lines.append("")
    lines.append(f"Цена: {format_money(unit_price)}")
    lines.append(f"Итого: {format_money(line_total(unit_price, quantity))} ({quantity} шт.)")
    return "\n".join(lines)


def product_keyboard(
    product: Product,
    variant_id: Optional[str],
    addon_ids: List[str],
    quantity: int,
) -> InlineKeyboardMarkup:
    """Карточка товара: варианты (один), добавки (несколько), количество."""
    rows = []
    for group in product.variant_groups:
        for option in group.options:
            if not option.id or not option.is_available:
                continue
            mark = "🔘" if option.id == variant_id else "⚪️"
            rows.append([button(f"{mark} {option.label} {_delta(option.price_delta.amount)}".strip(), f"var:{option.id}")])

    for group in product.addon_groups:
        for option in group.options:
            if not option.id or not option.is_available:
                continue
            mark = "☑️" if option.id in addon_ids else "⬜️"
            rows.append([button(f"{mark} {option.label} {_delta(option.price_delta.amount)}".strip(), f"addon:{option.id}")])

    rows.append([button("➖", "qty:dec"), button(str(quantity), "noop"), button("➕", "qty:inc")])
    rows.append([button("🛒 Добавить в заказ", "add")])
    rows.append([button("◀️ Назад", "catalog")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def _delta(amount) -> str:
    if not amount:
        return ""
    return f"+{format_money(amount)}" if amount > 0 else f"-{format_money(-amount)}"


def cart_text(cart: Cart) -> str:
    if not cart.items:
        return "<b>🛒 Ваша корзина</b>\n\nКорзина пуста.\n\n<i>Добавьте товары из каталога</i>"

    lines = ["<b>🛒 Ваша корзина</b>", ""]
    for index, item in enumerate(cart.items, start=1):
        lines.append(
            f"{index}. {escape(item.name)} × {item.quantity} = {format_money(line_total(item.price, item.quantity))}"
        )
    lines.append("")
    lines.append(f"Товаров: {cart.count}")
    lines.append(f"<b>Итого: {format_money(cart.total)}</b>")
    return "\n".join(lines)


def cart_keyboard(cart: Cart) -> InlineKeyboardMarkup:
    """Строки корзины адресуются по индексу: ключ строки может не влезть в callback_data."""
    rows = []
    for index, item in enumerate(cart.items):
        rows.append([
            button("➖", f"line:dec:{index}"),
            button(f"{index + 1}. {item.name}", "noop"),
            button("➕", f"line:inc:{index}"),
            button("🗑", f"line:del:{index}"),
        ])
    if cart.items:
        rows.append([button("🧹 Очистить", "cart:clear"), button("✅ Оформить", "cart:checkout")])
    rows.append([button("📦 Каталог", "catalog")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def orders_text(orders: List[Order]) -> str:
    if not orders:
        return "<b>📋 Мои заказы</b>\n\nЗаказов пока нет."

    lines = ["<b>📋 Мои заказы</b>", ""]
    for order in orders:
        status = STATUS_LABELS.get(order.status, order.status)
        lines.append(f"#{escape(order.id[:8])} · {format_money(order.total_amount.amount)} · {status}")
    return "\n".join(lines)
