"""
Расчёт цены товара: база + дельта варианта + дельты добавок.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Iterable, Dict, List

from ..models.product import Product, CatalogEntry, VariantOption, AddonOption, AddonGroup


CENT = Decimal("0.01")


class SelectionError(ValueError):
    """Недопустимый выбор варианта или добавок."""


def to_decimal(value) -> Decimal:
    """Переводит число в Decimal через строку, чтобы не тащить хвосты float."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value) -> Decimal:
    """Округляет до двух знаков."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def variant_lookup(product: Product) -> Dict[str, VariantOption]:
    return {
        option.id: option
        for group in product.variant_groups
        for option in group.options
        if option.id
    }


def addon_lookup(product: Product) -> Dict[str, AddonOption]:
    return {
        option.id: option
        for group in product.addon_groups
        for option in group.options
        if option.id
    }


def default_variant_id(product: Product) -> Optional[str]:
    """Первый вариант первой группы, выбранный по умолчанию."""
    if product.variant_groups and product.variant_groups[0].options:
        return product.variant_groups[0].options[0].id
    return None


def effective_base_price(product: Product, entry: Optional[CatalogEntry] = None) -> Decimal:
    """Базовая цена в магазине: переопределённая цена записи или цена товара."""
    if entry is not None and entry.price_override is not None:
        return to_decimal(entry.price_override)
    return to_decimal(product.price)


def compute_unit_price(
    product: Product,
    variant_id: Optional[str] = None,
    addon_option_ids: Iterable[str] = (),
    base_price=None,
) -> Decimal:
    """
    Цена за единицу с учётом выбора.

    Неизвестные id варианта или добавок дают нулевую надбавку.
    Результат округляется до двух знаков.
    """
    base = to_decimal(product.price if base_price is None else base_price)

    variants = variant_lookup(product)
    variant_delta = Decimal("0")
    if variant_id and variant_id in variants:
        variant_delta = to_decimal(variants[variant_id].price_delta.amount)

    addons = addon_lookup(product)
    addons_delta = sum(
        (to_decimal(addons[addon_id].price_delta.amount) for addon_id in addon_option_ids if addon_id in addons),
        Decimal("0"),
    )

    return round_money(base + variant_delta + addons_delta)


def _group_of(product: Product, addon_id: str) -> Optional[AddonGroup]:
    for group in product.addon_groups:
        if any(option.id == addon_id for option in group.options):
            return group
    return None


def validate_selection(
    product: Product,
    variant_id: Optional[str],
    addon_option_ids: List[str],
) -> None:
    """Проверяет, что выбор варианта и добавок допустим для товара."""
    variants = variant_lookup(product)
    if variant_id is None:
        if variants:
            raise SelectionError(f"Выберите вариант для товара '{product.label}'")
    else:
        variant = variants.get(variant_id)
        if variant is None:
            raise SelectionError(f"Неизвестный вариант '{variant_id}' для товара '{product.label}'")
        if not variant.is_available:
            raise SelectionError(f"Вариант '{variant.label}' недоступен")

    addons = addon_lookup(product)
    selected_per_group: Dict[str, int] = {}
    for addon_id in addon_option_ids:
        addon = addons.get(addon_id)
        if addon is None:
            raise SelectionError(f"Неизвестная добавка '{addon_id}' для товара '{product.label}'")
        if not addon.is_available:
            raise SelectionError(f"Добавка '{addon.label}' недоступна")
        group = _group_of(product, addon_id)
        key = group.id or group.label
        selected_per_group[key] = selected_per_group.get(key, 0) + 1

    for group in product.addon_groups:
        selected = selected_per_group.get(group.id or group.label, 0)
        if group.required and selected == 0:
            raise SelectionError(f"Группа '{group.label}' обязательна")
        if group.max_selectable and selected > group.max_selectable:
            raise SelectionError(
                f"В группе '{group.label}' можно выбрать не больше {group.max_selectable}"
            )


def line_total(unit_price, quantity: int) -> Decimal:
    return round_money(to_decimal(unit_price) * quantity)


def cents_to_dollars(value) -> float:
    """Центы в доллары; нечисловые и бесконечные значения дают 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return 0
    if not math.isfinite(value):
        return 0
    return value / 100


def format_money(value, symbol: str = "$") -> str:
    """Форматирует сумму как $x.xx."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        value = 0
    elif not math.isfinite(value):
        value = 0
    return f"{symbol}{round_money(value):.2f}"
