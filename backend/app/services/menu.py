"""
Витрина: группировка меню магазина по категориям.
"""

from typing import Dict, List, Optional

from ..models.product import Product, CatalogEntry, ShopMenu
from ..models.storefront import Storefront, StorefrontCategory, StorefrontProduct
from .pricing import effective_base_price


def group_products_by_category(products: Optional[List[Product]]) -> Dict[str, List[Product]]:
    """
    Группирует товары по первой категории (id в нижнем регистре).

    Порядок групп - порядок первого появления. Товары без категории пропускаются.
    """
    grouped: Dict[str, List[Product]] = {}
    for product in products or []:
        if not product.categories:
            continue
        grouped.setdefault(product.categories[0].lower(), []).append(product)
    return grouped


def find_product(menu: ShopMenu, product_id: str) -> Optional[Product]:
    return next((p for p in menu.products if p.id == product_id), None)


def find_catalog_entry(menu: ShopMenu, product_id: str) -> Optional[CatalogEntry]:
    return next((e for e in menu.catalog_entries if e.product_id == product_id), None)


def _sort_key(item):
    # без sortOrder - в конец
    return (item[1].sort_order is None, item[1].sort_order or 0)


def build_storefront(menu: ShopMenu) -> Storefront:
    """Витрина: только доступные в магазине товары, с ценой магазина."""
    entries = {e.product_id: e for e in menu.catalog_entries}
    listed = [
        (product, entries[product.id])
        for product in menu.products
        if product.id in entries and entries[product.id].is_available
    ]
    listed.sort(key=_sort_key)

    names = {c.id.lower(): c.name for c in menu.categories}
    by_product = {product.id: entry for product, entry in listed}

    categories = []
    for category_id, products in group_products_by_category([p for p, _ in listed]).items():
        categories.append(StorefrontCategory(
            id=category_id,
            name=names.get(category_id, category_id),
            products=[
                StorefrontProduct(
                    id=product.id,
                    label=product.label,
                    description=product.description,
                    image_url=product.image_url,
                    price=float(effective_base_price(product, by_product[product.id])),
                    sort_order=by_product[product.id].sort_order,
                    allergy_info=product.allergy_info,
                    variant_groups=product.variant_groups,
                    addon_groups=product.addon_groups,
                )
                for product in products
            ],
        ))

    return Storefront(shop=menu.shop, categories=categories)
