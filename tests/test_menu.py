"""
Tests for storefront grouping.
"""

from backend.app.models.product import Product
from backend.app.services.menu import (
    build_storefront,
    find_catalog_entry,
    find_product,
    group_products_by_category,
)


def product(product_id, categories):
    return Product(id=product_id, label=product_id, price=1, categories=categories)


class TestGroupProductsByCategory:

    def test_first_seen_order_and_lowercase(self):
        grouped = group_products_by_category([
            product("a", ["Drinks"]),
            product("b", ["food"]),
            product("c", ["drinks", "food"]),
        ])
        assert list(grouped) == ["drinks", "food"]
        assert [p.id for p in grouped["drinks"]] == ["a", "c"]

    def test_products_without_category_are_skipped(self):
        assert group_products_by_category([product("a", [])]) == {}

    def test_none(self):
        assert group_products_by_category(None) == {}


class TestBuildStorefront:

    def test_only_available_catalog_products(self, menu):
        storefront = build_storefront(menu)
        ids = [p.id for c in storefront.categories for p in c.products]
        assert "p-seasonal" not in ids
        assert "p-offmenu" not in ids
        assert "p-water" not in ids

    def test_groups_follow_sort_order(self, menu):
        storefront = build_storefront(menu)
        assert [c.id for c in storefront.categories] == ["bakery", "coffee"]
        assert [c.name for c in storefront.categories] == ["Выпечка", "Кофе"]
        assert [p.id for p in storefront.categories[1].products] == ["p-latte", "p-espresso"]

    def test_effective_price(self, menu):
        storefront = build_storefront(menu)
        latte = storefront.categories[1].products[0]
        assert latte.price == 4.2
        assert latte.image_url == "https://cdn.test/latte.jpg"

    def test_lookups(self, menu):
        assert find_product(menu, "p-latte").label == "Latte"
        assert find_product(menu, "missing") is None
        assert find_catalog_entry(menu, "p-latte").id == "e-latte"
        assert find_catalog_entry(menu, "p-offmenu") is None
