"""
Tests for the cart reducer: line identity, merging and quantities.
"""

from decimal import Decimal

from backend.app.models.cart import CartItemInput
from backend.app.services.cart import Cart, cart_key, make_signature


def item(product_id="p-latte", price="4.50", quantity=None, variant_id=None, addons=None):
    return CartItemInput(
        id=product_id,
        name=product_id,
        price=Decimal(price),
        quantity=quantity,
        variant_id=variant_id,
        addon_option_ids=addons,
    )


class TestKeys:

    def test_cart_key_for_shop(self):
        assert cart_key("shop-1") == "mewmew_cart_v1:shop-1"

    def test_cart_key_without_shop(self):
        assert cart_key(None) == "mewmew_cart_v1:global"
        assert cart_key("") == "mewmew_cart_v1:global"

    def test_signature_format(self):
        assert make_signature("p", "v", ["b", "a"]) == "p::v::a,b"
        assert make_signature("p") == "p::::"

    def test_signature_ignores_addon_order(self):
        assert make_signature("p", "v", ["a", "b"]) == make_signature("p", "v", ["b", "a"])


class TestAddItem:

    def test_new_line(self):
        cart = Cart("shop-1")
        assert cart.add_item("shop-1", item()) is True
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 1
        assert cart.items[0].key == "p-latte::::"

    def test_same_signature_merges(self):
        cart = Cart("shop-1")
        cart.add_item("shop-1", item(variant_id="v", addons=["a", "b"]))
        cart.add_item("shop-1", item(variant_id="v", addons=["b", "a"], quantity=2))
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_different_addons_are_separate_lines(self):
        cart = Cart("shop-1")
        cart.add_item("shop-1", item(addons=["a"]))
        cart.add_item("shop-1", item(addons=["b"]))
        assert len(cart.items) == 2

    def test_other_shop_resets_cart(self):
        cart = Cart("shop-1")
        cart.add_item("shop-1", item())
        cart.add_item("shop-2", item("p-tea"))
        assert cart.shop_id == "shop-2"
        assert [it.id for it in cart.items] == ["p-tea"]


class TestQuantities:

    def setup_method(self):
        self.cart = Cart("shop-1")
        self.cart.add_item("shop-1", item(quantity=2))
        self.key = self.cart.items[0].key

    def test_increment(self):
        assert self.cart.increment(self.key, 3) is True
        assert self.cart.items[0].quantity == 5

    def test_decrement_removes_at_zero(self):
        self.cart.decrement(self.key)
        assert self.cart.items[0].quantity == 1
        self.cart.decrement(self.key, 5)
        assert self.cart.items == []

    def test_set_quantity(self):
        self.cart.set_quantity(self.key, 7)
        assert self.cart.items[0].quantity == 7
        self.cart.set_quantity(self.key, -1)
        assert self.cart.items == []

    def test_unknown_key_is_noop(self):
        assert self.cart.increment("missing") is False
        assert self.cart.decrement("missing") is False
        assert self.cart.set_quantity("missing", 3) is False
        assert self.cart.items[0].quantity == 2

    def test_remove_and_clear(self):
        self.cart.add_item("shop-1", item("p-tea"))
        self.cart.remove_item(self.key)
        assert [it.id for it in self.cart.items] == ["p-tea"]
        self.cart.clear()
        assert self.cart.items == []


class TestSelectors:

    def test_count_and_total(self):
        cart = Cart("shop-1")
        cart.add_item("shop-1", item(price="4.50", quantity=2))
        cart.add_item("shop-1", item("p-bun", price="1.25"))
        assert cart.count == 3
        assert cart.total == Decimal("10.25")

    def test_empty_cart(self):
        cart = Cart()
        assert cart.count == 0
        assert cart.total == Decimal("0")

    def test_view(self):
        cart = Cart("shop-1")
        cart.add_item("shop-1", item(quantity=2))
        view = cart.view()
        assert view.shop_id == "shop-1"
        assert view.count == 2
        assert view.total == Decimal("9.00")
