"""
Статусы заказа и оформление заказа из корзины.
"""

from decimal import Decimal
from typing import Optional

from ..models.order import Order, OrderCreate, OrderItemPayload
from .cart import Cart
from .pricing import to_decimal, round_money


class EmptyCartError(ValueError):
    """Попытка оформить пустую корзину."""


# Следующий статус для каждого шага
STATUS_FLOW = {
    "placed": "accepted",
    "accepted": "ready_for_pickup",
    "ready_for_pickup": "completed",
}

TERMINAL_STATUSES = ("completed", "rejected", "cancelled")


def next_status(status: str) -> Optional[str]:
    return STATUS_FLOW.get(status)


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def order_total(order: Order) -> Decimal:
    """Сумма заказа по позициям."""
    total = sum(
        (to_decimal(item.final_unit_price.amount) * item.quantity for item in order.items),
        Decimal("0"),
    )
    return round_money(total)


def build_order_from_cart(
    cart: Cart,
    user_id: str,
    customer_name: str,
    customer_phone: Optional[str] = None,
    customer_notes: Optional[str] = None,
    fulfillment_type: Optional[str] = None,
    scheduled_for: Optional[str] = None,
) -> OrderCreate:
    """Собирает запрос на создание заказа из строк корзины."""
    if not cart.items:
        raise EmptyCartError("Cart is empty.")

    return OrderCreate(
        user_id=user_id,
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_notes=customer_notes,
        fulfillment_type=fulfillment_type,
        scheduled_for=scheduled_for,
        items=[
            OrderItemPayload(
                product_id=item.id,
                product_variant_id=item.variant_id,
                quantity=item.quantity,
                addon_option_ids=item.addon_option_ids or [],
            )
            for item in cart.items
        ],
    )
