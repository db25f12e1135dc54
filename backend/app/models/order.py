"""
Модели заказа.
"""

from datetime import datetime
from typing import Optional, List, Literal
from pydantic import Field

from .base import ApiModel
from .shop import Money


OrderStatus = Literal[
    "placed",
    "accepted",
    "rejected",
    "ready_for_pickup",
    "completed",
    "cancelled",
]
PaymentStatus = Literal["unpaid", "authorized", "paid", "refunded"]
FulfillmentType = Literal["pickup", "delivery"]


class OrderItemAddon(ApiModel):
    """Снимок добавки в заказе."""
    addon_option_id: str
    name_snapshot: str
    price_delta_snapshot: Money


class OrderItem(ApiModel):
    """Снимок позиции заказа."""
    product_id: str
    product_variant_id: Optional[str] = None
    product_name_snapshot: str
    variant_label_snapshot: Optional[str] = None
    final_unit_price: Money
    quantity: int = Field(..., ge=1)
    addons: List[OrderItemAddon] = []


class FulfillmentSlot(ApiModel):
    type: FulfillmentType
    scheduled_for: Optional[str] = None


class Order(ApiModel):
    """Полная модель заказа."""
    id: str
    shop_id: str
    user_id: str
    status: OrderStatus = "placed"
    payment_status: PaymentStatus = "unpaid"
    total_amount: Money
    submitted_at: Optional[datetime] = None
    customer_name: str
    customer_phone: Optional[str] = None
    customer_notes: Optional[str] = None
    fulfillment_slot: Optional[FulfillmentSlot] = None
    items: List[OrderItem] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderItemPayload(ApiModel):
    """Позиция нового заказа."""
    product_id: str
    product_variant_id: Optional[str] = None
    quantity: int = Field(..., ge=1)
    addon_option_ids: List[str] = []


class OrderCreate(ApiModel):
    """Модель для создания заказа."""
    user_id: str
    customer_name: str = Field(..., min_length=1)
    customer_phone: Optional[str] = None
    customer_notes: Optional[str] = None
    items: List[OrderItemPayload]
    fulfillment_type: Optional[FulfillmentType] = None
    scheduled_for: Optional[str] = None


class OrderUpdate(ApiModel):
    """Частичное обновление заказа."""
    payment_status: Optional[PaymentStatus] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_notes: Optional[str] = None


class OrderStatusUpdate(ApiModel):
    next_status: OrderStatus
