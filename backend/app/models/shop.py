"""
Модели магазина.
"""

from datetime import datetime
from typing import Optional, List, Literal
from pydantic import Field

from .base import ApiModel


ShopStatus = Literal["draft", "open", "closed", "suspended"]
PaymentPolicy = Literal["pay_on_pickup", "prepaid_only"]
OrderAcceptanceMode = Literal["auto", "manual"]
ShopMemberRole = Literal["owner", "manager", "admin", "staff", "viewer"]


class Money(ApiModel):
    """Сумма с валютой."""
    amount: float = 0
    currency: str = "USD"


class FulfillmentOptions(ApiModel):
    """Способы получения заказа."""
    pickup_enabled: bool = True
    delivery_enabled: bool = False
    delivery_radius_km: Optional[float] = None
    delivery_fee: Optional[Money] = None
    lead_time_minutes: Optional[int] = None


class ShopSettings(ApiModel):
    """Модель для обновления магазина (все поля необязательны)."""
    name: Optional[str] = Field(None, max_length=255)
    slug: Optional[str] = None
    legal_name: Optional[str] = None
    address: Optional[str] = None
    timezone: Optional[str] = None
    status: Optional[ShopStatus] = None
    accepting_orders: Optional[bool] = None
    payment_policy: Optional[PaymentPolicy] = None
    order_acceptance_mode: Optional[OrderAcceptanceMode] = None
    allow_guest_checkout: Optional[bool] = None
    fulfillment_options: Optional[FulfillmentOptions] = None
    default_currency: Optional[str] = None


class ShopCreate(ShopSettings):
    """Модель для создания магазина."""
    owner_user_id: str


class Shop(ApiModel):
    """Полная модель магазина."""
    id: str
    name: str
    slug: str
    owner_user_id: Optional[str] = None
    legal_name: Optional[str] = None
    address: Optional[str] = None
    timezone: Optional[str] = None
    status: ShopStatus = "draft"
    accepting_orders: bool = False
    payment_policy: PaymentPolicy = "pay_on_pickup"
    order_acceptance_mode: OrderAcceptanceMode = "manual"
    allow_guest_checkout: bool = False
    fulfillment_options: FulfillmentOptions = Field(default_factory=FulfillmentOptions)
    default_currency: str = "USD"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ShopMember(ApiModel):
    """Участник магазина."""
    id: str
    shop_id: str
    user_id: str
    role: ShopMemberRole
    invitation_status: Optional[Literal["pending", "accepted", "revoked"]] = None
    invited_by_user_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ShopMemberInvite(ApiModel):
    """Приглашение участника."""
    user_id: str
    role: ShopMemberRole
    invited_by_user_id: Optional[str] = None


class ShopMemberUpdate(ApiModel):
    role: Optional[ShopMemberRole] = None
    is_active: Optional[bool] = None


class ShopHoursWindow(ApiModel):
    """Интервал работы, время в формате HH:MM или HH:MM:SS."""
    opens_at: str = Field(..., pattern=r"^\d{2}:\d{2}(:\d{2})?$")
    closes_at: str = Field(..., pattern=r"^\d{2}:\d{2}(:\d{2})?$")
    is_closed: Optional[bool] = None


class WeeklyHours(ApiModel):
    monday: Optional[List[ShopHoursWindow]] = None
    tuesday: Optional[List[ShopHoursWindow]] = None
    wednesday: Optional[List[ShopHoursWindow]] = None
    thursday: Optional[List[ShopHoursWindow]] = None
    friday: Optional[List[ShopHoursWindow]] = None
    saturday: Optional[List[ShopHoursWindow]] = None
    sunday: Optional[List[ShopHoursWindow]] = None


class ShopHoursPayload(ApiModel):
    """Модель для сохранения часов работы."""
    timezone: str
    weekly: WeeklyHours = Field(default_factory=WeeklyHours)


class ShopHours(ShopHoursPayload):
    """Часы работы магазина."""
    id: Optional[str] = None
    shop_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ManagedShopView(ApiModel):
    """Магазин, которым управляет пользователь."""
    shop_id: str
    name: str
    status: ShopStatus
    accepting_orders: bool = False
    role: ShopMemberRole
