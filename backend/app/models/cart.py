"""
Модели корзины.
"""

from decimal import Decimal
from typing import Optional, List
from pydantic import Field, field_serializer, field_validator

from .base import ApiModel
from .order import FulfillmentType


class CartItem(ApiModel):
    """Строка корзины. Сохраняется в хранилище в этом же виде (camelCase)."""
    key: str  # сигнатура id::variant::addons
    id: str
    name: str
    image_url: Optional[str] = None
    price: Decimal  # цена за единицу
    quantity: int = Field(1, ge=0)
    variant_id: Optional[str] = None
    addon_option_ids: Optional[List[str]] = None

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        # в хранилище и в JSON цена числом
        return float(price)


class CartItemInput(ApiModel):
    """Товар, который добавляется в корзину."""
    id: str
    name: str
    image_url: Optional[str] = None
    price: Decimal
    quantity: Optional[int] = Field(None, ge=1)
    variant_id: Optional[str] = None
    addon_option_ids: Optional[List[str]] = None


class CartItemAdd(ApiModel):
    """Запрос на добавление товара: цену считает сервер."""
    product_id: str
    variant_id: Optional[str] = None
    addon_option_ids: List[str] = []
    quantity: int = Field(1, ge=1)

    @field_validator("addon_option_ids")
    @classmethod
    def _unique_addons(cls, v: List[str]) -> List[str]:
        # чекбоксы: повторный выбор той же добавки ничего не меняет
        return list(dict.fromkeys(v))


class CartQuantityUpdate(ApiModel):
    quantity: int = Field(..., ge=0)


class CartStep(ApiModel):
    by: int = Field(1, ge=1)


class CartView(ApiModel):
    """Корзина магазина с итогами."""
    shop_id: Optional[str] = None
    items: List[CartItem] = []
    count: int = 0
    total: Decimal = Decimal("0.00")

    @field_serializer("total", when_used="json")
    def _total_as_number(self, total: Decimal) -> float:
        return float(total)


class CartSummary(ApiModel):
    count: int
    total: float
    lines: int


class CheckoutRequest(ApiModel):
    """Данные покупателя для оформления заказа из корзины."""
    customer_name: str = Field(..., min_length=1)
    customer_phone: Optional[str] = None
    customer_notes: Optional[str] = None
    user_id: Optional[str] = None
    fulfillment_type: Optional[FulfillmentType] = None
    scheduled_for: Optional[str] = None
