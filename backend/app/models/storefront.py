"""
Модели витрины магазина для покупателя.
"""

from typing import Optional, List

from .base import ApiModel
from .shop import Shop
from .product import VariantGroup, AddonGroup


class StorefrontProduct(ApiModel):
    """Товар на витрине с ценой магазина."""
    id: str
    label: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    price: float
    sort_order: Optional[int] = None
    allergy_info: Optional[List[str]] = None
    variant_groups: List[VariantGroup] = []
    addon_groups: List[AddonGroup] = []


class StorefrontCategory(ApiModel):
    id: str
    name: str
    products: List[StorefrontProduct] = []


class Storefront(ApiModel):
    """Меню магазина, сгруппированное по категориям."""
    shop: Shop
    categories: List[StorefrontCategory] = []
    is_open: Optional[bool] = None
