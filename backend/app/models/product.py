"""
Модели товара, вариантов и добавок.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import Field

from .base import ApiModel
from .category import Category
from .shop import Money, Shop


class MediaAsset(ApiModel):
    """Медиа файл товара."""
    url: str
    alt: Optional[str] = None
    kind: Optional[str] = Field(None, pattern="^(image|video)$")


class VariantOption(ApiModel):
    """Вариант товара (взаимоисключающий выбор)."""
    id: Optional[str] = None
    label: str
    price_delta: Money = Field(default_factory=Money)
    is_available: bool = True


class VariantGroup(ApiModel):
    """Группа вариантов (например, размеры)."""
    id: Optional[str] = None
    label: str
    options: List[VariantOption] = []


class AddonOption(ApiModel):
    """Добавка (выбирается дополнительно)."""
    id: Optional[str] = None
    label: str
    price_delta: Money = Field(default_factory=Money)
    is_available: bool = True


class AddonGroup(ApiModel):
    """Группа добавок."""
    id: Optional[str] = None
    label: str
    required: bool = False
    max_selectable: Optional[int] = None
    options: List[AddonOption] = []


class ProductBase(ApiModel):
    """Базовая модель товара."""
    label: str = Field(..., max_length=255)
    price: float = Field(0, ge=0)
    description: Optional[str] = None
    owner_user_id: Optional[str] = None
    categories: List[str] = []
    tags: Optional[List[str]] = None
    media: Optional[List[MediaAsset]] = None
    allergy_info: Optional[List[str]] = None
    variant_groups: List[VariantGroup] = []
    addon_groups: List[AddonGroup] = []


class ProductCreate(ProductBase):
    """Модель для создания товара."""
    shop_id: str
    is_available: Optional[bool] = None


class ProductUpdate(ApiModel):
    """Модель для обновления товара."""
    label: Optional[str] = Field(None, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    categories: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    media: Optional[List[MediaAsset]] = None
    allergy_info: Optional[List[str]] = None
    variant_groups: Optional[List[VariantGroup]] = None
    addon_groups: Optional[List[AddonGroup]] = None
    is_available: Optional[bool] = None


class Product(ProductBase):
    """Полная модель товара."""
    id: str
    shop_id: Optional[str] = None
    is_available: bool = True
    category_details: List[Category] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def image_url(self) -> Optional[str]:
        """Первое изображение товара."""
        for asset in self.media or []:
            if asset.kind in (None, "image"):
                return asset.url
        return None


class CatalogEntry(ApiModel):
    """Привязка товара каталога к магазину (цена, доступность, категории)."""
    id: str
    product_id: str
    shop_id: str
    price_override: Optional[float] = None
    is_available: bool = True
    category_ids: List[str] = []
    sort_order: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ShopMenu(ApiModel):
    """Меню магазина."""
    shop: Shop
    categories: List[Category] = []
    products: List[Product] = []
    catalog_entries: List[CatalogEntry] = Field(
        default_factory=list,
        validation_alias="productsInShop",
        serialization_alias="productsInShop",
    )
