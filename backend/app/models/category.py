"""
Модели категории товаров.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from .base import ApiModel


class CategoryCreate(ApiModel):
    """Модель для создания категории."""
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    parent_category_id: Optional[str] = None
    position: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryUpdate(ApiModel):
    """Модель для обновления категории."""
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    parent_category_id: Optional[str] = None
    position: Optional[int] = None
    is_active: Optional[bool] = None


class Category(ApiModel):
    """Полная модель категории."""
    id: str
    name: str
    shop_id: Optional[str] = None
    description: Optional[str] = None
    position: Optional[int] = None
    is_active: bool = True
    parent_category_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
