"""
Модели пользователя.
"""

from datetime import datetime
from typing import Optional, Literal

from .base import ApiModel


UserRole = Literal["customer", "shopAdmin"]


class UserCreate(ApiModel):
    """Модель для регистрации пользователя в бэкенде."""
    id: str


class UserUpdate(ApiModel):
    display_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None


class User(ApiModel):
    """Пользователь платформы."""
    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
