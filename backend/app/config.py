"""
Конфигурация приложения.
"""

from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings


# Определяем корень проекта (где лежит .env)
PROJECT_ROOT = Path(__file__).parent.parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

DEFAULT_API_BASE_URL = "http://localhost:7071/api"


def normalize_base_url(value: str) -> str:
    """Приводит адрес бэкенда к виду .../api без завершающего слэша."""
    if not value:
        return DEFAULT_API_BASE_URL
    trimmed = value.rstrip("/")
    return trimmed if trimmed.endswith("/api") else f"{trimmed}/api"


class Settings(BaseSettings):
    """Настройки приложения."""

    # Приложение
    APP_NAME: str = "Mewmew"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Сервер
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Внешний REST бэкенд платформы
    API_BASE_URL: str = DEFAULT_API_BASE_URL
    API_TIMEOUT: float = 10.0
    API_ACCESS_TOKEN: str = ""  # сервисный токен для бота и анонимной витрины

    # Кэш запросов
    QUERY_CACHE_TTL: float = 60.0  # сколько секунд держим неиспользуемые данные
    API_SESSIONS_LIMIT: int = 256

    # Хранилище корзин
    DATABASE_PATH: Path = PROJECT_ROOT / "database" / "storefront.db"
    CART_STORAGE_PREFIX: str = "mewmew_cart_v1"

    # Telegram Bot
    BOT_TOKEN: str = ""
    BOT_SHOP_ID: str = ""  # магазин по умолчанию для /start без параметра

    # CORS
    CORS_ORIGINS: list = ["*"]

    @field_validator("API_BASE_URL", mode="before")
    @classmethod
    def _normalize_api_base_url(cls, v):
        return normalize_base_url(v or "")

    class Config:
        env_file = str(ENV_FILE)
        env_file_encoding = "utf-8"
        extra = "ignore"


# Глобальный экземпляр настроек
settings = Settings()

# Логируем загрузку конфигурации
print(f"[CONFIG] Loading from: {ENV_FILE}")
print(f"[CONFIG] ENV file exists: {ENV_FILE.exists()}")
print(f"[CONFIG] API_BASE_URL: {settings.API_BASE_URL}")
print(f"[CONFIG] Service token configured: {'Yes' if settings.API_ACCESS_TOKEN else 'No'}")
