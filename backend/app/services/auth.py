"""
Токен доступа к бэкенду.
"""

import logging
from typing import Awaitable, Callable, Optional

from ..config import settings

logger = logging.getLogger(__name__)


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Достаёт токен из заголовка 'Bearer <token>'."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_token(authorization: Optional[str]) -> str:
    """Токен вызывающего или сервисный токен."""
    return parse_bearer(authorization) or settings.API_ACCESS_TOKEN


class AccessTokenStore:
    """Текущий токен доступа (для бота и фоновых задач)."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set(self, token: Optional[str]) -> None:
        self._token = token or None

    def clear(self) -> None:
        self._token = None


async def sync_access_token(
    store: AccessTokenStore,
    source: Callable[[], Awaitable[Optional[str]]],
) -> Optional[str]:
    """
    Запрашивает токен у источника и сохраняет его.

    Источник возвращает None, если вход не выполнен, тогда токен сбрасывается.
    """
    token = await source()
    if token:
        store.set(token)
        logger.info("[AUTH] Access token updated")
    else:
        store.clear()
        logger.info("[AUTH] No signed-in account, access token cleared")
    return store.token
