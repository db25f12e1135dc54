"""
API бэкенда для одного токена и кэш сессий по токенам.
"""

import logging
from collections import OrderedDict
from typing import Optional

from ..config import settings
from .backend_client import BackendClient
from .query_cache import QueryCache
from .shops_api import ShopsApi
from .categories_api import CategoriesApi
from .products_api import ProductsApi
from .orders_api import OrdersApi
from .users_api import UsersApi

logger = logging.getLogger(__name__)


class StoreApi:
    """Все API бэкенда с общим кэшем запросов."""

    def __init__(self, client: BackendClient, token: Optional[str], ttl: Optional[float] = None):
        self.token = token
        self.cache = QueryCache(ttl=settings.QUERY_CACHE_TTL if ttl is None else ttl)
        self.shops = ShopsApi(client, token, self.cache)
        self.categories = CategoriesApi(client, token, self.cache)
        self.products = ProductsApi(client, token, self.cache)
        self.orders = OrdersApi(client, token, self.cache)
        self.users = UsersApi(client, token, self.cache)


class ApiSessions:
    """
    Сессии StoreApi по токену (LRU).

    Кэш одного токена никогда не отдаётся другому.
    """

    def __init__(self, client: BackendClient, limit: Optional[int] = None):
        self.client = client
        self.limit = limit or settings.API_SESSIONS_LIMIT
        self._sessions: "OrderedDict[str, StoreApi]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, token: Optional[str]) -> StoreApi:
        key = token or ""
        api = self._sessions.get(key)
        if api is not None:
            self._sessions.move_to_end(key)
            return api

        api = StoreApi(self.client, token)
        self._sessions[key] = api
        if len(self._sessions) > self.limit:
            self._sessions.popitem(last=False)
            logger.debug(f"[SESSIONS] Evicted oldest session, {len(self._sessions)} left")
        return api

    def drop(self, token: Optional[str]) -> None:
        self._sessions.pop(token or "", None)

    def clear(self) -> None:
        self._sessions.clear()


_api_sessions: Optional[ApiSessions] = None


def get_api_sessions(client: BackendClient) -> ApiSessions:
    """Сессии для клиента; при смене клиента создаются заново."""
    global _api_sessions
    if _api_sessions is None or _api_sessions.client is not client:
        _api_sessions = ApiSessions(client)
    return _api_sessions


def reset_api_sessions() -> None:
    global _api_sessions
    _api_sessions = None
