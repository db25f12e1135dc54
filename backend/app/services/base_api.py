"""
Общая часть API поверх клиента бэкенда: один токен, один кэш.
"""

from typing import Any, Awaitable, Callable, Iterable, Optional

from .backend_client import BackendClient
from .query_cache import QueryCache, Tag


class BaseApi:
    """Запросы кэшируются, мутации сбрасывают теги."""

    def __init__(self, client: BackendClient, token: Optional[str], cache: QueryCache):
        self.client = client
        self.token = token
        self.cache = cache

    async def _query(
        self,
        endpoint: str,
        args: Any,
        fetch: Callable[[], Awaitable[Any]],
        provides: Callable[[Any, Any], Iterable[Tag]],
    ) -> Any:
        return await self.cache.query(endpoint, args, fetch, provides)

    async def _mutate(self, call: Awaitable[Any], invalidates: Iterable[Tag]) -> Any:
        # при ошибке кэш не трогаем
        result = await call
        self.cache.invalidate(invalidates)
        return result
