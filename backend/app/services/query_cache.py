"""
Кэш запросов с тегами: запросы предоставляют теги, мутации их инвалидируют.
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tag:
    """Тег кэша. Тег инвалидации без id совпадает со всеми тегами типа."""
    type: str
    id: Optional[str] = None

    def matches(self, other: "Tag") -> bool:
        return self.type == other.type and (self.id is None or self.id == other.id)


@dataclass
class CacheEntry:
    value: Any
    tags: Tuple[Tag, ...]
    stored_at: float = field(default=0.0)


CacheKey = Tuple[str, str]


def _canonical_args(args: Any) -> str:
    """Аргументы запроса в стабильную строку (порядок ключей не важен)."""
    return json.dumps(args, sort_keys=True, default=str)


class QueryCache:
    """Кэш результатов запросов с дедупликацией одновременных запросов."""

    def __init__(self, ttl: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._inflight: Dict[CacheKey, asyncio.Future] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self.ttl <= 0 or (self._clock() - entry.stored_at) < self.ttl

    async def query(
        self,
        endpoint: str,
        args: Any,
        fetch: Callable[[], Awaitable[Any]],
        provides: Optional[Callable[[Any, Any], Iterable[Tag]]] = None,
    ) -> Any:
        """Возвращает данные из кэша или выполняет fetch и кэширует результат."""
        key: CacheKey = (endpoint, _canonical_args(args))

        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            return entry.value

        pending = self._inflight.get(key)
        if pending is not None:
            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                if not pending.cancelled():
                    raise
                # отменили первого вызывающего, а не нас: повторяем запрос
                return await self.query(endpoint, args, fetch, provides)

        future = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            value = await fetch()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            # ошибки не кэшируем, но отдаём всем ожидающим
            future.set_exception(e)
            # чтобы не было "Future exception was never retrieved"
            future.exception()
            raise
        else:
            tags = tuple(provides(value, args)) if provides else ()
            self._entries[key] = CacheEntry(value=value, tags=tags, stored_at=self._clock())
            future.set_result(value)
            return value
        finally:
            self._inflight.pop(key, None)

    def invalidate(self, tags: Iterable[Tag]) -> int:
        """Удаляет записи, которые предоставляют хотя бы один из тегов."""
        tags = list(tags)
        stale = [
            key for key, entry in self._entries.items()
            if any(tag.matches(provided) for tag in tags for provided in entry.tags)
        ]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug(f"[CACHE] Invalidated {len(stale)} entries for {tags}")
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


def list_tags(tag_type: str, items: Optional[List[Any]], list_id: str = "LIST", id_attr: str = "id") -> List[Tag]:
    """Теги списка: по тегу на элемент плюс тег всего списка."""
    list_tag = Tag(tag_type, list_id)
    if not items:
        return [list_tag]
    return [Tag(tag_type, getattr(item, id_attr)) for item in items] + [list_tag]
