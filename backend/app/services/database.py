"""
Сервис для работы с базой данных SQLite (хранилище корзин).
"""

import aiosqlite
from pathlib import Path
from typing import Optional, List, Dict, Any, AsyncGenerator

from ..config import settings


SCHEMA = """
CREATE TABLE IF NOT EXISTS cart_storage (
    owner_id TEXT NOT NULL,
    storage_key TEXT NOT NULL,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (owner_id, storage_key)
)
"""


class DatabaseService:
    """Асинхронный сервис для работы с SQLite."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path or settings.DATABASE_PATH
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Устанавливает соединение с базой данных."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA encoding = 'UTF-8'")

    async def disconnect(self) -> None:
        """Закрывает соединение с базой данных."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def ensure_schema(self) -> None:
        """Создаёт таблицы, если их ещё нет."""
        await self.connection.executescript(SCHEMA)
        await self.commit()

    @property
    def connection(self) -> aiosqlite.Connection:
        """Возвращает текущее соединение."""
        if not self._connection:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    async def execute(self, query: str, params: tuple = ()) -> aiosqlite.Cursor:
        """Выполняет SQL запрос."""
        return await self.connection.execute(query, params)

    async def commit(self) -> None:
        """Фиксирует транзакцию."""
        await self.connection.commit()

    async def rollback(self) -> None:
        """Откатывает транзакцию."""
        await self.connection.rollback()

    async def fetch_one(self, query: str, params: tuple = ()) -> Optional[Dict[str, Any]]:
        """Выполняет запрос и возвращает одну строку."""
        cursor = await self.execute(query, params)
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def upsert(self, table: str, data: Dict[str, Any], conflict: List[str]) -> None:
        """Вставляет запись или обновляет её при конфликте по ключу."""
        columns = ", ".join(data.keys())
        placeholders = ", ".join(["?" for _ in data])
        updates = ", ".join(f"{k} = excluded.{k}" for k in data if k not in conflict)
        query = (
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders}) "
            f"ON CONFLICT ({', '.join(conflict)}) DO UPDATE SET {updates}"
        )
        await self.execute(query, tuple(data.values()))
        await self.commit()


# Глобальный экземпляр сервиса (создаётся в lifespan)
_db_service: Optional[DatabaseService] = None


async def get_db() -> AsyncGenerator[DatabaseService, None]:
    """Dependency для FastAPI - возвращает сервис базы данных."""
    global _db_service

    if _db_service is None:
        _db_service = DatabaseService()
        await _db_service.connect()
        await _db_service.ensure_schema()

    try:
        yield _db_service
    except Exception:
        await _db_service.rollback()
        raise

