"""
Скрипт инициализации базы данных SQLite для хранилища корзин.
Создаёт схему и выводит статистику.
"""

import sqlite3
import os
import sys
from pathlib import Path

# Корень проекта в путь, чтобы взять схему и настройки приложения
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.app.config import settings  # noqa: E402
from backend.app.services.database import SCHEMA  # noqa: E402


DATABASE_PATH = Path(settings.DATABASE_PATH)


def init_database(reset: bool = False) -> None:
    """
    Инициализирует базу данных.

    Args:
        reset: Если True, удаляет существующую базу и создаёт новую.
    """
    if reset and DATABASE_PATH.exists():
        os.remove(DATABASE_PATH)
        print(f"[OK] Удалена существующая база данных: {DATABASE_PATH}")

    DATABASE_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DATABASE_PATH)
    cursor = conn.cursor()

    try:
        cursor.executescript(SCHEMA)
        conn.commit()
        print(f"\n[OK] База данных готова: {DATABASE_PATH}")
        print_statistics(cursor)
    except sqlite3.Error as e:
        conn.rollback()
        print(f"[ERROR] Ошибка: {e}")
        raise
    finally:
        conn.close()


def clear_carts() -> int:
    """Удаляет все сохранённые корзины, структура остаётся."""
    conn = sqlite3.connect(DATABASE_PATH)
    try:
        cursor = conn.execute("DELETE FROM cart_storage")
        conn.commit()
        print(f"[OK] Удалено корзин: {cursor.rowcount}")
        return cursor.rowcount
    finally:
        conn.close()


def print_statistics(cursor: sqlite3.Cursor) -> None:
    """Выводит статистику базы данных."""
    print("\n=== Статистика базы данных ===")
    print("-" * 40)

    cursor.execute("SELECT COUNT(*), COUNT(DISTINCT owner_id) FROM cart_storage")
    carts, owners = cursor.fetchone()
    print(f"  Корзин: {carts}")
    print(f"  Покупателей: {owners}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Инициализация базы данных")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Удалить существующую базу и создать новую"
    )
    parser.add_argument(
        "--clear-carts",
        action="store_true",
        help="Удалить все сохранённые корзины"
    )

    args = parser.parse_args()

    print("=" * 50)
    print("  Mewmew - Инициализация БД")
    print("=" * 50)
    print()

    init_database(reset=args.reset)
    if args.clear_carts:
        clear_carts()
