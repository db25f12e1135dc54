"""
Telegram Bot - точка входа.
"""

import asyncio
import logging
from typing import Optional
from aiogram import Bot, Dispatcher
from aiogram.enums import ParseMode
from aiogram.client.default import DefaultBotProperties
from aiogram.fsm.storage.memory import MemoryStorage

from backend.app.config import settings
from backend.app.services.auth import AccessTokenStore, sync_access_token
from backend.app.services.backend_client import BackendClient
from backend.app.services.cart import CartService
from backend.app.services.database import DatabaseService
from backend.app.services.store_api import ApiSessions
from .handlers import router
from .middlewares import CustomerMiddleware

# Настройка логирования
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def service_token() -> Optional[str]:
    """Сервисный токен бота из настроек."""
    return settings.API_ACCESS_TOKEN or None


def create_dispatcher(cart_service: CartService, sessions: ApiSessions, tokens: AccessTokenStore) -> Dispatcher:
    """Диспетчер с хранилищем состояний, middleware и роутерами."""
    dp = Dispatcher(storage=MemoryStorage(), cart_service=cart_service)

    middleware = CustomerMiddleware(sessions, tokens)
    dp.message.middleware(middleware)
    dp.callback_query.middleware(middleware)

    dp.include_router(router)
    return dp


async def main(bot_token: str):
    """Запуск бота."""
    db = DatabaseService(db_path=settings.DATABASE_PATH)
    await db.connect()
    await db.ensure_schema()

    client = BackendClient()
    tokens = AccessTokenStore()
    await sync_access_token(tokens, service_token)
    if not tokens.token:
        logger.warning("API_ACCESS_TOKEN is not set, backend calls go without authorization")

    bot = Bot(
        token=bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML)
    )
    dp = create_dispatcher(CartService(db), ApiSessions(client), tokens)

    logger.info(f"Bot starting... default shop: {settings.BOT_SHOP_ID or '-'}")

    try:
        try:
            await bot.delete_webhook(drop_pending_updates=True)
        except Exception as e:
            logger.warning(f"Error deleting webhook: {e}")

        await dp.start_polling(bot, allowed_updates=["message", "callback_query"])
    finally:
        await bot.session.close()
        await client.close()
        await db.disconnect()


def run_bot(bot_token: str):
    """Синхронная обёртка для запуска бота."""
    asyncio.run(main(bot_token))


if __name__ == "__main__":
    if not settings.BOT_TOKEN:
        raise ValueError("BOT_TOKEN environment variable is required")

    run_bot(settings.BOT_TOKEN)
