"""
Middleware для бота.
"""

from typing import Any, Awaitable, Callable, Dict
from aiogram import BaseMiddleware
from aiogram.types import Message, CallbackQuery, TelegramObject

from backend.app.services.auth import AccessTokenStore
from backend.app.services.store_api import ApiSessions


def cart_owner_id(telegram_id: int) -> str:
    """Владелец корзины для пользователя Telegram."""
    return f"tg:{telegram_id}"


class CustomerMiddleware(BaseMiddleware):
    """Пропускает только личные чаты и добавляет в контекст API и владельца корзины."""

    def __init__(self, sessions: ApiSessions, tokens: AccessTokenStore):
        self.sessions = sessions
        self.tokens = tokens

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any]
    ) -> Any:
        # Бот отвечает только в личных сообщениях (private)
        if isinstance(event, Message):
            if event.chat.type != "private":
                return
        elif isinstance(event, CallbackQuery):
            if event.message and event.message.chat.type != "private":
                return

        user = getattr(event, "from_user", None)
        if user:
            data["telegram_user"] = {
                "id": user.id,
                "username": user.username,
                "full_name": user.full_name,
            }
            data["cart_owner"] = cart_owner_id(user.id)

        data["api"] = self.sessions.get(self.tokens.token)
        return await handler(event, data)
