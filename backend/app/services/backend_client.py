"""
HTTP клиент внешнего REST бэкенда платформы (магазины, каталог, заказы, пользователи).
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from ..config import settings
from ..models.base import ApiModel
from ..models.shop import (
    Shop, ShopCreate, ShopSettings, ShopMember, ShopMemberInvite, ShopMemberUpdate,
    ShopHours, ShopHoursPayload, ManagedShopView,
)
from ..models.category import Category, CategoryCreate, CategoryUpdate
from ..models.product import Product, ProductCreate, ProductUpdate, ShopMenu
from ..models.order import Order, OrderCreate, OrderUpdate, OrderStatusUpdate
from ..models.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=ApiModel)


class ApiError(Exception):
    """Ошибка ответа бэкенда."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class BackendUnavailableError(ApiError):
    """Бэкенд недоступен (сеть, таймаут)."""

    def __init__(self, message: str):
        super().__init__(503, message)


def error_message(response: httpx.Response) -> str:
    """Достаёт текст ошибки из ответа как получится."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for field in ("detail", "message", "error"):
            value = data.get(field)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    return text or response.reason_phrase or f"HTTP {response.status_code}"


def _params(**params) -> Dict[str, Any]:
    """Убирает пустые параметры; bool отправляем как true/false."""
    result = {}
    for key, value in params.items():
        if value is None:
            continue
        result[key] = str(value).lower() if isinstance(value, bool) else value
    return result


class BackendClient:
    """Асинхронный клиент бэкенда. Токен передаётся в каждый вызов."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.API_BASE_URL
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.API_TIMEOUT,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Выполняет запрос и возвращает JSON (или None для пустого ответа)."""
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        if isinstance(json, ApiModel):
            json = json.to_payload()

        try:
            response = await self._http.request(method, path, json=json, params=params or None, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"[BACKEND] {method} {path} failed: {e}")
            raise BackendUnavailableError(f"Backend is unavailable: {e}") from e

        if response.is_error:
            message = error_message(response)
            logger.warning(f"[BACKEND] {method} {path} -> {response.status_code}: {message}")
            raise ApiError(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _parse(self, model: Type[M], data: Any, method: str, path: str) -> M:
        """Ответ, который не подходит под модель, считается ошибкой бэкенда (502)."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"[BACKEND] {method} {path} returned unexpected {model.__name__}: {e.error_count()} errors")
            raise ApiError(502, f"Unexpected {model.__name__} payload from backend") from e

    async def _one(self, model: Type[M], method: str, path: str, token, **kwargs) -> M:
        data = await self.request(method, path, token, **kwargs)
        return self._parse(model, data, method, path)

    async def _many(self, model: Type[M], path: str, token, params=None) -> List[M]:
        data = await self.request("GET", path, token, params=params)
        return [self._parse(model, item, "GET", path) for item in data or []]

    # Магазины

    async def list_shops(self, token, status: Optional[str] = None, accepting_orders: Optional[bool] = None) -> List[Shop]:
        return await self._many(Shop, "/shops", token, _params(status=status, acceptingOrders=accepting_orders))

    async def create_shop(self, token, body: ShopCreate) -> Shop:
        return await self._one(Shop, "POST", "/shops", token, json=body)

    async def get_shop(self, token, shop_id: str) -> Shop:
        return await self._one(Shop, "GET", f"/shops/{shop_id}", token)

    async def update_shop(self, token, shop_id: str, body: ShopSettings) -> Shop:
        return await self._one(Shop, "PATCH", f"/shops/{shop_id}", token, json=body)

    async def delete_shop(self, token, shop_id: str) -> None:
        await self.request("DELETE", f"/shops/{shop_id}", token)

    async def get_shop_menu(self, token, shop_id: str) -> ShopMenu:
        return await self._one(ShopMenu, "GET", f"/shops/{shop_id}/menu", token)

    # Участники магазина

    async def list_shop_members(self, token, shop_id: str) -> List[ShopMember]:
        return await self._many(ShopMember, f"/shops/{shop_id}/members", token)

    async def create_shop_member(self, token, shop_id: str, body: ShopMemberInvite) -> ShopMember:
        return await self._one(ShopMember, "POST", f"/shops/{shop_id}/members", token, json=body)

    async def update_shop_member(self, token, shop_id: str, member_id: str, body: ShopMemberUpdate) -> ShopMember:
        return await self._one(ShopMember, "PATCH", f"/shops/{shop_id}/members/{member_id}", token, json=body)

    # Часы работы

    async def get_shop_hours(self, token, shop_id: str) -> Optional[ShopHours]:
        data = await self.request("GET", f"/shops/{shop_id}/hours", token)
        # пустой объект значит, что часы не заданы
        if not data:
            return None
        return self._parse(ShopHours, data, "GET", f"/shops/{shop_id}/hours")

    async def upsert_shop_hours(self, token, shop_id: str, body: ShopHoursPayload) -> ShopHours:
        return await self._one(ShopHours, "PUT", f"/shops/{shop_id}/hours", token, json=body)

    # Категории

    async def list_categories(self, token) -> List[Category]:
        return await self._many(Category, "/categories", token)

    async def get_category(self, token, category_id: str) -> Category:
        return await self._one(Category, "GET", f"/categories/{category_id}", token)

    async def create_category(self, token, body: CategoryCreate) -> Category:
        return await self._one(Category, "POST", "/categories", token, json=body)

    async def update_category(self, token, category_id: str, body: CategoryUpdate) -> Category:
        return await self._one(Category, "PATCH", f"/categories/{category_id}", token, json=body)

    async def delete_category(self, token, category_id: str) -> None:
        await self.request("DELETE", f"/categories/{category_id}", token)

    # Товары

    async def list_products(self, token, shop_id: Optional[str] = None, owner_user_id: Optional[str] = None) -> List[Product]:
        return await self._many(Product, "/products", token, _params(shopId=shop_id, ownerUserId=owner_user_id))

    async def get_product(self, token, product_id: str) -> Product:
        return await self._one(Product, "GET", f"/products/{product_id}", token)

    async def create_product(self, token, body: ProductCreate) -> Product:
        return await self._one(Product, "POST", "/products", token, json=body)

    async def update_product(self, token, product_id: str, body: ProductUpdate) -> Product:
        return await self._one(Product, "PATCH", f"/products/{product_id}", token, json=body)

    async def delete_product(self, token, product_id: str) -> None:
        await self.request("DELETE", f"/products/{product_id}", token)

    # Заказы

    async def list_shop_orders(self, token, shop_id: str, status: Optional[str] = None) -> List[Order]:
        return await self._many(Order, f"/shops/{shop_id}/orders", token, _params(status=status))

    async def create_order(self, token, shop_id: str, body: OrderCreate) -> Order:
        return await self._one(Order, "POST", f"/shops/{shop_id}/orders", token, json=body)

    async def update_order_status(self, token, shop_id: str, order_id: str, body: OrderStatusUpdate) -> Order:
        return await self._one(Order, "PATCH", f"/shops/{shop_id}/orders/{order_id}/status", token, json=body)

    async def list_orders(self, token, shop_id: Optional[str] = None, user_id: Optional[str] = None) -> List[Order]:
        return await self._many(Order, "/orders", token, _params(shopId=shop_id, userId=user_id))

    async def get_order(self, token, order_id: str) -> Order:
        return await self._one(Order, "GET", f"/orders/{order_id}", token)

    async def update_order(self, token, order_id: str, body: OrderUpdate) -> Order:
        return await self._one(Order, "PATCH", f"/orders/{order_id}", token, json=body)

    async def delete_order(self, token, order_id: str) -> None:
        await self.request("DELETE", f"/orders/{order_id}", token)

    # Пользователи

    async def list_users(self, token) -> List[User]:
        return await self._many(User, "/users", token)

    async def create_user(self, token, body: UserCreate) -> User:
        return await self._one(User, "POST", "/users", token, json=body)

    async def get_user(self, token, user_id: str) -> User:
        return await self._one(User, "GET", f"/users/{user_id}", token)

    async def update_user(self, token, user_id: str, body: UserUpdate) -> User:
        return await self._one(User, "PATCH", f"/users/{user_id}", token, json=body)

    async def delete_user(self, token, user_id: str) -> None:
        await self.request("DELETE", f"/users/{user_id}", token)

    async def list_managed_shops(self, token, user_id: str) -> List[ManagedShopView]:
        return await self._many(ManagedShopView, f"/users/{user_id}/shops", token)


# Глобальный экземпляр клиента (создаётся в lifespan)
_backend_client: Optional[BackendClient] = None


def get_backend_client() -> BackendClient:
    """Dependency для FastAPI - возвращает клиент бэкенда."""
    global _backend_client
    if _backend_client is None:
        _backend_client = BackendClient()
    return _backend_client
