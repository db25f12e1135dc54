"""
Заказы: списки магазина и общие, создание, смена статуса.
"""

from typing import List, Optional

from ..models.order import Order, OrderCreate, OrderUpdate, OrderStatusUpdate
from .base_api import BaseApi
from .query_cache import Tag, list_tags

ORDERS = "Orders"
SHOP_ORDERS = "ShopOrders"
LIST = Tag(ORDERS, "LIST")


def shop_orders_list_tag(shop_id: str) -> Tag:
    return Tag(SHOP_ORDERS, f"{shop_id}-LIST")


class OrdersApi(BaseApi):

    async def list_shop_orders(self, shop_id: str, status: Optional[str] = None) -> List[Order]:
        return await self._query(
            "listShopOrders", {"shopId": shop_id, "status": status},
            lambda: self.client.list_shop_orders(self.token, shop_id, status=status),
            lambda result, args: list_tags(SHOP_ORDERS, result, list_id=f"{args['shopId']}-LIST"),
        )

    async def list_orders(self, shop_id: Optional[str] = None, user_id: Optional[str] = None) -> List[Order]:
        return await self._query(
            "listOrders", {"shopId": shop_id, "userId": user_id},
            lambda: self.client.list_orders(self.token, shop_id=shop_id, user_id=user_id),
            lambda result, _: list_tags(ORDERS, result),
        )

    async def get_order(self, order_id: str) -> Order:
        return await self._query(
            "getOrder", order_id,
            lambda: self.client.get_order(self.token, order_id),
            lambda _, arg: [Tag(ORDERS, arg)],
        )

    async def refresh_order(self, order_id: str) -> Order:
        """Заказ прямо из бэкенда; кэшированная запись сбрасывается."""
        self.cache.invalidate([Tag(ORDERS, order_id)])
        return await self.get_order(order_id)

    async def create_order(self, shop_id: str, body: OrderCreate) -> Order:
        return await self._mutate(
            self.client.create_order(self.token, shop_id, body),
            [shop_orders_list_tag(shop_id), LIST],
        )

    async def update_order_status(self, shop_id: str, order_id: str, body: OrderStatusUpdate) -> Order:
        return await self._mutate(
            self.client.update_order_status(self.token, shop_id, order_id, body),
            [Tag(SHOP_ORDERS, order_id), shop_orders_list_tag(shop_id), Tag(ORDERS, order_id)],
        )

    async def update_order(self, order_id: str, body: OrderUpdate) -> Order:
        return await self._mutate(
            self.client.update_order(self.token, order_id, body),
            [Tag(ORDERS, order_id), LIST],
        )

    async def delete_order(self, order_id: str) -> None:
        await self._mutate(
            self.client.delete_order(self.token, order_id),
            [Tag(ORDERS, order_id), LIST],
        )
