"""
Магазины: карточка, меню, часы работы, участники.
"""

from typing import List, Optional

from ..models.shop import (
    Shop, ShopCreate, ShopSettings, ShopMember, ShopMemberInvite, ShopMemberUpdate,
    ShopHours, ShopHoursPayload,
)
from ..models.product import ShopMenu
from .base_api import BaseApi
from .query_cache import Tag, list_tags

SHOPS = "Shops"
SHOP_MENU = "ShopMenu"
SHOP_HOURS = "ShopHours"
SHOP_MEMBERS = "ShopMembers"

LIST = Tag(SHOPS, "LIST")


def members_list_tag(shop_id: str) -> Tag:
    return Tag(SHOP_MEMBERS, f"{shop_id}-LIST")


class ShopsApi(BaseApi):

    async def list_shops(self, status: Optional[str] = None, accepting_orders: Optional[bool] = None) -> List[Shop]:
        args = {"status": status, "acceptingOrders": accepting_orders}
        return await self._query(
            "listShops", args,
            lambda: self.client.list_shops(self.token, status=status, accepting_orders=accepting_orders),
            lambda result, _: list_tags(SHOPS, result),
        )

    async def get_shop(self, shop_id: str) -> Shop:
        return await self._query(
            "getShop", shop_id,
            lambda: self.client.get_shop(self.token, shop_id),
            lambda _, arg: [Tag(SHOPS, arg)],
        )

    async def create_shop(self, body: ShopCreate) -> Shop:
        return await self._mutate(self.client.create_shop(self.token, body), [LIST])

    async def update_shop(self, shop_id: str, body: ShopSettings) -> Shop:
        return await self._mutate(
            self.client.update_shop(self.token, shop_id, body),
            [Tag(SHOPS, shop_id), LIST],
        )

    async def delete_shop(self, shop_id: str) -> None:
        await self._mutate(
            self.client.delete_shop(self.token, shop_id),
            [Tag(SHOPS, shop_id), LIST],
        )

    async def get_shop_menu(self, shop_id: str) -> ShopMenu:
        return await self._query(
            "getShopMenu", shop_id,
            lambda: self.client.get_shop_menu(self.token, shop_id),
            lambda _, arg: [Tag(SHOP_MENU, arg)],
        )

    async def get_shop_hours(self, shop_id: str) -> Optional[ShopHours]:
        return await self._query(
            "getShopHours", shop_id,
            lambda: self.client.get_shop_hours(self.token, shop_id),
            lambda _, arg: [Tag(SHOP_HOURS, arg)],
        )

    async def upsert_shop_hours(self, shop_id: str, body: ShopHoursPayload) -> ShopHours:
        return await self._mutate(
            self.client.upsert_shop_hours(self.token, shop_id, body),
            [Tag(SHOP_HOURS, shop_id)],
        )

    async def list_shop_members(self, shop_id: str) -> List[ShopMember]:
        return await self._query(
            "listShopMembers", shop_id,
            lambda: self.client.list_shop_members(self.token, shop_id),
            lambda result, arg: list_tags(SHOP_MEMBERS, result, list_id=f"{arg}-LIST"),
        )

    async def create_shop_member(self, shop_id: str, body: ShopMemberInvite) -> ShopMember:
        return await self._mutate(
            self.client.create_shop_member(self.token, shop_id, body),
            [members_list_tag(shop_id)],
        )

    async def update_shop_member(self, shop_id: str, member_id: str, body: ShopMemberUpdate) -> ShopMember:
        return await self._mutate(
            self.client.update_shop_member(self.token, shop_id, member_id, body),
            [Tag(SHOP_MEMBERS, member_id), members_list_tag(shop_id)],
        )
