"""
Пользователи и магазины под их управлением.
"""

from typing import List

from ..models.user import User, UserCreate, UserUpdate
from ..models.shop import ManagedShopView
from .base_api import BaseApi
from .query_cache import Tag, list_tags

USERS = "Users"
MANAGED_SHOPS = "ManagedShops"
LIST = Tag(USERS, "LIST")


class UsersApi(BaseApi):

    async def list_users(self) -> List[User]:
        return await self._query(
            "listUsers", None,
            lambda: self.client.list_users(self.token),
            lambda result, _: list_tags(USERS, result),
        )

    async def get_user(self, user_id: str) -> User:
        return await self._query(
            "getUser", user_id,
            lambda: self.client.get_user(self.token, user_id),
            lambda _, arg: [Tag(USERS, arg)],
        )

    async def create_user(self, body: UserCreate) -> User:
        return await self._mutate(self.client.create_user(self.token, body), [LIST])

    async def update_user(self, user_id: str, body: UserUpdate) -> User:
        return await self._mutate(
            self.client.update_user(self.token, user_id, body),
            [Tag(USERS, user_id), LIST],
        )

    async def delete_user(self, user_id: str) -> None:
        await self._mutate(
            self.client.delete_user(self.token, user_id),
            [Tag(USERS, user_id), LIST],
        )

    async def list_managed_shops(self, user_id: str) -> List[ManagedShopView]:
        return await self._query(
            "listManagedShops", user_id,
            lambda: self.client.list_managed_shops(self.token, user_id),
            lambda result, _: list_tags(MANAGED_SHOPS, result, id_attr="shop_id"),
        )
