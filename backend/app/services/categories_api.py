"""
Категории товаров.
"""

from typing import List

from ..models.category import Category, CategoryCreate, CategoryUpdate
from .base_api import BaseApi
from .query_cache import Tag, list_tags

CATEGORIES = "Categories"
LIST = Tag(CATEGORIES, "LIST")


class CategoriesApi(BaseApi):

    async def list_categories(self) -> List[Category]:
        return await self._query(
            "listCategories", None,
            lambda: self.client.list_categories(self.token),
            lambda result, _: list_tags(CATEGORIES, result),
        )

    async def get_category(self, category_id: str) -> Category:
        return await self._query(
            "getCategory", category_id,
            lambda: self.client.get_category(self.token, category_id),
            lambda _, arg: [Tag(CATEGORIES, arg)],
        )

    async def create_category(self, body: CategoryCreate) -> Category:
        return await self._mutate(self.client.create_category(self.token, body), [LIST])

    async def update_category(self, category_id: str, body: CategoryUpdate) -> Category:
        return await self._mutate(
            self.client.update_category(self.token, category_id, body),
            [Tag(CATEGORIES, category_id), LIST],
        )

    async def delete_category(self, category_id: str) -> None:
        await self._mutate(
            self.client.delete_category(self.token, category_id),
            [Tag(CATEGORIES, category_id), LIST],
        )
