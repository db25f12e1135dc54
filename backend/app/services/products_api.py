"""
Товары владельца.
"""

from typing import List, Optional

from ..models.product import Product, ProductCreate, ProductUpdate
from .base_api import BaseApi
from .query_cache import Tag, list_tags

PRODUCTS = "Products"
LIST = Tag(PRODUCTS, "LIST")


class ProductsApi(BaseApi):

    async def list_products(self, shop_id: Optional[str] = None, owner_user_id: Optional[str] = None) -> List[Product]:
        return await self._query(
            "listProducts", {"shopId": shop_id, "ownerUserId": owner_user_id},
            lambda: self.client.list_products(self.token, shop_id=shop_id, owner_user_id=owner_user_id),
            lambda result, _: list_tags(PRODUCTS, result),
        )

    async def get_product(self, product_id: str) -> Product:
        return await self._query(
            "getProduct", product_id,
            lambda: self.client.get_product(self.token, product_id),
            lambda _, arg: [Tag(PRODUCTS, arg)],
        )

    async def create_product(self, body: ProductCreate) -> Product:
        return await self._mutate(self.client.create_product(self.token, body), [LIST])

    async def update_product(self, product_id: str, body: ProductUpdate) -> Product:
        return await self._mutate(
            self.client.update_product(self.token, product_id, body),
            [Tag(PRODUCTS, product_id), LIST],
        )

    async def delete_product(self, product_id: str) -> None:
        await self._mutate(
            self.client.delete_product(self.token, product_id),
            [Tag(PRODUCTS, product_id), LIST],
        )
