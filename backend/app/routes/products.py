"""
API Routes для товаров.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from ..models.product import Product, ProductCreate, ProductUpdate
from ..services.store_api import StoreApi
from .users import get_owner_api

router = APIRouter()


@router.get("/", response_model=List[Product])
async def list_products(
    shop_id: Optional[str] = Query(None, alias="shopId"),
    owner_user_id: Optional[str] = Query(None, alias="ownerUserId"),
    api: StoreApi = Depends(get_owner_api)
):
    """Товары с фильтром по магазину или владельцу."""
    return await api.products.list_products(shop_id=shop_id, owner_user_id=owner_user_id)


@router.post("/", response_model=Product)
async def create_product(
    product: ProductCreate,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.products.create_product(product)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.products.get_product(product_id)


@router.patch("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    product: ProductUpdate,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.products.update_product(product_id, product)


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    await api.products.delete_product(product_id)
    return {"message": "Product deleted"}
