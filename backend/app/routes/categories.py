"""
API Routes для категорий.
"""

from fastapi import APIRouter, Depends
from typing import List

from ..models.category import Category, CategoryCreate, CategoryUpdate
from ..services.store_api import StoreApi
from .users import get_owner_api

router = APIRouter()


@router.get("/", response_model=List[Category])
async def list_categories(api: StoreApi = Depends(get_owner_api)):
    return await api.categories.list_categories()


@router.post("/", response_model=Category)
async def create_category(
    category: CategoryCreate,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.categories.create_category(category)


@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.categories.get_category(category_id)


@router.patch("/{category_id}", response_model=Category)
async def update_category(
    category_id: str,
    category: CategoryUpdate,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.categories.update_category(category_id, category)


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    await api.categories.delete_category(category_id)
    return {"message": "Category deleted"}
