"""
API Routes для заказов.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from ..models.order import Order, OrderUpdate
from ..services.store_api import StoreApi
from .users import get_owner_api

router = APIRouter()


@router.get("/", response_model=List[Order])
async def list_orders(
    shop_id: Optional[str] = Query(None, alias="shopId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    api: StoreApi = Depends(get_owner_api)
):
    return await api.orders.list_orders(shop_id=shop_id, user_id=user_id)


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.orders.get_order(order_id)


@router.patch("/{order_id}", response_model=Order)
async def update_order(
    order_id: str,
    order_update: OrderUpdate,
    api: StoreApi = Depends(get_owner_api)
):
    """Обновляет данные заказа (оплата, контакты покупателя)."""
    return await api.orders.update_order(order_id, order_update)


@router.delete("/{order_id}")
async def delete_order(
    order_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    await api.orders.delete_order(order_id)
    return {"message": "Order deleted"}
