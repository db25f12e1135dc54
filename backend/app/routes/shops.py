"""
API Routes для магазинов (кабинет владельца).
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from ..models.shop import (
    Shop, ShopCreate, ShopSettings, ShopMember, ShopMemberInvite, ShopMemberUpdate,
    ShopHours, ShopHoursPayload,
)
from ..models.product import ShopMenu
from ..models.order import Order, OrderCreate, OrderStatusUpdate
from ..services.order_flow import next_status
from ..services.store_api import StoreApi
from .users import get_owner_api

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[Shop])
async def list_shops(
    status: Optional[str] = None,
    accepting_orders: Optional[bool] = Query(None, alias="acceptingOrders"),
    api: StoreApi = Depends(get_owner_api)
):
    """Список магазинов с фильтрами."""
    return await api.shops.list_shops(status=status, accepting_orders=accepting_orders)


@router.post("/", response_model=Shop)
async def create_shop(
    shop: ShopCreate,
    api: StoreApi = Depends(get_owner_api)
):
    """Создаёт магазин."""
    created = await api.shops.create_shop(shop)
    logger.info(f"[SHOPS] Created shop {created.id} ({created.slug})")
    return created


@router.get("/{shop_id}", response_model=Shop)
async def get_shop(
    shop_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.shops.get_shop(shop_id)


@router.patch("/{shop_id}", response_model=Shop)
async def update_shop(
    shop_id: str,
    shop_update: ShopSettings,
    api: StoreApi = Depends(get_owner_api)
):
    """Обновляет настройки магазина."""
    return await api.shops.update_shop(shop_id, shop_update)


@router.delete("/{shop_id}")
async def delete_shop(
    shop_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    await api.shops.delete_shop(shop_id)
    logger.info(f"[SHOPS] Deleted shop {shop_id}")
    return {"message": "Shop deleted"}


@router.get("/{shop_id}/menu", response_model=ShopMenu)
async def get_shop_menu(
    shop_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    """Меню магазина: категории, товары и записи каталога."""
    return await api.shops.get_shop_menu(shop_id)


# Часы работы

@router.get("/{shop_id}/hours", response_model=Optional[ShopHours])
async def get_shop_hours(
    shop_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    """Часы работы (null, если не заданы)."""
    return await api.shops.get_shop_hours(shop_id)


@router.put("/{shop_id}/hours", response_model=ShopHours)
async def upsert_shop_hours(
    shop_id: str,
    hours: ShopHoursPayload,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.shops.upsert_shop_hours(shop_id, hours)


# Участники

@router.get("/{shop_id}/members", response_model=List[ShopMember])
async def list_shop_members(
    shop_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.shops.list_shop_members(shop_id)


@router.post("/{shop_id}/members", response_model=ShopMember)
async def invite_shop_member(
    shop_id: str,
    invite: ShopMemberInvite,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.shops.create_shop_member(shop_id, invite)


@router.patch("/{shop_id}/members/{member_id}", response_model=ShopMember)
async def update_shop_member(
    shop_id: str,
    member_id: str,
    member_update: ShopMemberUpdate,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.shops.update_shop_member(shop_id, member_id, member_update)


# Заказы магазина

@router.get("/{shop_id}/orders", response_model=List[Order])
async def list_shop_orders(
    shop_id: str,
    status: Optional[str] = None,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.orders.list_shop_orders(shop_id, status=status)


@router.post("/{shop_id}/orders", response_model=Order)
async def create_shop_order(
    shop_id: str,
    order: OrderCreate,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.orders.create_order(shop_id, order)


@router.patch("/{shop_id}/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    shop_id: str,
    order_id: str,
    status_update: OrderStatusUpdate,
    api: StoreApi = Depends(get_owner_api)
):
    """Переводит заказ в указанный статус."""
    order = await api.orders.update_order_status(shop_id, order_id, status_update)
    logger.info(f"[ORDERS] Order {order_id} -> {order.status}")
    return order


@router.post("/{shop_id}/orders/{order_id}/advance", response_model=Order)
async def advance_order(
    shop_id: str,
    order_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    """Переводит заказ на следующий шаг: placed -> accepted -> ready_for_pickup -> completed."""
    order = await api.orders.refresh_order(order_id)
    if order.shop_id != shop_id:
        raise HTTPException(status_code=404, detail="Order not found")

    target = next_status(order.status)
    if target is None:
        raise HTTPException(status_code=409, detail="Order is already terminal.")

    updated = await api.orders.update_order_status(
        shop_id, order_id, OrderStatusUpdate(next_status=target)
    )
    logger.info(f"[ORDERS] Order {order_id} advanced {order.status} -> {updated.status}")
    return updated
