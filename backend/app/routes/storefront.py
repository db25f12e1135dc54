"""
API Routes витрины магазина для покупателей.
"""

from fastapi import APIRouter, Depends
from typing import Optional

from ..models.shop import ShopHours
from ..models.storefront import Storefront
from ..services.backend_client import ApiError
from ..services.menu import build_storefront
from ..services.shop_hours import is_accepting_orders
from ..services.store_api import StoreApi
from .users import get_api

router = APIRouter()


async def _shop_hours(api: StoreApi, shop_id: str) -> Optional[ShopHours]:
    try:
        return await api.shops.get_shop_hours(shop_id)
    except ApiError as e:
        if e.status_code == 404:
            return None
        raise


@router.get("/{shop_id}", response_model=Storefront)
async def get_storefront(
    shop_id: str,
    api: StoreApi = Depends(get_api)
):
    """Меню магазина по категориям, только доступные товары."""
    menu = await api.shops.get_shop_menu(shop_id)
    storefront = build_storefront(menu)
    storefront.is_open = is_accepting_orders(menu.shop, await _shop_hours(api, shop_id))
    return storefront
