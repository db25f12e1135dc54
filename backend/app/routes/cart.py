"""
API Routes для корзины покупателя.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from ..models.cart import (
    CartItemAdd, CartItemInput, CartQuantityUpdate, CartStep,
    CartView, CartSummary, CheckoutRequest,
)
from ..models.order import Order
from ..services.cart import CartService
from ..services.menu import find_product, find_catalog_entry
from ..services.order_flow import build_order_from_cart
from ..services.pricing import (
    compute_unit_price, default_variant_id, effective_base_price, validate_selection,
)
from ..services.store_api import StoreApi
from .users import get_api, get_client_id, get_cart_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{shop_id}", response_model=CartView)
async def get_cart(
    shop_id: str,
    client_id: str = Depends(get_client_id),
    carts: CartService = Depends(get_cart_service)
):
    """Корзина покупателя в магазине."""
    cart = await carts.load(client_id, shop_id)
    return cart.view()


@router.get("/{shop_id}/summary", response_model=CartSummary)
async def get_cart_summary(
    shop_id: str,
    client_id: str = Depends(get_client_id),
    carts: CartService = Depends(get_cart_service)
):
    """Количество товаров и сумма."""
    cart = await carts.load(client_id, shop_id)
    return CartSummary(count=cart.count, total=float(cart.total), lines=len(cart.items))


@router.post("/{shop_id}/items", response_model=CartView)
async def add_to_cart(
    shop_id: str,
    item: CartItemAdd,
    client_id: str = Depends(get_client_id),
    api: StoreApi = Depends(get_api),
    carts: CartService = Depends(get_cart_service)
):
    """Добавляет товар в корзину. Цену считает сервер по меню магазина."""
    menu = await api.shops.get_shop_menu(shop_id)
    product = find_product(menu, item.product_id)
    entry = find_catalog_entry(menu, item.product_id)
    if not product or not entry or not entry.is_available:
        raise HTTPException(status_code=404, detail="Product not found in this shop")

    variant_id = item.variant_id or default_variant_id(product)
    validate_selection(product, variant_id, item.addon_option_ids)

    price = compute_unit_price(
        product,
        variant_id,
        item.addon_option_ids,
        base_price=effective_base_price(product, entry),
    )
    cart = await carts.add_item(client_id, shop_id, CartItemInput(
        id=product.id,
        name=product.label,
        image_url=product.image_url,
        price=price,
        quantity=item.quantity,
        variant_id=variant_id,
        addon_option_ids=item.addon_option_ids or None,
    ))
    return cart.view()


@router.patch("/{shop_id}/items/{key}", response_model=CartView)
async def set_item_quantity(
    shop_id: str,
    key: str,
    update: CartQuantityUpdate,
    client_id: str = Depends(get_client_id),
    carts: CartService = Depends(get_cart_service)
):
    """Задаёт количество; 0 удаляет строку."""
    cart = await carts.set_quantity(client_id, shop_id, key, update.quantity)
    return cart.view()


@router.post("/{shop_id}/items/{key}/increment", response_model=CartView)
async def increment_item(
    shop_id: str,
    key: str,
    step: CartStep = CartStep(),
    client_id: str = Depends(get_client_id),
    carts: CartService = Depends(get_cart_service)
):
    cart = await carts.increment(client_id, shop_id, key, step.by)
    return cart.view()


@router.post("/{shop_id}/items/{key}/decrement", response_model=CartView)
async def decrement_item(
    shop_id: str,
    key: str,
    step: CartStep = CartStep(),
    client_id: str = Depends(get_client_id),
    carts: CartService = Depends(get_cart_service)
):
    cart = await carts.decrement(client_id, shop_id, key, step.by)
    return cart.view()


@router.delete("/{shop_id}/items/{key}", response_model=CartView)
async def remove_item(
    shop_id: str,
    key: str,
    client_id: str = Depends(get_client_id),
    carts: CartService = Depends(get_cart_service)
):
    cart = await carts.remove_item(client_id, shop_id, key)
    return cart.view()


@router.delete("/{shop_id}", response_model=CartView)
async def clear_cart(
    shop_id: str,
    client_id: str = Depends(get_client_id),
    carts: CartService = Depends(get_cart_service)
):
    """Очищает корзину магазина."""
    cart = await carts.clear(client_id, shop_id)
    return cart.view()


@router.post("/{shop_id}/checkout", response_model=Order)
async def checkout(
    shop_id: str,
    checkout_data: CheckoutRequest,
    client_id: str = Depends(get_client_id),
    api: StoreApi = Depends(get_api),
    carts: CartService = Depends(get_cart_service)
):
    """Оформляет заказ из корзины и очищает её."""
    cart = await carts.load(client_id, shop_id)
    order_body = build_order_from_cart(
        cart,
        user_id=checkout_data.user_id or client_id,
        customer_name=checkout_data.customer_name,
        customer_phone=checkout_data.customer_phone,
        customer_notes=checkout_data.customer_notes,
        fulfillment_type=checkout_data.fulfillment_type,
        scheduled_for=checkout_data.scheduled_for,
    )
    order = await api.orders.create_order(shop_id, order_body)
    await carts.clear(client_id, shop_id)
    logger.info(f"[CART] Checkout {client_id} -> order {order.id} in shop {shop_id}")
    return order
