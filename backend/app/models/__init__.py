"""
Модели данных витрины (DTO внешнего бэкенда и корзина).
"""

from .base import ApiModel
from .shop import (
    Money, FulfillmentOptions, Shop, ShopCreate, ShopSettings,
    ShopMember, ShopMemberInvite, ShopMemberUpdate,
    ShopHours, ShopHoursPayload, ShopHoursWindow, ManagedShopView,
)
from .category import Category, CategoryCreate, CategoryUpdate
from .product import (
    VariantOption, VariantGroup, AddonOption, AddonGroup,
    Product, ProductCreate, ProductUpdate, CatalogEntry, ShopMenu,
)
from .order import (
    Order, OrderItem, OrderItemAddon, OrderCreate, OrderItemPayload,
    OrderUpdate, OrderStatusUpdate,
)
from .user import User, UserCreate, UserUpdate
from .cart import (
    CartItem, CartItemInput, CartItemAdd, CartQuantityUpdate, CartStep,
    CartView, CartSummary, CheckoutRequest,
)
from .storefront import Storefront, StorefrontCategory, StorefrontProduct

__all__ = [
    "ApiModel",
    # Shop
    "Money", "FulfillmentOptions", "Shop", "ShopCreate", "ShopSettings",
    "ShopMember", "ShopMemberInvite", "ShopMemberUpdate",
    "ShopHours", "ShopHoursPayload", "ShopHoursWindow", "ManagedShopView",
    # Category
    "Category", "CategoryCreate", "CategoryUpdate",
    # Product
    "VariantOption", "VariantGroup", "AddonOption", "AddonGroup",
    "Product", "ProductCreate", "ProductUpdate", "CatalogEntry", "ShopMenu",
    # Order
    "Order", "OrderItem", "OrderItemAddon", "OrderCreate", "OrderItemPayload",
    "OrderUpdate", "OrderStatusUpdate",
    # User
    "User", "UserCreate", "UserUpdate",
    # Cart
    "CartItem", "CartItemInput", "CartItemAdd", "CartQuantityUpdate", "CartStep",
    "CartView", "CartSummary", "CheckoutRequest",
    # Storefront
    "Storefront", "StorefrontCategory", "StorefrontProduct",
]
