"""
API Routes витрины и кабинета владельца.
"""

from .users import router as users_router
from .shops import router as shops_router
from .categories import router as categories_router
from .products import router as products_router
from .orders import router as orders_router
from .storefront import router as storefront_router
from .cart import router as cart_router

__all__ = [
    "users_router",
    "shops_router",
    "categories_router",
    "products_router",
    "orders_router",
    "storefront_router",
    "cart_router",
]
