"""
API Routes для пользователей и общие зависимости маршрутов.
"""

from fastapi import APIRouter, Depends, HTTPException, Header
from typing import List, Optional

from ..models.user import User, UserCreate, UserUpdate
from ..models.shop import ManagedShopView
from ..services.auth import parse_bearer, resolve_token
from ..services.backend_client import BackendClient, get_backend_client
from ..services.cart import CartService
from ..services.database import DatabaseService, get_db
from ..services.store_api import StoreApi, get_api_sessions

router = APIRouter()


async def get_access_token(
    authorization: Optional[str] = Header(None),
) -> str:
    """Токен вызывающего, а без него сервисный токен."""
    return resolve_token(authorization)


async def require_owner_token(
    authorization: Optional[str] = Header(None),
) -> str:
    """Токен владельца из заголовка Authorization: Bearer <token>."""
    token = parse_bearer(authorization)
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Authorization required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


async def get_api(
    token: str = Depends(get_access_token),
    client: BackendClient = Depends(get_backend_client),
) -> StoreApi:
    return get_api_sessions(client).get(token)


async def get_owner_api(
    token: str = Depends(require_owner_token),
    client: BackendClient = Depends(get_backend_client),
) -> StoreApi:
    return get_api_sessions(client).get(token)


async def get_client_id(
    x_client_id: Optional[str] = Header(None, alias="X-Client-ID"),
) -> str:
    """Идентификатор клиента витрины, которому принадлежит корзина."""
    if not x_client_id or not x_client_id.strip():
        raise HTTPException(status_code=400, detail="X-Client-ID header is required")
    return x_client_id.strip()


async def get_cart_service(db: DatabaseService = Depends(get_db)) -> CartService:
    return CartService(db)


@router.get("/", response_model=List[User])
async def list_users(api: StoreApi = Depends(get_owner_api)):
    """Список пользователей."""
    return await api.users.list_users()


@router.post("/", response_model=User)
async def create_user(
    user_data: UserCreate,
    api: StoreApi = Depends(get_owner_api)
):
    """Регистрирует пользователя в бэкенде (после входа)."""
    return await api.users.create_user(user_data)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.users.get_user(user_id)


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    user_update: UserUpdate,
    api: StoreApi = Depends(get_owner_api)
):
    return await api.users.update_user(user_id, user_update)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    await api.users.delete_user(user_id)
    return {"message": "User deleted"}


@router.get("/{user_id}/shops", response_model=List[ManagedShopView])
async def list_managed_shops(
    user_id: str,
    api: StoreApi = Depends(get_owner_api)
):
    """Магазины, которыми управляет пользователь."""
    return await api.users.list_managed_shops(user_id)
