"""
Mewmew - FastAPI шлюз витрины и кабинета владельца
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .services import backend_client, database, store_api
from .services.backend_client import ApiError, BackendClient
from .services.database import DatabaseService
from .services.order_flow import EmptyCartError
from .services.pricing import SelectionError
from .routes import (
    users_router,
    shops_router,
    categories_router,
    products_router,
    orders_router,
    storefront_router,
    cart_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle управление приложением."""
    # Startup
    # Используем путь из настроек, чтобы он был единым для всего приложения
    database._db_service = DatabaseService(db_path=settings.DATABASE_PATH)
    await database._db_service.connect()
    await database._db_service.ensure_schema()
    print(f"[OK] Database connected: {settings.DATABASE_PATH}")

    if backend_client._backend_client is None:
        backend_client._backend_client = BackendClient()
    print(f"[OK] Backend API: {backend_client._backend_client.base_url}")

    yield

    # Shutdown
    store_api.reset_api_sessions()
    if backend_client._backend_client:
        await backend_client._backend_client.close()
        backend_client._backend_client = None
    if database._db_service:
        await database._db_service.disconnect()
        database._db_service = None
    print("[OK] Database disconnected")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="API витрины магазинов и кабинета владельца",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    """Ошибка бэкенда отдаётся с его статусом."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(SelectionError)
async def selection_error_handler(request: Request, exc: SelectionError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(EmptyCartError)
async def empty_cart_handler(request: Request, exc: EmptyCartError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app.include_router(users_router, prefix="/api/users", tags=["Users"])
app.include_router(shops_router, prefix="/api/shops", tags=["Shops"])
app.include_router(categories_router, prefix="/api/categories", tags=["Categories"])
app.include_router(products_router, prefix="/api/products", tags=["Products"])
app.include_router(orders_router, prefix="/api/orders", tags=["Orders"])
app.include_router(storefront_router, prefix="/api/storefront", tags=["Storefront"])
app.include_router(cart_router, prefix="/api/cart", tags=["Cart"])


@app.get("/health")
@app.get("/api/health")
async def health_check():
    """Проверка здоровья сервиса."""
    return {"status": "healthy"}
