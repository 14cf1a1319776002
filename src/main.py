"""Основной модуль FastAPI приложения."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from base.config import get_allowed_hosts, get_api_prefix
from base.exception_handlers import add_exception_handlers
from base.orm import init_db
from kits.entrypoints.api.endpoints import router as kits_router
from orders.entrypoints.api.endpoints import router as orders_router
from pricing.entrypoints.api.endpoints import router as pricing_router
from pricing.services.rules_store import get_rules_store

# Настройка логирования
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения."""
    # Startup: некорректные правила ценообразования останавливают запуск
    store = get_rules_store()
    logger.info(f"Pricing rule sets loaded: {', '.join(store.names())}")
    await init_db()
    yield


# Создаем FastAPI приложение
app = FastAPI(
    title="Jersey Store Pricing API",
    description="API расчета цен для магазина именной спортивной формы",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Настройка CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_hosts(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Регистрация обработчиков исключений
add_exception_handlers(app)

# Регистрация роутеров
api_prefix = get_api_prefix()
app.include_router(pricing_router, prefix=f"{api_prefix}/price", tags=["pricing"])
app.include_router(kits_router, prefix=f"{api_prefix}/kit-config", tags=["kit-config"])
app.include_router(orders_router, prefix=f"{api_prefix}/orders", tags=["orders"])


@app.get("/")
async def health_check():
    """Проверка работоспособности API."""
    return {"message": "API is running"}
