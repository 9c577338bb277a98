import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI

from card_market.config import settings
from card_market.database import engine, create_tables
from card_market.presentation.errors import register_exception_handlers
from card_market.presentation import (
    orders_api, products_api, users_api, payments_api, shipping_api, carts_api, favorites_api,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables(engine)
        logger.info("Таблицы созданы")

    yield

    await engine.dispose()
    logger.info("Приложение останавливается...")


app = FastAPI(
    title=settings.SERVICE_NAME,
    description="Маркетплейс коллекционных карточек",
    version="1.0.0",
    lifespan=lifespan
)

register_exception_handlers(app)

for module in (orders_api, products_api, users_api, payments_api, shipping_api, carts_api, favorites_api):
    app.include_router(module.router, prefix="/api")


@app.get("/")
async def root():
    return {"message": f"{settings.SERVICE_NAME} работает"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
