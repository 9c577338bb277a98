import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field

from card_market.domain.models import Product
from card_market.domain.exceptions import ProductNotFoundError, EntityInUseError
from card_market.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class ProductDTO(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    image_url: str = ""
    price: Decimal = Field(ge=0)
    stock_quantity: int = Field(ge=0)
    edition: str = ""
    rarity: str = ""


class ProductService:
    """Каталог карт"""

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def create(self, data: ProductDTO) -> Product:
        now = datetime.now(timezone.utc)
        product = Product(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data.model_dump())
        async with self._uow() as uow:
            await uow.products.create(product)
            await uow.commit()
        logger.info(f"Товар создан: {product.id} ({product.name})")
        return product

    async def get(self, product_id: str) -> Product:
        async with self._uow() as uow:
            product = await uow.products.get_by_id(product_id)
            if not product:
                raise ProductNotFoundError(f"Товар {product_id} не найден")
            return product

    async def list(self) -> List[Product]:
        async with self._uow() as uow:
            return await uow.products.list()

    async def update(self, product_id: str, data: ProductDTO) -> Product:
        async with self._uow() as uow:
            product = await uow.products.get_by_id(product_id)
            if not product:
                raise ProductNotFoundError(f"Товар {product_id} не найден")

            updated = product.model_copy(
                update={**data.model_dump(), "updated_at": datetime.now(timezone.utc)}
            )
            await uow.products.update(updated)
            await uow.commit()

        logger.info(f"Товар обновлен: {product_id}")
        return updated

    async def delete(self, product_id: str) -> None:
        async with self._uow() as uow:
            if not await uow.products.get_by_id(product_id):
                raise ProductNotFoundError(f"Товар {product_id} не найден")
            if await uow.orders.references_product(product_id):
                raise EntityInUseError(f"Товар {product_id} есть в заказах, удаление запрещено")

            await uow.carts.remove_product(product_id)
            await uow.favorites.delete_for_product(product_id)
            await uow.products.delete(product_id)
            await uow.commit()

        logger.info(f"Товар удален: {product_id}")
