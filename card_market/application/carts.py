import logging
import uuid
from datetime import datetime, timezone
from pydantic import BaseModel, Field

from card_market.domain.models import ShoppingCart, ShoppingCartItem
from card_market.domain.exceptions import (
    CartNotFoundError, CartItemNotFoundError, UserNotFoundError, ProductNotFoundError,
    DuplicateEntityError, EmptyCartError, InsufficientStockError,
)
from card_market.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class CartItemDTO(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)


class ShoppingCartService:
    """Корзина пользователя. Остатки при добавлении проверяются, но не резервируются"""

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def create_for_user(self, user_id: str) -> ShoppingCart:
        cart = ShoppingCart(id=str(uuid.uuid4()), user_id=user_id, created_at=datetime.now(timezone.utc))
        async with self._uow() as uow:
            if not await uow.users.get_by_id(user_id):
                raise UserNotFoundError(f"Пользователь {user_id} не найден")
            if await uow.carts.get_by_user_id(user_id):
                raise DuplicateEntityError(f"Корзина для пользователя {user_id} уже существует")

            await uow.carts.create(cart)
            await uow.commit()

        logger.info(f"Корзина {cart.id} создана для пользователя {user_id}")
        return cart

    async def get_by_user(self, user_id: str) -> ShoppingCart:
        async with self._uow() as uow:
            cart = await uow.carts.get_by_user_id(user_id)
            if not cart:
                raise CartNotFoundError(f"Корзина пользователя {user_id} не найдена")
            return cart

    async def add_item(self, cart_id: str, data: CartItemDTO) -> ShoppingCartItem:
        item = ShoppingCartItem(id=str(uuid.uuid4()), cart_id=cart_id, **data.model_dump())
        async with self._uow() as uow:
            if not await uow.carts.get_by_id(cart_id):
                raise CartNotFoundError(f"Корзина {cart_id} не найдена")

            product = await uow.products.get_by_id(data.product_id)
            if not product:
                raise ProductNotFoundError(f"Товар {data.product_id} не найден")
            if not product.has_stock(data.quantity):
                raise InsufficientStockError(product.id, product.stock_quantity, data.quantity)

            await uow.carts.add_item(item)
            await uow.commit()

        logger.info(f"Товар {item.product_id} добавлен в корзину {cart_id}")
        return item

    async def remove_item(self, item_id: str) -> None:
        async with self._uow() as uow:
            if not await uow.carts.get_item(item_id):
                raise CartItemNotFoundError(f"Позиция корзины {item_id} не найдена")
            await uow.carts.remove_item(item_id)
            await uow.commit()

    async def clear(self, cart_id: str) -> None:
        async with self._uow() as uow:
            cart = await uow.carts.get_by_id(cart_id)
            if not cart:
                raise CartNotFoundError(f"Корзина {cart_id} не найдена")
            if not cart.items:
                raise EmptyCartError(f"В корзине {cart_id} нет товаров")

            await uow.carts.clear(cart_id)
            await uow.commit()

        logger.info(f"Корзина {cart_id} очищена")
