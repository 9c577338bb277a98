import logging
import uuid
from datetime import datetime, timezone
from typing import List
from pydantic import BaseModel

from card_market.domain.models import UserFavorite
from card_market.domain.exceptions import (
    FavoriteNotFoundError, UserNotFoundError, ProductNotFoundError, DuplicateEntityError,
)
from card_market.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class AddFavoriteDTO(BaseModel):
    user_id: str
    product_id: str


class UserFavoriteService:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def list_for_user(self, user_id: str) -> List[UserFavorite]:
        async with self._uow() as uow:
            return await uow.favorites.list_by_user(user_id)

    async def get(self, favorite_id: str) -> UserFavorite:
        async with self._uow() as uow:
            favorite = await uow.favorites.get_by_id(favorite_id)
            if not favorite:
                raise FavoriteNotFoundError(f"Избранное {favorite_id} не найдено")
            return favorite

    async def add(self, data: AddFavoriteDTO) -> UserFavorite:
        favorite = UserFavorite(id=str(uuid.uuid4()), added_at=datetime.now(timezone.utc), **data.model_dump())
        async with self._uow() as uow:
            if not await uow.users.get_by_id(data.user_id):
                raise UserNotFoundError(f"Пользователь {data.user_id} не найден")
            if not await uow.products.get_by_id(data.product_id):
                raise ProductNotFoundError(f"Товар {data.product_id} не найден")
            if await uow.favorites.exists(data.user_id, data.product_id):
                raise DuplicateEntityError(f"Товар {data.product_id} уже в избранном")

            await uow.favorites.create(favorite)
            await uow.commit()

        logger.info(f"Товар {data.product_id} добавлен в избранное пользователя {data.user_id}")
        return favorite

    async def remove(self, favorite_id: str) -> None:
        async with self._uow() as uow:
            if not await uow.favorites.get_by_id(favorite_id):
                raise FavoriteNotFoundError(f"Избранное {favorite_id} не найдено")
            await uow.favorites.delete(favorite_id)
            await uow.commit()
