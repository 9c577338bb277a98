import logging
import uuid
from datetime import datetime, timezone
from typing import List
from pydantic import BaseModel, Field

from card_market.domain.models import User, UserRole
from card_market.domain.exceptions import UserNotFoundError, DuplicateEntityError, EntityInUseError
from card_market.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class UserDTO(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3)
    role: UserRole = UserRole.CUSTOMER


class UserService:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def create(self, data: UserDTO) -> User:
        now = datetime.now(timezone.utc)
        user = User(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data.model_dump())
        async with self._uow() as uow:
            if await uow.users.get_by_email(user.email):
                raise DuplicateEntityError(f"Пользователь с email {user.email} уже существует")
            await uow.users.create(user)
            await uow.commit()
        logger.info(f"Пользователь создан: {user.id}")
        return user

    async def get(self, user_id: str) -> User:
        async with self._uow() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise UserNotFoundError(f"Пользователь {user_id} не найден")
            return user

    async def list(self) -> List[User]:
        async with self._uow() as uow:
            return await uow.users.list()

    async def update(self, user_id: str, data: UserDTO) -> User:
        async with self._uow() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise UserNotFoundError(f"Пользователь {user_id} не найден")

            same_email = await uow.users.get_by_email(data.email)
            if same_email and same_email.id != user_id:
                raise DuplicateEntityError(f"Пользователь с email {data.email} уже существует")

            updated = user.model_copy(
                update={**data.model_dump(), "updated_at": datetime.now(timezone.utc)}
            )
            await uow.users.update(updated)
            await uow.commit()

        logger.info(f"Пользователь обновлен: {user_id}")
        return updated

    async def delete(self, user_id: str) -> None:
        async with self._uow() as uow:
            if not await uow.users.get_by_id(user_id):
                raise UserNotFoundError(f"Пользователь {user_id} не найден")
            if await uow.orders.exists_for_user(user_id):
                raise EntityInUseError(f"У пользователя {user_id} есть заказы, удаление запрещено")

            await uow.carts.delete_for_user(user_id)
            await uow.favorites.delete_for_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info(f"Пользователь удален: {user_id}")
