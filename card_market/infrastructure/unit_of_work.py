import logging
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from card_market.domain.exceptions import PersistenceError
from card_market.infrastructure.repositories import (
    SQLAlchemyOrderRepository,
    SQLAlchemyProductRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyPaymentRepository,
    SQLAlchemyShippingInfoRepository,
    SQLAlchemyShoppingCartRepository,
    SQLAlchemyUserFavoriteRepository,
)

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Одна сессия и одна транзакция на вызов use case"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def __call__(self):
        async with self._session_factory() as session:
            try:
                uow_impl = _UnitOfWorkImpl(session)
                yield uow_impl
                # Commit не вызван, откатываем
                await session.rollback()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Ошибка базы данных: {e}", exc_info=True)
                raise PersistenceError("Ошибка при работе с базой данных") from e
            except Exception:
                await session.rollback()
                raise


class _UnitOfWorkImpl:
    def __init__(self, session: AsyncSession):
        self._session = session
        self.orders = SQLAlchemyOrderRepository(session)
        self.products = SQLAlchemyProductRepository(session)
        self.users = SQLAlchemyUserRepository(session)
        self.payments = SQLAlchemyPaymentRepository(session)
        self.shipping = SQLAlchemyShippingInfoRepository(session)
        self.carts = SQLAlchemyShoppingCartRepository(session)
        self.favorites = SQLAlchemyUserFavoriteRepository(session)

    async def commit(self):
        await self._session.commit()

    async def rollback(self):
        await self._session.rollback()
