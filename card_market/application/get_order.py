import logging
from typing import Optional, List

from card_market.domain.models import Order
from card_market.domain.exceptions import OrderNotFoundError, EntityInUseError
from card_market.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class GetOrderUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, order_id: str) -> Order:
        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(f"Заказ {order_id} не найден")
            return order


class ListOrdersUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, user_id: Optional[str] = None) -> List[Order]:
        async with self._uow() as uow:
            return await uow.orders.list(user_id=user_id)


class DeleteOrderUseCase:
    """Удаляет заказ вместе со строками и доставкой. Оплаченный заказ не удаляется"""

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, order_id: str) -> None:
        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(f"Заказ {order_id} не найден")
            if await uow.payments.get_by_order_id(order_id):
                raise EntityInUseError(f"У заказа {order_id} есть платеж, удаление запрещено")

            await uow.orders.delete(order_id)
            await uow.commit()

        logger.info(f"Заказ {order_id} удален")
