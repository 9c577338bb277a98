import logging

from card_market.domain.models import Order
from card_market.domain.exceptions import OrderNotFoundError, OrderCompletionError, InvalidOrderError
from card_market.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateOrderStatusUseCase:
    """Смена статуса заказа.

    Меняется только status и updated_at. Перевод в "completed" разрешён,
    только если платеж Completed и доставка Delivered. Платеж и доставка
    перечитываются из БД в той же транзакции, а не берутся из заказа,
    загруженного раньше.
    """

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, order_id: str, status: str) -> None:
        if not status or not status.strip():
            raise InvalidOrderError("Статус заказа не может быть пустым")
        status = status.strip()

        logger.info(f"Смена статуса заказа {order_id} на '{status}'")

        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(f"Заказ {order_id} не найден")

            if Order.is_completion_request(status):
                payment = await uow.payments.get_by_order_id(order_id)
                shipping = await uow.shipping.get_by_order_id(order_id)

                if not Order.can_be_completed(payment, shipping):
                    error = OrderCompletionError(
                        order_id,
                        payment_status=payment.status.value if payment else None,
                        shipping_status=shipping.status.value if shipping else None
                    )
                    logger.warning(str(error))
                    raise error

            await uow.orders.update_status(order_id, status)
            await uow.commit()

        logger.info(f"Заказ {order_id} переведен в статус '{status}'")
