import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field

from card_market.domain.models import Payment, PaymentMethod, PaymentStatus
from card_market.domain.exceptions import (
    PaymentNotFoundError, OrderNotFoundError, DuplicateEntityError,
)
from card_market.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class CreatePaymentDTO(BaseModel):
    order_id: str
    amount: Decimal = Field(ge=0)
    method: PaymentMethod = PaymentMethod.CREDIT_CARD
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: str = Field(min_length=1)


class UpdatePaymentDTO(BaseModel):
    amount: Decimal = Field(ge=0)
    method: PaymentMethod
    status: PaymentStatus
    transaction_id: str = Field(min_length=1)
    completed_at: Optional[datetime] = None


def _completed_at(status: PaymentStatus, completed_at: Optional[datetime]) -> Optional[datetime]:
    if status == PaymentStatus.COMPLETED and completed_at is None:
        return datetime.now(timezone.utc)
    return completed_at


class PaymentService:
    """Платежи. Один платеж на заказ, связь только через order_id"""

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def create(self, data: CreatePaymentDTO) -> Payment:
        payment = Payment(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            completed_at=_completed_at(data.status, None),
            **data.model_dump()
        )
        async with self._uow() as uow:
            if not await uow.orders.get_by_id(data.order_id):
                raise OrderNotFoundError(f"Заказ {data.order_id} не найден")
            if await uow.payments.get_by_order_id(data.order_id):
                raise DuplicateEntityError(f"Для заказа {data.order_id} платеж уже создан")

            await uow.payments.create(payment)
            await uow.commit()

        logger.info(f"Платеж {payment.id} создан для заказа {payment.order_id}, статус {payment.status.value}")
        return payment

    async def get(self, payment_id: str) -> Payment:
        async with self._uow() as uow:
            payment = await uow.payments.get_by_id(payment_id)
            if not payment:
                raise PaymentNotFoundError(f"Платеж {payment_id} не найден")
            return payment

    async def get_by_order(self, order_id: str) -> Payment:
        async with self._uow() as uow:
            payment = await uow.payments.get_by_order_id(order_id)
            if not payment:
                raise PaymentNotFoundError(f"Платеж для заказа {order_id} не найден")
            return payment

    async def list(self, order_id: Optional[str] = None) -> List[Payment]:
        async with self._uow() as uow:
            return await uow.payments.list(order_id=order_id)

    async def update(self, payment_id: str, data: UpdatePaymentDTO) -> Payment:
        async with self._uow() as uow:
            payment = await uow.payments.get_by_id(payment_id)
            if not payment:
                raise PaymentNotFoundError(f"Платеж {payment_id} не найден")

            updated = payment.model_copy(
                update={
                    **data.model_dump(),
                    "completed_at": _completed_at(data.status, data.completed_at or payment.completed_at)
                }
            )
            await uow.payments.update(updated)
            await uow.commit()

        logger.info(f"Платеж {payment_id} обновлен, статус {updated.status.value}")
        return updated

    async def delete(self, payment_id: str) -> None:
        async with self._uow() as uow:
            if not await uow.payments.get_by_id(payment_id):
                raise PaymentNotFoundError(f"Платеж {payment_id} не найден")
            await uow.payments.delete(payment_id)
            await uow.commit()

        logger.info(f"Платеж {payment_id} удален")
