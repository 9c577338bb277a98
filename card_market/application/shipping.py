import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field

from card_market.domain.models import ShippingInfo, ShippingStatus
from card_market.domain.exceptions import (
    ShippingInfoNotFoundError, OrderNotFoundError, DuplicateEntityError,
)
from card_market.application.create_order import ShippingDetailsDTO
from card_market.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class CreateShippingInfoDTO(ShippingDetailsDTO):
    order_id: str
    status: ShippingStatus = ShippingStatus.PREPARING


class UpdateShippingInfoDTO(BaseModel):
    status: Optional[ShippingStatus] = None
    tracking_number: Optional[str] = None
    shipping_cost: Optional[Decimal] = Field(default=None, ge=0)


class ShippingInfoService:
    """Доставка заказа: Preparing → Shipped → Delivered.

    Изменение стоимости доставки не пересчитывает сумму заказа.
    """

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def create(self, data: CreateShippingInfoDTO) -> ShippingInfo:
        shipping = _stamp_dates(ShippingInfo(id=str(uuid.uuid4()), **data.model_dump()))
        async with self._uow() as uow:
            if not await uow.orders.get_by_id(data.order_id):
                raise OrderNotFoundError(f"Заказ {data.order_id} не найден")
            if await uow.shipping.get_by_order_id(data.order_id):
                raise DuplicateEntityError(f"Для заказа {data.order_id} доставка уже оформлена")

            await uow.shipping.create(shipping)
            await uow.commit()

        logger.info(f"Доставка {shipping.id} создана для заказа {shipping.order_id}")
        return shipping

    async def get(self, shipping_id: str) -> ShippingInfo:
        async with self._uow() as uow:
            shipping = await uow.shipping.get_by_id(shipping_id)
            if not shipping:
                raise ShippingInfoNotFoundError(f"Доставка {shipping_id} не найдена")
            return shipping

    async def get_by_order(self, order_id: str) -> ShippingInfo:
        async with self._uow() as uow:
            shipping = await uow.shipping.get_by_order_id(order_id)
            if not shipping:
                raise ShippingInfoNotFoundError(f"Доставка для заказа {order_id} не найдена")
            return shipping

    async def list(self) -> List[ShippingInfo]:
        async with self._uow() as uow:
            return await uow.shipping.list()

    async def update(self, shipping_id: str, data: UpdateShippingInfoDTO) -> ShippingInfo:
        async with self._uow() as uow:
            shipping = await uow.shipping.get_by_id(shipping_id)
            if not shipping:
                raise ShippingInfoNotFoundError(f"Доставка {shipping_id} не найдена")

            changes = {}
            if data.status is not None:
                changes["status"] = data.status
            if data.tracking_number and data.tracking_number.strip():
                changes["tracking_number"] = data.tracking_number
            if data.shipping_cost is not None:
                changes["shipping_cost"] = data.shipping_cost

            updated = _stamp_dates(shipping.model_copy(update=changes))
            await uow.shipping.update(updated)
            await uow.commit()

        logger.info(f"Доставка {shipping_id} обновлена, статус {updated.status.value}")
        return updated

    async def delete(self, shipping_id: str) -> None:
        async with self._uow() as uow:
            if not await uow.shipping.get_by_id(shipping_id):
                raise ShippingInfoNotFoundError(f"Доставка {shipping_id} не найдена")
            await uow.shipping.delete(shipping_id)
            await uow.commit()

        logger.info(f"Доставка {shipping_id} удалена")


def _stamp_dates(shipping: ShippingInfo) -> ShippingInfo:
    """Проставляет даты отправки и вручения при переходе в Shipped/Delivered"""
    now = datetime.now(timezone.utc)
    changes = {}
    if shipping.status in (ShippingStatus.SHIPPED, ShippingStatus.DELIVERED) and shipping.shipped_date is None:
        changes["shipped_date"] = now
    if shipping.status == ShippingStatus.DELIVERED and shipping.delivered_date is None:
        changes["delivered_date"] = now
    return shipping.model_copy(update=changes) if changes else shipping
