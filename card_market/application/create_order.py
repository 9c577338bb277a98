import logging
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List
import uuid

from card_market.domain.models import Order, OrderItem, OrderStatus, ShippingInfo, ShippingStatus
from card_market.domain.exceptions import InsufficientStockError, InvalidOrderError
from card_market.application.interfaces import UnitOfWork


logger = logging.getLogger(__name__)


class OrderLineDTO(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)


class ShippingDetailsDTO(BaseModel):
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    postal_code: str = ""
    shipping_cost: Decimal = Field(default=Decimal("0"), ge=0)
    tracking_number: str = ""
    estimated_delivery: Optional[datetime] = None


class CreateOrderDTO(BaseModel):
    user_id: str
    items: List[OrderLineDTO]
    shipping: Optional[ShippingDetailsDTO] = None


class CreateOrderUseCase:
    """Создание заказа.

    Проверка остатков, фиксация цен, списание остатков и запись заказа
    со строками и доставкой идут в одной транзакции. Любая ошибка
    откатывает всё, включая уже списанные остатки.
    """

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, order_data: CreateOrderDTO) -> Order:
        logger.info(f"Создание заказа для пользователя {order_data.user_id}, строк: {len(order_data.items)}")

        if not order_data.items:
            raise InvalidOrderError("Заказ должен содержать хотя бы одну позицию")

        async with self._uow() as uow:
            if not await uow.users.get_by_id(order_data.user_id):
                raise InvalidOrderError(f"Пользователь {order_data.user_id} не найден")

            order_id = str(uuid.uuid4())
            total_price = Decimal("0")
            items = []

            for line in order_data.items:
                product = await uow.products.get_by_id(line.product_id, for_update=True)
                if not product or not product.has_stock(line.quantity):
                    logger.warning(f"Недостаточно товара {line.product_id} для заказа {order_id}")
                    raise InsufficientStockError(
                        line.product_id,
                        available=product.stock_quantity if product else None,
                        required=line.quantity
                    )

                # Цена фиксируется на момент заказа
                item = OrderItem(
                    id=str(uuid.uuid4()),
                    order_id=order_id,
                    product_id=product.id,
                    quantity=line.quantity,
                    price=product.price
                )
                total_price += item.subtotal

                if not await uow.products.decrement_stock(product.id, line.quantity):
                    logger.warning(f"Остаток товара {product.id} изменился во время оформления заказа {order_id}")
                    raise InsufficientStockError(product.id)

                items.append(item)

            shipping = None
            if order_data.shipping:
                shipping = ShippingInfo(
                    id=str(uuid.uuid4()),
                    order_id=order_id,
                    status=ShippingStatus.PREPARING,
                    **order_data.shipping.model_dump()
                )
                total_price += shipping.shipping_cost

            now = datetime.now(timezone.utc)
            order = Order(
                id=order_id,
                user_id=order_data.user_id,
                status=OrderStatus.PENDING.value,
                total_price=total_price,
                created_at=now,
                updated_at=now,
                items=items,
                shipping=shipping
            )
            await uow.orders.create(order)
            await uow.commit()

        logger.info(f"Заказ создан: {order.id}, сумма: {order.total_price}")
        return order
