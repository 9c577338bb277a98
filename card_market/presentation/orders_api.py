from typing import Optional, List
from fastapi import APIRouter, Depends, Response, status

from card_market.presentation.schemas import (
    CreateOrderRequest, UpdateOrderStatusRequest, OrderResponse, ServiceResponse,
)
from card_market.presentation.dependencies import (
    get_create_order_use_case, get_update_order_status_use_case, get_get_order_use_case,
    get_list_orders_use_case, get_delete_order_use_case,
)
from card_market.application.create_order import (
    CreateOrderUseCase, CreateOrderDTO, OrderLineDTO, ShippingDetailsDTO,
)
from card_market.application.update_order_status import UpdateOrderStatusUseCase
from card_market.application.get_order import GetOrderUseCase, ListOrdersUseCase, DeleteOrderUseCase

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=ServiceResponse[OrderResponse],
    status_code=status.HTTP_201_CREATED
)
async def create_order(
    request: CreateOrderRequest,
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case)
):
    """Создать новый заказ"""
    dto = CreateOrderDTO(
        user_id=request.user_id,
        items=[
            OrderLineDTO(product_id=line.product_id, quantity=line.quantity)
            for line in request.items
        ],
        shipping=ShippingDetailsDTO(**request.shipping.model_dump()) if request.shipping else None
    )
    order = await use_case(dto)
    return ServiceResponse(
        data=OrderResponse.from_domain(order),
        message="Заказ создан"
    )


@router.get("", response_model=ServiceResponse[List[OrderResponse]])
async def list_orders(
    user_id: Optional[str] = None,
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case)
):
    """Список заказов, опционально по пользователю"""
    orders = await use_case(user_id=user_id)
    return ServiceResponse(data=[OrderResponse.from_domain(order) for order in orders])


@router.get("/{order_id}", response_model=ServiceResponse[OrderResponse])
async def get_order(
    order_id: str,
    use_case: GetOrderUseCase = Depends(get_get_order_use_case)
):
    """Получить заказ по ID"""
    order = await use_case(order_id)
    return ServiceResponse(data=OrderResponse.from_domain(order))


@router.put("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    use_case: UpdateOrderStatusUseCase = Depends(get_update_order_status_use_case)
):
    """Сменить статус заказа. Позиции и доставка здесь не меняются"""
    await use_case(order_id, request.status)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_order(
    order_id: str,
    use_case: DeleteOrderUseCase = Depends(get_delete_order_use_case)
):
    """Удалить заказ"""
    await use_case(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
