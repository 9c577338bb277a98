from typing import Optional, List
from fastapi import APIRouter, Depends, Response, status

from card_market.application.payments import PaymentService, CreatePaymentDTO, UpdatePaymentDTO
from card_market.presentation.dependencies import get_payment_service
from card_market.presentation.schemas import PaymentResponse, ServiceResponse

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("", response_model=ServiceResponse[PaymentResponse], status_code=status.HTTP_201_CREATED)
async def create_payment(data: CreatePaymentDTO, service: PaymentService = Depends(get_payment_service)):
    payment = await service.create(data)
    return ServiceResponse(data=PaymentResponse.model_validate(payment), message="Платеж создан")


@router.get("", response_model=ServiceResponse[List[PaymentResponse]])
async def list_payments(
    order_id: Optional[str] = None,
    service: PaymentService = Depends(get_payment_service)
):
    payments = await service.list(order_id=order_id)
    return ServiceResponse(data=[PaymentResponse.model_validate(p) for p in payments])


@router.get("/order/{order_id}", response_model=ServiceResponse[PaymentResponse])
async def get_payment_by_order(order_id: str, service: PaymentService = Depends(get_payment_service)):
    payment = await service.get_by_order(order_id)
    return ServiceResponse(data=PaymentResponse.model_validate(payment))


@router.get("/{payment_id}", response_model=ServiceResponse[PaymentResponse])
async def get_payment(payment_id: str, service: PaymentService = Depends(get_payment_service)):
    payment = await service.get(payment_id)
    return ServiceResponse(data=PaymentResponse.model_validate(payment))


@router.put("/{payment_id}", response_model=ServiceResponse[PaymentResponse])
async def update_payment(
    payment_id: str,
    data: UpdatePaymentDTO,
    service: PaymentService = Depends(get_payment_service)
):
    payment = await service.update(payment_id, data)
    return ServiceResponse(data=PaymentResponse.model_validate(payment), message="Платеж обновлен")


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_payment(payment_id: str, service: PaymentService = Depends(get_payment_service)):
    await service.delete(payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
