from typing import List
from fastapi import APIRouter, Depends, Response, status

from card_market.application.shipping import (
    ShippingInfoService, CreateShippingInfoDTO, UpdateShippingInfoDTO,
)
from card_market.presentation.dependencies import get_shipping_service
from card_market.presentation.schemas import ShippingInfoResponse, ServiceResponse

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.post("", response_model=ServiceResponse[ShippingInfoResponse], status_code=status.HTTP_201_CREATED)
async def create_shipping(
    data: CreateShippingInfoDTO,
    service: ShippingInfoService = Depends(get_shipping_service)
):
    shipping = await service.create(data)
    return ServiceResponse(data=ShippingInfoResponse.model_validate(shipping), message="Доставка создана")


@router.get("", response_model=ServiceResponse[List[ShippingInfoResponse]])
async def list_shipping(service: ShippingInfoService = Depends(get_shipping_service)):
    items = await service.list()
    return ServiceResponse(data=[ShippingInfoResponse.model_validate(s) for s in items])


@router.get("/order/{order_id}", response_model=ServiceResponse[ShippingInfoResponse])
async def get_shipping_by_order(order_id: str, service: ShippingInfoService = Depends(get_shipping_service)):
    shipping = await service.get_by_order(order_id)
    return ServiceResponse(data=ShippingInfoResponse.model_validate(shipping))


@router.get("/{shipping_id}", response_model=ServiceResponse[ShippingInfoResponse])
async def get_shipping(shipping_id: str, service: ShippingInfoService = Depends(get_shipping_service)):
    shipping = await service.get(shipping_id)
    return ServiceResponse(data=ShippingInfoResponse.model_validate(shipping))


@router.put("/{shipping_id}", response_model=ServiceResponse[ShippingInfoResponse])
async def update_shipping(
    shipping_id: str,
    data: UpdateShippingInfoDTO,
    service: ShippingInfoService = Depends(get_shipping_service)
):
    """Обновляет только статус, трек-номер и стоимость"""
    shipping = await service.update(shipping_id, data)
    return ServiceResponse(data=ShippingInfoResponse.model_validate(shipping), message="Доставка обновлена")


@router.delete("/{shipping_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_shipping(shipping_id: str, service: ShippingInfoService = Depends(get_shipping_service)):
    await service.delete(shipping_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
