from fastapi import APIRouter, Depends, Response, status

from card_market.application.carts import ShoppingCartService, CartItemDTO
from card_market.presentation.dependencies import get_cart_service
from card_market.presentation.schemas import (
    ShoppingCartResponse, ShoppingCartItemResponse, ServiceResponse,
)

router = APIRouter(prefix="/carts", tags=["carts"])


@router.post(
    "/user/{user_id}",
    response_model=ServiceResponse[ShoppingCartResponse],
    status_code=status.HTTP_201_CREATED
)
async def create_cart(user_id: str, service: ShoppingCartService = Depends(get_cart_service)):
    cart = await service.create_for_user(user_id)
    return ServiceResponse(data=ShoppingCartResponse.model_validate(cart), message="Корзина создана")


@router.get("/user/{user_id}", response_model=ServiceResponse[ShoppingCartResponse])
async def get_cart(user_id: str, service: ShoppingCartService = Depends(get_cart_service)):
    cart = await service.get_by_user(user_id)
    return ServiceResponse(data=ShoppingCartResponse.model_validate(cart))


@router.post(
    "/{cart_id}/items",
    response_model=ServiceResponse[ShoppingCartItemResponse],
    status_code=status.HTTP_201_CREATED
)
async def add_cart_item(
    cart_id: str,
    data: CartItemDTO,
    service: ShoppingCartService = Depends(get_cart_service)
):
    item = await service.add_item(cart_id, data)
    return ServiceResponse(data=ShoppingCartItemResponse.model_validate(item), message="Товар добавлен в корзину")


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def remove_cart_item(item_id: str, service: ShoppingCartService = Depends(get_cart_service)):
    await service.remove_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{cart_id}/clear", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def clear_cart(cart_id: str, service: ShoppingCartService = Depends(get_cart_service)):
    await service.clear(cart_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
