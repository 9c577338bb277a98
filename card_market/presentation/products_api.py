from typing import List
from fastapi import APIRouter, Depends, Response, status

from card_market.application.products import ProductService, ProductDTO
from card_market.presentation.dependencies import get_product_service
from card_market.presentation.schemas import ProductResponse, ServiceResponse

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=ServiceResponse[ProductResponse], status_code=status.HTTP_201_CREATED)
async def create_product(data: ProductDTO, service: ProductService = Depends(get_product_service)):
    product = await service.create(data)
    return ServiceResponse(data=ProductResponse.model_validate(product), message="Товар создан")


@router.get("", response_model=ServiceResponse[List[ProductResponse]])
async def list_products(service: ProductService = Depends(get_product_service)):
    products = await service.list()
    return ServiceResponse(data=[ProductResponse.model_validate(p) for p in products])


@router.get("/{product_id}", response_model=ServiceResponse[ProductResponse])
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    product = await service.get(product_id)
    return ServiceResponse(data=ProductResponse.model_validate(product))


@router.put("/{product_id}", response_model=ServiceResponse[ProductResponse])
async def update_product(
    product_id: str,
    data: ProductDTO,
    service: ProductService = Depends(get_product_service)
):
    product = await service.update(product_id, data)
    return ServiceResponse(data=ProductResponse.model_validate(product), message="Товар обновлен")


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    await service.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
