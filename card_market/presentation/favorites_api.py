from typing import List
from fastapi import APIRouter, Depends, Response, status

from card_market.application.favorites import UserFavoriteService, AddFavoriteDTO
from card_market.presentation.dependencies import get_favorite_service
from card_market.presentation.schemas import UserFavoriteResponse, ServiceResponse

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("/user/{user_id}", response_model=ServiceResponse[List[UserFavoriteResponse]])
async def list_favorites(user_id: str, service: UserFavoriteService = Depends(get_favorite_service)):
    favorites = await service.list_for_user(user_id)
    return ServiceResponse(data=[UserFavoriteResponse.model_validate(f) for f in favorites])


@router.get("/{favorite_id}", response_model=ServiceResponse[UserFavoriteResponse])
async def get_favorite(favorite_id: str, service: UserFavoriteService = Depends(get_favorite_service)):
    favorite = await service.get(favorite_id)
    return ServiceResponse(data=UserFavoriteResponse.model_validate(favorite))


@router.post("", response_model=ServiceResponse[UserFavoriteResponse], status_code=status.HTTP_201_CREATED)
async def add_favorite(data: AddFavoriteDTO, service: UserFavoriteService = Depends(get_favorite_service)):
    favorite = await service.add(data)
    return ServiceResponse(data=UserFavoriteResponse.model_validate(favorite), message="Добавлено в избранное")


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def remove_favorite(favorite_id: str, service: UserFavoriteService = Depends(get_favorite_service)):
    await service.remove(favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
