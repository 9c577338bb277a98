from typing import List
from fastapi import APIRouter, Depends, Response, status

from card_market.application.users import UserService, UserDTO
from card_market.presentation.dependencies import get_user_service
from card_market.presentation.schemas import UserResponse, ServiceResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=ServiceResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(data: UserDTO, service: UserService = Depends(get_user_service)):
    user = await service.create(data)
    return ServiceResponse(data=UserResponse.model_validate(user), message="Пользователь создан")


@router.get("", response_model=ServiceResponse[List[UserResponse]])
async def list_users(service: UserService = Depends(get_user_service)):
    users = await service.list()
    return ServiceResponse(data=[UserResponse.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=ServiceResponse[UserResponse])
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    user = await service.get(user_id)
    return ServiceResponse(data=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=ServiceResponse[UserResponse])
async def update_user(user_id: str, data: UserDTO, service: UserService = Depends(get_user_service)):
    user = await service.update(user_id, data)
    return ServiceResponse(data=UserResponse.model_validate(user), message="Пользователь обновлен")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    await service.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
