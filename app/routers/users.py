from fastapi import APIRouter, Depends

from app.dependencies import get_user_service
from app.schemas import DeleteResponse, UserCreate, UserResponse
from app.services.user_service import UserService, user_from_payload

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list()

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get(user_id)

@router.post("", status_code=201, response_model=UserResponse)
async def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    return await service.create(user_from_payload(data))

@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, data: UserCreate, service: UserService = Depends(get_user_service)):
    return await service.update(user_id, user_from_payload(data))

@router.delete("/{user_id}", response_model=DeleteResponse)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    await service.delete(user_id)
    return DeleteResponse(message=f"User with id : {user_id} deleted")
