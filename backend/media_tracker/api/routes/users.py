"""Users API - tenant CRUD; deleting a user cascades to everything they own."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from media_tracker.api.dependencies import get_controllers
from media_tracker.core.errors import ResourceNotFoundError
from media_tracker.schemas.user import UserBody, UserResponse
from media_tracker.services.assembly import Controllers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    name: str | None = Query(None, max_length=255),
    controllers: Controllers = Depends(get_controllers),
):
    users = await controllers.users.filter_users(name)
    return [UserResponse.from_internal(u) for u in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserBody, controllers: Controllers = Depends(get_controllers),
):
    user = await controllers.users.save_user(body.to_internal())
    logger.info("User created", extra={"user_id": str(user.id)})
    return UserResponse.from_internal(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID, controllers: Controllers = Depends(get_controllers),
):
    user = await controllers.users.get_user(user_id)
    if user is None:
        raise ResourceNotFoundError("User", str(user_id))
    return UserResponse.from_internal(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserBody,
    controllers: Controllers = Depends(get_controllers),
):
    user = await controllers.users.save_user(body.to_internal(user_id))
    return UserResponse.from_internal(user)


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID, controllers: Controllers = Depends(get_controllers),
):
    deleted = await controllers.users.delete_user(user_id)
    return {"deleted": deleted}
