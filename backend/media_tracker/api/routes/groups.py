"""Groups API - ordered collections of media items inside a category.

Invariants:
    - allowSameName=false in the body rejects a name already used in the category
    - DELETE clears the group from its media items unless ?deleteMediaItems=true
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from media_tracker.api.dependencies import get_controllers
from media_tracker.core.errors import ResourceNotFoundError
from media_tracker.schemas.containers import GroupBody, GroupResponse, NameFilterBody
from media_tracker.services.assembly import Controllers

router = APIRouter(
    prefix="/api/v1/users/{user_id}/categories/{category_id}/groups",
    tags=["groups"],
)


@router.get("", response_model=list[GroupResponse])
async def list_groups(
    user_id: UUID,
    category_id: UUID,
    controllers: Controllers = Depends(get_controllers),
):
    groups = await controllers.groups.get_all_groups(user_id, category_id)
    return [GroupResponse.from_internal(g) for g in groups]


@router.post("/filter", response_model=list[GroupResponse])
async def filter_groups(
    user_id: UUID,
    category_id: UUID,
    body: NameFilterBody,
    controllers: Controllers = Depends(get_controllers),
):
    groups = await controllers.groups.filter_groups(
        user_id, category_id, body.to_internal(),
    )
    return [GroupResponse.from_internal(g) for g in groups]


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    user_id: UUID,
    category_id: UUID,
    body: GroupBody,
    controllers: Controllers = Depends(get_controllers),
):
    group = await controllers.groups.save_group(
        body.to_internal(user_id, category_id),
        allow_same_name=body.allow_same_name,
    )
    return GroupResponse.from_internal(group)


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(
    user_id: UUID,
    category_id: UUID,
    group_id: UUID,
    controllers: Controllers = Depends(get_controllers),
):
    group = await controllers.groups.get_group(user_id, category_id, group_id)
    if group is None:
        raise ResourceNotFoundError("Group", str(group_id))
    return GroupResponse.from_internal(group)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(
    user_id: UUID,
    category_id: UUID,
    group_id: UUID,
    body: GroupBody,
    controllers: Controllers = Depends(get_controllers),
):
    group = await controllers.groups.save_group(
        body.to_internal(user_id, category_id, group_id),
        allow_same_name=body.allow_same_name,
    )
    return GroupResponse.from_internal(group)


@router.delete("/{group_id}")
async def delete_group(
    user_id: UUID,
    category_id: UUID,
    group_id: UUID,
    delete_media_items: bool = Query(False, alias="deleteMediaItems"),
    controllers: Controllers = Depends(get_controllers),
):
    deleted = await controllers.groups.delete_group(
        user_id, category_id, group_id, delete_media_items,
    )
    return {"deleted": deleted}
