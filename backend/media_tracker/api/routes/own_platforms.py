"""Own Platforms API - where a user owns media items; supports merging.

Invariants:
    - Merge keeps the first id (updated with merged_data) and re-points every media
      item that referenced the others
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from media_tracker.api.dependencies import get_controllers
from media_tracker.core.errors import ResourceNotFoundError
from media_tracker.schemas.containers import (
    NameFilterBody, OwnPlatformBody, OwnPlatformMergeBody, OwnPlatformResponse,
)
from media_tracker.services.assembly import Controllers

router = APIRouter(
    prefix="/api/v1/users/{user_id}/categories/{category_id}/own-platforms",
    tags=["own-platforms"],
)


@router.get("", response_model=list[OwnPlatformResponse])
async def list_own_platforms(
    user_id: UUID,
    category_id: UUID,
    controllers: Controllers = Depends(get_controllers),
):
    own_platforms = await controllers.own_platforms.get_all_own_platforms(
        user_id, category_id,
    )
    return [OwnPlatformResponse.from_internal(p) for p in own_platforms]


@router.post("/filter", response_model=list[OwnPlatformResponse])
async def filter_own_platforms(
    user_id: UUID,
    category_id: UUID,
    body: NameFilterBody,
    controllers: Controllers = Depends(get_controllers),
):
    own_platforms = await controllers.own_platforms.filter_own_platforms(
        user_id, category_id, body.to_internal(),
    )
    return [OwnPlatformResponse.from_internal(p) for p in own_platforms]


@router.post("/merge")
async def merge_own_platforms(
    user_id: UUID,
    category_id: UUID,
    body: OwnPlatformMergeBody,
    controllers: Controllers = Depends(get_controllers),
):
    deleted = await controllers.own_platforms.merge_own_platforms(
        body.own_platform_ids,
        body.merged_data.to_internal(user_id, category_id),
    )
    return {"deleted": deleted}


@router.post(
    "", response_model=OwnPlatformResponse, status_code=status.HTTP_201_CREATED,
)
async def create_own_platform(
    user_id: UUID,
    category_id: UUID,
    body: OwnPlatformBody,
    controllers: Controllers = Depends(get_controllers),
):
    own_platform = await controllers.own_platforms.save_own_platform(
        body.to_internal(user_id, category_id),
    )
    return OwnPlatformResponse.from_internal(own_platform)


@router.get("/{own_platform_id}", response_model=OwnPlatformResponse)
async def get_own_platform(
    user_id: UUID,
    category_id: UUID,
    own_platform_id: UUID,
    controllers: Controllers = Depends(get_controllers),
):
    own_platform = await controllers.own_platforms.get_own_platform(
        user_id, category_id, own_platform_id,
    )
    if own_platform is None:
        raise ResourceNotFoundError("OwnPlatform", str(own_platform_id))
    return OwnPlatformResponse.from_internal(own_platform)


@router.put("/{own_platform_id}", response_model=OwnPlatformResponse)
async def update_own_platform(
    user_id: UUID,
    category_id: UUID,
    own_platform_id: UUID,
    body: OwnPlatformBody,
    controllers: Controllers = Depends(get_controllers),
):
    own_platform = await controllers.own_platforms.save_own_platform(
        body.to_internal(user_id, category_id, own_platform_id),
    )
    return OwnPlatformResponse.from_internal(own_platform)


@router.delete("/{own_platform_id}")
async def delete_own_platform(
    user_id: UUID,
    category_id: UUID,
    own_platform_id: UUID,
    controllers: Controllers = Depends(get_controllers),
):
    deleted = await controllers.own_platforms.delete_own_platform(
        user_id, category_id, own_platform_id,
    )
    return {"deleted": deleted}
