"""Categories API - per-user containers of a single media type.

Invariants:
    - DELETE without ?force=true is refused (409) while the category holds media items
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from media_tracker.api.dependencies import get_controllers
from media_tracker.core.errors import ResourceNotFoundError
from media_tracker.schemas.containers import (
    CategoryBody, CategoryResponse, NameFilterBody,
)
from media_tracker.services.assembly import Controllers

router = APIRouter(prefix="/api/v1/users/{user_id}/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    user_id: UUID, controllers: Controllers = Depends(get_controllers),
):
    categories = await controllers.categories.get_all_categories(user_id)
    return [CategoryResponse.from_internal(c) for c in categories]


@router.post("/filter", response_model=list[CategoryResponse])
async def filter_categories(
    user_id: UUID,
    body: NameFilterBody,
    controllers: Controllers = Depends(get_controllers),
):
    categories = await controllers.categories.filter_categories(
        user_id, body.to_internal(),
    )
    return [CategoryResponse.from_internal(c) for c in categories]


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_category(
    user_id: UUID,
    body: CategoryBody,
    controllers: Controllers = Depends(get_controllers),
):
    category = await controllers.categories.save_category(body.to_internal(user_id))
    return CategoryResponse.from_internal(category)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    user_id: UUID,
    category_id: UUID,
    controllers: Controllers = Depends(get_controllers),
):
    category = await controllers.categories.get_category(user_id, category_id)
    if category is None:
        raise ResourceNotFoundError("Category", str(category_id))
    return CategoryResponse.from_internal(category)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    user_id: UUID,
    category_id: UUID,
    body: CategoryBody,
    controllers: Controllers = Depends(get_controllers),
):
    category = await controllers.categories.save_category(
        body.to_internal(user_id, category_id),
    )
    return CategoryResponse.from_internal(category)


@router.delete("/{category_id}")
async def delete_category(
    user_id: UUID,
    category_id: UUID,
    force: bool = Query(False),
    controllers: Controllers = Depends(get_controllers),
):
    deleted = await controllers.categories.delete_category(
        user_id, category_id, force,
    )
    return {"deleted": deleted}
