"""Media Items API - one router per media type, all built by build_media_item_router.

Invariants:
    - Every route is scoped by (user, category) from the path
    - Creating an item in a category of another media type is a SaveError (400)
    - Filter/search responses carry the populated group and own platform
    - allowSameName=false in the body rejects a name already used in the category

Design Decisions:
    - A router factory over (controller attribute, body, response) instead of four
      copies of the same seven handlers
"""

from typing import Callable
from uuid import UUID

from fastapi import APIRouter, Depends, status

from media_tracker.api.dependencies import get_controllers
from media_tracker.core.errors import ResourceNotFoundError
from media_tracker.schemas.media_item import (
    BookBody, BookResponse, FilterMediaItemsRequest, MediaItemBody,
    MediaItemResponse, MovieBody, MovieResponse, SearchMediaItemsRequest,
    TvShowBody, TvShowResponse, VideogameBody, VideogameResponse,
)
from media_tracker.services.assembly import Controllers
from media_tracker.services.media_items.media_item import MediaItemEntityController


def build_media_item_router(
    path: str,
    resource_name: str,
    select_controller: Callable[[Controllers], MediaItemEntityController],
    body_class: type[MediaItemBody],
    response_class: type[MediaItemResponse],
) -> APIRouter:
    router = APIRouter(
        prefix=f"/api/v1/users/{{user_id}}/categories/{{category_id}}/{path}",
        tags=[path],
    )

    def get_controller(
        controllers: Controllers = Depends(get_controllers),
    ) -> MediaItemEntityController:
        return select_controller(controllers)

    @router.get("", response_model=list[response_class])
    async def list_media_items(
        user_id: UUID,
        category_id: UUID,
        controller: MediaItemEntityController = Depends(get_controller),
    ):
        items = await controller.get_all_media_items(user_id, category_id)
        return [response_class.from_internal(i) for i in items]

    @router.post("/filter", response_model=list[response_class])
    async def filter_media_items(
        user_id: UUID,
        category_id: UUID,
        body: FilterMediaItemsRequest,
        controller: MediaItemEntityController = Depends(get_controller),
    ):
        items = await controller.filter_and_order_media_items(
            user_id, category_id, body.internal_filter(), body.internal_sort_by(),
        )
        return [response_class.from_internal(i) for i in items]

    @router.post("/search", response_model=list[response_class])
    async def search_media_items(
        user_id: UUID,
        category_id: UUID,
        body: SearchMediaItemsRequest,
        controller: MediaItemEntityController = Depends(get_controller),
    ):
        items = await controller.search_media_items(
            user_id, category_id, body.term, body.internal_filter(),
        )
        return [response_class.from_internal(i) for i in items]

    @router.post(
        "", response_model=response_class, status_code=status.HTTP_201_CREATED,
    )
    async def create_media_item(
        user_id: UUID,
        category_id: UUID,
        body: body_class,
        controller: MediaItemEntityController = Depends(get_controller),
    ):
        item = await controller.save_media_item(
            body.to_internal(user_id, category_id),
            allow_same_name=body.allow_same_name,
        )
        return response_class.from_internal(item)

    @router.get("/{media_item_id}", response_model=response_class)
    async def get_media_item(
        user_id: UUID,
        category_id: UUID,
        media_item_id: UUID,
        controller: MediaItemEntityController = Depends(get_controller),
    ):
        item = await controller.get_media_item(user_id, category_id, media_item_id)
        if item is None:
            raise ResourceNotFoundError(resource_name, str(media_item_id))
        return response_class.from_internal(item)

    @router.put("/{media_item_id}", response_model=response_class)
    async def update_media_item(
        user_id: UUID,
        category_id: UUID,
        media_item_id: UUID,
        body: body_class,
        controller: MediaItemEntityController = Depends(get_controller),
    ):
        item = await controller.save_media_item(
            body.to_internal(user_id, category_id, media_item_id),
            allow_same_name=body.allow_same_name,
        )
        return response_class.from_internal(item)

    @router.delete("/{media_item_id}")
    async def delete_media_item(
        user_id: UUID,
        category_id: UUID,
        media_item_id: UUID,
        controller: MediaItemEntityController = Depends(get_controller),
    ):
        deleted = await controller.delete_media_item(
            user_id, category_id, media_item_id,
        )
        return {"deleted": deleted}

    return router


movies_router = build_media_item_router(
    "movies", "Movie", lambda c: c.movies, MovieBody, MovieResponse,
)
books_router = build_media_item_router(
    "books", "Book", lambda c: c.books, BookBody, BookResponse,
)
tv_shows_router = build_media_item_router(
    "tv-shows", "TvShow", lambda c: c.tv_shows, TvShowBody, TvShowResponse,
)
videogames_router = build_media_item_router(
    "videogames", "Videogame", lambda c: c.videogames,
    VideogameBody, VideogameResponse,
)
