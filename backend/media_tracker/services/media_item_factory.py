"""Media Item Factory - resolves the controllers bound to a media type.

Invariants:
    - Every MediaType has exactly one bound entity controller (and optionally an
      external catalog controller)
    - Lookup by (user, category id) fails with FindError if the category does not exist
    - Unknown or unbound media types are GenericError

Design Decisions:
    - Explicit bindings passed in by services/assembly.py, no module-level singletons:
      adding a media type means adding one binding there
"""

import logging
from dataclasses import dataclass

from media_tracker.core.domain_types import CategoryId, MediaType, UserId
from media_tracker.core.entities import Category
from media_tracker.core.errors import ErrorContext, FindError, GenericError
from media_tracker.core.repository_protocols import MediaItemCatalogController
from media_tracker.services.category_controller import CategoryController
from media_tracker.services.media_items.media_item import MediaItemEntityController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaItemBinding:
    entity_controller: MediaItemEntityController
    catalog_controller: MediaItemCatalogController | None = None


class MediaItemFactory:
    """Per media type lookup of entity and catalog controllers."""

    def __init__(
        self,
        categories: CategoryController,
        bindings: dict[MediaType, MediaItemBinding],
    ):
        self.categories = categories
        self._bindings = dict(bindings)

    def get_all_entity_controllers(self) -> list[MediaItemEntityController]:
        return [self._resolve(media_type).entity_controller for media_type in MediaType]

    def get_all_catalog_controllers(self) -> list[MediaItemCatalogController]:
        return [
            binding.catalog_controller
            for binding in (self._resolve(media_type) for media_type in MediaType)
            if binding.catalog_controller is not None
        ]

    def get_entity_controller_from_media_type(
        self, media_type: MediaType,
    ) -> MediaItemEntityController:
        return self._resolve(media_type).entity_controller

    def get_catalog_controller_from_media_type(
        self, media_type: MediaType,
    ) -> MediaItemCatalogController:
        catalog_controller = self._resolve(media_type).catalog_controller
        if catalog_controller is None:
            raise GenericError(f"No catalog controller bound for media type {media_type}")
        return catalog_controller

    def get_entity_controller_from_category(
        self, category: Category,
    ) -> MediaItemEntityController:
        return self.get_entity_controller_from_media_type(category.media_type)

    def get_catalog_controller_from_category(
        self, category: Category,
    ) -> MediaItemCatalogController:
        return self.get_catalog_controller_from_media_type(category.media_type)

    async def get_entity_controller_from_category_id(
        self, user_id: UserId, category_id: CategoryId,
    ) -> MediaItemEntityController:
        category = await self._require_category(user_id, category_id)
        return self.get_entity_controller_from_category(category)

    async def get_catalog_controller_from_category_id(
        self, user_id: UserId, category_id: CategoryId,
    ) -> MediaItemCatalogController:
        category = await self._require_category(user_id, category_id)
        return self.get_catalog_controller_from_category(category)

    async def _require_category(self, user_id: UserId, category_id: CategoryId) -> Category:
        category = await self.categories.get_category(user_id, category_id)
        if category is None:
            logger.warning(
                "Cannot resolve media item controller for a missing category",
                extra={"user_id": str(user_id), "category_id": str(category_id)},
            )
            raise FindError(
                "Cannot get media item controller for a non-existing category media type",
                ErrorContext(user_id=user_id, category_id=category_id),
            )
        return category

    def _resolve(self, media_type: MediaType) -> MediaItemBinding:
        try:
            return self._bindings[MediaType(media_type)]
        except (KeyError, ValueError):
            raise GenericError(
                f"Cannot resolve controllers from media type {media_type}",
            ) from None
