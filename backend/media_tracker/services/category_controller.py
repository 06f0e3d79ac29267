"""Category Controller - categories of a user, guarded against orphaning media items.

Invariants:
    - A new category requires its owner to exist
    - An update requires the category to exist for that user; its media_type may only
      change while the category contains no media item
    - delete_category refuses while media items exist unless forced; the delete then
      removes items, groups, own platforms and the category concurrently
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from media_tracker.core.conditions import SortSpec, all_of, eq, fields_equal, iequals
from media_tracker.core.domain_types import CategoryId, UserId, ref_id
from media_tracker.core.entities import Category, NameFilter
from media_tracker.core.errors import (
    DeleteError, ErrorContext, GenericError, SaveError,
)
from media_tracker.infrastructure.query_helper import QueryHelper
from media_tracker.models.category import CategoryRecord
from media_tracker.services.entity_controller import AbstractEntityController
from media_tracker.services.user_controller import UserController

if TYPE_CHECKING:
    from media_tracker.services.group_controller import GroupController
    from media_tracker.services.media_item_factory import MediaItemFactory
    from media_tracker.services.own_platform_controller import OwnPlatformController

logger = logging.getLogger(__name__)


class CategoryController(AbstractEntityController):
    """Controller for category entities."""

    def __init__(self, query_helper: QueryHelper[Category], users: UserController):
        self.query_helper = query_helper
        self.users = users
        self._groups: GroupController | None = None
        self._own_platforms: OwnPlatformController | None = None
        self._media_items: MediaItemFactory | None = None

    def bind_dependents(
        self,
        groups: GroupController,
        own_platforms: OwnPlatformController,
        media_items: MediaItemFactory,
    ) -> None:
        """Late binding: these controllers themselves depend on categories."""
        self._groups = groups
        self._own_platforms = own_platforms
        self._media_items = media_items

    @property
    def media_items(self) -> MediaItemFactory:
        if self._media_items is None:
            raise GenericError("CategoryController dependents are not bound")
        return self._media_items

    async def get_category(
        self, user_id: UserId, category_id: CategoryId,
    ) -> Category | None:
        return await self.query_helper.find_one(
            fields_equal(id=category_id, owner_id=user_id),
        )

    async def get_all_categories(self, user_id: UserId) -> list[Category]:
        return await self.filter_categories(user_id)

    async def filter_categories(
        self, user_id: UserId, category_filter: NameFilter | None = None,
    ) -> list[Category]:
        name = category_filter.name if category_filter else None
        conditions = all_of(
            eq("owner_id", user_id),
            iequals("name", name) if name else None,
        )
        return await self.query_helper.find(conditions, [SortSpec("name")])

    async def save_category(self, category: Category) -> Category:
        user_id = ref_id(category.owner)
        if category.id is None:
            await self.check_existence_preconditions(
                SaveError("User does not exist"),
                lambda: self.users.get_user(user_id),
            )
        else:
            category_id = category.id
            stored = await self.check_existence_preconditions(
                SaveError("Category does not exist for given user"),
                lambda: self.get_category(user_id, category_id),
            )
            if stored.media_type != category.media_type:
                await self._check_no_media_items(stored)
        return await self.query_helper.save(category, CategoryRecord())

    async def delete_category(
        self, user_id: UserId, category_id: CategoryId, force: bool = False,
    ) -> int:
        category = await self.check_existence_preconditions(
            DeleteError("Category does not exist for given user"),
            lambda: self.get_category(user_id, category_id),
        )
        controller = self.media_items.get_entity_controller_from_category(category)
        return await self.cleanup_with_empty_check(
            force,
            lambda: controller.get_all_media_items_in_category(category_id),
            [
                lambda: controller.delete_all_media_items_in_category(category_id),
                lambda: self._groups.delete_all_groups_in_category(category_id),
                lambda: self._own_platforms.delete_all_own_platforms_in_category(
                    category_id,
                ),
                lambda: self.query_helper.delete_by_id(category_id),
            ],
        )

    async def delete_all_categories_for_user(self, user_id: UserId) -> int:
        """Delete the category rows of a user (no cascade to their contents)."""
        return await self.query_helper.delete(eq("owner_id", user_id))

    async def _check_no_media_items(self, stored: Category) -> None:
        controller = self.media_items.get_entity_controller_from_category(stored)
        items = await controller.get_all_media_items_in_category(stored.id)
        if items:
            logger.warning(
                "Refusing media type change of a non-empty category",
                extra={"category_id": str(stored.id)},
            )
            raise SaveError(
                "Cannot change the media type of a category that contains media items",
                ErrorContext(
                    user_id=ref_id(stored.owner), category_id=stored.id,
                ),
            )
