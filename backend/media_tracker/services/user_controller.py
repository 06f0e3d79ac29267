"""User Controller - tenant lifecycle, with a cascade over everything a user owns.

Invariants:
    - User names are unique (exact match) across all users
    - Updating a user requires it to exist
    - delete_user removes categories, groups, own platforms and the media items of
      every media type concurrently, then the user row; returns the summed count
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from media_tracker.core.conditions import SortSpec, eq, iequals
from media_tracker.core.domain_types import UserId
from media_tracker.core.entities import User
from media_tracker.core.errors import DeleteError, GenericError, SaveError
from media_tracker.infrastructure.query_helper import QueryHelper
from media_tracker.models.user import UserRecord
from media_tracker.services.entity_controller import (
    AbstractEntityController, sum_results,
)

if TYPE_CHECKING:
    from media_tracker.services.category_controller import CategoryController
    from media_tracker.services.group_controller import GroupController
    from media_tracker.services.media_item_factory import MediaItemFactory
    from media_tracker.services.own_platform_controller import OwnPlatformController

logger = logging.getLogger(__name__)


class UserController(AbstractEntityController):
    """Controller for user entities."""

    def __init__(self, query_helper: QueryHelper[User]):
        self.query_helper = query_helper
        self._categories: CategoryController | None = None
        self._groups: GroupController | None = None
        self._own_platforms: OwnPlatformController | None = None
        self._media_items: MediaItemFactory | None = None

    def bind_dependents(
        self,
        categories: CategoryController,
        groups: GroupController,
        own_platforms: OwnPlatformController,
        media_items: MediaItemFactory,
    ) -> None:
        """Late binding of the controllers that own user data (built after this one)."""
        self._categories = categories
        self._groups = groups
        self._own_platforms = own_platforms
        self._media_items = media_items

    async def get_user(self, user_id: UserId) -> User | None:
        return await self.query_helper.find_one(eq("id", user_id))

    async def filter_users(self, name: str | None = None) -> list[User]:
        conditions = iequals("name", name) if name else None
        return await self.query_helper.find(conditions, [SortSpec("name")])

    async def save_user(self, user: User) -> User:
        if user.id is not None:
            user_id = user.id
            await self.check_existence_preconditions(
                SaveError("User does not exist"),
                lambda: self.get_user(user_id),
            )
        return await self.query_helper.check_uniqueness_and_save(
            user, UserRecord(), eq("name", user.name),
        )

    async def delete_user(self, user_id: UserId) -> int:
        if self._categories is None or self._media_items is None:
            raise GenericError("UserController dependents are not bound")
        await self.check_existence_preconditions(
            DeleteError("User does not exist"),
            lambda: self.get_user(user_id),
        )
        deleted = await sum_results(
            self._categories.delete_all_categories_for_user(user_id),
            self._groups.delete_all_groups_for_user(user_id),
            self._own_platforms.delete_all_own_platforms_for_user(user_id),
            *(
                controller.delete_all_media_items_for_user(user_id)
                for controller in self._media_items.get_all_entity_controllers()
            ),
        )
        deleted += await self.query_helper.delete_by_id(user_id)
        logger.info(
            f"Deleted user and {deleted - 1} owned records",
            extra={"user_id": str(user_id)},
        )
        return deleted
