"""Group Controller - groups of a (user, category) and the item references to them.

Invariants:
    - A new group requires its category to exist for the user; an update requires the
      group to exist under (user, category)
    - allow_same_name=False makes (owner, category, name) unique
    - delete_group never leaves items pointing at a deleted group: by default their
      group reference is cleared, with delete_media_items=True they are deleted
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from media_tracker.core.conditions import SortSpec, all_of, eq, fields_equal, iequals
from media_tracker.core.domain_types import CategoryId, GroupId, UserId, ref_id
from media_tracker.core.entities import Group, NameFilter
from media_tracker.core.errors import DeleteError, GenericError, SaveError
from media_tracker.infrastructure.query_helper import QueryHelper
from media_tracker.models.group import GroupRecord
from media_tracker.services.category_controller import CategoryController
from media_tracker.services.entity_controller import AbstractEntityController

if TYPE_CHECKING:
    from media_tracker.services.media_item_factory import MediaItemFactory

logger = logging.getLogger(__name__)


class GroupController(AbstractEntityController):
    """Controller for group entities."""

    def __init__(
        self, query_helper: QueryHelper[Group], categories: CategoryController,
    ):
        self.query_helper = query_helper
        self.categories = categories
        self._media_items: MediaItemFactory | None = None

    def bind_media_items(self, media_items: MediaItemFactory) -> None:
        self._media_items = media_items

    @property
    def media_items(self) -> MediaItemFactory:
        if self._media_items is None:
            raise GenericError("GroupController media item factory is not bound")
        return self._media_items

    async def get_group(
        self, user_id: UserId, category_id: CategoryId, group_id: GroupId,
    ) -> Group | None:
        return await self.query_helper.find_one(
            fields_equal(id=group_id, owner_id=user_id, category_id=category_id),
        )

    async def get_all_groups(self, user_id: UserId, category_id: CategoryId) -> list[Group]:
        return await self.filter_groups(user_id, category_id)

    async def filter_groups(
        self,
        user_id: UserId,
        category_id: CategoryId,
        group_filter: NameFilter | None = None,
    ) -> list[Group]:
        name = group_filter.name if group_filter else None
        conditions = all_of(
            fields_equal(owner_id=user_id, category_id=category_id),
            iequals("name", name) if name else None,
        )
        return await self.query_helper.find(conditions, [SortSpec("name")])

    async def save_group(
        self,
        group: Group,
        skip_preconditions: bool = False,
        allow_same_name: bool = True,
    ) -> Group:
        user_id = ref_id(group.owner)
        category_id = ref_id(group.category)
        if not skip_preconditions:
            await self._check_write_preconditions(
                SaveError(
                    "Group does not exist for given user/category" if group.id
                    else "User or category does not exist"
                ),
                user_id, category_id, group.id,
            )
        if allow_same_name:
            return await self.query_helper.save(group, GroupRecord())
        return await self.query_helper.check_uniqueness_and_save(
            group, GroupRecord(),
            all_of(
                fields_equal(owner_id=user_id, category_id=category_id),
                iequals("name", group.name),
            ),
        )

    async def delete_group(
        self,
        user_id: UserId,
        category_id: CategoryId,
        group_id: GroupId,
        delete_media_items: bool = False,
    ) -> int:
        """Delete a group and clear (or delete) the media items that referenced it."""
        await self._check_write_preconditions(
            DeleteError("Group does not exist for given user/category"),
            user_id, category_id, group_id,
        )
        controller = await self.media_items.get_entity_controller_from_category_id(
            user_id, category_id,
        )
        if delete_media_items:
            items_step = controller.delete_all_media_items_in_group(group_id)
        else:
            items_step = controller.remove_group_from_all_media_items(
                user_id, category_id, group_id,
            )
        deleted, affected_items = await asyncio.gather(
            self.query_helper.delete_by_id(group_id), items_step,
        )
        return deleted + affected_items if delete_media_items else deleted

    async def delete_all_groups_in_category(self, category_id: CategoryId) -> int:
        """Delete the groups of a category (media items are not touched)."""
        return await self.query_helper.delete(eq("category_id", category_id))

    async def delete_all_groups_for_user(self, user_id: UserId) -> int:
        return await self.query_helper.delete(eq("owner_id", user_id))

    async def _check_write_preconditions(
        self,
        error,
        user_id: UserId,
        category_id: CategoryId,
        group_id: GroupId | None,
    ):
        if group_id is not None:
            return await self.check_existence_preconditions(
                error, lambda: self.get_group(user_id, category_id, group_id),
            )
        return await self.check_existence_preconditions(
            error, lambda: self.categories.get_category(user_id, category_id),
        )
