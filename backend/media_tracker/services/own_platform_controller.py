"""Own Platform Controller - own platforms of a (user, category), merge and delete.

Invariants:
    - A new own platform requires its category to exist for the user; an update
      requires the own platform to exist under (user, category)
    - merge_own_platforms needs at least two distinct ids, all under merged_data's
      (user, category); the first id survives with merged_data, items pointing at
      the others are re-pointed to it, then the others are deleted
    - delete_own_platform deletes the row and clears the reference in media items

Design Decisions:
    - Merge and delete are run_steps workflows: no rollback, but a partial failure is
      logged and reports the completed steps in the raised error
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from media_tracker.core.conditions import (
    SortSpec, all_of, eq, fields_equal, iequals, in_,
)
from media_tracker.core.domain_types import (
    CategoryId, OwnPlatformId, UserId, ref_id,
)
from media_tracker.core.entities import NameFilter, OwnPlatform
from media_tracker.core.errors import (
    DeleteError, ErrorContext, GenericError, SaveError,
)
from media_tracker.infrastructure.query_helper import QueryHelper
from media_tracker.models.own_platform import OwnPlatformRecord
from media_tracker.services.category_controller import CategoryController
from media_tracker.services.entity_controller import (
    AbstractEntityController, sum_results,
)

if TYPE_CHECKING:
    from media_tracker.services.media_item_factory import MediaItemFactory

logger = logging.getLogger(__name__)


class OwnPlatformController(AbstractEntityController):
    """Controller for own platform entities."""

    def __init__(
        self,
        query_helper: QueryHelper[OwnPlatform],
        categories: CategoryController,
    ):
        self.query_helper = query_helper
        self.categories = categories
        self._media_items: MediaItemFactory | None = None

    def bind_media_items(self, media_items: MediaItemFactory) -> None:
        self._media_items = media_items

    @property
    def media_items(self) -> MediaItemFactory:
        if self._media_items is None:
            raise GenericError(
                "OwnPlatformController media item factory is not bound",
            )
        return self._media_items

    async def get_own_platform(
        self, user_id: UserId, category_id: CategoryId, own_platform_id: OwnPlatformId,
    ) -> OwnPlatform | None:
        return await self.query_helper.find_one(
            fields_equal(
                id=own_platform_id, owner_id=user_id, category_id=category_id,
            ),
        )

    async def get_all_own_platforms(
        self, user_id: UserId, category_id: CategoryId,
    ) -> list[OwnPlatform]:
        return await self.filter_own_platforms(user_id, category_id)

    async def filter_own_platforms(
        self,
        user_id: UserId,
        category_id: CategoryId,
        own_platform_filter: NameFilter | None = None,
    ) -> list[OwnPlatform]:
        name = own_platform_filter.name if own_platform_filter else None
        conditions = all_of(
            fields_equal(owner_id=user_id, category_id=category_id),
            iequals("name", name) if name else None,
        )
        return await self.query_helper.find(conditions, [SortSpec("name")])

    async def save_own_platform(
        self, own_platform: OwnPlatform, skip_preconditions: bool = False,
    ) -> OwnPlatform:
        if not skip_preconditions:
            await self._check_write_preconditions(
                SaveError(
                    "Own platform does not exist for given user/category"
                    if own_platform.id
                    else "User or category does not exist"
                ),
                ref_id(own_platform.owner),
                ref_id(own_platform.category),
                own_platform.id,
            )
        return await self.query_helper.save(own_platform, OwnPlatformRecord())

    async def merge_own_platforms(
        self, own_platform_ids: list[OwnPlatformId], merged_data: OwnPlatform,
    ) -> int:
        """Merge two or more own platforms into the first one; returns the number deleted."""
        if len(own_platform_ids) < 2:
            raise GenericError("Invalid merge_own_platforms input: at least 2 ids required")
        if len(set(own_platform_ids)) != len(own_platform_ids):
            raise GenericError("Invalid merge_own_platforms input: duplicate ids")
        user_id = ref_id(merged_data.owner)
        category_id = ref_id(merged_data.category)
        context = ErrorContext(user_id=user_id, category_id=category_id)

        found = await self.query_helper.find(all_of(
            fields_equal(owner_id=user_id, category_id=category_id),
            in_("id", own_platform_ids),
        ))
        if len(found) != len(own_platform_ids):
            logger.warning(
                "Merge refused, own platforms not found for user/category",
                extra={"user_id": str(user_id), "category_id": str(category_id)},
            )
            raise SaveError(
                "One or more own platforms not found for given user/category",
                context,
            )

        survivor = replace(merged_data, id=own_platform_ids[0])
        to_delete = own_platform_ids[1:]
        controller = await self.media_items.get_entity_controller_from_category_id(
            user_id, category_id,
        )
        results = await self.run_steps("merge_own_platforms", [
            ("save_survivor", lambda: self.save_own_platform(survivor)),
            (
                "replace_references",
                lambda: controller.replace_own_platform_in_all_media_items(
                    user_id, category_id, to_delete, survivor.id,
                ),
            ),
            (
                "delete_merged",
                lambda: sum_results(
                    *(self.query_helper.delete_by_id(i) for i in to_delete),
                ),
            ),
        ])
        return results[-1]

    async def delete_own_platform(
        self, user_id: UserId, category_id: CategoryId, own_platform_id: OwnPlatformId,
    ) -> int:
        """Delete an own platform and clear its reference in every media item."""
        await self._check_write_preconditions(
            DeleteError("Own platform does not exist for given user/category"),
            user_id, category_id, own_platform_id,
        )
        controller = await self.media_items.get_entity_controller_from_category_id(
            user_id, category_id,
        )

        async def delete_and_clear() -> int:
            deleted, _ = await asyncio.gather(
                self.query_helper.delete_by_id(own_platform_id),
                controller.replace_own_platform_in_all_media_items(
                    user_id, category_id, own_platform_id, None,
                ),
            )
            return deleted

        results = await self.run_steps(
            "delete_own_platform", [("delete_and_clear", delete_and_clear)],
        )
        return results[0]

    async def delete_all_own_platforms_in_category(self, category_id: CategoryId) -> int:
        """Delete the own platforms of a category (media items are not touched)."""
        return await self.query_helper.delete(eq("category_id", category_id))

    async def delete_all_own_platforms_for_user(self, user_id: UserId) -> int:
        return await self.query_helper.delete(eq("owner_id", user_id))

    async def _check_write_preconditions(
        self,
        error,
        user_id: UserId,
        category_id: CategoryId,
        own_platform_id: OwnPlatformId | None,
    ):
        if own_platform_id is not None:
            return await self.check_existence_preconditions(
                error,
                lambda: self.get_own_platform(user_id, category_id, own_platform_id),
            )
        return await self.check_existence_preconditions(
            error, lambda: self.categories.get_category(user_id, category_id),
        )
