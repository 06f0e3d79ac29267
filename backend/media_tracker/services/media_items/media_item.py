"""Media Item Entity Controller - shared logic for every media type, hooks per subtype.

Invariants:
    - Every query is scoped by (owner, category) except the by-id bulk helpers
    - Filter: AND of (owner, category), importance levels, case-insensitive exact name,
      completion status, group and own platform membership
    - complete=True means completed_last_on set AND marked_as_redo != True;
      complete=False is exactly the complement
    - Explicit group/own platform ids win over the any/no flags; any+no (or neither)
      means no constraint
    - Sort specs apply in order, later ones break ties; unknown fields are GenericError
    - Search terms are literal substrings (no wildcard or regex semantics)
    - Saving checks, concurrently: item exists (update) or category exists with the
      linked media type (insert); group and own platform resolve under (user, category)

Design Decisions:
    - One base class holding all shared logic; subclasses only implement the hooks
      (default sort, blank record, sort fields, filter/search contributions, media type,
      validation)
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from media_tracker.core.conditions import (
    Condition, SortSpec, all_of, any_of, eq, fields_equal, icontains, iequals,
    in_, is_set, is_unset, ne,
)
from media_tracker.core.domain_types import (
    CategoryId, GroupId, MediaItemId, MediaItemSortField, MediaType, OwnPlatformId,
    UserId, optional_ref_id, ref_id,
)
from media_tracker.core.entities import (
    MediaItem, MediaItemFilter, MediaItemGroupFilter, MediaItemOwnPlatformFilter,
    MediaItemSortBy,
)
from media_tracker.core.errors import (
    DeleteError, ErrorContext, GenericError, SaveError,
)
from media_tracker.infrastructure.query_helper import QueryHelper
from media_tracker.services.category_controller import CategoryController
from media_tracker.services.entity_controller import AbstractEntityController
from media_tracker.services.group_controller import GroupController
from media_tracker.services.own_platform_controller import OwnPlatformController

logger = logging.getLogger(__name__)

TMediaItem = TypeVar("TMediaItem", bound=MediaItem)

POPULATE_ALL = ("group", "own_platform")

COMMON_SORT_FIELDS: dict[MediaItemSortField, tuple[str, ...]] = {
    MediaItemSortField.IMPORTANCE: ("importance",),
    MediaItemSortField.NAME: ("name",),
    MediaItemSortField.GROUP: ("group_id", "order_in_group"),
    MediaItemSortField.OWN_PLATFORM: ("own_platform_id",),
    MediaItemSortField.COMPLETION_DATE: ("completed_last_on",),
    MediaItemSortField.ACTIVE: ("active",),
    MediaItemSortField.RELEASE_DATE: ("release_date",),
}


class MediaItemEntityController(AbstractEntityController, ABC, Generic[TMediaItem]):
    """Controller for the media items of one media type."""

    def __init__(
        self,
        query_helper: QueryHelper[TMediaItem],
        categories: CategoryController,
        groups: GroupController,
        own_platforms: OwnPlatformController,
    ):
        self.query_helper = query_helper
        self.categories = categories
        self.groups = groups
        self.own_platforms = own_platforms

    # ─── Subclass hooks ──────────────────────────────────────────

    @property
    @abstractmethod
    def linked_media_type(self) -> MediaType: ...

    @abstractmethod
    def default_sort_by(self) -> list[MediaItemSortBy]: ...

    @abstractmethod
    def new_blank_record(self) -> Any: ...

    @abstractmethod
    def sort_fields_for(self, field: MediaItemSortField) -> tuple[str, ...]:
        """Store fields for a sort field; delegate to common_sort_fields() by default."""

    @abstractmethod
    def search_conditions(self, term: str) -> list[Condition]:
        """Subtype fields matched by a search term, besides the name."""

    def filter_conditions(self, media_item_filter: MediaItemFilter | None) -> Condition | None:
        """Subtype contribution to the filter tree."""
        return None

    def validate_media_item(self, media_item: TMediaItem) -> None:
        """Subtype invariants checked before saving; raise SaveError on violation."""

    def common_sort_fields(self, field: MediaItemSortField) -> tuple[str, ...]:
        try:
            return COMMON_SORT_FIELDS[field]
        except KeyError:
            logger.error(f"Unexpected sort field for {self.linked_media_type.value}: {field}")
            raise GenericError(f"Unhandled sort field {field}") from None

    # ─── Reads ───────────────────────────────────────────────────

    async def get_media_item(
        self, user_id: UserId, category_id: CategoryId, media_item_id: MediaItemId,
    ) -> TMediaItem | None:
        return await self.query_helper.find_one(
            fields_equal(id=media_item_id, owner_id=user_id, category_id=category_id),
        )

    async def get_all_media_items(
        self, user_id: UserId, category_id: CategoryId,
    ) -> list[TMediaItem]:
        return await self.filter_and_order_media_items(
            user_id, category_id, sort_by=self.default_sort_by(),
        )

    async def get_all_media_items_in_group(self, group_id: GroupId) -> list[TMediaItem]:
        return await self.query_helper.find(eq("group_id", group_id))

    async def get_all_media_items_in_own_platform(
        self, own_platform_id: OwnPlatformId,
    ) -> list[TMediaItem]:
        return await self.query_helper.find(eq("own_platform_id", own_platform_id))

    async def get_all_media_items_in_category(
        self, category_id: CategoryId,
    ) -> list[TMediaItem]:
        return await self.query_helper.find(eq("category_id", category_id))

    async def filter_and_order_media_items(
        self,
        user_id: UserId,
        category_id: CategoryId,
        media_item_filter: MediaItemFilter | None = None,
        sort_by: list[MediaItemSortBy] | None = None,
    ) -> list[TMediaItem]:
        conditions = self.build_filter_conditions(
            user_id, category_id, media_item_filter,
        )
        return await self.query_helper.find(
            conditions, self.build_sort(sort_by or []), POPULATE_ALL,
        )

    async def search_media_items(
        self,
        user_id: UserId,
        category_id: CategoryId,
        term: str,
        media_item_filter: MediaItemFilter | None = None,
    ) -> list[TMediaItem]:
        """Items matching the filter whose name (or subtype fields) contain term."""
        conditions = all_of(
            self.build_filter_conditions(user_id, category_id, media_item_filter),
            any_of(icontains("name", term), *self.search_conditions(term)),
        )
        return await self.query_helper.find(
            conditions, [SortSpec("name")], POPULATE_ALL,
        )

    # ─── Writes ──────────────────────────────────────────────────

    async def save_media_item(
        self,
        media_item: TMediaItem,
        skip_preconditions: bool = False,
        allow_same_name: bool = True,
    ) -> TMediaItem:
        self.validate_media_item(media_item)
        user_id = ref_id(media_item.owner)
        category_id = ref_id(media_item.category)
        if not skip_preconditions:
            await self._check_write_preconditions(
                SaveError(
                    "Media item or group or own platform does not exist for given user/category"
                    if media_item.id
                    else "User or category or group or own platform does not exist"
                ),
                user_id, category_id,
                optional_ref_id(media_item.group),
                optional_ref_id(media_item.own_platform),
                media_item.id,
            )
        if allow_same_name:
            return await self.query_helper.save(media_item, self.new_blank_record())
        return await self.query_helper.check_uniqueness_and_save(
            media_item, self.new_blank_record(),
            all_of(
                fields_equal(owner_id=user_id, category_id=category_id),
                iequals("name", media_item.name),
            ),
        )

    async def delete_media_item(
        self, user_id: UserId, category_id: CategoryId, media_item_id: MediaItemId,
    ) -> int:
        await self._check_write_preconditions(
            DeleteError("Media item does not exist for given user/category"),
            user_id, category_id, None, None, media_item_id,
        )
        return await self.query_helper.delete_by_id(media_item_id)

    async def delete_all_media_items_in_group(self, group_id: GroupId) -> int:
        return await self.query_helper.delete(eq("group_id", group_id))

    async def delete_all_media_items_in_category(self, category_id: CategoryId) -> int:
        return await self.query_helper.delete(eq("category_id", category_id))

    async def delete_all_media_items_for_user(self, user_id: UserId) -> int:
        return await self.query_helper.delete(eq("owner_id", user_id))

    async def replace_own_platform_in_all_media_items(
        self,
        user_id: UserId,
        category_id: CategoryId,
        old_own_platform_ids: OwnPlatformId | list[OwnPlatformId],
        new_own_platform_id: OwnPlatformId | None,
    ) -> int:
        """Re-point (or clear, with None) own platform references in bulk."""
        if isinstance(old_own_platform_ids, list):
            match_old = in_("own_platform_id", old_own_platform_ids)
        else:
            match_old = eq("own_platform_id", old_own_platform_ids)
        return await self.query_helper.update_selective_many(
            {"own_platform_id": new_own_platform_id},
            all_of(fields_equal(owner_id=user_id, category_id=category_id), match_old),
        )

    async def remove_group_from_all_media_items(
        self, user_id: UserId, category_id: CategoryId, group_id: GroupId,
    ) -> int:
        return await self.query_helper.update_selective_many(
            {"group_id": None, "order_in_group": None},
            fields_equal(owner_id=user_id, category_id=category_id, group_id=group_id),
        )

    # ─── Filter and sort building ────────────────────────────────

    def build_filter_conditions(
        self,
        user_id: UserId,
        category_id: CategoryId,
        media_item_filter: MediaItemFilter | None,
    ) -> Condition:
        base = fields_equal(owner_id=user_id, category_id=category_id)
        if media_item_filter is None:
            return all_of(base, self.filter_conditions(None))
        f = media_item_filter
        return all_of(
            base,
            in_("importance", [int(i) for i in f.importance_levels])
            if f.importance_levels else None,
            iequals("name", f.name) if f.name else None,
            _completion_condition(f.complete),
            _membership_condition(
                "group_id", f.groups, _group_flags,
            ),
            _membership_condition(
                "own_platform_id", f.own_platforms, _own_platform_flags,
            ),
            self.filter_conditions(f),
        )

    def build_sort(self, sort_by: list[MediaItemSortBy]) -> list[SortSpec]:
        return [
            SortSpec(store_field, spec.ascending)
            for spec in sort_by
            for store_field in self.sort_fields_for(MediaItemSortField(spec.field))
        ]

    async def _check_write_preconditions(
        self,
        error,
        user_id: UserId,
        category_id: CategoryId,
        group_id: GroupId | None,
        own_platform_id: OwnPlatformId | None,
        media_item_id: MediaItemId | None,
    ) -> None:
        async def check() -> list:
            lookups = []
            if media_item_id is not None:
                lookups.append(self.get_media_item(user_id, category_id, media_item_id))
            else:
                lookups.append(self.categories.get_category(user_id, category_id))
            if group_id is not None:
                lookups.append(self.groups.get_group(user_id, category_id, group_id))
            if own_platform_id is not None:
                lookups.append(
                    self.own_platforms.get_own_platform(
                        user_id, category_id, own_platform_id,
                    ),
                )
            return list(await asyncio.gather(*lookups))

        resolved = await self.check_existence_preconditions(error, check)
        if media_item_id is None and resolved[0].media_type != self.linked_media_type:
            logger.warning(
                f"Media type mismatch: category is {resolved[0].media_type.value}, "
                f"controller is {self.linked_media_type.value}",
                extra={"user_id": str(user_id), "category_id": str(category_id)},
            )
            raise SaveError(
                "Media item and category have incompatible media types",
                ErrorContext(user_id=user_id, category_id=category_id),
            )


def _completion_condition(complete: bool | None) -> Condition | None:
    if complete is None:
        return None
    if complete:
        return all_of(is_set("completed_last_on"), ne("marked_as_redo", True))
    return any_of(is_unset("completed_last_on"), eq("marked_as_redo", True))


def _group_flags(group_filter: MediaItemGroupFilter):
    return group_filter.group_ids, group_filter.any_group, group_filter.no_group


def _own_platform_flags(own_platform_filter: MediaItemOwnPlatformFilter):
    return (
        own_platform_filter.own_platform_ids,
        own_platform_filter.any_own_platform,
        own_platform_filter.no_own_platform,
    )


def _membership_condition(field: str, membership_filter, flags) -> Condition | None:
    """Explicit ids, else any-only -> set, no-only -> unset, otherwise no constraint."""
    if membership_filter is None:
        return None
    ids, any_value, no_value = flags(membership_filter)
    if ids:
        return in_(field, ids)
    if any_value and not no_value:
        return is_set(field)
    if no_value and not any_value:
        return is_unset(field)
    return None
