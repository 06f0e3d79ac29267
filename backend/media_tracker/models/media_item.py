"""MediaItem ORM mixin - columns and conversions shared by the four media item tables.

Invariants:
    - One table per media type; each record class mixes in MediaItemRecordMixin
    - completed_on is a JSON list of ISO dates; completed_last_on is its max, persisted
      so filters and sorts can use it
    - group / own_platform are view-only relationships, loaded only when populated
      (lazy="raise" otherwise)

Design Decisions:
    - Mixin with declared_attr relationships over joined-table inheritance: the four
      tables share no rows, and each media item controller queries a single table
"""

import uuid
from datetime import date

from sqlalchemy import Boolean, Date, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from media_tracker.core.domain_types import (
    Importance, Unresolved, optional_ref_id, ref_id,
)
from media_tracker.core.entities import MediaItem
from media_tracker.db.base import reference
from media_tracker.models.group import GroupRecord
from media_tracker.models.own_platform import OwnPlatformRecord


def dates_to_json(values: list[date]) -> list[str]:
    return [value.isoformat() for value in values]


def dates_from_json(values: list[str] | None) -> list[date]:
    return [date.fromisoformat(value) for value in values or []]


class MediaItemRecordMixin:
    """Columns common to every media type."""

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    group_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    order_in_group: Mapped[int | None] = mapped_column(Integer, nullable=True)
    own_platform_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    importance: Mapped[int] = mapped_column(
        Integer, nullable=False, default=Importance.NONE.value,
    )
    genres: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_on: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    completed_last_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    marked_as_redo: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    catalog_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    @declared_attr
    def group(cls) -> Mapped[GroupRecord | None]:
        return relationship(
            GroupRecord,
            primaryjoin=f"foreign({cls.__name__}.group_id) == GroupRecord.id",
            viewonly=True, lazy="raise",
        )

    @declared_attr
    def own_platform(cls) -> Mapped[OwnPlatformRecord | None]:
        return relationship(
            OwnPlatformRecord,
            primaryjoin=(
                f"foreign({cls.__name__}.own_platform_id) == OwnPlatformRecord.id"
            ),
            viewonly=True, lazy="raise",
        )

    def assign_common(self, item: MediaItem) -> None:
        self.name = item.name
        self.owner_id = ref_id(item.owner)
        self.category_id = ref_id(item.category)
        self.group_id = optional_ref_id(item.group)
        self.order_in_group = item.order_in_group if item.group is not None else None
        self.own_platform_id = optional_ref_id(item.own_platform)
        self.importance = int(item.importance)
        self.genres = list(item.genres)
        self.description = item.description
        self.user_comment = item.user_comment
        self.completed_on = dates_to_json(item.completed_on)
        self.completed_last_on = item.completed_last_on
        self.active = item.active
        self.marked_as_redo = item.marked_as_redo
        self.release_date = item.release_date
        self.catalog_id = item.catalog_id
        self.image_url = item.image_url

    def common_fields(self, populate: frozenset[str]) -> dict:
        """Keyword arguments for the MediaItem constructor."""
        return {
            "id": self.id,
            "name": self.name,
            "owner": Unresolved(self.owner_id),
            "category": Unresolved(self.category_id),
            "group": reference(
                self.group_id, "group" in populate, lambda: self.group,
            ),
            "order_in_group": self.order_in_group,
            "own_platform": reference(
                self.own_platform_id, "own_platform" in populate,
                lambda: self.own_platform,
            ),
            "importance": Importance(self.importance),
            "genres": list(self.genres or []),
            "description": self.description,
            "user_comment": self.user_comment,
            "completed_on": dates_from_json(self.completed_on),
            "active": self.active,
            "marked_as_redo": self.marked_as_redo,
            "release_date": self.release_date,
            "catalog_id": self.catalog_id,
            "image_url": self.image_url,
        }
