"""OwnPlatform ORM - persists where a user owns media items of a category."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from media_tracker.core.domain_types import Unresolved, ref_id
from media_tracker.core.entities import OwnPlatform
from media_tracker.db.base import Base, TimestampedRecord


class OwnPlatformRecord(TimestampedRecord, Base):
    __tablename__ = "own_platforms"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def assign_from(self, own_platform: OwnPlatform) -> None:
        self.name = own_platform.name
        self.owner_id = ref_id(own_platform.owner)
        self.category_id = ref_id(own_platform.category)
        self.color = own_platform.color
        self.icon = own_platform.icon

    def to_internal(self, populate: frozenset[str] = frozenset()) -> OwnPlatform:
        return OwnPlatform(
            id=self.id,
            name=self.name,
            owner=Unresolved(self.owner_id),
            category=Unresolved(self.category_id),
            color=self.color,
            icon=self.icon,
        )
