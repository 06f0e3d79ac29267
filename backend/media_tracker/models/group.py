"""Group ORM - persists an ordered collection of media items inside a category."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from media_tracker.core.domain_types import Unresolved, ref_id
from media_tracker.core.entities import Group
from media_tracker.db.base import Base, TimestampedRecord


class GroupRecord(TimestampedRecord, Base):
    __tablename__ = "groups"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )

    def assign_from(self, group: Group) -> None:
        self.name = group.name
        self.owner_id = ref_id(group.owner)
        self.category_id = ref_id(group.category)

    def to_internal(self, populate: frozenset[str] = frozenset()) -> Group:
        return Group(
            id=self.id,
            name=self.name,
            owner=Unresolved(self.owner_id),
            category=Unresolved(self.category_id),
        )
