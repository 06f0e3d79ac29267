"""Category ORM - persists a user's container of media items of one media type.

Invariants:
    - owner_id references users.id (no FK; cascades run in CategoryController/UserController)
    - media_type stores the MediaType value
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from media_tracker.core.domain_types import MediaType, Unresolved, ref_id
from media_tracker.core.entities import Category
from media_tracker.db.base import Base, TimestampedRecord


class CategoryRecord(TimestampedRecord, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    media_type: Mapped[str] = mapped_column(String(20), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)

    def assign_from(self, category: Category) -> None:
        self.name = category.name
        self.media_type = MediaType(category.media_type).value
        self.owner_id = ref_id(category.owner)
        self.color = category.color

    def to_internal(self, populate: frozenset[str] = frozenset()) -> Category:
        return Category(
            id=self.id,
            name=self.name,
            media_type=MediaType(self.media_type),
            owner=Unresolved(self.owner_id),
            color=self.color,
        )
