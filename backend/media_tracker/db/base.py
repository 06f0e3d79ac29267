"""SQLAlchemy Declarative Base - shared base class and columns for all ORM records.

Invariants:
    - All records inherit from Base and TimestampedRecord
    - Base is the single source of truth for table metadata
    - Records never hold database foreign keys: references are plain UUID columns and
      integrity is enforced by the entity controllers

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - Every record converts to and from its core entity (assign_from / to_internal) so
      the services layer never touches ORM instances
"""

import uuid
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from media_tracker.core.domain_types import Resolved, Unresolved


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all Media Tracker ORM records."""
    pass


class TimestampedRecord:
    """Primary key plus creation/update timestamps."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )


def reference(
    target_id: uuid.UUID | None,
    populated: bool,
    load_related: Callable[[], object],
):
    """Build a Ref for a reference column, resolved only when it was populated."""
    if target_id is None:
        return None
    if populated:
        related = load_related()
        if related is not None:
            return Resolved(related.to_internal())
    return Unresolved(target_id)
