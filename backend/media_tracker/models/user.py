"""User ORM - persists the tenant that owns every other record.

Invariants:
    - name is unique across users (checked by UserController, not by the database)
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from media_tracker.core.entities import User
from media_tracker.db.base import Base, TimestampedRecord


class UserRecord(TimestampedRecord, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def assign_from(self, user: User) -> None:
        self.name = user.name

    def to_internal(self, populate: frozenset[str] = frozenset()) -> User:
        return User(id=self.id, name=self.name)
