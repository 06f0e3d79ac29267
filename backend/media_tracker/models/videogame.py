"""Videogame ORM - media item table for the VIDEOGAME media type."""

from sqlalchemy import Float, JSON
from sqlalchemy.orm import Mapped, mapped_column

from media_tracker.core.entities import Videogame
from media_tracker.db.base import Base, TimestampedRecord
from media_tracker.models.media_item import MediaItemRecordMixin


class VideogameRecord(MediaItemRecordMixin, TimestampedRecord, Base):
    __tablename__ = "videogames"

    developers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    publishers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    platforms: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    average_length_hours: Mapped[float | None] = mapped_column(
        Float, nullable=True,
    )

    def assign_from(self, videogame: Videogame) -> None:
        self.assign_common(videogame)
        self.developers = list(videogame.developers)
        self.publishers = list(videogame.publishers)
        self.platforms = list(videogame.platforms)
        self.average_length_hours = videogame.average_length_hours

    def to_internal(self, populate: frozenset[str] = frozenset()) -> Videogame:
        return Videogame(
            **self.common_fields(populate),
            developers=list(self.developers or []),
            publishers=list(self.publishers or []),
            platforms=list(self.platforms or []),
            average_length_hours=self.average_length_hours,
        )
