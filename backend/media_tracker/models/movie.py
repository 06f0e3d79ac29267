"""Movie ORM - media item table for the MOVIE media type."""

from sqlalchemy import Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from media_tracker.core.entities import Movie
from media_tracker.db.base import Base, TimestampedRecord
from media_tracker.models.media_item import MediaItemRecordMixin


class MovieRecord(MediaItemRecordMixin, TimestampedRecord, Base):
    __tablename__ = "movies"

    directors: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def assign_from(self, movie: Movie) -> None:
        self.assign_common(movie)
        self.directors = list(movie.directors)
        self.duration_minutes = movie.duration_minutes

    def to_internal(self, populate: frozenset[str] = frozenset()) -> Movie:
        return Movie(
            **self.common_fields(populate),
            directors=list(self.directors or []),
            duration_minutes=self.duration_minutes,
        )
