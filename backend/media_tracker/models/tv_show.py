"""TvShow ORM - media item table for the TV_SHOW media type.

Invariants:
    - seasons is a JSON list of {number, episodes_number, watched_episodes_number}
      objects, ordered by number
"""

from dataclasses import asdict
from datetime import date

from sqlalchemy import Boolean, Date, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from media_tracker.core.entities import TvShow, TvShowSeason
from media_tracker.db.base import Base, TimestampedRecord
from media_tracker.models.media_item import MediaItemRecordMixin


class TvShowRecord(MediaItemRecordMixin, TimestampedRecord, Base):
    __tablename__ = "tv_shows"

    creators: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    average_episode_runtime_minutes: Mapped[int | None] = mapped_column(
        Integer, nullable=True,
    )
    seasons: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    in_production: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    next_episode_air_date: Mapped[date | None] = mapped_column(
        Date, nullable=True,
    )

    def assign_from(self, tv_show: TvShow) -> None:
        self.assign_common(tv_show)
        self.creators = list(tv_show.creators)
        self.average_episode_runtime_minutes = (
            tv_show.average_episode_runtime_minutes
        )
        self.seasons = [asdict(season) for season in tv_show.seasons]
        self.in_production = tv_show.in_production
        self.next_episode_air_date = tv_show.next_episode_air_date

    def to_internal(self, populate: frozenset[str] = frozenset()) -> TvShow:
        return TvShow(
            **self.common_fields(populate),
            creators=list(self.creators or []),
            average_episode_runtime_minutes=self.average_episode_runtime_minutes,
            seasons=[TvShowSeason(**season) for season in self.seasons or []],
            in_production=self.in_production,
            next_episode_air_date=self.next_episode_air_date,
        )
