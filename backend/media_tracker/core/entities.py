"""Domain Entities - internal representation of every persisted entity and its filters.

Invariants:
    - id is None only before the first save
    - References to other entities are Ref values (Unresolved or Resolved), never raw ids
    - MediaItem.completed_last_on is always max(completed_on), or None when empty
    - TvShow seasons are numbered with positive, unique, strictly increasing numbers

Design Decisions:
    - Plain mutable dataclasses: controllers build them, QueryHelper copies them onto
      ORM records (models/*.assign_from) and back (models/*.to_internal)
    - Filters are separate frozen dataclasses so routes can build them straight from DTOs
"""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from media_tracker.core.domain_types import (
    Importance, MediaItemSortField, MediaType, Ref,
)


# ─── Tenant and Containers ───────────────────────────────────────

@dataclass
class User:
    name: str
    id: UUID | None = None


@dataclass
class Category:
    """Container of media items of a single media type."""
    name: str
    media_type: MediaType
    owner: Ref[User]
    color: str | None = None
    id: UUID | None = None


@dataclass
class Group:
    """Ordered collection of media items inside a category (e.g. a saga)."""
    name: str
    owner: Ref[User]
    category: Ref[Category]
    id: UUID | None = None


@dataclass
class OwnPlatform:
    """Where the user owns a media item (e.g. a streaming service or a shelf)."""
    name: str
    owner: Ref[User]
    category: Ref[Category]
    color: str | None = None
    icon: str | None = None
    id: UUID | None = None


# ─── Media Items ─────────────────────────────────────────────────

@dataclass
class MediaItem:
    """Fields shared by every media type."""
    name: str
    owner: Ref[User]
    category: Ref[Category]
    importance: Importance = Importance.NONE
    group: Ref[Group] | None = None
    order_in_group: int | None = None
    own_platform: Ref[OwnPlatform] | None = None
    genres: list[str] = field(default_factory=list)
    description: str | None = None
    user_comment: str | None = None
    completed_on: list[date] = field(default_factory=list)
    active: bool = False
    marked_as_redo: bool = False
    release_date: date | None = None
    catalog_id: str | None = None
    image_url: str | None = None
    id: UUID | None = None

    @property
    def completed_last_on(self) -> date | None:
        return max(self.completed_on) if self.completed_on else None


@dataclass
class Movie(MediaItem):
    directors: list[str] = field(default_factory=list)
    duration_minutes: int | None = None


@dataclass
class Book(MediaItem):
    authors: list[str] = field(default_factory=list)
    pages_number: int | None = None


@dataclass
class TvShowSeason:
    number: int
    episodes_number: int | None = None
    watched_episodes_number: int | None = None


@dataclass
class TvShow(MediaItem):
    creators: list[str] = field(default_factory=list)
    average_episode_runtime_minutes: int | None = None
    seasons: list[TvShowSeason] = field(default_factory=list)
    in_production: bool | None = None
    next_episode_air_date: date | None = None


@dataclass
class Videogame(MediaItem):
    developers: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    average_length_hours: float | None = None


# ─── Filters and Sorting ─────────────────────────────────────────

@dataclass(frozen=True)
class NameFilter:
    """Case-insensitive exact name filter for categories, groups and own platforms."""
    name: str | None = None


@dataclass(frozen=True)
class MediaItemGroupFilter:
    """Explicit group_ids win; otherwise any_group/no_group select set/unset groups."""
    any_group: bool = False
    no_group: bool = False
    group_ids: tuple[UUID, ...] = ()


@dataclass(frozen=True)
class MediaItemOwnPlatformFilter:
    any_own_platform: bool = False
    no_own_platform: bool = False
    own_platform_ids: tuple[UUID, ...] = ()


@dataclass(frozen=True)
class MediaItemFilter:
    importance_levels: tuple[Importance, ...] = ()
    groups: MediaItemGroupFilter | None = None
    own_platforms: MediaItemOwnPlatformFilter | None = None
    complete: bool | None = None
    name: str | None = None


@dataclass(frozen=True)
class MediaItemSortBy:
    field: MediaItemSortField
    ascending: bool = True
