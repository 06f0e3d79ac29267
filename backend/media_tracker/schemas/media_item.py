"""Media Item Schemas - bodies, filters and responses for the four media item APIs.

Invariants:
    - Owner and category come from the path; group / own platform by id in the body
    - Responses expose group and own platform as {id, name...} when populated, {id}
      otherwise
    - Sort fields are validated against MediaItemSortField; a field valid for another
      media type is rejected by the controller (GENERIC)

Design Decisions:
    - One base body/response plus a subtype_fields tuple per media type keeps the four
      APIs identical apart from their own fields
"""

from dataclasses import asdict
from datetime import date
from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from media_tracker.core.domain_types import (
    Importance, MediaItemSortField, Resolved, Unresolved, ref_id,
)
from media_tracker.core.entities import (
    Book, MediaItem, MediaItemFilter, MediaItemGroupFilter,
    MediaItemOwnPlatformFilter, MediaItemSortBy, Movie, TvShow, TvShowSeason,
    Videogame,
)


# ─── Bodies ──────────────────────────────────────────────────────

class MediaItemBody(BaseModel):
    """Fields shared by every media type."""
    entity_class: ClassVar[type[MediaItem]] = MediaItem
    subtype_fields: ClassVar[tuple[str, ...]] = ()

    name: str = Field(min_length=1, max_length=255)
    importance: Importance = Importance.NONE
    group_id: UUID | None = None
    order_in_group: int | None = Field(None, ge=0)
    own_platform_id: UUID | None = None
    genres: list[str] = []
    description: str | None = Field(None, max_length=10_000)
    user_comment: str | None = Field(None, max_length=10_000)
    completed_on: list[date] = []
    active: bool = False
    marked_as_redo: bool = False
    release_date: date | None = None
    catalog_id: str | None = Field(None, max_length=255)
    image_url: str | None = Field(None, max_length=2048)
    allow_same_name: bool = Field(True, alias="allowSameName")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    def to_internal(
        self,
        user_id: UUID,
        category_id: UUID,
        media_item_id: UUID | None = None,
    ) -> MediaItem:
        return self.entity_class(
            id=media_item_id,
            name=self.name,
            owner=Unresolved(user_id),
            category=Unresolved(category_id),
            importance=self.importance,
            group=Unresolved(self.group_id) if self.group_id else None,
            order_in_group=self.order_in_group,
            own_platform=(
                Unresolved(self.own_platform_id) if self.own_platform_id else None
            ),
            genres=list(self.genres),
            description=self.description,
            user_comment=self.user_comment,
            completed_on=list(self.completed_on),
            active=self.active,
            marked_as_redo=self.marked_as_redo,
            release_date=self.release_date,
            catalog_id=self.catalog_id,
            image_url=self.image_url,
            **self.subtype_values(),
        )

    def subtype_values(self) -> dict:
        return {name: getattr(self, name) for name in self.subtype_fields}


class MovieBody(MediaItemBody):
    entity_class = Movie
    subtype_fields = ("directors", "duration_minutes")

    directors: list[str] = []
    duration_minutes: int | None = Field(None, ge=0)


class BookBody(MediaItemBody):
    entity_class = Book
    subtype_fields = ("authors", "pages_number")

    authors: list[str] = []
    pages_number: int | None = Field(None, ge=0)


class TvShowSeasonBody(BaseModel):
    number: int
    episodes_number: int | None = Field(None, ge=0)
    watched_episodes_number: int | None = Field(None, ge=0)


class TvShowBody(MediaItemBody):
    entity_class = TvShow
    subtype_fields = (
        "creators", "average_episode_runtime_minutes", "in_production",
        "next_episode_air_date",
    )

    creators: list[str] = []
    average_episode_runtime_minutes: int | None = Field(None, ge=0)
    seasons: list[TvShowSeasonBody] = []
    in_production: bool | None = None
    next_episode_air_date: date | None = None

    def subtype_values(self) -> dict:
        values = super().subtype_values()
        values["seasons"] = [
            TvShowSeason(**season.model_dump()) for season in self.seasons
        ]
        return values


class VideogameBody(MediaItemBody):
    entity_class = Videogame
    subtype_fields = ("developers", "publishers", "platforms", "average_length_hours")

    developers: list[str] = []
    publishers: list[str] = []
    platforms: list[str] = []
    average_length_hours: float | None = Field(None, ge=0)


# ─── Filter, sort and search ─────────────────────────────────────

class GroupFilterBody(BaseModel):
    any_group: bool = False
    no_group: bool = False
    group_ids: list[UUID] = []


class OwnPlatformFilterBody(BaseModel):
    any_own_platform: bool = False
    no_own_platform: bool = False
    own_platform_ids: list[UUID] = []


class MediaItemFilterBody(BaseModel):
    importance_levels: list[Importance] = []
    groups: GroupFilterBody | None = None
    own_platforms: OwnPlatformFilterBody | None = None
    complete: bool | None = None
    name: str | None = Field(None, max_length=255)

    def to_internal(self) -> MediaItemFilter:
        return MediaItemFilter(
            importance_levels=tuple(self.importance_levels),
            groups=MediaItemGroupFilter(
                any_group=self.groups.any_group,
                no_group=self.groups.no_group,
                group_ids=tuple(self.groups.group_ids),
            ) if self.groups else None,
            own_platforms=MediaItemOwnPlatformFilter(
                any_own_platform=self.own_platforms.any_own_platform,
                no_own_platform=self.own_platforms.no_own_platform,
                own_platform_ids=tuple(self.own_platforms.own_platform_ids),
            ) if self.own_platforms else None,
            complete=self.complete,
            name=self.name,
        )


class SortByBody(BaseModel):
    field: MediaItemSortField
    ascending: bool = True


class FilterMediaItemsRequest(BaseModel):
    filter: MediaItemFilterBody | None = None
    sort_by: list[SortByBody] = []

    def internal_filter(self) -> MediaItemFilter | None:
        return self.filter.to_internal() if self.filter else None

    def internal_sort_by(self) -> list[MediaItemSortBy] | None:
        if not self.sort_by:
            return None
        return [MediaItemSortBy(s.field, s.ascending) for s in self.sort_by]


class SearchMediaItemsRequest(BaseModel):
    term: str = Field(min_length=1, max_length=255)
    filter: MediaItemFilterBody | None = None

    def internal_filter(self) -> MediaItemFilter | None:
        return self.filter.to_internal() if self.filter else None


# ─── Responses ───────────────────────────────────────────────────

class GroupRefResponse(BaseModel):
    id: UUID
    name: str | None = None


class OwnPlatformRefResponse(BaseModel):
    id: UUID
    name: str | None = None
    color: str | None = None
    icon: str | None = None


def _group_ref(ref) -> GroupRefResponse | None:
    match ref:
        case None:
            return None
        case Resolved(entity=group):
            return GroupRefResponse(id=group.id, name=group.name)
        case Unresolved(id=group_id):
            return GroupRefResponse(id=group_id)


def _own_platform_ref(ref) -> OwnPlatformRefResponse | None:
    match ref:
        case None:
            return None
        case Resolved(entity=own_platform):
            return OwnPlatformRefResponse(
                id=own_platform.id, name=own_platform.name,
                color=own_platform.color, icon=own_platform.icon,
            )
        case Unresolved(id=own_platform_id):
            return OwnPlatformRefResponse(id=own_platform_id)


class MediaItemResponse(BaseModel):
    subtype_fields: ClassVar[tuple[str, ...]] = ()

    id: UUID
    name: str
    category_id: UUID
    importance: Importance
    group: GroupRefResponse | None = None
    order_in_group: int | None = None
    own_platform: OwnPlatformRefResponse | None = None
    genres: list[str] = []
    description: str | None = None
    user_comment: str | None = None
    completed_on: list[date] = []
    completed_last_on: date | None = None
    active: bool = False
    marked_as_redo: bool = False
    release_date: date | None = None
    catalog_id: str | None = None
    image_url: str | None = None

    @classmethod
    def from_internal(cls, item: MediaItem):
        return cls(
            id=item.id,
            name=item.name,
            category_id=ref_id(item.category),
            importance=item.importance,
            group=_group_ref(item.group),
            order_in_group=item.order_in_group,
            own_platform=_own_platform_ref(item.own_platform),
            genres=item.genres,
            description=item.description,
            user_comment=item.user_comment,
            completed_on=item.completed_on,
            completed_last_on=item.completed_last_on,
            active=item.active,
            marked_as_redo=item.marked_as_redo,
            release_date=item.release_date,
            catalog_id=item.catalog_id,
            image_url=item.image_url,
            **cls.subtype_values(item),
        )

    @classmethod
    def subtype_values(cls, item: MediaItem) -> dict:
        return {name: getattr(item, name) for name in cls.subtype_fields}


class MovieResponse(MediaItemResponse):
    subtype_fields = MovieBody.subtype_fields

    directors: list[str] = []
    duration_minutes: int | None = None


class BookResponse(MediaItemResponse):
    subtype_fields = BookBody.subtype_fields

    authors: list[str] = []
    pages_number: int | None = None


class TvShowResponse(MediaItemResponse):
    subtype_fields = TvShowBody.subtype_fields

    creators: list[str] = []
    average_episode_runtime_minutes: int | None = None
    seasons: list[TvShowSeasonBody] = []
    in_production: bool | None = None
    next_episode_air_date: date | None = None

    @classmethod
    def subtype_values(cls, item: TvShow) -> dict:
        values = super().subtype_values(item)
        values["seasons"] = [
            TvShowSeasonBody(**asdict(season)) for season in item.seasons
        ]
        return values


class VideogameResponse(MediaItemResponse):
    subtype_fields = VideogameBody.subtype_fields

    developers: list[str] = []
    publishers: list[str] = []
    platforms: list[str] = []
    average_length_hours: float | None = None
