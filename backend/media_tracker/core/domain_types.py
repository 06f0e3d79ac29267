"""Domain Types - identifiers, enums and the reference union shared by every entity.

Invariants:
    - UserId, CategoryId, GroupId, OwnPlatformId, MediaItemId wrap UUIDs; controller
      signatures take these, never a bare UUID
    - MediaType is a closed set; adding a member requires a MediaItemFactory binding
    - A reference is either Unresolved(id) or Resolved(entity), never a bare union
    - ref_id() is the only way to read the id behind a reference

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost
    - str Enums for values that cross the HTTP boundary, IntEnum for importance
      (stored as an integer so it sorts numerically)
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Generic, NewType, Protocol, TypeVar, Union
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
CategoryId = NewType("CategoryId", UUID)
GroupId = NewType("GroupId", UUID)
OwnPlatformId = NewType("OwnPlatformId", UUID)
MediaItemId = NewType("MediaItemId", UUID)


class PersistedEntity(Protocol):
    """Anything with a store identifier (None before the first save)."""
    id: UUID | None


# ─── References ──────────────────────────────────────────────────

T = TypeVar("T", bound=PersistedEntity)


@dataclass(frozen=True)
class Unresolved(Generic[T]):
    """Reference holding only the id of the target entity."""
    id: UUID


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """Reference whose target was populated from the store."""
    entity: T


Ref = Union[Unresolved[T], Resolved[T]]


def ref_id(ref: Ref) -> UUID:
    """Extract the target id of a reference."""
    match ref:
        case Unresolved(id=target_id):
            return target_id
        case Resolved(entity=entity):
            if entity.id is None:
                raise ValueError("Resolved reference points to an unsaved entity")
            return entity.id
    raise TypeError(f"Not a reference: {ref!r}")


def optional_ref_id(ref: Ref | None) -> UUID | None:
    return ref_id(ref) if ref is not None else None


# ─── Enums ───────────────────────────────────────────────────────

class MediaType(str, Enum):
    """Media type of a category: decides which media item controller governs it."""
    BOOK = "BOOK"
    MOVIE = "MOVIE"
    TV_SHOW = "TV_SHOW"
    VIDEOGAME = "VIDEOGAME"


class Importance(IntEnum):
    """Importance level of a media item."""
    NONE = 100
    LOW = 200
    MEDIUM = 300
    HIGH = 400


class MediaItemSortField(str, Enum):
    """Sort fields for media items. The last four are only valid for one media type."""
    IMPORTANCE = "IMPORTANCE"
    NAME = "NAME"
    GROUP = "GROUP"
    OWN_PLATFORM = "OWN_PLATFORM"
    COMPLETION_DATE = "COMPLETION_DATE"
    ACTIVE = "ACTIVE"
    RELEASE_DATE = "RELEASE_DATE"
    DIRECTOR = "DIRECTOR"
    AUTHOR = "AUTHOR"
    CREATOR = "CREATOR"
    DEVELOPER = "DEVELOPER"
