"""Container Schemas - categories, groups and own platforms at the API boundary.

Invariants:
    - Names are stripped and non-empty
    - Owner and category always come from the path, never from the body
    - allowSameName=false asks the save to reject a name already used in the category
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from media_tracker.core.domain_types import MediaType, Unresolved, ref_id
from media_tracker.core.entities import Category, Group, NameFilter, OwnPlatform


class NamedBody(BaseModel):
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class NameFilterBody(BaseModel):
    name: str | None = Field(None, max_length=255)

    def to_internal(self) -> NameFilter:
        return NameFilter(name=self.name)


# ─── Categories ──────────────────────────────────────────────────

class CategoryBody(NamedBody):
    media_type: MediaType
    color: str | None = Field(None, max_length=20)

    def to_internal(
        self, user_id: UUID, category_id: UUID | None = None,
    ) -> Category:
        return Category(
            id=category_id, name=self.name, media_type=self.media_type,
            owner=Unresolved(user_id), color=self.color,
        )


class CategoryResponse(BaseModel):
    id: UUID
    name: str
    media_type: MediaType
    color: str | None = None

    @classmethod
    def from_internal(cls, category: Category) -> "CategoryResponse":
        return cls(
            id=category.id, name=category.name,
            media_type=category.media_type, color=category.color,
        )


# ─── Groups ──────────────────────────────────────────────────────

class GroupBody(NamedBody):
    allow_same_name: bool = Field(True, alias="allowSameName")

    def to_internal(
        self, user_id: UUID, category_id: UUID, group_id: UUID | None = None,
    ) -> Group:
        return Group(
            id=group_id, name=self.name,
            owner=Unresolved(user_id), category=Unresolved(category_id),
        )


class GroupResponse(BaseModel):
    id: UUID
    name: str
    category_id: UUID

    @classmethod
    def from_internal(cls, group: Group) -> "GroupResponse":
        return cls(
            id=group.id, name=group.name, category_id=ref_id(group.category),
        )


# ─── Own Platforms ───────────────────────────────────────────────

class OwnPlatformBody(NamedBody):
    color: str | None = Field(None, max_length=20)
    icon: str | None = Field(None, max_length=100)

    def to_internal(
        self,
        user_id: UUID,
        category_id: UUID,
        own_platform_id: UUID | None = None,
    ) -> OwnPlatform:
        return OwnPlatform(
            id=own_platform_id, name=self.name,
            owner=Unresolved(user_id), category=Unresolved(category_id),
            color=self.color, icon=self.icon,
        )


class OwnPlatformMergeBody(BaseModel):
    """The first id survives and receives merged_data."""
    own_platform_ids: list[UUID] = Field(min_length=2)
    merged_data: OwnPlatformBody


class OwnPlatformResponse(BaseModel):
    id: UUID
    name: str
    category_id: UUID
    color: str | None = None
    icon: str | None = None

    @classmethod
    def from_internal(cls, own_platform: OwnPlatform) -> "OwnPlatformResponse":
        return cls(
            id=own_platform.id, name=own_platform.name,
            category_id=ref_id(own_platform.category),
            color=own_platform.color, icon=own_platform.icon,
        )
