"""User Schemas - request/response bodies for the users API."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from media_tracker.core.entities import User


class UserBody(BaseModel):
    """User creation/update - name is stripped and non-empty."""
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    def to_internal(self, user_id: UUID | None = None) -> User:
        return User(id=user_id, name=self.name)


class UserResponse(BaseModel):
    id: UUID
    name: str

    @classmethod
    def from_internal(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name)
