"""User schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Self
from uuid import UUID

from pydantic import Field, model_validator

from recipe_share.schemas.base import NonBlankStr, RecordData, RecordInput


class UserCreate(RecordInput):
    """Registration payload."""

    username: NonBlankStr
    email: NonBlankStr
    profile_image: str | None = None
    bio: str | None = None


class UserProfileUpdate(RecordInput):
    """Partial profile edit; only fields that were provided are written."""

    username: NonBlankStr | None = None
    email: NonBlankStr | None = None
    profile_image: str | None = None
    bio: str | None = None

    @model_validator(mode="after")
    def _required_fields_not_cleared(self) -> Self:
        for name in ("username", "email"):
            if name in self.model_fields_set and getattr(self, name) is None:
                msg = f"{name} cannot be cleared"
                raise ValueError(msg)
        return self


class UserData(RecordData):
    """Stored user as returned to callers."""

    id: UUID
    username: str
    email: str
    profile_image: str | None = None
    bio: str | None = None
    favorite_recipes: list[UUID] = Field(
        default_factory=list,
        description="Favorite recipe ids in the order they were added",
    )
    created_at: datetime
