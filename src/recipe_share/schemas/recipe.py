"""Recipe and comment schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Self
from uuid import UUID

from pydantic import Field, model_validator

from recipe_share.schemas.base import (
    NonBlankStr,
    NonBlankText,
    RecordData,
    RecordInput,
    TagStr,
)


RequiredEntries = Annotated[list[NonBlankText], Field(min_length=1)]


class AuthorReference(RecordInput):
    """Author of a new recipe.

    ``username`` and ``profile_image`` are copied from the user when omitted.
    """

    author_id: UUID
    username: str | None = None
    profile_image: str | None = None


class RecipeCreate(RecordInput):
    """Payload for creating a recipe."""

    title: NonBlankStr
    description: str | None = None
    ingredients: RequiredEntries
    steps: RequiredEntries
    tags: list[TagStr] = Field(default_factory=list)
    author: AuthorReference


class RecipeUpdate(RecordInput):
    """Partial recipe edit; only fields that were provided are written."""

    title: NonBlankStr | None = None
    description: str | None = None
    ingredients: RequiredEntries | None = None
    steps: RequiredEntries | None = None
    tags: list[TagStr] | None = None

    @model_validator(mode="after")
    def _required_fields_not_cleared(self) -> Self:
        for name in ("title", "ingredients", "steps", "tags"):
            if name in self.model_fields_set and getattr(self, name) is None:
                msg = f"{name} cannot be cleared"
                raise ValueError(msg)
        return self


class CommentCreate(RecordInput):
    """Payload for appending a comment to a recipe.

    ``username`` is the author's name at posting time; it is looked up from
    the user when omitted.
    """

    user_id: UUID
    username: NonBlankStr | None = None
    text: NonBlankText


class AuthorSnapshot(RecordData):
    """Author details embedded in a recipe."""

    author_id: UUID
    username: str | None = None
    profile_image: str | None = None


class CommentData(RecordData):
    """Comment embedded in a recipe."""

    user_id: UUID
    username: str
    text: str
    created_at: datetime


class RecipeData(RecordData):
    """Stored recipe as returned to callers."""

    id: UUID
    title: str
    description: str | None = None
    ingredients: list[str]
    steps: list[str]
    tags: list[str] = Field(default_factory=list)
    author: AuthorSnapshot
    comments: list[CommentData] = Field(default_factory=list)
    favorites_count: int = 0
    created_at: datetime
    updated_at: datetime


class FavoriteToggleResult(RecordData):
    """Outcome of a favorite toggle."""

    user_id: UUID
    recipe_id: UUID
    favorited: bool
    favorites_count: int
