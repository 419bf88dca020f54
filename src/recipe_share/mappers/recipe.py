"""Recipe mappers.

Row construction sets every default explicitly (ids, timestamps,
``favorites_count``) instead of relying on column defaults.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from recipe_share.database.models import (
    Recipe,
    RecipeComment,
    RecipeTag,
    as_utc,
    utcnow,
)
from recipe_share.schemas import AuthorSnapshot, CommentData, RecipeData


if TYPE_CHECKING:
    from datetime import datetime

    from recipe_share.schemas import CommentCreate, RecipeCreate


def build_tag_entries(tags: list[str], title: str) -> list[RecipeTag]:
    """One tag row per tag, in order, each carrying the recipe title."""
    return [
        RecipeTag(position=position, tag=tag, title=title)
        for position, tag in enumerate(tags)
    ]


def build_recipe_row(
    data: RecipeCreate,
    *,
    author_username: str | None,
    author_profile_image: str | None,
    now: datetime | None = None,
) -> Recipe:
    """Construct a new recipe row with no comments and no favorites."""
    now = now or utcnow()
    return Recipe(
        recipe_id=uuid.uuid4(),
        title=data.title,
        description=data.description,
        ingredients=list(data.ingredients),
        steps=list(data.steps),
        author_id=data.author.author_id,
        author_username=author_username,
        author_profile_image=author_profile_image,
        favorites_count=0,
        created_at=now,
        updated_at=now,
        tag_entries=build_tag_entries(data.tags, data.title),
        comments=[],
    )


def build_comment_row(
    data: CommentCreate,
    *,
    username: str,
    now: datetime | None = None,
) -> RecipeComment:
    """Construct a comment row; the owning recipe sets ``recipe_id`` on append."""
    return RecipeComment(
        user_id=data.user_id,
        username=username,
        text=data.text,
        created_at=now or utcnow(),
    )


def build_comment_data(comment: RecipeComment) -> CommentData:
    """Map a comment row to its read model."""
    return CommentData(
        user_id=comment.user_id,
        username=comment.username,
        text=comment.text,
        created_at=as_utc(comment.created_at),
    )


def build_recipe_data(recipe: Recipe) -> RecipeData:
    """Map a recipe row (with its tags and comments loaded) to its read model."""
    return RecipeData(
        id=recipe.recipe_id,
        title=recipe.title,
        description=recipe.description,
        ingredients=list(recipe.ingredients),
        steps=list(recipe.steps),
        tags=recipe.tags,
        author=AuthorSnapshot(
            author_id=recipe.author_id,
            username=recipe.author_username,
            profile_image=recipe.author_profile_image,
        ),
        comments=[build_comment_data(comment) for comment in recipe.comments],
        favorites_count=recipe.favorites_count,
        created_at=as_utc(recipe.created_at),
        updated_at=as_utc(recipe.updated_at),
    )
