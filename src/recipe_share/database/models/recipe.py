"""Recipe record definition.

The recipe row carries its author snapshot and ordered ingredient/step lists
inline. Tags and comments are owned child rows that only exist through their
recipe and are removed with it.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_share.database.models.base import AutoIncrementId, BaseDatabaseModel, utcnow


StringList = JSON().with_variant(JSONB(), "postgresql")


class Recipe(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipes' table."""

    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_title", "title"),
        Index("ix_recipes_author_id", "author_id"),
    )

    recipe_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    ingredients: Mapped[list[str]] = mapped_column(
        StringList,
        nullable=False,
    )
    steps: Mapped[list[str]] = mapped_column(
        StringList,
        nullable=False,
    )
    # Author snapshot, denormalized for display without a join.
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.user_id"),
        nullable=False,
    )
    author_username: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    author_profile_image: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    favorites_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    tag_entries: Mapped[list[RecipeTag]] = relationship(
        "RecipeTag",
        cascade="all, delete-orphan",
        order_by="RecipeTag.position",
        lazy="selectin",
    )
    comments: Mapped[list[RecipeComment]] = relationship(
        "RecipeComment",
        cascade="all, delete-orphan",
        order_by="RecipeComment.comment_id",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        """Tags in their stored order."""
        return [entry.tag for entry in self.tag_entries]


class RecipeTag(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipe_tags' table.

    One row per (recipe, tag). The recipe title is copied onto each row so
    that ``ix_recipe_tags_title_tag`` holds one entry per (title, tag) pair;
    it must be rewritten whenever the recipe title changes.
    """

    __tablename__ = "recipe_tags"
    __table_args__ = (
        Index("ix_recipe_tags_tag", "tag"),
        Index("ix_recipe_tags_title_tag", "title", "tag"),
        Index("ix_recipe_tags_recipe_id", "recipe_id"),
    )

    tag_id: Mapped[int] = mapped_column(
        AutoIncrementId,
        primary_key=True,
        autoincrement=True,
    )
    recipe_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("recipes.recipe_id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    tag: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )


class RecipeComment(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipe_comments' table.

    Comments are embedded in their recipe: they are loaded with it, appended
    through it, and deleted with it. Insertion order is ``comment_id`` order.
    """

    __tablename__ = "recipe_comments"
    __table_args__ = (Index("ix_recipe_comments_recipe_id", "recipe_id"),)

    comment_id: Mapped[int] = mapped_column(
        AutoIncrementId,
        primary_key=True,
        autoincrement=True,
    )
    recipe_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("recipes.recipe_id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.user_id"),
        nullable=False,
    )
    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
