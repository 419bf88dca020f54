"""User record definition.

A user's favorite recipes are kept as one row per favorite in
``user_favorite_recipes``; the autoincrement id preserves the order in which
favorites were added.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_share.database.models.base import AutoIncrementId, BaseDatabaseModel, utcnow


class User(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'users' table.

    ``username`` and ``email`` are each unique; the unique indexes double as
    the lookup index for login/profile queries.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    profile_image: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    favorites: Mapped[list[UserFavoriteRecipe]] = relationship(
        "UserFavoriteRecipe",
        cascade="all, delete-orphan",
        order_by="UserFavoriteRecipe.favorite_id",
        lazy="selectin",
    )

    @property
    def favorite_recipe_ids(self) -> list[uuid.UUID]:
        """Favorite recipe ids in the order they were added."""
        return [favorite.recipe_id for favorite in self.favorites]


class UserFavoriteRecipe(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'user_favorite_recipes' table.

    A weak reference from a user to a recipe: it never owns the recipe, and
    it is removed when the recipe is deleted.
    """

    __tablename__ = "user_favorite_recipes"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "recipe_id",
            name="uq_user_favorite_recipes_user_id_recipe_id",
        ),
        Index("ix_user_favorite_recipes_recipe_id", "recipe_id"),
    )

    favorite_id: Mapped[int] = mapped_column(
        AutoIncrementId,
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    recipe_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("recipes.recipe_id", ondelete="CASCADE"),
        nullable=False,
    )
    favorited_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
