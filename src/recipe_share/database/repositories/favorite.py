"""Favorite (user -> recipe weak reference) repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from recipe_share.core.exceptions import DuplicateKeyException, NotFoundException
from recipe_share.database.models import UserFavoriteRecipe, utcnow
from recipe_share.database.repositories.base import (
    is_foreign_key_violation,
    is_unique_violation,
)


if TYPE_CHECKING:
    import uuid
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession


class FavoriteRepository:
    """Data access for ``user_favorite_recipes``."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find(
        self,
        user_id: uuid.UUID,
        recipe_id: uuid.UUID,
    ) -> UserFavoriteRecipe | None:
        """Get the favorite row linking ``user_id`` to ``recipe_id``, if any."""
        return await self._session.scalar(
            select(UserFavoriteRecipe).where(
                UserFavoriteRecipe.user_id == user_id,
                UserFavoriteRecipe.recipe_id == recipe_id,
            )
        )

    async def add(
        self,
        user_id: uuid.UUID,
        recipe_id: uuid.UUID,
        now: datetime | None = None,
    ) -> UserFavoriteRecipe:
        """Append ``recipe_id`` to the user's favorites.

        Raises:
            DuplicateKeyException: If the recipe is already a favorite, e.g.
                when a concurrent toggle by the same user added it first.
            NotFoundException: If the recipe was deleted before the insert.
        """
        favorite = UserFavoriteRecipe(
            user_id=user_id,
            recipe_id=recipe_id,
            favorited_at=now or utcnow(),
        )
        self._session.add(favorite)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(
                e,
                "uq_user_favorite_recipes_user_id_recipe_id",
                "user_favorite_recipes",
                ("user_id", "recipe_id"),
            ):
                raise DuplicateKeyException(
                    "Favorite", "favoriteRecipes", recipe_id
                ) from e
            if is_foreign_key_violation(
                e, "fk_user_favorite_recipes_recipe_id_recipes"
            ):
                raise NotFoundException("Recipe", recipe_id) from e
            raise
        return favorite

    async def remove(self, user_id: uuid.UUID, recipe_id: uuid.UUID) -> int:
        """Delete the favorite linking ``user_id`` to ``recipe_id``.

        Returns:
            Number of rows removed; 0 when a concurrent toggle removed it first.
        """
        result = await self._session.execute(
            delete(UserFavoriteRecipe)
            .where(
                UserFavoriteRecipe.user_id == user_id,
                UserFavoriteRecipe.recipe_id == recipe_id,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def remove_recipe_everywhere(self, recipe_id: uuid.UUID) -> int:
        """Pull ``recipe_id`` out of every user's favorites.

        Returns:
            Number of favorite rows removed.
        """
        result = await self._session.execute(
            delete(UserFavoriteRecipe)
            .where(UserFavoriteRecipe.recipe_id == recipe_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def count_for_recipe(self, recipe_id: uuid.UUID) -> int:
        """Number of users who have ``recipe_id`` among their favorites."""
        count = await self._session.scalar(
            select(func.count())
            .select_from(UserFavoriteRecipe)
            .where(UserFavoriteRecipe.recipe_id == recipe_id)
        )
        return count or 0
