"""Favorites service.

A favorite is recorded twice: as an entry in the user's favorites and as
the recipe's ``favorites_count``. Both writes happen in one transaction, so
either both land or neither does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_share.core.exceptions import DuplicateKeyException, NotFoundException
from recipe_share.database.connection import get_session_factory, session_scope
from recipe_share.database.models import utcnow
from recipe_share.database.repositories import (
    FavoriteRepository,
    RecipeRepository,
    UserRepository,
)
from recipe_share.observability.logging import get_logger, log_context
from recipe_share.schemas import FavoriteToggleResult


if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = get_logger(__name__)


class FavoritesService:
    """Favorite toggling and count maintenance."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session_factory: Optional session factory. If None, uses the
                global factory from ``init_database``.
        """
        self._session_factory = session_factory

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Session factory used for each operation."""
        if self._session_factory is not None:
            return self._session_factory
        return get_session_factory()

    async def toggle_favorite(
        self,
        user_id: uuid.UUID,
        recipe_id: uuid.UUID,
    ) -> FavoriteToggleResult:
        """Add ``recipe_id`` to the user's favorites, or remove it if present.

        The recipe's ``favorites_count`` moves by +1 or -1 with a relative
        update in the same transaction. Toggling twice restores both the
        favorites list and the count. The count only moves when a favorite
        row was actually inserted or deleted, so a removal that lost a race
        to a concurrent toggle leaves it unchanged.

        Raises:
            NotFoundException: If the user or the recipe does not exist.
            DuplicateKeyException: If a concurrent toggle by the same user
                added the favorite first; nothing is written.
        """
        with log_context(
            operation="toggle_favorite",
            user_id=str(user_id),
            recipe_id=str(recipe_id),
        ):
            try:
                async with session_scope(self.session_factory) as session:
                    if not await UserRepository(session).exists(user_id):
                        raise NotFoundException("User", user_id)

                    recipes = RecipeRepository(session)
                    if not await recipes.exists(recipe_id):
                        raise NotFoundException("Recipe", recipe_id)

                    favorites = FavoriteRepository(session)
                    now = utcnow()
                    existing = await favorites.find(user_id, recipe_id)
                    if existing is None:
                        await favorites.add(user_id, recipe_id, now)
                        delta = 1
                    elif await favorites.remove(user_id, recipe_id):
                        delta = -1
                    else:
                        # A concurrent toggle removed the row after it was read;
                        # that toggle already decremented the count.
                        logger.warning(
                            "Favorite already removed by a concurrent toggle"
                        )
                        delta = 0

                    if delta:
                        count = await recipes.adjust_favorites_count(
                            recipe_id, delta, now
                        )
                    else:
                        count = await recipes.get_favorites_count(recipe_id)
                    if count is None:
                        # Recipe deleted between the existence check and the update.
                        raise NotFoundException("Recipe", recipe_id)
            except DuplicateKeyException:
                logger.warning("Concurrent favorite toggle rejected")
                raise

            logger.info("Toggled favorite", favorited=delta > 0, favorites_count=count)
            return FavoriteToggleResult(
                user_id=user_id,
                recipe_id=recipe_id,
                favorited=delta > 0,
                favorites_count=count,
            )

    async def reconcile_favorites_count(self, recipe_id: uuid.UUID) -> int:
        """Recompute ``favorites_count`` from the users' favorites.

        Repair path for counts that drifted, e.g. after rows were edited
        outside this service.

        Returns:
            The corrected count.

        Raises:
            NotFoundException: If no recipe has this id.
        """
        with log_context(operation="reconcile_favorites_count", recipe_id=str(recipe_id)):
            async with session_scope(self.session_factory) as session:
                recipes = RecipeRepository(session)
                if not await recipes.exists(recipe_id):
                    raise NotFoundException("Recipe", recipe_id)
                actual = await FavoriteRepository(session).count_for_recipe(recipe_id)
                count = await recipes.set_favorites_count(recipe_id, actual)
                if count is None:
                    raise NotFoundException("Recipe", recipe_id)

            logger.info("Reconciled favorites count", favorites_count=count)
            return count
