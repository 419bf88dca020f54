"""Recipe service.

Owns the transaction for each recipe operation:
- Creating, editing and deleting recipes
- Appending comments
- Title, tag and author queries
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_share.database.connection import get_session_factory, session_scope
from recipe_share.database.models import utcnow
from recipe_share.database.repositories import (
    DEFAULT_LIMIT,
    FavoriteRepository,
    RecipeRepository,
    UserRepository,
)
from recipe_share.mappers import build_comment_row, build_recipe_data, build_recipe_row
from recipe_share.observability.logging import get_logger, log_context
from recipe_share.schemas import CommentCreate, RecipeCreate, RecipeUpdate, parse_input


if TYPE_CHECKING:
    import uuid
    from collections.abc import Mapping, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from recipe_share.database.models import Recipe
    from recipe_share.schemas import RecipeData

logger = get_logger(__name__)


def _to_data(recipes: list[Recipe]) -> list[RecipeData]:
    return [build_recipe_data(recipe) for recipe in recipes]


class RecipeService:
    """Operations on recipes and their embedded comments."""

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

    async def create_recipe(self, data: RecipeCreate | Mapping[str, Any]) -> RecipeData:
        """Create a recipe with no comments and a favorites count of 0.

        The author must exist. Author username and profile image are copied
        from the user unless the payload supplies them.

        Raises:
            ValidationException: If title, ingredients, steps or author is
                missing or empty.
            NotFoundException: If the author does not exist.
        """
        payload = parse_input(RecipeCreate, data, "Recipe")
        author = payload.author

        with log_context(operation="create_recipe", author_id=str(author.author_id)):
            async with session_scope(self.session_factory) as session:
                user = await UserRepository(session).require(author.author_id)
                username = (
                    author.username
                    if "username" in author.model_fields_set
                    else user.username
                )
                profile_image = (
                    author.profile_image
                    if "profile_image" in author.model_fields_set
                    else user.profile_image
                )
                recipe = await RecipeRepository(session).add(
                    build_recipe_row(
                        payload,
                        author_username=username,
                        author_profile_image=profile_image,
                    )
                )
                result = build_recipe_data(recipe)

            logger.info("Created recipe", recipe_id=str(result.id), tags=len(result.tags))
            return result

    async def get_recipe(self, recipe_id: uuid.UUID) -> RecipeData:
        """Get a recipe with its comments.

        Raises:
            NotFoundException: If no recipe has this id.
        """
        async with session_scope(self.session_factory) as session:
            recipe = await RecipeRepository(session).require(recipe_id)
            return build_recipe_data(recipe)

    async def update_recipe(
        self,
        recipe_id: uuid.UUID,
        data: RecipeUpdate | Mapping[str, Any],
    ) -> RecipeData:
        """Edit recipe fields; only the provided fields are written.

        Comments, author and ``favorites_count`` are not editable here.

        Raises:
            ValidationException: If a required field is blank or cleared.
            NotFoundException: If no recipe has this id.
        """
        payload = parse_input(RecipeUpdate, data, "Recipe")
        changes = payload.model_dump(include=payload.model_fields_set, by_alias=False)

        with log_context(operation="update_recipe", recipe_id=str(recipe_id)):
            async with session_scope(self.session_factory) as session:
                recipes = RecipeRepository(session)
                recipe = await recipes.require(recipe_id)
                if changes:
                    await recipes.update(recipe, dict(changes))
                result = build_recipe_data(recipe)

            logger.info("Updated recipe", fields=sorted(changes))
            return result

    async def delete_recipe(self, recipe_id: uuid.UUID) -> None:
        """Delete a recipe.

        Its comments go with it, and its id is pulled from every user's
        favorites in the same transaction.

        Raises:
            NotFoundException: If no recipe has this id.
        """
        with log_context(operation="delete_recipe", recipe_id=str(recipe_id)):
            async with session_scope(self.session_factory) as session:
                recipes = RecipeRepository(session)
                recipe = await recipes.require(recipe_id)
                removed = await FavoriteRepository(session).remove_recipe_everywhere(
                    recipe_id
                )
                await recipes.delete(recipe)

            logger.info("Deleted recipe", favorites_removed=removed)

    async def add_comment(
        self,
        recipe_id: uuid.UUID,
        data: CommentCreate | Mapping[str, Any],
    ) -> RecipeData:
        """Append a comment to a recipe.

        Comments keep insertion order. The commenter's username is copied
        from the user when the payload omits it.

        Raises:
            ValidationException: If text or user id is missing or empty.
            NotFoundException: If the recipe or the commenting user does
                not exist.
        """
        payload = parse_input(CommentCreate, data, "Comment")

        with log_context(
            operation="add_comment",
            recipe_id=str(recipe_id),
            user_id=str(payload.user_id),
        ):
            async with session_scope(self.session_factory) as session:
                recipes = RecipeRepository(session)
                recipe = await recipes.require(recipe_id)
                user = await UserRepository(session).require(payload.user_id)
                now = utcnow()
                await recipes.append_comment(
                    recipe,
                    build_comment_row(
                        payload,
                        username=payload.username or user.username,
                        now=now,
                    ),
                    now,
                )
                result = build_recipe_data(recipe)

            logger.info("Added comment", comments=len(result.comments))
            return result

    async def search_by_title(
        self,
        title: str,
        *,
        prefix: bool = False,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[RecipeData]:
        """Recipes whose title matches exactly, or starts with ``title``."""
        async with session_scope(self.session_factory) as session:
            found = await RecipeRepository(session).find_by_title(
                title, prefix=prefix, limit=limit, offset=offset
            )
            return _to_data(found)

    async def search_by_tags(
        self,
        tags: Sequence[str],
        *,
        match_all: bool = False,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[RecipeData]:
        """Recipes carrying any of ``tags``, or all of them with ``match_all``."""
        async with session_scope(self.session_factory) as session:
            found = await RecipeRepository(session).find_by_tags(
                list(tags), match_all=match_all, limit=limit, offset=offset
            )
            return _to_data(found)

    async def search_by_title_and_tags(
        self,
        title: str,
        tags: Sequence[str],
        *,
        prefix: bool = False,
        match_all: bool = False,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[RecipeData]:
        """Combined title and tag search."""
        async with session_scope(self.session_factory) as session:
            found = await RecipeRepository(session).find_by_title_and_tags(
                title,
                list(tags),
                prefix=prefix,
                match_all=match_all,
                limit=limit,
                offset=offset,
            )
            return _to_data(found)

    async def list_by_author(
        self,
        author_id: uuid.UUID,
        *,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[RecipeData]:
        """Recipes by one author, newest first. Unknown authors yield []."""
        async with session_scope(self.session_factory) as session:
            found = await RecipeRepository(session).find_by_author(
                author_id, limit=limit, offset=offset
            )
            return _to_data(found)

    async def refresh_author_snapshot(self, user_id: uuid.UUID) -> int:
        """Copy a user's current username and profile image onto their recipes.

        Returns:
            Number of recipes rewritten.

        Raises:
            NotFoundException: If no user has this id.
        """
        with log_context(operation="refresh_author_snapshot", user_id=str(user_id)):
            async with session_scope(self.session_factory) as session:
                user = await UserRepository(session).require(user_id)
                updated = await RecipeRepository(session).update_author_snapshot(
                    user_id, user.username, user.profile_image
                )

            logger.info("Refreshed author snapshot", recipes=updated)
            return updated
