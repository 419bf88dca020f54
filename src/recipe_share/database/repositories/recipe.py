"""Recipe data repository.

Query methods map onto the declared indexes:

- ``find_by_title``: ``ix_recipes_title`` (point or prefix)
- ``find_by_tags``: ``ix_recipe_tags_tag``
- ``find_by_title_and_tags``: ``ix_recipe_tags_title_tag``
- ``find_by_author``: ``ix_recipes_author_id``
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import case, func, select, update

from recipe_share.core.exceptions import NotFoundException
from recipe_share.database.models import Recipe, RecipeComment, RecipeTag, utcnow
from recipe_share.mappers import build_tag_entries


if TYPE_CHECKING:
    import uuid
    from collections.abc import Sequence
    from datetime import datetime

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.ext.asyncio import AsyncSession


DEFAULT_LIMIT = 50


def _title_condition(column: Any, title: str, *, prefix: bool) -> ColumnElement[bool]:
    if prefix:
        return column.startswith(title, autoescape=True)
    return column == title


def _tagged_recipe_ids(
    tags: Sequence[str],
    *,
    match_all: bool,
    title: str | None = None,
    prefix: bool = False,
) -> Select[Any]:
    stmt = select(RecipeTag.recipe_id).where(RecipeTag.tag.in_(tags))
    if title is not None:
        stmt = stmt.where(_title_condition(RecipeTag.title, title, prefix=prefix))
    if match_all:
        stmt = stmt.group_by(RecipeTag.recipe_id).having(
            func.count(func.distinct(RecipeTag.tag)) == len(set(tags))
        )
    return stmt


class RecipeRepository:
    """Data access for ``recipes`` and their owned tag and comment rows."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, recipe: Recipe) -> Recipe:
        """Insert a new recipe with its tags."""
        self._session.add(recipe)
        await self._session.flush()
        return recipe

    async def get(self, recipe_id: uuid.UUID) -> Recipe | None:
        """Get a recipe by id, with tags and comments loaded."""
        return await self._session.get(Recipe, recipe_id)

    async def require(self, recipe_id: uuid.UUID) -> Recipe:
        """Get a recipe by id.

        Raises:
            NotFoundException: If no recipe has this id.
        """
        recipe = await self.get(recipe_id)
        if recipe is None:
            raise NotFoundException("Recipe", recipe_id)
        return recipe

    async def exists(self, recipe_id: uuid.UUID) -> bool:
        """Whether a recipe with this id exists, without loading it."""
        found = await self._session.scalar(
            select(Recipe.recipe_id).where(Recipe.recipe_id == recipe_id)
        )
        return found is not None

    async def update(
        self,
        recipe: Recipe,
        changes: dict[str, Any],
        now: datetime | None = None,
    ) -> Recipe:
        """Apply field changes and refresh ``updated_at``.

        A new title is copied onto the tag rows; new tags replace the old
        tag rows entirely.
        """
        tags = changes.pop("tags", None)
        for field, value in changes.items():
            setattr(recipe, field, value)

        if tags is not None:
            recipe.tag_entries = build_tag_entries(tags, recipe.title)
        elif "title" in changes:
            for entry in recipe.tag_entries:
                entry.title = recipe.title

        recipe.updated_at = now or utcnow()
        await self._session.flush()
        return recipe

    async def delete(self, recipe: Recipe) -> None:
        """Delete a recipe; its comments and tag rows go with it."""
        await self._session.delete(recipe)
        await self._session.flush()

    async def append_comment(
        self,
        recipe: Recipe,
        comment: RecipeComment,
        now: datetime | None = None,
    ) -> RecipeComment:
        """Append ``comment`` after the existing comments."""
        recipe.comments.append(comment)
        recipe.updated_at = now or comment.created_at
        await self._session.flush()
        return comment

    async def adjust_favorites_count(
        self,
        recipe_id: uuid.UUID,
        delta: int,
        now: datetime | None = None,
    ) -> int | None:
        """Add ``delta`` to ``favorites_count`` in a single relative UPDATE.

        The stored value is never read back into Python and rewritten, so
        concurrent adjustments cannot overwrite each other. The count is
        clamped at zero.

        Returns:
            The new count, or None if the recipe does not exist.
        """
        adjusted = Recipe.favorites_count + delta
        if delta < 0:
            adjusted = case((adjusted >= 0, adjusted), else_=0)
        result = await self._session.execute(
            update(Recipe)
            .where(Recipe.recipe_id == recipe_id)
            .values(favorites_count=adjusted, updated_at=now or utcnow())
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            return None
        return await self.get_favorites_count(recipe_id)

    async def set_favorites_count(
        self,
        recipe_id: uuid.UUID,
        count: int,
        now: datetime | None = None,
    ) -> int | None:
        """Overwrite ``favorites_count``; used only for reconciliation."""
        result = await self._session.execute(
            update(Recipe)
            .where(Recipe.recipe_id == recipe_id)
            .values(favorites_count=count, updated_at=now or utcnow())
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            return None
        return await self.get_favorites_count(recipe_id)

    async def update_author_snapshot(
        self,
        author_id: uuid.UUID,
        username: str | None,
        profile_image: str | None,
        now: datetime | None = None,
    ) -> int:
        """Rewrite the embedded author snapshot on all of an author's recipes.

        Returns:
            Number of recipes updated.
        """
        result = await self._session.execute(
            update(Recipe)
            .where(Recipe.author_id == author_id)
            .values(
                author_username=username,
                author_profile_image=profile_image,
                updated_at=now or utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def find_by_title(
        self,
        title: str,
        *,
        prefix: bool = False,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[Recipe]:
        """Recipes whose title equals (or starts with) ``title``."""
        stmt = (
            select(Recipe)
            .where(_title_condition(Recipe.title, title, prefix=prefix))
            .order_by(Recipe.title, Recipe.created_at, Recipe.recipe_id)
        )
        return await self._fetch(stmt, limit=limit, offset=offset)

    async def find_by_tags(
        self,
        tags: Sequence[str],
        *,
        match_all: bool = False,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[Recipe]:
        """Recipes carrying any (or, with ``match_all``, every) tag in ``tags``."""
        if not tags:
            return []
        stmt = (
            select(Recipe)
            .where(Recipe.recipe_id.in_(_tagged_recipe_ids(tags, match_all=match_all)))
            .order_by(Recipe.title, Recipe.created_at, Recipe.recipe_id)
        )
        return await self._fetch(stmt, limit=limit, offset=offset)

    async def find_by_title_and_tags(
        self,
        title: str,
        tags: Sequence[str],
        *,
        prefix: bool = False,
        match_all: bool = False,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[Recipe]:
        """Combined title and tag filter.

        Falls back to a title-only lookup when ``tags`` is empty.
        """
        if not tags:
            return await self.find_by_title(
                title, prefix=prefix, limit=limit, offset=offset
            )
        matching = _tagged_recipe_ids(
            tags, match_all=match_all, title=title, prefix=prefix
        )
        stmt = (
            select(Recipe)
            .where(Recipe.recipe_id.in_(matching))
            .order_by(Recipe.title, Recipe.created_at, Recipe.recipe_id)
        )
        return await self._fetch(stmt, limit=limit, offset=offset)

    async def find_by_author(
        self,
        author_id: uuid.UUID,
        *,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[Recipe]:
        """Recipes by one author, newest first."""
        stmt = (
            select(Recipe)
            .where(Recipe.author_id == author_id)
            .order_by(Recipe.created_at.desc(), Recipe.recipe_id)
        )
        return await self._fetch(stmt, limit=limit, offset=offset)

    async def _fetch(self, stmt: Select[Any], *, limit: int, offset: int) -> list[Recipe]:
        result = await self._session.scalars(stmt.limit(limit).offset(offset))
        return list(result.all())

    async def get_favorites_count(self, recipe_id: uuid.UUID) -> int | None:
        """Stored ``favorites_count``, or None if the recipe does not exist."""
        return await self._session.scalar(
            select(Recipe.favorites_count).where(Recipe.recipe_id == recipe_id)
        )
