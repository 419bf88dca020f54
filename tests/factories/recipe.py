"""Recipe and comment factories for generating test data.

Uses polyfactory for consistent test data generation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from polyfactory.factories.pydantic_factory import ModelFactory

from recipe_share.schemas import AuthorReference, CommentCreate, RecipeCreate


if TYPE_CHECKING:
    from uuid import UUID


class RecipeCreateFactory(ModelFactory[RecipeCreate]):
    """Factory for generating RecipeCreate payloads."""

    __model__ = RecipeCreate

    @classmethod
    def title(cls) -> str:
        """Default title."""
        return "Tomato Soup"

    @classmethod
    def description(cls) -> str | None:
        """Default description."""
        return "A simple weeknight soup"

    @classmethod
    def ingredients(cls) -> list[str]:
        """Default ingredients."""
        return ["4 tomatoes", "1 onion", "500 ml stock"]

    @classmethod
    def steps(cls) -> list[str]:
        """Default steps, in execution order."""
        return ["Chop the vegetables", "Simmer for 20 minutes", "Blend"]

    @classmethod
    def tags(cls) -> list[str]:
        """Default tags."""
        return ["soup", "vegetarian"]

    @classmethod
    def for_author(cls, author_id: UUID, **kwargs: Any) -> RecipeCreate:
        """Create a recipe whose author snapshot is filled from the user."""
        return cls.build(author=AuthorReference(author_id=author_id), **kwargs)

    @classmethod
    def payload(cls, author_id: UUID, **kwargs: Any) -> dict[str, Any]:
        """Create a camelCase request body, as an HTTP handler would pass it."""
        body: dict[str, Any] = {
            "title": cls.title(),
            "description": cls.description(),
            "ingredients": cls.ingredients(),
            "steps": cls.steps(),
            "tags": cls.tags(),
            "author": {"authorId": str(author_id)},
        }
        body.update(kwargs)
        return body


class CommentCreateFactory(ModelFactory[CommentCreate]):
    """Factory for generating CommentCreate payloads."""

    __model__ = CommentCreate

    @classmethod
    def username(cls) -> str | None:
        """Looked up from the user by default."""
        return None

    @classmethod
    def text(cls) -> str:
        """Default comment text."""
        return "yum"

    @classmethod
    def by(cls, user_id: UUID, **kwargs: Any) -> CommentCreate:
        """Create a comment by ``user_id``."""
        return cls.build(user_id=user_id, **kwargs)
