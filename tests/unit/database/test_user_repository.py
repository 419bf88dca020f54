"""Unit tests for UserRepository."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest

from recipe_share.core.exceptions import DuplicateKeyException, NotFoundException
from recipe_share.database.repositories import (
    FavoriteRepository,
    RecipeRepository,
    UserRepository,
)
from recipe_share.mappers import build_recipe_row, build_user_row
from tests.factories.recipe import RecipeCreateFactory
from tests.factories.user import UserCreateFactory


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from recipe_share.database.models import User


pytestmark = pytest.mark.unit


@pytest.fixture
def repository(session: AsyncSession) -> UserRepository:
    """Create UserRepository on the test session."""
    return UserRepository(session)


@pytest.fixture
async def alice(repository: UserRepository) -> User:
    """A stored user named alice."""
    return await repository.add(build_user_row(UserCreateFactory.alice()))


class TestAdd:
    """Tests for add method."""

    async def test_duplicate_username_names_the_field(
        self,
        repository: UserRepository,
        alice: User,
    ):
        """Should translate the unique violation into DuplicateKeyException."""
        with pytest.raises(DuplicateKeyException) as exc_info:
            await repository.add(build_user_row(UserCreateFactory.alice(email="b@y.com")))

        assert exc_info.value.field == "username"
        assert exc_info.value.value == "alice"

    async def test_duplicate_email_names_the_field(
        self,
        repository: UserRepository,
        alice: User,
    ):
        """Should report the email when only the email collides."""
        with pytest.raises(DuplicateKeyException) as exc_info:
            await repository.add(
                build_user_row(UserCreateFactory.build(username="bob", email="a@x.com"))
            )

        assert exc_info.value.field == "email"


class TestLookups:
    """Tests for get / require / exists / get_by_*."""

    async def test_get_by_username_and_email(self, repository: UserRepository, alice: User):
        """Should find the user through either unique key."""
        assert await repository.get_by_username("alice") is alice
        assert await repository.get_by_email("a@x.com") is alice
        assert await repository.get_by_username("nobody") is None

    async def test_require_raises_for_unknown_id(self, repository: UserRepository):
        """Should raise NotFoundException for an unknown id."""
        missing = uuid.uuid4()

        with pytest.raises(NotFoundException) as exc_info:
            await repository.require(missing)

        assert exc_info.value.resource == "User"
        assert exc_info.value.identifier == missing

    async def test_exists(self, repository: UserRepository, alice: User):
        """Should report existence without loading the row."""
        assert await repository.exists(alice.user_id) is True
        assert await repository.exists(uuid.uuid4()) is False


class TestUpdate:
    """Tests for update method."""

    async def test_applies_changes(self, repository: UserRepository, alice: User):
        """Should write the changed fields."""
        await repository.update(alice, {"bio": "Loves soup"})

        assert alice.bio == "Loves soup"

    async def test_rename_to_taken_username(self, repository: UserRepository, alice: User):
        """Should reject renaming onto an existing username."""
        bob = await repository.add(build_user_row(UserCreateFactory.build(username="bob")))

        with pytest.raises(DuplicateKeyException) as exc_info:
            await repository.update(bob, {"username": "alice"})

        assert exc_info.value.field == "username"


class TestListFavoriteRecipes:
    """Tests for list_favorite_recipes method."""

    async def test_returns_recipes_in_favorite_order(
        self,
        session: AsyncSession,
        repository: UserRepository,
        alice: User,
    ):
        """Should resolve favorites in the order they were added."""
        recipes = RecipeRepository(session)
        first = await recipes.add(
            build_recipe_row(
                RecipeCreateFactory.for_author(alice.user_id, title="B"),
                author_username="alice",
                author_profile_image=None,
            )
        )
        second = await recipes.add(
            build_recipe_row(
                RecipeCreateFactory.for_author(alice.user_id, title="A"),
                author_username="alice",
                author_profile_image=None,
            )
        )
        favorites = FavoriteRepository(session)
        await favorites.add(alice.user_id, first.recipe_id)
        await favorites.add(alice.user_id, second.recipe_id)

        found = await repository.list_favorite_recipes(alice.user_id)

        assert [r.recipe_id for r in found] == [first.recipe_id, second.recipe_id]

    async def test_empty_for_user_without_favorites(
        self,
        repository: UserRepository,
        alice: User,
    ):
        """Should return an empty list."""
        assert await repository.list_favorite_recipes(alice.user_id) == []
