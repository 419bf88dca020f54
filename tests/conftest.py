"""Shared test fixtures for the recipe share persistence tests.

Storage-backed tests run against a fresh in-memory SQLite database per test,
created from the ORM metadata.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest


# Must be set before settings are first loaded.
os.environ.setdefault("APP_ENV", "test")

from recipe_share.core.config import get_settings
from recipe_share.database.connection import create_engine, create_session_factory
from recipe_share.database.schema import create_schema
from recipe_share.services.favorites import FavoritesService
from recipe_share.services.recipes import RecipeService
from recipe_share.services.users import UserService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Reload settings for every test so env changes do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with all tables and indexes created."""
    engine = create_engine(TEST_DATABASE_URL)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return create_session_factory(engine)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A session for repository-level tests; rolled back afterwards."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def user_service(session_factory: async_sessionmaker[AsyncSession]) -> UserService:
    """UserService bound to the test database."""
    return UserService(session_factory)


@pytest.fixture
def recipe_service(session_factory: async_sessionmaker[AsyncSession]) -> RecipeService:
    """RecipeService bound to the test database."""
    return RecipeService(session_factory)


@pytest.fixture
def favorites_service(
    session_factory: async_sessionmaker[AsyncSession],
) -> FavoritesService:
    """FavoritesService bound to the test database."""
    return FavoritesService(session_factory)
