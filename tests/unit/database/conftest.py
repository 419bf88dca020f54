"""Database unit test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

import recipe_share.database.connection as db_module


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
async def reset_database_globals() -> AsyncGenerator[None]:
    """Reset the global engine before and after each test."""
    await db_module.close_database()
    yield
    await db_module.close_database()
