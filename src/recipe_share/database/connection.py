"""Database engine and session lifecycle.

This module provides:
- Async engine creation from settings (PostgreSQL via asyncpg, SQLite via aiosqlite)
- A process-wide session factory, initialised once at startup
- ``session_scope``: one transaction per operation, rolled back on error
- Health checks
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from recipe_share.core.config import Settings, get_settings
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _engine_options(url: str, settings: Settings) -> dict[str, Any]:
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            # All sessions must share the single in-memory connection.
            return {"poolclass": StaticPool}
        return {}
    return {
        "pool_size": settings.database.pool_size,
        "max_overflow": settings.database.max_overflow,
        "pool_recycle": settings.database.pool_recycle,
        "pool_pre_ping": settings.database.pool_pre_ping,
    }


def create_engine(url: str | None = None, settings: Settings | None = None) -> AsyncEngine:
    """Create an async engine for ``url`` (defaults to the configured URL).

    SQLite engines get ``PRAGMA foreign_keys=ON`` on every new connection so
    that ``ON DELETE CASCADE`` behaves as it does on PostgreSQL.
    """
    settings = settings or get_settings()
    url = url or settings.database_url

    engine = create_async_engine(
        url,
        echo=settings.database.echo,
        **_engine_options(url, settings),
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by all services.

    Objects stay readable after commit so read models can be built from them
    without another round trip.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_database(
    url: str | None = None,
    *,
    create_tables: bool = False,
) -> AsyncEngine:
    """Initialise the global engine and session factory.

    Should be called once during application startup.

    Args:
        url: Connection URL; defaults to ``Settings.database_url``.
        create_tables: Create missing tables and indexes after connecting.

    Returns:
        The initialised engine.
    """
    global _engine, _session_factory  # noqa: PLW0603

    engine = create_engine(url)
    logger.info(
        "Initializing database engine",
        backend=engine.dialect.name,
        database=engine.url.database,
    )

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Failed to connect to database")
        await engine.dispose()
        raise

    if create_tables:
        from recipe_share.database.schema import create_schema

        await create_schema(engine)

    _engine = engine
    _session_factory = create_session_factory(engine)
    logger.info("Database connection established successfully")
    return engine


async def close_database() -> None:
    """Dispose of the global engine. Should be called during shutdown."""
    global _engine, _session_factory  # noqa: PLW0603

    if _engine is not None:
        logger.info("Closing database engine")
        await _engine.dispose()
    _engine = None
    _session_factory = None


def get_engine() -> AsyncEngine:
    """Return the global engine.

    Raises:
        RuntimeError: If ``init_database`` has not been called.
    """
    if _engine is None:
        msg = "Database engine not initialized. Call init_database() first."
        raise RuntimeError(msg)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the global session factory.

    Raises:
        RuntimeError: If ``init_database`` has not been called.
    """
    if _session_factory is None:
        msg = "Database engine not initialized. Call init_database() first."
        raise RuntimeError(msg)
    return _session_factory


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Run a block in a single transaction.

    Commits when the block exits normally; rolls back and re-raises on any
    exception so no partial write survives.
    """
    factory = session_factory or get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def check_database_health() -> dict[str, str]:
    """Check health of the database connection."""
    results: dict[str, str] = {}

    if _engine is None:
        results["database"] = "not_initialized"
        return results

    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        results["database"] = "healthy"
    except SQLAlchemyError:
        logger.warning("Database health check failed")
        results["database"] = "unhealthy"

    return results
