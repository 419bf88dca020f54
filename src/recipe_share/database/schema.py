"""Schema management and index introspection.

Tables are created from the ORM metadata; migrations are out of scope, so
``create_schema`` only creates what is missing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel
from sqlalchemy import UniqueConstraint

from recipe_share.database.models import BaseDatabaseModel
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = get_logger(__name__)


class IndexDefinition(BaseModel):
    """A secondary or unique index declared on a record table."""

    table: str
    name: str
    columns: list[str]
    unique: bool = False


async def create_schema(engine: AsyncEngine) -> None:
    """Create all record tables and their indexes if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseDatabaseModel.metadata.create_all)
    logger.info(
        "Database schema ensured",
        tables=sorted(BaseDatabaseModel.metadata.tables),
    )


async def drop_schema(engine: AsyncEngine) -> None:
    """Drop all record tables."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseDatabaseModel.metadata.drop_all)
    logger.warning("Database schema dropped")


def list_index_definitions() -> list[IndexDefinition]:
    """Return every index and unique constraint declared by the record tables.

    Sorted by table then index name.
    """
    definitions: list[IndexDefinition] = []
    for table in BaseDatabaseModel.metadata.sorted_tables:
        definitions.extend(
            IndexDefinition(
                table=table.name,
                name=str(index.name),
                columns=[column.name for column in index.columns],
                unique=bool(index.unique),
            )
            for index in table.indexes
        )
        definitions.extend(
            IndexDefinition(
                table=table.name,
                name=str(constraint.name),
                columns=[column.name for column in constraint.columns],
                unique=True,
            )
            for constraint in table.constraints
            if isinstance(constraint, UniqueConstraint)
        )
    return sorted(definitions, key=lambda d: (d.table, d.name))
