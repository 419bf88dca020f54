"""Declarative base shared by all record tables."""

from __future__ import annotations

import enum
import json
from datetime import UTC, datetime

from sqlalchemy import BigInteger, Integer, MetaData
from sqlalchemy.orm import DeclarativeBase


NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
AutoIncrementId = BigInteger().with_variant(Integer(), "sqlite")


def utcnow() -> datetime:
    """Timezone-aware current time used for every record timestamp."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to timestamps read back without a zone (SQLite drops it)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class BaseDatabaseModel(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._to_json()})"

    def _to_json(self) -> str:
        def serialize(obj: object) -> object:
            if isinstance(obj, list):
                return [serialize(item) for item in obj]
            if isinstance(obj, enum.Enum):
                return obj.value
            if isinstance(obj, BaseDatabaseModel):
                return {
                    k: serialize(v)
                    for k, v in vars(obj).items()
                    if not k.startswith("_")
                }
            if hasattr(obj, "isoformat"):
                return obj.isoformat()
            return obj

        return json.dumps(serialize(self), default=str, ensure_ascii=False)
