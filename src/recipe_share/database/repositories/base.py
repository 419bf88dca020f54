"""Shared helpers for repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from sqlalchemy.exc import IntegrityError


def is_unique_violation(
    exc: IntegrityError,
    constraint: str,
    table: str,
    columns: tuple[str, ...],
) -> bool:
    """Whether ``exc`` was raised by the named unique constraint.

    PostgreSQL reports the constraint name; SQLite reports
    ``UNIQUE constraint failed: <table>.<column>, ...``.
    """
    message = str(exc.orig)
    if constraint in message:
        return True
    return "UNIQUE constraint failed" in message and all(
        f"{table}.{column}" in message for column in columns
    )


def is_foreign_key_violation(exc: IntegrityError, constraint: str) -> bool:
    """Whether ``exc`` was raised by a foreign key check.

    PostgreSQL reports the constraint name; SQLite only reports
    ``FOREIGN KEY constraint failed``.
    """
    message = str(exc.orig)
    return constraint in message or "FOREIGN KEY constraint failed" in message
