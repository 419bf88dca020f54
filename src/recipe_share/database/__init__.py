"""Relational storage layer.

This package provides:
- Engine and session lifecycle management
- ORM record types with their constraints and indexes
- Repository classes for data access
- Schema creation and index introspection
"""

from recipe_share.database.connection import (
    check_database_health,
    close_database,
    get_engine,
    get_session_factory,
    init_database,
    session_scope,
)
from recipe_share.database.schema import (
    IndexDefinition,
    create_schema,
    drop_schema,
    list_index_definitions,
)


__all__ = [
    "IndexDefinition",
    "check_database_health",
    "close_database",
    "create_schema",
    "drop_schema",
    "get_engine",
    "get_session_factory",
    "init_database",
    "list_index_definitions",
    "session_scope",
]
