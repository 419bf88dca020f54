"""Observability helpers (logging)."""

from recipe_share.observability.logging import (
    bind_context,
    get_logger,
    log_context,
    setup_logging,
)


__all__ = [
    "bind_context",
    "get_logger",
    "log_context",
    "setup_logging",
]
