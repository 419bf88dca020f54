"""Persistence-layer exceptions.

Every error raised by this package derives from :class:`AppException` and
carries a stable ``error`` code, a human readable ``message`` and optional
structured ``details`` so that request handlers can translate it into their
own response format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel


if TYPE_CHECKING:
    from pydantic import ValidationError as PydanticValidationError


class ErrorDetail(BaseModel):
    """Structured detail for a single rejected field."""

    code: str
    message: str
    field: str | None = None


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialisable representation of the error."""
        return {
            "error": self.error,
            "message": self.message,
            "details": (
                [d.model_dump() for d in self.details] if self.details else None
            ),
        }


class NotFoundException(AppException):
    """A referenced record id does not resolve."""

    def __init__(self, resource: str, identifier: Any) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            error="NOT_FOUND",
            message=f"{resource} with identifier '{identifier}' not found",
        )


class DuplicateKeyException(AppException):
    """A write violated a uniqueness constraint.

    Not retryable: the same write will keep failing until the conflicting
    value changes.
    """

    def __init__(self, resource: str, field: str, value: Any = None) -> None:
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(
            error="DUPLICATE_KEY",
            message=f"{resource} with {field} '{value}' already exists",
            details=[
                ErrorDetail(
                    code="DUPLICATE_KEY",
                    message=f"{field} must be unique",
                    field=field,
                )
            ],
        )


class ValidationException(AppException):
    """Input is missing required fields or has empty values."""

    def __init__(
        self,
        message: str = "Record validation failed",
        details: list[ErrorDetail] | None = None,
    ) -> None:
        super().__init__(error="VALIDATION_ERROR", message=message, details=details)

    @classmethod
    def from_pydantic(
        cls,
        exc: PydanticValidationError,
        resource: str,
    ) -> ValidationException:
        """Build from a pydantic ``ValidationError``."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]) or None,
            )
            for error in exc.errors()
        ]
        return cls(message=f"{resource} validation failed", details=details)

    @property
    def fields(self) -> list[str]:
        """Names of the rejected fields."""
        return [d.field for d in self.details or [] if d.field]
