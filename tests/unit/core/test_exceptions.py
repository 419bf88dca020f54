"""Unit tests for persistence exceptions.

Tests cover:
- Error codes and messages
- Structured details
- Conversion from pydantic validation errors
"""

from __future__ import annotations

from uuid import UUID

import pytest
from pydantic import BaseModel, Field, ValidationError

from recipe_share.core.exceptions import (
    AppException,
    DuplicateKeyException,
    ErrorDetail,
    NotFoundException,
    ValidationException,
)


pytestmark = pytest.mark.unit


class TestErrorDetail:
    """Tests for ErrorDetail model."""

    def test_creates_with_required_fields(self):
        """Should create with required fields."""
        detail = ErrorDetail(code="VALIDATION_ERROR", message="Field is required")

        assert detail.code == "VALIDATION_ERROR"
        assert detail.field is None


class TestAppException:
    """Tests for the base exception."""

    def test_to_dict_without_details(self):
        """Should serialize with null details."""
        exc = AppException(error="SOMETHING", message="went wrong")

        assert exc.to_dict() == {
            "error": "SOMETHING",
            "message": "went wrong",
            "details": None,
        }
        assert str(exc) == "went wrong"


class TestNotFoundException:
    """Tests for NotFoundException."""

    def test_carries_resource_and_identifier(self):
        """Should expose the missing resource and id."""
        recipe_id = UUID("00000000-0000-0000-0000-000000000001")
        exc = NotFoundException("Recipe", recipe_id)

        assert exc.error == "NOT_FOUND"
        assert exc.resource == "Recipe"
        assert exc.identifier == recipe_id
        assert str(recipe_id) in exc.message
        assert isinstance(exc, AppException)


class TestDuplicateKeyException:
    """Tests for DuplicateKeyException."""

    def test_names_the_conflicting_field(self):
        """Should expose field and value and a matching detail."""
        exc = DuplicateKeyException("User", "username", "alice")

        assert exc.error == "DUPLICATE_KEY"
        assert exc.field == "username"
        assert exc.value == "alice"
        assert exc.message == "User with username 'alice' already exists"
        assert exc.to_dict()["details"] == [
            {
                "code": "DUPLICATE_KEY",
                "message": "username must be unique",
                "field": "username",
            }
        ]


class TestValidationException:
    """Tests for ValidationException."""

    def test_from_pydantic_lists_each_field(self):
        """Should produce one detail per rejected field."""

        class Payload(BaseModel):
            title: str = Field(min_length=1)
            steps: list[str] = Field(min_length=1)

        with pytest.raises(ValidationError) as exc_info:
            Payload(title="", steps=[])

        exc = ValidationException.from_pydantic(exc_info.value, "Recipe")

        assert exc.error == "VALIDATION_ERROR"
        assert exc.message == "Recipe validation failed"
        assert exc.fields == ["title", "steps"]

    def test_nested_locations_are_dotted(self):
        """Should join nested error locations with dots."""

        class Author(BaseModel):
            author_id: UUID

        class Payload(BaseModel):
            author: Author

        with pytest.raises(ValidationError) as exc_info:
            Payload(author={})

        exc = ValidationException.from_pydantic(exc_info.value, "Recipe")

        assert exc.fields == ["author.author_id"]

    def test_defaults(self):
        """Should have a generic message and no details by default."""
        exc = ValidationException()

        assert exc.message == "Record validation failed"
        assert exc.fields == []
