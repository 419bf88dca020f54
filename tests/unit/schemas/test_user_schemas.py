"""Tests for user schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from recipe_share.core.exceptions import ValidationException
from recipe_share.schemas import UserCreate, UserProfileUpdate, parse_input


pytestmark = pytest.mark.unit


class TestUserCreate:
    """Tests for UserCreate validation."""

    def test_accepts_camel_case_and_ignores_unknown(self):
        """Should accept profileImage and drop unrelated fields."""
        user = UserCreate.model_validate(
            {
                "username": "alice",
                "email": "a@x.com",
                "profileImage": "https://img.example.com/a.png",
                "password": "ignored",
            }
        )

        assert user.profile_image == "https://img.example.com/a.png"
        assert not hasattr(user, "password")

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "a@x.com"},
            {"username": "alice"},
            {"username": "  ", "email": "a@x.com"},
            {"username": "alice", "email": ""},
        ],
    )
    def test_requires_username_and_email(self, body: dict[str, str]):
        """Should reject missing or blank identity fields."""
        with pytest.raises(ValidationError):
            UserCreate.model_validate(body)


class TestParseInput:
    """Tests for parse_input."""

    def test_passes_instances_through(self):
        """Should return an already-validated instance unchanged."""
        user = UserCreate(username="alice", email="a@x.com")

        assert parse_input(UserCreate, user, "User") is user

    def test_wraps_pydantic_errors(self):
        """Should raise ValidationException naming the rejected fields."""
        with pytest.raises(ValidationException) as exc_info:
            parse_input(UserCreate, {"username": ""}, "User")

        assert exc_info.value.message == "User validation failed"
        assert sorted(exc_info.value.fields) == ["email", "username"]


class TestUserProfileUpdate:
    """Tests for UserProfileUpdate validation."""

    def test_allows_clearing_optional_fields(self):
        """Should allow bio and profile image to be cleared."""
        update = UserProfileUpdate.model_validate({"bio": None})

        assert update.model_fields_set == {"bio"}

    @pytest.mark.parametrize("field", ["username", "email"])
    def test_cannot_clear_identity(self, field: str):
        """Should reject explicit nulls for username or email."""
        with pytest.raises(ValidationError, match="cannot be cleared"):
            UserProfileUpdate.model_validate({field: None})
