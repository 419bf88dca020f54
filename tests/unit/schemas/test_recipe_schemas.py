"""Tests for recipe and comment schemas."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from recipe_share.core.exceptions import ValidationException
from recipe_share.schemas import (
    AuthorSnapshot,
    CommentCreate,
    RecipeCreate,
    RecipeData,
    RecipeUpdate,
    parse_input,
)
from tests.factories.recipe import RecipeCreateFactory


pytestmark = pytest.mark.unit

AUTHOR_ID = uuid.UUID("00000000-0000-0000-0000-0000000000aa")


class TestRecipeCreate:
    """Tests for RecipeCreate validation."""

    def test_accepts_camel_case_body(self):
        """Should accept the wire names used by request handlers."""
        payload = RecipeCreate.model_validate(RecipeCreateFactory.payload(AUTHOR_ID))

        assert payload.author.author_id == AUTHOR_ID
        assert payload.tags == ["soup", "vegetarian"]
        assert payload.author.model_fields_set == {"author_id"}

    def test_strips_whitespace(self):
        """Should strip surrounding whitespace from the title and entries."""
        payload = RecipeCreate.model_validate(
            RecipeCreateFactory.payload(AUTHOR_ID, title="  Soup ", steps=[" Boil "])
        )

        assert payload.title == "Soup"
        assert payload.steps == ["Boil"]

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("title", "   "),
            ("ingredients", []),
            ("steps", []),
            ("steps", ["Boil", ""]),
            ("ingredients", ["  "]),
        ],
    )
    def test_rejects_empty_required_fields(self, field: str, value: object):
        """Should reject blank titles and empty or blank list entries."""
        with pytest.raises(ValidationError):
            RecipeCreate.model_validate(
                RecipeCreateFactory.payload(AUTHOR_ID, **{field: value})
            )

    def test_requires_author(self):
        """Should reject a recipe without an author reference."""
        body = RecipeCreateFactory.payload(AUTHOR_ID)
        del body["author"]

        with pytest.raises(ValidationException) as exc_info:
            parse_input(RecipeCreate, body, "Recipe")

        assert exc_info.value.fields == ["author"]

    def test_tags_default_to_empty(self):
        """Should default tags to an empty list."""
        body = RecipeCreateFactory.payload(AUTHOR_ID)
        del body["tags"]

        assert RecipeCreate.model_validate(body).tags == []


class TestRecipeUpdate:
    """Tests for RecipeUpdate validation."""

    def test_tracks_provided_fields(self):
        """Should only mark fields that were sent."""
        update = RecipeUpdate.model_validate({"description": None, "title": "Stew"})

        assert update.model_fields_set == {"description", "title"}

    @pytest.mark.parametrize("field", ["title", "ingredients", "steps", "tags"])
    def test_cannot_clear_required_fields(self, field: str):
        """Should reject explicit nulls for required fields."""
        with pytest.raises(ValidationError, match="cannot be cleared"):
            RecipeUpdate.model_validate({field: None})


class TestCommentCreate:
    """Tests for CommentCreate validation."""

    def test_rejects_blank_text(self):
        """Should reject whitespace-only text."""
        with pytest.raises(ValidationError):
            CommentCreate(user_id=AUTHOR_ID, text="  ")

    def test_accepts_camel_case(self):
        """Should accept userId."""
        comment = CommentCreate.model_validate({"userId": str(AUTHOR_ID), "text": "yum"})

        assert comment.user_id == AUTHOR_ID
        assert comment.username is None


class TestRecipeData:
    """Tests for the recipe read model."""

    def test_serializes_with_wire_names(self):
        """Should dump camelCase names."""
        now = datetime(2024, 1, 1, tzinfo=UTC)
        data = RecipeData(
            id=uuid.uuid4(),
            title="Soup",
            ingredients=["water"],
            steps=["boil"],
            author=AuthorSnapshot(author_id=AUTHOR_ID, username="alice"),
            created_at=now,
            updated_at=now,
        )

        dumped = data.model_dump()

        assert dumped["favoritesCount"] == 0
        assert dumped["comments"] == []
        assert dumped["author"] == {
            "authorId": AUTHOR_ID,
            "username": "alice",
            "profileImage": None,
        }
        assert "createdAt" in dumped

    def test_rejects_unknown_fields(self):
        """Should forbid fields that are not declared."""
        with pytest.raises(ValidationError):
            AuthorSnapshot(author_id=AUTHOR_ID, nickname="al")
