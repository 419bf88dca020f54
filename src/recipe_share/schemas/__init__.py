"""Input payloads and read models for users, recipes and comments."""

from recipe_share.schemas.base import RecordData, RecordInput, parse_input
from recipe_share.schemas.recipe import (
    AuthorReference,
    AuthorSnapshot,
    CommentCreate,
    CommentData,
    FavoriteToggleResult,
    RecipeCreate,
    RecipeData,
    RecipeUpdate,
)
from recipe_share.schemas.user import UserCreate, UserData, UserProfileUpdate


__all__ = [
    "AuthorReference",
    "AuthorSnapshot",
    "CommentCreate",
    "CommentData",
    "FavoriteToggleResult",
    "RecipeCreate",
    "RecipeData",
    "RecipeUpdate",
    "RecordData",
    "RecordInput",
    "UserCreate",
    "UserData",
    "UserProfileUpdate",
    "parse_input",
]
