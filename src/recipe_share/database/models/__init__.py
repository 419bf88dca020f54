"""ORM record types.

Importing this package registers every table on ``BaseDatabaseModel.metadata``.
"""

from .base import BaseDatabaseModel, as_utc, utcnow
from .recipe import Recipe, RecipeComment, RecipeTag
from .user import User, UserFavoriteRecipe


__all__ = [
    "BaseDatabaseModel",
    "Recipe",
    "RecipeComment",
    "RecipeTag",
    "User",
    "UserFavoriteRecipe",
    "as_utc",
    "utcnow",
]
