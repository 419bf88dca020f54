"""Database repositories."""

from recipe_share.database.repositories.favorite import FavoriteRepository
from recipe_share.database.repositories.recipe import DEFAULT_LIMIT, RecipeRepository
from recipe_share.database.repositories.user import UserRepository


__all__ = ["DEFAULT_LIMIT", "FavoriteRepository", "RecipeRepository", "UserRepository"]
