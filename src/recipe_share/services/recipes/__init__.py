"""Recipe service module.

Creates, edits, deletes and searches recipes and appends comments.
"""

from recipe_share.services.recipes.service import RecipeService


__all__ = ["RecipeService"]
