"""Favorites service module.

Keeps user favorite lists and recipe favorite counts consistent.
"""

from recipe_share.services.favorites.service import FavoritesService


__all__ = ["FavoritesService"]
