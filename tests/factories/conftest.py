"""Factory configuration and exports.

This module exports all factories for convenient importing in tests.
"""

from tests.factories.recipe import CommentCreateFactory, RecipeCreateFactory
from tests.factories.settings import SettingsFactory
from tests.factories.user import UserCreateFactory


__all__ = [
    "CommentCreateFactory",
    "RecipeCreateFactory",
    "SettingsFactory",
    "UserCreateFactory",
]
