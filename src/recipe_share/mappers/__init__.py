"""Data mappers between ORM rows and schema read models."""

from recipe_share.mappers.recipe import (
    build_comment_data,
    build_comment_row,
    build_recipe_data,
    build_recipe_row,
    build_tag_entries,
)
from recipe_share.mappers.user import build_user_data, build_user_row


__all__ = [
    "build_comment_data",
    "build_comment_row",
    "build_recipe_data",
    "build_recipe_row",
    "build_tag_entries",
    "build_user_data",
    "build_user_row",
]
