"""User mappers: input payload -> row, row -> read model."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from recipe_share.database.models import User, as_utc, utcnow
from recipe_share.schemas import UserCreate, UserData


if TYPE_CHECKING:
    from datetime import datetime


def build_user_row(data: UserCreate, now: datetime | None = None) -> User:
    """Construct a new user row with its generated id and creation time."""
    return User(
        user_id=uuid.uuid4(),
        username=data.username,
        email=data.email,
        profile_image=data.profile_image,
        bio=data.bio,
        created_at=now or utcnow(),
        favorites=[],
    )


def build_user_data(user: User) -> UserData:
    """Map a user row to its read model."""
    return UserData(
        id=user.user_id,
        username=user.username,
        email=user.email,
        profile_image=user.profile_image,
        bio=user.bio,
        favorite_recipes=user.favorite_recipe_ids,
        created_at=as_utc(user.created_at),
    )
