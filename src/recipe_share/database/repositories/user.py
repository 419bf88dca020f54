"""User data repository.

Repositories work inside a session owned by the caller and never commit;
the service layer decides transaction boundaries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from recipe_share.core.exceptions import DuplicateKeyException, NotFoundException
from recipe_share.database.models import Recipe, User, UserFavoriteRecipe
from recipe_share.database.repositories.base import is_unique_violation


if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession


_UNIQUE_FIELDS = {
    "username": "uq_users_username",
    "email": "uq_users_email",
}


class UserRepository:
    """Data access for ``users``."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, user: User) -> User:
        """Insert a new user.

        Raises:
            DuplicateKeyException: If the username or email is already taken.
        """
        self._session.add(user)
        await self._flush(user)
        return user

    async def update(self, user: User, changes: dict[str, Any]) -> User:
        """Apply ``changes`` to ``user`` and write them.

        Raises:
            DuplicateKeyException: If a changed username or email is taken.
        """
        for field, value in changes.items():
            setattr(user, field, value)
        await self._flush(user)
        return user

    async def get(self, user_id: uuid.UUID) -> User | None:
        """Get a user by id, with favorites loaded."""
        return await self._session.get(User, user_id)

    async def require(self, user_id: uuid.UUID) -> User:
        """Get a user by id.

        Raises:
            NotFoundException: If no user has this id.
        """
        user = await self.get(user_id)
        if user is None:
            raise NotFoundException("User", user_id)
        return user

    async def exists(self, user_id: uuid.UUID) -> bool:
        """Whether a user with this id exists, without loading it."""
        found = await self._session.scalar(
            select(User.user_id).where(User.user_id == user_id)
        )
        return found is not None

    async def get_by_username(self, username: str) -> User | None:
        """Point lookup served by ``uq_users_username``."""
        return await self._session.scalar(select(User).where(User.username == username))

    async def get_by_email(self, email: str) -> User | None:
        """Point lookup served by ``uq_users_email``."""
        return await self._session.scalar(select(User).where(User.email == email))

    async def list_favorite_recipes(self, user_id: uuid.UUID) -> list[Recipe]:
        """Resolve a user's favorite ids to recipes, in favorite order.

        Ids that no longer resolve are dropped by the inner join.
        """
        stmt = (
            select(Recipe)
            .join(UserFavoriteRecipe, UserFavoriteRecipe.recipe_id == Recipe.recipe_id)
            .where(UserFavoriteRecipe.user_id == user_id)
            .order_by(UserFavoriteRecipe.favorite_id)
        )
        result = await self._session.scalars(stmt)
        return list(result.all())

    async def _flush(self, user: User) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            for field, constraint in _UNIQUE_FIELDS.items():
                if is_unique_violation(e, constraint, "users", (field,)):
                    raise DuplicateKeyException(
                        "User", field, getattr(user, field)
                    ) from e
            raise
