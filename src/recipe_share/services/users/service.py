"""User service.

Owns the transaction for each user operation:
- Registration with storage-enforced username/email uniqueness
- Profile lookups and edits
- Resolving a user's favorite recipe ids to recipes
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_share.core.exceptions import DuplicateKeyException, NotFoundException
from recipe_share.database.connection import get_session_factory, session_scope
from recipe_share.database.repositories import UserRepository
from recipe_share.mappers import build_recipe_data, build_user_data, build_user_row
from recipe_share.observability.logging import get_logger, log_context
from recipe_share.schemas import UserCreate, UserProfileUpdate, parse_input


if TYPE_CHECKING:
    import uuid
    from collections.abc import Mapping

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from recipe_share.schemas import RecipeData, UserData

logger = get_logger(__name__)


class UserService:
    """Operations on user records."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session_factory: Optional session factory. If None, uses the
                global factory from ``init_database``.
        """
        self._session_factory = session_factory

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Session factory used for each operation."""
        if self._session_factory is not None:
            return self._session_factory
        return get_session_factory()

    async def create_user(self, data: UserCreate | Mapping[str, Any]) -> UserData:
        """Register a user.

        Args:
            data: Username and email (both required), optional profile image and bio.

        Returns:
            The stored user with its generated id and ``created_at``.

        Raises:
            ValidationException: If username or email is missing or blank.
            DuplicateKeyException: If the username or email is already taken.
        """
        payload = parse_input(UserCreate, data, "User")

        with log_context(operation="create_user"):
            try:
                async with session_scope(self.session_factory) as session:
                    user = await UserRepository(session).add(build_user_row(payload))
                    result = build_user_data(user)
            except DuplicateKeyException as e:
                logger.warning("Rejected duplicate user", field=e.field)
                raise

            logger.info("Created user", user_id=str(result.id))
            return result

    async def get_user(self, user_id: uuid.UUID) -> UserData:
        """Get a user by id.

        Raises:
            NotFoundException: If no user has this id.
        """
        async with session_scope(self.session_factory) as session:
            user = await UserRepository(session).require(user_id)
            return build_user_data(user)

    async def get_user_by_username(self, username: str) -> UserData:
        """Get a user by username.

        Raises:
            NotFoundException: If no user has this username.
        """
        async with session_scope(self.session_factory) as session:
            user = await UserRepository(session).get_by_username(username)
            if user is None:
                raise NotFoundException("User", username)
            return build_user_data(user)

    async def update_profile(
        self,
        user_id: uuid.UUID,
        data: UserProfileUpdate | Mapping[str, Any],
    ) -> UserData:
        """Edit profile fields; only the provided fields are written.

        Recipe author snapshots and comment usernames are not rewritten here;
        see ``RecipeService.refresh_author_snapshot``.

        Raises:
            ValidationException: If username or email is blank or cleared.
            NotFoundException: If no user has this id.
            DuplicateKeyException: If the new username or email is taken.
        """
        payload = parse_input(UserProfileUpdate, data, "User")
        changes = payload.model_dump(include=payload.model_fields_set, by_alias=False)

        with log_context(operation="update_profile", user_id=str(user_id)):
            try:
                async with session_scope(self.session_factory) as session:
                    users = UserRepository(session)
                    user = await users.require(user_id)
                    if changes:
                        await users.update(user, changes)
                    result = build_user_data(user)
            except DuplicateKeyException as e:
                logger.warning("Rejected duplicate profile change", field=e.field)
                raise

            logger.info("Updated user profile", fields=sorted(changes))
            return result

    async def list_favorite_recipes(self, user_id: uuid.UUID) -> list[RecipeData]:
        """Resolve a user's favorites to recipes, in the order they were added.

        Raises:
            NotFoundException: If no user has this id.
        """
        async with session_scope(self.session_factory) as session:
            users = UserRepository(session)
            if not await users.exists(user_id):
                raise NotFoundException("User", user_id)
            recipes = await users.list_favorite_recipes(user_id)
            return [build_recipe_data(recipe) for recipe in recipes]
