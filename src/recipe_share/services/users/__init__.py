"""User service module.

Registers users and manages their profiles.
"""

from recipe_share.services.users.service import UserService


__all__ = ["UserService"]
