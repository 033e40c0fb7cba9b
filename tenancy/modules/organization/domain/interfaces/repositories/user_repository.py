"""User Repository Interface

Domain contract for looking up users referenced by organization membership.
"""

from collections.abc import Iterable
from typing import Protocol

from ...entities.user import User
from ...value_objects import EmailAddress, UserId


class IUserRepository(Protocol):
    """Repository interface for users."""

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find user by id.

        Args:
            user_id: User identifier

        Returns:
            User if found, None otherwise
        """
        ...

    async def find_by_email(self, email: EmailAddress) -> User | None:
        """Find user by e-mail address."""
        ...

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> list[User]:
        """Find the users with the given ids; unknown ids are skipped."""
        ...

    async def exists_by_email(self, email: EmailAddress) -> bool:
        ...

    async def find_all_active(self) -> list[User]:
        ...

    async def save(self, user: User) -> User:
        """Persist a user."""
        ...
