"""
In-Memory User Repository

Dictionary-backed user store used by the organization module.
"""

from collections.abc import Iterable
from copy import deepcopy

from tenancy.core.infrastructure import current_unit_of_work
from tenancy.modules.organization.domain.entities import User
from tenancy.modules.organization.domain.value_objects import EmailAddress, UserId


class InMemoryUserRepository:
    """In-process implementation of ``IUserRepository``."""

    def __init__(self, users: Iterable[User] = ()):
        self._users: dict[UserId, User] = {}
        for user in users:
            self._users[user.user_id] = deepcopy(user)

    def snapshot(self) -> dict[UserId, User]:
        return dict(self._users)

    def restore(self, state: dict[UserId, User]) -> None:
        self._users = dict(state)

    async def find_by_id(self, user_id: UserId) -> User | None:
        stored = self._users.get(user_id)
        return deepcopy(stored) if stored is not None else None

    async def find_by_email(self, email: EmailAddress) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return deepcopy(user)
        return None

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> list[User]:
        """Find users in request order, skipping unknown ids."""
        return [
            deepcopy(self._users[user_id])
            for user_id in user_ids
            if user_id in self._users
        ]

    async def exists_by_email(self, email: EmailAddress) -> bool:
        return any(user.email == email for user in self._users.values())

    async def find_all_active(self) -> list[User]:
        return [deepcopy(user) for user in self._users.values() if user.is_active()]

    async def save(self, user: User) -> User:
        """
        Persist a user.

        Raises:
            UnitOfWorkError: If called inside a read-only transaction
        """
        unit_of_work = current_unit_of_work()
        if unit_of_work is not None:
            unit_of_work.ensure_writable()
        self._users[user.user_id] = deepcopy(user)
        return user
