"""
Notification Service Interface

Protocol for telling users about organization lifecycle changes.
"""

from typing import Protocol

from ...aggregates.organization import Organization
from ...entities.user import User
from ...enums import Role


class INotificationService(Protocol):
    """Protocol for organization notifications."""

    async def notify_organization_created(
        self, organization: Organization, owner: User
    ) -> None:
        """
        Notify the owner that their organization was created.

        Args:
            organization: The new organization
            owner: The creating user
        """
        ...

    async def notify_user_added_to_organization(
        self, organization: Organization, user: User, role: Role
    ) -> None:
        """
        Notify a user that they were added.

        Args:
            organization: Organization joined
            user: User added
            role: Role granted
        """
        ...

    async def notify_user_removed_from_organization(
        self, organization: Organization, user: User
    ) -> None:
        ...

    async def notify_role_changed(
        self, organization: Organization, user: User, old_role: Role, new_role: Role
    ) -> None:
        ...

    async def send_email_verification(self, user: User, verification_token: str) -> None:
        ...
