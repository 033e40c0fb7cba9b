"""
Remove user from organization command implementation.

Members may always remove themselves; removing someone else requires
being able to manage their role. The last owner can never be removed.
"""

from tenancy.core.cqrs import Command, CommandHandler
from tenancy.core.logging import get_logger
from tenancy.modules.organization.domain.errors import (
    NotMemberError,
    UnauthorizedOrganizationAccessError,
)
from tenancy.modules.organization.domain.value_objects import OrganizationId, UserId

from .base import OrganizationCommandHandlerBase

logger = get_logger(__name__)


class RemoveUserFromOrganizationCommand(Command):
    """Command to remove a user from an organization."""

    def __init__(
        self,
        organization_id: OrganizationId,
        user_id: UserId,
        removed_by: UserId,
    ):
        super().__init__()
        self.organization_id = organization_id
        self.user_id = user_id
        self.removed_by = removed_by

    @property
    def is_self_removal(self) -> bool:
        return self.user_id == self.removed_by


class RemoveUserFromOrganizationCommandHandler(
    OrganizationCommandHandlerBase,
    CommandHandler[RemoveUserFromOrganizationCommand, None],
):
    """Handler for removing users from organizations."""

    async def handle(self, command: RemoveUserFromOrganizationCommand) -> None:
        """
        Remove a user from an organization.

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            UnauthorizedOrganizationAccessError: If the remover is not a member
                or cannot manage the user
            NotMemberError: If the user is not a member
            UserNotFoundError: If the user does not exist
            LastOwnerError: If the user is the last owner
        """
        logger.info(
            "Removing user from organization",
            organization_id=str(command.organization_id),
            user_id=str(command.user_id),
            removed_by=str(command.removed_by),
            self_removal=command.is_self_removal,
        )

        async def remove():
            organization = await self._load_organization(command.organization_id)

            if not command.is_self_removal:
                remover = organization.get_member(command.removed_by)
                if remover is None:
                    raise UnauthorizedOrganizationAccessError(
                        "Removing user is not a member of this organization",
                        code="organization.removeUser.notMember",
                        organization_id=command.organization_id.value,
                        user_id=command.removed_by.value,
                    )
                target = organization.get_member(command.user_id)
                if target is None:
                    raise NotMemberError(
                        "organization", command.organization_id, command.user_id
                    )
                if not remover.can_manage(target):
                    raise UnauthorizedOrganizationAccessError(
                        "User does not have permission to remove this user",
                        code="organization.removeUser.unauthorized",
                        organization_id=command.organization_id.value,
                        user_id=command.removed_by.value,
                        required_role=target.role.value,
                    )

            user = await self._load_user(command.user_id)
            organization.remove_user(command.user_id)
            await self._save_and_publish(organization)
            return organization, user

        organization, user = await self._transaction_manager.execute_in_transaction(
            remove
        )

        await self._notify(
            "user_removed",
            lambda: self._notification_service.notify_user_removed_from_organization(
                organization, user
            ),
            organization_id=str(command.organization_id),
            user_id=str(command.user_id),
        )
        logger.info(
            "User removed from organization",
            organization_id=str(command.organization_id),
            user_id=str(command.user_id),
        )
