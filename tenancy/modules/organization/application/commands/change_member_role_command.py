"""
Change member role command implementation.

Promotes or demotes a member. The changer must be able to manage both the
member's current role and the role being assigned.
"""

from tenancy.core.cqrs import Command, CommandHandler
from tenancy.core.logging import get_logger
from tenancy.modules.organization.application.decorators import validate_input
from tenancy.modules.organization.application.dtos.request import (
    ChangeMemberRoleRequest,
)
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.errors import (
    NotMemberError,
    UnauthorizedOrganizationAccessError,
)
from tenancy.modules.organization.domain.value_objects import OrganizationId, UserId

from .base import OrganizationCommandHandlerBase

logger = get_logger(__name__)


class ChangeMemberRoleCommand(Command):
    """Command to change a member's role."""

    def __init__(
        self,
        organization_id: OrganizationId,
        user_id: UserId,
        new_role: Role,
        changed_by: UserId,
    ):
        super().__init__()
        self.organization_id = organization_id
        self.user_id = user_id
        self.new_role = new_role
        self.changed_by = changed_by


class ChangeMemberRoleCommandHandler(
    OrganizationCommandHandlerBase,
    CommandHandler[ChangeMemberRoleCommand, Role],
):
    """Handler for changing member roles."""

    @validate_input(ChangeMemberRoleRequest)
    async def handle(self, command: ChangeMemberRoleCommand) -> Role:
        """
        Change a member's role.

        Returns:
            The member's previous role

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            UnauthorizedOrganizationAccessError: If the changer lacks permission
            NotMemberError: If the user is not a member
            LastOwnerError: If this would demote the last owner
        """
        logger.info(
            "Changing member role",
            organization_id=str(command.organization_id),
            user_id=str(command.user_id),
            new_role=command.new_role.value,
            changed_by=str(command.changed_by),
        )

        async def change():
            organization = await self._load_organization(command.organization_id)
            self._require_role(
                organization,
                command.changed_by,
                Role.ADMIN,
                code="organization.changeRole.unauthorized",
                message="User does not have permission to change member roles",
            )

            member = organization.get_member(command.user_id)
            if member is None:
                raise NotMemberError(
                    "organization", command.organization_id, command.user_id
                )

            changer_role = organization.get_user_role(command.changed_by)
            if not (
                changer_role.can_manage(member.role)
                and changer_role.can_manage(command.new_role)
            ):
                raise UnauthorizedOrganizationAccessError(
                    f"User cannot change role {member.role.value} to {command.new_role.value}",
                    code="organization.role.cannotAssign",
                    organization_id=command.organization_id.value,
                    user_id=command.changed_by.value,
                    required_role=command.new_role.value,
                )

            user = await self._load_user(command.user_id)
            organization.update_user_role(command.user_id, command.new_role)
            await self._save_and_publish(organization)
            return organization, user, member.role

        organization, user, old_role = (
            await self._transaction_manager.execute_in_transaction(change)
        )

        if old_role != command.new_role:
            await self._notify(
                "role_changed",
                lambda: self._notification_service.notify_role_changed(
                    organization, user, old_role, command.new_role
                ),
                organization_id=str(command.organization_id),
                user_id=str(command.user_id),
            )
        return old_role
