"""
Add user to organization command implementation.

Adds an existing, eligible user to an organization with a role the adder
is allowed to assign.
"""

from tenancy.core.cqrs import Command, CommandHandler
from tenancy.core.logging import get_logger
from tenancy.modules.organization.application.decorators import validate_input
from tenancy.modules.organization.application.dtos.request import AddUserRequest
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.errors import (
    UnauthorizedOrganizationAccessError,
)
from tenancy.modules.organization.domain.value_objects import OrganizationId, UserId

from .base import OrganizationCommandHandlerBase

logger = get_logger(__name__)


class AddUserToOrganizationCommand(Command):
    """Command to add a user to an organization."""

    def __init__(
        self,
        organization_id: OrganizationId,
        user_id: UserId,
        added_by: UserId,
        role: Role = Role.MEMBER,
    ):
        super().__init__()
        self.organization_id = organization_id
        self.user_id = user_id
        self.role = role
        self.added_by = added_by


class AddUserToOrganizationCommandHandler(
    OrganizationCommandHandlerBase,
    CommandHandler[AddUserToOrganizationCommand, None],
):
    """Handler for adding users to organizations."""

    @validate_input(AddUserRequest)
    async def handle(self, command: AddUserToOrganizationCommand) -> None:
        """
        Add a user to an organization.

        Process:
        1. Check the adder is an admin
        2. Check the user exists and may join
        3. Check the adder may assign the requested role
        4. Add, save, publish, then notify the user

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            UnauthorizedOrganizationAccessError: If the adder lacks permission
            UserNotFoundError: If the user does not exist
            UserCannotJoinError: If the user is not eligible
            UserOrganizationLimitError: If the user is at the organization limit
            AlreadyMemberError: If the user is already a member
            MemberLimitExceededError: If the organization is full
        """
        logger.info(
            "Adding user to organization",
            organization_id=str(command.organization_id),
            user_id=str(command.user_id),
            role=command.role.value,
            added_by=str(command.added_by),
        )

        async def add():
            organization = await self._load_organization(command.organization_id)
            self._require_role(
                organization,
                command.added_by,
                Role.ADMIN,
                code="organization.addUser.unauthorized",
                message="User does not have permission to add users to organization",
            )

            user = await self._load_user(command.user_id)
            await self._domain_service.validate_user_can_join_organization(
                command.user_id, command.organization_id
            )

            adder_role = organization.get_user_role(command.added_by)
            if not adder_role.can_manage(command.role):
                raise UnauthorizedOrganizationAccessError(
                    f"User cannot assign role: {command.role.value}",
                    code="organization.role.cannotAssign",
                    organization_id=command.organization_id.value,
                    user_id=command.added_by.value,
                    required_role=command.role.value,
                )

            organization.add_user(command.user_id, command.role)
            await self._save_and_publish(organization)
            return organization, user

        organization, user = await self._transaction_manager.execute_in_transaction(add)

        await self._notify(
            "user_added",
            lambda: self._notification_service.notify_user_added_to_organization(
                organization, user, command.role
            ),
            organization_id=str(command.organization_id),
            user_id=str(command.user_id),
        )
        logger.info(
            "User added to organization",
            organization_id=str(command.organization_id),
            user_id=str(command.user_id),
        )
