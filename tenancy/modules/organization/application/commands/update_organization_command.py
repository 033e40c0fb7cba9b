"""
Update organization command implementation.

Changes name, description and settings of an organization.
"""

from typing import Any

from tenancy.core.cqrs import Command, CommandHandler
from tenancy.core.logging import get_logger
from tenancy.modules.organization.application.decorators import validate_input
from tenancy.modules.organization.application.dtos.request import (
    UpdateOrganizationRequest,
)
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.errors import OrganizationNameTakenError
from tenancy.modules.organization.domain.value_objects import (
    OrganizationDescription,
    OrganizationId,
    OrganizationName,
    UserId,
)

from .base import OrganizationCommandHandlerBase

logger = get_logger(__name__)


class UpdateOrganizationCommand(Command):
    """Command to update an organization; ``None`` fields stay unchanged."""

    def __init__(
        self,
        organization_id: OrganizationId,
        requester_id: UserId,
        name: str | None = None,
        description: str | None = None,
        settings: dict[str, Any] | None = None,
    ):
        super().__init__()
        self.organization_id = organization_id
        self.requester_id = requester_id
        self.name = name
        self.description = description
        self.settings = settings


class UpdateOrganizationCommandHandler(
    OrganizationCommandHandlerBase,
    CommandHandler[UpdateOrganizationCommand, None],
):
    """Handler for updating organizations."""

    @validate_input(UpdateOrganizationRequest)
    async def handle(self, command: UpdateOrganizationCommand) -> None:
        """
        Update organization details and settings.

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            UnauthorizedOrganizationAccessError: If the requester is not an admin
            OrganizationNameTakenError: If the new name is in use
            InvalidSettingsError: If settings break policy
            InactiveAggregateError: If the organization is inactive
        """
        logger.info(
            "Updating organization",
            organization_id=str(command.organization_id),
            requester_id=str(command.requester_id),
        )

        async def update():
            organization = await self._load_organization(command.organization_id)
            self._require_role(
                organization,
                command.requester_id,
                Role.ADMIN,
                code="organization.update.unauthorized",
                message="User does not have permission to update organization",
            )

            if command.name is not None or command.description is not None:
                name = (
                    OrganizationName(command.name)
                    if command.name is not None
                    else organization.name
                )
                if name != organization.name and not (
                    await self._domain_service.is_organization_name_available(name)
                ):
                    raise OrganizationNameTakenError(str(name))

                description = (
                    OrganizationDescription(command.description)
                    if command.description is not None
                    else organization.description
                )
                organization.update(name, description)

            if command.settings is not None:
                settings = organization.settings.with_all(command.settings)
                await self._domain_service.validate_organization_settings(
                    settings, organization.organization_id
                )
                organization.update_settings(settings)

            await self._save_and_publish(organization)

        await self._transaction_manager.execute_in_transaction(update)
        logger.info("Organization updated", organization_id=str(command.organization_id))
