"""
Create organization command implementation.

Creates an organization owned by the requesting user.
"""

from typing import Any

from tenancy.core.cqrs import Command, CommandHandler
from tenancy.core.logging import get_logger
from tenancy.modules.organization.application.decorators import validate_input
from tenancy.modules.organization.application.dtos.request import (
    CreateOrganizationRequest,
)
from tenancy.modules.organization.domain.aggregates import Organization
from tenancy.modules.organization.domain.errors import OrganizationNameTakenError
from tenancy.modules.organization.domain.value_objects import (
    OrganizationDescription,
    OrganizationId,
    OrganizationName,
    OrganizationSettings,
    UserId,
)

from .base import OrganizationCommandHandlerBase

logger = get_logger(__name__)


class CreateOrganizationCommand(Command):
    """Command to create a new organization."""

    def __init__(
        self,
        name: str,
        creator_id: UserId,
        description: str | None = None,
        settings: dict[str, Any] | None = None,
    ):
        super().__init__()
        self.name = name
        self.description = description
        self.creator_id = creator_id
        self.settings = settings


class CreateOrganizationCommandHandler(
    OrganizationCommandHandlerBase,
    CommandHandler[CreateOrganizationCommand, OrganizationId],
):
    """Handler for creating organizations."""

    @validate_input(CreateOrganizationRequest)
    async def handle(self, command: CreateOrganizationCommand) -> OrganizationId:
        """
        Create an organization with the creator as its owner.

        Process:
        1. Check name availability
        2. Check the creator may join another organization
        3. Create, apply initial settings and save
        4. Publish events, then notify the creator

        Returns:
            Id of the new organization

        Raises:
            ValidationError: If name, description or settings are malformed
            OrganizationNameTakenError: If the name is in use
            UserNotFoundError: If the creator does not exist
            UserCannotJoinError: If the creator is not eligible
            UserOrganizationLimitError: If the creator is at the organization limit
            InvalidSettingsError: If initial settings break policy
        """
        name = OrganizationName(command.name)
        description = OrganizationDescription(command.description)
        organization_id = OrganizationId.generate()

        logger.info(
            "Creating organization",
            organization_id=str(organization_id),
            creator_id=str(command.creator_id),
        )

        async def create():
            if not await self._domain_service.is_organization_name_available(name):
                raise OrganizationNameTakenError(str(name))

            creator = await self._load_user(command.creator_id)
            await self._domain_service.validate_user_can_join_organization(
                command.creator_id, organization_id
            )

            organization = Organization.create(
                organization_id, name, description, command.creator_id
            )
            if command.settings:
                organization.update_settings(self._initial_settings(command.settings))

            await self._save_and_publish(organization)
            return organization, creator

        organization, creator = await self._transaction_manager.execute_in_transaction(
            create
        )

        await self._notify(
            "organization_created",
            lambda: self._notification_service.notify_organization_created(
                organization, creator
            ),
            organization_id=str(organization_id),
        )

        logger.info("Organization created", organization_id=str(organization_id))
        return organization_id

    def _initial_settings(self, values: dict[str, Any]) -> OrganizationSettings:
        """Merge requested settings over the defaults and check them against policy."""
        settings = OrganizationSettings.default().with_all(values)
        self._domain_service.validate_settings_policy(settings)
        return settings
