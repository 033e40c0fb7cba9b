"""
Transfer ownership command implementation.

The requesting owner hands ownership to another user and steps down to
admin.
"""

from tenancy.core.cqrs import Command, CommandHandler
from tenancy.core.logging import get_logger
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.value_objects import OrganizationId, UserId

from .base import OrganizationCommandHandlerBase

logger = get_logger(__name__)


class TransferOwnershipCommand(Command):
    """Command to transfer organization ownership."""

    def __init__(
        self,
        organization_id: OrganizationId,
        new_owner_id: UserId,
        requested_by: UserId,
    ):
        super().__init__()
        self.organization_id = organization_id
        self.new_owner_id = new_owner_id
        self.requested_by = requested_by


class TransferOwnershipCommandHandler(
    OrganizationCommandHandlerBase,
    CommandHandler[TransferOwnershipCommand, None],
):
    """Handler for ownership transfers."""

    async def handle(self, command: TransferOwnershipCommand) -> None:
        """
        Transfer ownership.

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            OwnershipTransferError: If the requester is not an owner
            UserNotFoundError: If the new owner does not exist
            InactiveUserError: If the new owner is not active
        """
        logger.info(
            "Transferring ownership",
            organization_id=str(command.organization_id),
            new_owner_id=str(command.new_owner_id),
            requested_by=str(command.requested_by),
        )

        async def transfer():
            organization = await self._load_organization(command.organization_id)
            previous_role = organization.get_user_role(command.new_owner_id)
            await self._domain_service.transfer_ownership(
                organization, command.requested_by, command.new_owner_id
            )
            await self._save_and_publish(organization)
            new_owner = await self._load_user(command.new_owner_id)
            previous_owner = await self._user_repository.find_by_id(command.requested_by)
            return organization, new_owner, previous_role, previous_owner

        organization, new_owner, previous_role, previous_owner = (
            await self._transaction_manager.execute_in_transaction(transfer)
        )

        if previous_role is None:
            await self._notify(
                "ownership_transferred",
                lambda: self._notification_service.notify_user_added_to_organization(
                    organization, new_owner, Role.OWNER
                ),
                organization_id=str(command.organization_id),
                user_id=str(command.new_owner_id),
            )
        elif previous_role is not Role.OWNER:
            await self._notify(
                "ownership_transferred",
                lambda: self._notification_service.notify_role_changed(
                    organization, new_owner, previous_role, Role.OWNER
                ),
                organization_id=str(command.organization_id),
                user_id=str(command.new_owner_id),
            )
        if previous_owner is not None:
            await self._notify(
                "ownership_transferred",
                lambda: self._notification_service.notify_role_changed(
                    organization, previous_owner, Role.OWNER, Role.ADMIN
                ),
                organization_id=str(command.organization_id),
                user_id=str(command.requested_by),
            )
