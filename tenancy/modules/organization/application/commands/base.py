"""
Shared plumbing for organization command handlers.

Every mutating use case follows the same steps: load inside a transaction,
authorize, mutate, save, publish the staged events once, commit, then
notify. Notification failures are logged and never undo the commit.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from tenancy.core.logging import get_logger
from tenancy.modules.organization.domain.aggregates import Organization
from tenancy.modules.organization.domain.entities import User
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.errors import (
    OrganizationNotFoundError,
    UnauthorizedOrganizationAccessError,
    UserNotFoundError,
)
from tenancy.modules.organization.domain.interfaces import (
    IDomainEventPublisher,
    INotificationService,
    IOrganizationRepository,
    ITransactionManager,
    IUserRepository,
)
from tenancy.modules.organization.domain.services import OrganizationDomainService
from tenancy.modules.organization.domain.value_objects import OrganizationId, UserId

logger = get_logger(__name__)


class OrganizationCommandHandlerBase:
    """Collaborators and helpers shared by organization command handlers."""

    def __init__(
        self,
        organization_repository: IOrganizationRepository,
        user_repository: IUserRepository,
        domain_service: OrganizationDomainService,
        event_publisher: IDomainEventPublisher,
        notification_service: INotificationService,
        transaction_manager: ITransactionManager,
    ):
        self._organization_repository = organization_repository
        self._user_repository = user_repository
        self._domain_service = domain_service
        self._event_publisher = event_publisher
        self._notification_service = notification_service
        self._transaction_manager = transaction_manager

    async def _load_organization(self, organization_id: OrganizationId) -> Organization:
        organization = await self._organization_repository.find_by_id(organization_id)
        if organization is None:
            raise OrganizationNotFoundError(organization_id)
        return organization

    async def _load_user(self, user_id: UserId) -> User:
        user = await self._user_repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _require_role(
        self,
        organization: Organization,
        user_id: UserId,
        minimum_role: Role,
        code: str,
        message: str,
    ) -> None:
        """
        Raises:
            UnauthorizedOrganizationAccessError: If the user lacks ``minimum_role``
        """
        if not organization.has_role(user_id, minimum_role):
            raise UnauthorizedOrganizationAccessError(
                message,
                code=code,
                organization_id=organization.id.value,
                user_id=user_id.value,
                required_role=minimum_role.value,
            )

    async def _save_and_publish(self, organization: Organization) -> None:
        """Persist, then publish the staged events once and clear them."""
        await self._organization_repository.save(organization)
        events = organization.get_events()
        if events:
            await self._event_publisher.publish_all(events)
        organization.clear_events()

    async def _notify(
        self, action: str, send: Callable[[], Awaitable[Any]], **context: Any
    ) -> None:
        """Run a notification outside the transaction; failures are only logged."""
        try:
            await send()
        except Exception:
            logger.exception("Notification failed", action=action, **context)
