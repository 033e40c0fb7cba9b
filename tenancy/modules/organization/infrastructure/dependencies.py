"""Organization module dependency configuration.

Builds the module's collaborators once and hands out command and query
handlers wired to them.
"""

from collections.abc import Iterable

from tenancy.core.config import MembershipPolicy, get_settings
from tenancy.core.logging import get_logger
from tenancy.modules.organization.application.commands import (
    AddUserToOrganizationCommandHandler,
    ChangeMemberRoleCommandHandler,
    CreateOrganizationCommandHandler,
    RemoveUserFromOrganizationCommandHandler,
    TransferOwnershipCommandHandler,
    UpdateOrganizationCommandHandler,
)
from tenancy.modules.organization.application.queries import (
    GetOrganizationQueryHandler,
)
from tenancy.modules.organization.domain.entities import User
from tenancy.modules.organization.domain.services import OrganizationDomainService

from .adapters import (
    InMemoryDomainEventPublisher,
    InMemoryTransactionManager,
    LoggingNotificationAdapter,
)
from .repositories import InMemoryOrganizationRepository, InMemoryUserRepository

logger = get_logger(__name__)


class OrganizationModule:
    """
    Organization module composition root.

    Usage Example:
        module = OrganizationModule(users=[alice, bob])
        organization_id = await module.create_organization.handle(
            CreateOrganizationCommand(name="Acme Corp", creator_id=alice.user_id)
        )
    """

    def __init__(
        self,
        policy: MembershipPolicy | None = None,
        users: Iterable[User] = (),
        organization_repository: InMemoryOrganizationRepository | None = None,
        user_repository: InMemoryUserRepository | None = None,
        event_publisher: InMemoryDomainEventPublisher | None = None,
        notification_service: LoggingNotificationAdapter | None = None,
    ):
        self.policy = policy or get_settings().membership
        self.organization_repository = (
            organization_repository or InMemoryOrganizationRepository()
        )
        self.user_repository = user_repository or InMemoryUserRepository(users)
        self.event_publisher = event_publisher or InMemoryDomainEventPublisher()
        self.notification_service = notification_service or LoggingNotificationAdapter()
        self.transaction_manager = InMemoryTransactionManager(
            [self.organization_repository, self.user_repository, self.event_publisher]
        )
        self.domain_service = OrganizationDomainService(
            self.organization_repository, self.user_repository, self.policy
        )

        logger.debug(
            "Organization module configured",
            max_organizations_per_user=self.policy.max_organizations_per_user,
        )

    def _command_dependencies(self) -> dict:
        return {
            "organization_repository": self.organization_repository,
            "user_repository": self.user_repository,
            "domain_service": self.domain_service,
            "event_publisher": self.event_publisher,
            "notification_service": self.notification_service,
            "transaction_manager": self.transaction_manager,
        }

    # =========================================================================
    # Handlers
    # =========================================================================

    @property
    def create_organization(self) -> CreateOrganizationCommandHandler:
        return CreateOrganizationCommandHandler(**self._command_dependencies())

    @property
    def update_organization(self) -> UpdateOrganizationCommandHandler:
        return UpdateOrganizationCommandHandler(**self._command_dependencies())

    @property
    def add_user(self) -> AddUserToOrganizationCommandHandler:
        return AddUserToOrganizationCommandHandler(**self._command_dependencies())

    @property
    def remove_user(self) -> RemoveUserFromOrganizationCommandHandler:
        return RemoveUserFromOrganizationCommandHandler(**self._command_dependencies())

    @property
    def change_member_role(self) -> ChangeMemberRoleCommandHandler:
        return ChangeMemberRoleCommandHandler(**self._command_dependencies())

    @property
    def transfer_ownership(self) -> TransferOwnershipCommandHandler:
        return TransferOwnershipCommandHandler(**self._command_dependencies())

    @property
    def get_organization(self) -> GetOrganizationQueryHandler:
        return GetOrganizationQueryHandler(
            self.organization_repository,
            self.user_repository,
            self.transaction_manager,
        )
