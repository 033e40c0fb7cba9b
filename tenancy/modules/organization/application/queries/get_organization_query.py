"""
Get organization query implementation.

Returns an organization read model to one of its members.
"""

from tenancy.core.cqrs import Query, QueryHandler
from tenancy.core.logging import get_logger
from tenancy.modules.organization.application.dtos.response import (
    MemberView,
    OrganizationView,
)
from tenancy.modules.organization.domain.errors import (
    OrganizationNotFoundError,
    UnauthorizedOrganizationAccessError,
)
from tenancy.modules.organization.domain.interfaces import (
    IOrganizationRepository,
    ITransactionManager,
    IUserRepository,
)
from tenancy.modules.organization.domain.value_objects import OrganizationId, UserId

logger = get_logger(__name__)


class GetOrganizationQuery(Query):
    """Query for a single organization."""

    def __init__(self, organization_id: OrganizationId, requesting_user_id: UserId):
        super().__init__()
        self.organization_id = organization_id
        self.requesting_user_id = requesting_user_id


class GetOrganizationQueryHandler(QueryHandler[GetOrganizationQuery, OrganizationView]):
    """Handler for organization queries."""

    def __init__(
        self,
        organization_repository: IOrganizationRepository,
        user_repository: IUserRepository,
        transaction_manager: ITransactionManager,
    ):
        self._organization_repository = organization_repository
        self._user_repository = user_repository
        self._transaction_manager = transaction_manager

    async def handle(self, query: GetOrganizationQuery) -> OrganizationView:
        """
        Load an organization for one of its members.

        Members whose user record cannot be found are left out of the view.

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            UnauthorizedOrganizationAccessError: If the requester is not a member
        """

        async def load() -> OrganizationView:
            organization = await self._organization_repository.find_by_id(
                query.organization_id
            )
            if organization is None:
                raise OrganizationNotFoundError(query.organization_id)

            if not organization.is_member(query.requesting_user_id):
                raise UnauthorizedOrganizationAccessError(
                    "User is not a member of this organization",
                    code="organization.access.denied",
                    organization_id=query.organization_id.value,
                    user_id=query.requesting_user_id.value,
                )

            members = organization.get_members()
            users = await self._user_repository.find_by_ids(
                [member.user_id for member in members]
            )
            users_by_id = {user.id: user for user in users}

            views = [
                MemberView.from_member(member, users_by_id[member.user_id])
                for member in members
                if member.user_id in users_by_id
            ]
            if len(views) < len(members):
                logger.warning(
                    "Skipping members without user record",
                    organization_id=str(query.organization_id),
                    missing=len(members) - len(views),
                )
            return OrganizationView.from_organization(organization, views)

        return await self._transaction_manager.execute_in_read_only_transaction(load)
