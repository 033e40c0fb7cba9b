"""
In-Memory Organization Repository

Dictionary-backed implementation of the organization repository. Stored
aggregates are private copies: callers always receive a fresh copy and a
save replaces the stored copy, so state only changes through ``save``.
The store takes part in units of work through ``snapshot``/``restore``.
"""

from copy import deepcopy

from tenancy.core.infrastructure import ConcurrencyConflictError, current_unit_of_work
from tenancy.core.logging import get_logger
from tenancy.modules.organization.domain.aggregates import Organization
from tenancy.modules.organization.domain.value_objects import (
    OrganizationId,
    OrganizationName,
    UserId,
)

logger = get_logger(__name__)


class InMemoryOrganizationRepository:
    """In-process implementation of ``IOrganizationRepository``."""

    def __init__(self):
        self._organizations: dict[OrganizationId, Organization] = {}

    # =========================================================================
    # Transactional resource
    # =========================================================================

    def snapshot(self) -> dict[OrganizationId, Organization]:
        return dict(self._organizations)

    def restore(self, state: dict[OrganizationId, Organization]) -> None:
        self._organizations = dict(state)

    # =========================================================================
    # Queries
    # =========================================================================

    async def find_by_id(self, organization_id: OrganizationId) -> Organization | None:
        """Find organization by id."""
        stored = self._organizations.get(organization_id)
        return deepcopy(stored) if stored is not None else None

    async def exists_by_name(self, name: OrganizationName) -> bool:
        return any(org.name == name for org in self._organizations.values())

    async def find_by_name(self, name: OrganizationName) -> Organization | None:
        """Find organization by exact name."""
        for organization in self._organizations.values():
            if organization.name == name:
                return deepcopy(organization)
        return None

    async def find_by_member_user_id(self, user_id: UserId) -> list[Organization]:
        """Find every organization, active or not, the user belongs to."""
        return [
            deepcopy(org)
            for org in self._organizations.values()
            if org.is_member(user_id)
        ]

    async def find_all_active(self) -> list[Organization]:
        return [deepcopy(org) for org in self._organizations.values() if org.is_active()]

    async def count(self) -> int:
        return len(self._organizations)

    # =========================================================================
    # Commands
    # =========================================================================

    async def save(self, organization: Organization) -> Organization:
        """
        Persist an organization and bump its version.

        Raises:
            UnitOfWorkError: If called inside a read-only transaction
            ConcurrencyConflictError: If the stored version differs from the
                aggregate's version
        """
        self._ensure_writable()

        stored = self._organizations.get(organization.id)
        if stored is not None and not stored.check_version(organization.version):
            logger.warning(
                "Stale organization write rejected",
                organization_id=str(organization.id),
                expected_version=organization.version,
                actual_version=stored.version,
            )
            raise ConcurrencyConflictError(
                "Organization", organization.id, organization.version, stored.version
            )

        if stored is not None:
            organization.increment_version()

        copy = deepcopy(organization)
        copy.clear_events()
        self._organizations[organization.id] = copy

        logger.debug(
            "Organization saved",
            organization_id=str(organization.id),
            version=organization.version,
        )
        return organization

    async def delete(self, organization_id: OrganizationId) -> bool:
        """Delete organization; returns False when it does not exist."""
        self._ensure_writable()
        return self._organizations.pop(organization_id, None) is not None

    def _ensure_writable(self) -> None:
        unit_of_work = current_unit_of_work()
        if unit_of_work is not None:
            unit_of_work.ensure_writable()
