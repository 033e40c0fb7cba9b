"""Organization Repository Interface

Domain contract for organization persistence that must be implemented by the infrastructure layer.
"""

from typing import Protocol

from ...aggregates.organization import Organization
from ...value_objects import OrganizationId, OrganizationName, UserId


class IOrganizationRepository(Protocol):
    """Repository interface for organization aggregates."""

    async def find_by_id(self, organization_id: OrganizationId) -> Organization | None:
        """Find organization by id.

        Args:
            organization_id: Organization identifier

        Returns:
            Organization if found, None otherwise
        """
        ...

    async def save(self, organization: Organization) -> Organization:
        """Persist an organization.

        Implementations compare the stored version with the aggregate's
        version and raise ``ConcurrencyConflictError`` on a stale write.

        Args:
            organization: Organization to persist

        Returns:
            The persisted organization with its new version
        """
        ...

    async def delete(self, organization_id: OrganizationId) -> bool:
        """Delete organization.

        Returns:
            True if deleted, False if not found
        """
        ...

    async def exists_by_name(self, name: OrganizationName) -> bool:
        """Check whether any organization uses this name."""
        ...

    async def find_by_name(self, name: OrganizationName) -> Organization | None:
        """Find organization by exact name."""
        ...

    async def find_by_member_user_id(self, user_id: UserId) -> list[Organization]:
        """Find all organizations the user is a member of."""
        ...

    async def find_all_active(self) -> list[Organization]:
        """Find all active organizations."""
        ...

    async def count(self) -> int:
        """Count stored organizations."""
        ...
