"""
Organization Events

Domain events related to organization lifecycle and membership.
"""

from uuid import UUID

from .base import TenancyDomainEvent


class OrganizationEvent(TenancyDomainEvent):
    aggregate_type = "Organization"

    def __init__(self, organization_id: UUID, **kwargs):
        self.organization_id = organization_id
        super().__init__(aggregate_id=organization_id, **kwargs)


class OrganizationCreated(OrganizationEvent):
    """Event raised when a new organization is created."""

    event_type = "organization.created"
    required_fields = ("organization_id", "name", "created_by")

    def __init__(
        self,
        organization_id: UUID,
        name: str,
        description: str | None,
        created_by: UUID,
        **kwargs,
    ):
        self.name = name
        self.description = description
        self.created_by = created_by
        super().__init__(organization_id, **kwargs)


class OrganizationUpdated(OrganizationEvent):
    """Event raised when organization name or description change."""

    event_type = "organization.updated"
    required_fields = ("organization_id", "name")

    def __init__(
        self, organization_id: UUID, name: str, description: str | None, **kwargs
    ):
        self.name = name
        self.description = description
        super().__init__(organization_id, **kwargs)


class UserAddedToOrganization(OrganizationEvent):
    """Event raised when a user joins an organization."""

    event_type = "organization.user.added"
    required_fields = ("organization_id", "user_id", "role")

    def __init__(self, organization_id: UUID, user_id: UUID, role: str, **kwargs):
        self.user_id = user_id
        self.role = role
        super().__init__(organization_id, **kwargs)


class UserRemovedFromOrganization(OrganizationEvent):
    """Event raised when a user leaves or is removed from an organization."""

    event_type = "organization.user.removed"
    required_fields = ("organization_id", "user_id")

    def __init__(self, organization_id: UUID, user_id: UUID, **kwargs):
        self.user_id = user_id
        super().__init__(organization_id, **kwargs)


class OrganizationMemberRoleChanged(OrganizationEvent):
    """Event raised when a member's role changes."""

    event_type = "organization.user.roleChanged"
    required_fields = ("organization_id", "user_id", "old_role", "new_role")

    def __init__(
        self,
        organization_id: UUID,
        user_id: UUID,
        old_role: str,
        new_role: str,
        **kwargs,
    ):
        self.user_id = user_id
        self.old_role = old_role
        self.new_role = new_role
        super().__init__(organization_id, **kwargs)
