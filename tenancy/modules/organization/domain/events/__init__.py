from .application_events import (
    ApplicationCreated,
    ApplicationDeactivated,
    ApplicationUpdated,
)
from .base import TenancyDomainEvent
from .organization_events import (
    OrganizationCreated,
    OrganizationMemberRoleChanged,
    OrganizationUpdated,
    UserAddedToOrganization,
    UserRemovedFromOrganization,
)
from .team_events import (
    TeamCreated,
    TeamDeactivated,
    TeamMemberAdded,
    TeamMemberRemoved,
    TeamMemberRoleChanged,
    TeamUpdated,
)

__all__ = [
    "ApplicationCreated",
    "ApplicationDeactivated",
    "ApplicationUpdated",
    "OrganizationCreated",
    "OrganizationMemberRoleChanged",
    "OrganizationUpdated",
    "TeamCreated",
    "TeamDeactivated",
    "TeamMemberAdded",
    "TeamMemberRemoved",
    "TeamMemberRoleChanged",
    "TeamUpdated",
    "TenancyDomainEvent",
    "UserAddedToOrganization",
    "UserRemovedFromOrganization",
]
