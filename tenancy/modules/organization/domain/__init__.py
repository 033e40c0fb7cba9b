"""Organization domain layer."""

from .aggregates import Application, Organization, Team
from .entities import OrganizationMember, TeamMember, User
from .enums import Role, TeamRole, UserStatus
from .services import OrganizationDomainService

__all__ = [
    "Application",
    "Organization",
    "OrganizationDomainService",
    "OrganizationMember",
    "Role",
    "Team",
    "TeamMember",
    "TeamRole",
    "User",
    "UserStatus",
]
