from .application_profile import (
    ApplicationDescription,
    ApplicationName,
    ApplicationSettings,
)
from .identifiers import ApplicationId, EntityId, OrganizationId, TeamId, UserId
from .organization_description import OrganizationDescription
from .organization_name import OrganizationName
from .organization_settings import OrganizationSettings
from .team_profile import TeamDescription, TeamName
from .user_profile import EmailAddress, PersonName

__all__ = [
    "ApplicationDescription",
    "ApplicationId",
    "ApplicationName",
    "ApplicationSettings",
    "EmailAddress",
    "EntityId",
    "OrganizationDescription",
    "OrganizationId",
    "OrganizationName",
    "OrganizationSettings",
    "PersonName",
    "TeamDescription",
    "TeamId",
    "TeamName",
    "UserId",
]
