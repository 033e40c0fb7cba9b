"""Application name, description and settings value objects."""

from dataclasses import dataclass, replace

from tenancy.core.domain.base import ValueObject
from tenancy.core.errors import ValidationError

from .base import BoundedDescription, BoundedName


@dataclass(frozen=True)
class ApplicationName(BoundedName):
    """Application name: 2-255 letters, digits, spaces, hyphens or underscores."""

    LABEL = "Application name"
    CODE_PREFIX = "application.name"


@dataclass(frozen=True)
class ApplicationDescription(BoundedDescription):
    LABEL = "Application description"
    CODE_PREFIX = "application.description"


@dataclass(frozen=True)
class ApplicationSettings(ValueObject):
    """
    Limits and feature switches of an application.

    ``None`` limits mean unlimited.
    """

    max_teams: int | None = None
    max_members_per_team: int | None = None
    allow_public_debates: bool = True
    require_team_approval: bool = False
    enable_notifications: bool = True

    def __post_init__(self):
        if self.max_teams is not None and self.max_teams < 0:
            raise ValidationError(
                "Max teams cannot be negative",
                field="max_teams",
                code="application.settings.maxTeams.invalid",
            )
        if self.max_members_per_team is not None and self.max_members_per_team < 1:
            raise ValidationError(
                "Max members per team must be at least 1",
                field="max_members_per_team",
                code="application.settings.maxMembersPerTeam.invalid",
            )

    @classmethod
    def default(cls) -> "ApplicationSettings":
        return cls()

    @classmethod
    def for_small_team(cls) -> "ApplicationSettings":
        return cls(
            max_teams=5,
            max_members_per_team=10,
            allow_public_debates=False,
            require_team_approval=True,
            enable_notifications=True,
        )

    @classmethod
    def for_enterprise(cls) -> "ApplicationSettings":
        return cls(
            max_teams=None,
            max_members_per_team=50,
            allow_public_debates=True,
            require_team_approval=True,
            enable_notifications=True,
        )

    def with_max_teams(self, max_teams: int | None) -> "ApplicationSettings":
        return replace(self, max_teams=max_teams)

    @property
    def has_team_limit(self) -> bool:
        return self.max_teams is not None

    def __str__(self) -> str:
        return (
            f"max_teams={self.max_teams}, "
            f"max_members_per_team={self.max_members_per_team}"
        )
