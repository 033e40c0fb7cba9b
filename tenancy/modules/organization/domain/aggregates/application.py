"""
Application Aggregate

An organization-owned application grouping a bounded set of teams.
"""

from collections.abc import Iterable
from datetime import datetime

from ..errors import (
    InvalidSettingsError,
    InvariantViolationError,
    TeamAlreadyAttachedError,
    TeamLimitExceededError,
    TeamNotAttachedError,
)
from ..events import ApplicationCreated, ApplicationDeactivated, ApplicationUpdated
from ..value_objects import (
    ApplicationDescription,
    ApplicationId,
    ApplicationName,
    ApplicationSettings,
    OrganizationId,
    TeamId,
    UserId,
)
from .tenant import TenantAggregate


class Application(TenantAggregate):
    """Application aggregate root."""

    AGGREGATE_NAME = "application"

    def __init__(
        self,
        application_id: ApplicationId,
        organization_id: OrganizationId,
        name: ApplicationName,
        description: ApplicationDescription | None = None,
        settings: ApplicationSettings | None = None,
        teams: Iterable[TeamId] = (),
        active: bool = True,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 1,
    ):
        super().__init__(
            entity_id=application_id,
            name=name,
            description=description or ApplicationDescription.empty(),
            active=active,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
        self.organization_id = organization_id
        self.settings = settings or ApplicationSettings.default()
        self._teams: set[TeamId] = set(teams)

    @classmethod
    def create(
        cls,
        application_id: ApplicationId,
        organization_id: OrganizationId,
        name: ApplicationName,
        description: ApplicationDescription | None,
        created_by: UserId,
        settings: ApplicationSettings | None = None,
    ) -> "Application":
        application = cls(
            application_id=application_id,
            organization_id=organization_id,
            name=name,
            description=description,
            settings=settings,
        )
        application.add_event(
            ApplicationCreated(
                application_id=application_id.value,
                organization_id=organization_id.value,
                name=str(application.name),
                description=application.description.value,
                created_by=created_by.value,
            )
        )
        return application

    @property
    def application_id(self) -> ApplicationId:
        return self.id

    # =========================================================================
    # Teams
    # =========================================================================

    def add_team(self, team_id: TeamId) -> None:
        """
        Attach a team.

        Raises:
            InactiveAggregateError: If the application is inactive
            TeamAlreadyAttachedError: If the team is already attached
            TeamLimitExceededError: If the team limit has been reached
        """
        self._ensure_active("add teams to")
        if team_id in self._teams:
            raise TeamAlreadyAttachedError(self.id, team_id)
        if self.settings.has_team_limit and self.team_count >= self.settings.max_teams:
            raise TeamLimitExceededError(self.id, self.settings.max_teams)
        self._teams.add(team_id)
        self.mark_modified()

    def remove_team(self, team_id: TeamId) -> None:
        """
        Detach a team.

        Raises:
            InactiveAggregateError: If the application is inactive
            TeamNotAttachedError: If the team is not attached
        """
        self._ensure_active("remove teams from")
        if team_id not in self._teams:
            raise TeamNotAttachedError(self.id, team_id)
        self._teams.discard(team_id)
        self.mark_modified()

    def has_team(self, team_id: TeamId) -> bool:
        return team_id in self._teams

    def can_add_team(self) -> bool:
        if not self.active:
            return False
        if not self.settings.has_team_limit:
            return True
        return self.team_count < self.settings.max_teams

    @property
    def teams(self) -> frozenset[TeamId]:
        return frozenset(self._teams)

    @property
    def team_count(self) -> int:
        return len(self._teams)

    # =========================================================================
    # Settings
    # =========================================================================

    def update_settings(self, new_settings: ApplicationSettings) -> None:
        """
        Replace the settings.

        Raises:
            InactiveAggregateError: If the application is inactive
            InvalidSettingsError: If the team limit is below the current team count
        """
        self._ensure_active("update settings for")
        if new_settings.has_team_limit and self.team_count > new_settings.max_teams:
            raise InvalidSettingsError(
                "application.settings.teamLimitTooLow",
                f"Cannot set team limit below current team count: {self.team_count}",
                setting="max_teams",
                value=new_settings.max_teams,
            )
        self.settings = new_settings
        self.mark_modified()

    def validate_invariants(self) -> None:
        if self.name is None or not str(self.name):
            raise InvariantViolationError(
                "application.name.required", "Application must have a name"
            )
        if self.organization_id is None:
            raise InvariantViolationError(
                "application.organization.required",
                "Application must belong to an organization",
            )
        if self.settings.has_team_limit and self.team_count > self.settings.max_teams:
            raise TeamLimitExceededError(self.id, self.settings.max_teams)

    # =========================================================================
    # Event factories
    # =========================================================================

    def _empty_description(self) -> ApplicationDescription:
        return ApplicationDescription.empty()

    def _updated_event(self) -> ApplicationUpdated:
        return ApplicationUpdated(
            application_id=self.id.value,
            organization_id=self.organization_id.value,
            name=str(self.name),
            description=self.description.value,
        )

    def _deactivated_event(self) -> ApplicationDeactivated:
        return ApplicationDeactivated(
            application_id=self.id.value,
            organization_id=self.organization_id.value,
            name=str(self.name),
        )
