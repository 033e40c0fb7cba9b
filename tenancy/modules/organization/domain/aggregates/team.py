"""
Team Aggregate

A group of organization members, optionally attached to an application.
The creator becomes the first team admin and the team always keeps at
least one admin while it has members.
"""

from collections.abc import Iterable
from datetime import datetime

from ..entities.member import TeamMember
from ..enums import TeamRole
from ..errors import InvalidSettingsError
from ..events import (
    TeamCreated,
    TeamDeactivated,
    TeamMemberAdded,
    TeamMemberRemoved,
    TeamMemberRoleChanged,
    TeamUpdated,
)
from ..value_objects import (
    ApplicationId,
    OrganizationId,
    TeamDescription,
    TeamId,
    TeamName,
    UserId,
)
from .roled_membership import RoledMembershipAggregate


class Team(RoledMembershipAggregate[TeamRole, TeamMember]):
    """Team aggregate root."""

    AGGREGATE_NAME = "team"
    MEMBER_TYPE = TeamMember
    GUARDED_ROLE = TeamRole.ADMIN

    def __init__(
        self,
        team_id: TeamId,
        organization_id: OrganizationId,
        name: TeamName,
        description: TeamDescription | None = None,
        application_id: ApplicationId | None = None,
        max_members: int | None = None,
        members: Iterable[TeamMember] = (),
        active: bool = True,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 1,
    ):
        super().__init__(
            entity_id=team_id,
            name=name,
            description=description or TeamDescription.empty(),
            members=members,
            active=active,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
        self.organization_id = organization_id
        self.application_id = application_id
        self.max_members = max_members

    @classmethod
    def create(
        cls,
        team_id: TeamId,
        organization_id: OrganizationId,
        name: TeamName,
        description: TeamDescription | None,
        creator_id: UserId,
        application_id: ApplicationId | None = None,
    ) -> "Team":
        """Create a team with ``creator_id`` as its first admin."""
        team = cls(
            team_id=team_id,
            organization_id=organization_id,
            name=name,
            description=description,
            application_id=application_id,
            members=[TeamMember(user_id=creator_id, role=TeamRole.ADMIN)],
        )
        team.add_event(
            TeamCreated(
                team_id=team_id.value,
                organization_id=organization_id.value,
                application_id=team._application_uuid(),
                name=str(team.name),
                description=team.description.value,
                created_by=creator_id.value,
            )
        )
        return team

    @property
    def team_id(self) -> TeamId:
        return self.id

    @property
    def admin_count(self) -> int:
        return self.owner_count

    def belongs_to_application(self) -> bool:
        return self.application_id is not None

    def can_add_member(self) -> bool:
        return self.active and self.has_capacity()

    def member_limit(self) -> int | None:
        return self.max_members

    def set_max_members(self, max_members: int | None) -> None:
        """
        Change the member limit; ``None`` removes it.

        Raises:
            InactiveAggregateError: If the team is inactive
            InvalidSettingsError: If the limit is below 1 or below the
                current member count
        """
        self._ensure_active("update")
        if max_members is not None and max_members < 1:
            raise InvalidSettingsError(
                "team.maxMembers.invalid",
                "Max members must be at least 1",
                setting="max_members",
                value=max_members,
            )
        if max_members is not None and self.member_count > max_members:
            raise InvalidSettingsError(
                "team.maxMembers.tooLow",
                f"Cannot set max members below current member count: {self.member_count}",
                setting="max_members",
                value=max_members,
            )
        self.max_members = max_members
        self.mark_modified()

    # =========================================================================
    # Event factories
    # =========================================================================

    def _application_uuid(self):
        return self.application_id.value if self.application_id else None

    def _event_scope(self) -> dict:
        return {
            "team_id": self.id.value,
            "organization_id": self.organization_id.value,
            "application_id": self._application_uuid(),
        }

    def _empty_description(self) -> TeamDescription:
        return TeamDescription.empty()

    def _updated_event(self) -> TeamUpdated:
        return TeamUpdated(
            **self._event_scope(),
            name=str(self.name),
            description=self.description.value,
        )

    def _deactivated_event(self) -> TeamDeactivated:
        return TeamDeactivated(**self._event_scope(), name=str(self.name))

    def _member_added_event(self, member: TeamMember) -> TeamMemberAdded:
        return TeamMemberAdded(
            **self._event_scope(),
            user_id=member.user_id.value,
            role=member.role.value,
        )

    def _member_removed_event(self, member: TeamMember) -> TeamMemberRemoved:
        return TeamMemberRemoved(**self._event_scope(), user_id=member.user_id.value)

    def _member_role_changed_event(
        self, old: TeamMember, new: TeamMember
    ) -> TeamMemberRoleChanged:
        return TeamMemberRoleChanged(
            **self._event_scope(),
            user_id=new.user_id.value,
            old_role=old.role.value,
            new_role=new.role.value,
        )
