"""
Team Events

Domain events related to team lifecycle and membership.
"""

from uuid import UUID

from .base import TenancyDomainEvent


class TeamEvent(TenancyDomainEvent):
    aggregate_type = "Team"

    def __init__(
        self,
        team_id: UUID,
        organization_id: UUID,
        application_id: UUID | None,
        **kwargs,
    ):
        self.team_id = team_id
        self.organization_id = organization_id
        self.application_id = application_id
        super().__init__(aggregate_id=team_id, **kwargs)


class TeamCreated(TeamEvent):
    event_type = "team.created"
    required_fields = ("team_id", "organization_id", "name", "created_by")

    def __init__(
        self,
        team_id: UUID,
        organization_id: UUID,
        application_id: UUID | None,
        name: str,
        description: str | None,
        created_by: UUID,
        **kwargs,
    ):
        self.name = name
        self.description = description
        self.created_by = created_by
        super().__init__(team_id, organization_id, application_id, **kwargs)


class TeamUpdated(TeamEvent):
    event_type = "team.updated"
    required_fields = ("team_id", "organization_id", "name")

    def __init__(
        self,
        team_id: UUID,
        organization_id: UUID,
        application_id: UUID | None,
        name: str,
        description: str | None,
        **kwargs,
    ):
        self.name = name
        self.description = description
        super().__init__(team_id, organization_id, application_id, **kwargs)


class TeamMemberAdded(TeamEvent):
    event_type = "team.member.added"
    required_fields = ("team_id", "organization_id", "user_id", "role")

    def __init__(
        self,
        team_id: UUID,
        organization_id: UUID,
        application_id: UUID | None,
        user_id: UUID,
        role: str,
        **kwargs,
    ):
        self.user_id = user_id
        self.role = role
        super().__init__(team_id, organization_id, application_id, **kwargs)


class TeamMemberRemoved(TeamEvent):
    event_type = "team.member.removed"
    required_fields = ("team_id", "organization_id", "user_id")

    def __init__(
        self,
        team_id: UUID,
        organization_id: UUID,
        application_id: UUID | None,
        user_id: UUID,
        **kwargs,
    ):
        self.user_id = user_id
        super().__init__(team_id, organization_id, application_id, **kwargs)


class TeamMemberRoleChanged(TeamEvent):
    event_type = "team.member.roleChanged"
    required_fields = ("team_id", "organization_id", "user_id", "old_role", "new_role")

    def __init__(
        self,
        team_id: UUID,
        organization_id: UUID,
        application_id: UUID | None,
        user_id: UUID,
        old_role: str,
        new_role: str,
        **kwargs,
    ):
        self.user_id = user_id
        self.old_role = old_role
        self.new_role = new_role
        super().__init__(team_id, organization_id, application_id, **kwargs)


class TeamDeactivated(TeamEvent):
    event_type = "team.deactivated"
    required_fields = ("team_id", "organization_id", "name")

    def __init__(
        self,
        team_id: UUID,
        organization_id: UUID,
        application_id: UUID | None,
        name: str,
        **kwargs,
    ):
        self.name = name
        super().__init__(team_id, organization_id, application_id, **kwargs)
