"""Unit tests for the Team aggregate."""

import pytest

from tenancy.modules.organization.domain.aggregates import Team
from tenancy.modules.organization.domain.enums import TeamRole
from tenancy.modules.organization.domain.errors import (
    InvalidSettingsError,
    LastOwnerError,
    MemberLimitExceededError,
)
from tenancy.modules.organization.domain.events import (
    TeamCreated,
    TeamDeactivated,
    TeamMemberAdded,
    TeamMemberRemoved,
    TeamMemberRoleChanged,
    TeamUpdated,
)
from tenancy.modules.organization.domain.value_objects import (
    ApplicationId,
    OrganizationId,
    TeamDescription,
    TeamId,
    TeamName,
    UserId,
)


@pytest.fixture
def creator_id():
    return UserId.generate()


@pytest.fixture
def team(creator_id):
    team = Team.create(
        TeamId.generate(),
        OrganizationId.generate(),
        TeamName("Platform"),
        TeamDescription("Builds the platform"),
        creator_id,
    )
    team.clear_events()
    return team


class TestTeam:
    """Test suite for team membership."""

    def test_creator_becomes_admin(self, creator_id):
        application_id = ApplicationId.generate()

        team = Team.create(
            TeamId.generate(),
            OrganizationId.generate(),
            TeamName("Platform"),
            None,
            creator_id,
            application_id=application_id,
        )

        assert team.get_user_role(creator_id) is TeamRole.ADMIN
        assert team.admin_count == 1
        assert team.belongs_to_application()
        [event] = team.get_events()
        assert isinstance(event, TeamCreated)
        assert event.application_id == application_id.value

    def test_membership_events(self, team):
        user_id = UserId.generate()

        team.add_user(user_id, TeamRole.MEMBER)
        team.update_user_role(user_id, TeamRole.LEAD)
        team.remove_user(user_id)

        assert [type(e) for e in team.get_events()] == [
            TeamMemberAdded,
            TeamMemberRoleChanged,
            TeamMemberRemoved,
        ]

    def test_last_admin_guard(self, team, creator_id):
        team.add_user(UserId.generate(), TeamRole.LEAD)

        with pytest.raises(LastOwnerError) as exc_info:
            team.update_user_role(creator_id, TeamRole.LEAD)

        assert exc_info.value.code == "team.admin.lastAdmin"

    def test_member_limit(self, team):
        team.set_max_members(2)
        team.add_user(UserId.generate(), TeamRole.MEMBER)

        assert not team.can_add_member()
        with pytest.raises(MemberLimitExceededError) as exc_info:
            team.add_user(UserId.generate(), TeamRole.MEMBER)
        assert exc_info.value.code == "team.members.limitExceeded"

    @pytest.mark.parametrize("limit,code", [(0, "team.maxMembers.invalid")])
    def test_invalid_limit(self, team, limit, code):
        with pytest.raises(InvalidSettingsError) as exc_info:
            team.set_max_members(limit)
        assert exc_info.value.code == code

    def test_limit_below_member_count(self, team):
        team.add_user(UserId.generate(), TeamRole.MEMBER)

        with pytest.raises(InvalidSettingsError) as exc_info:
            team.set_max_members(1)

        assert exc_info.value.code == "team.maxMembers.tooLow"
        assert team.max_members is None

    def test_update_and_deactivate_events(self, team):
        team.update(TeamName("Platform Core"), None)
        team.deactivate()
        team.deactivate()

        assert [type(e) for e in team.get_events()] == [TeamUpdated, TeamDeactivated]
        assert not team.can_add_member()
