"""
Unit tests for the organization domain service.

Tests cover:
- Name availability and join eligibility
- Settings policy validation
- Merge rules and role tie-break
- Ownership transfer
"""

from unittest.mock import AsyncMock, Mock

import pytest

from tenancy.core.config import MembershipPolicy
from tenancy.modules.organization.domain.aggregates import Organization
from tenancy.modules.organization.domain.enums import Role, UserStatus
from tenancy.modules.organization.domain.errors import (
    InactiveUserError,
    InvalidSettingsError,
    MergeRejectedError,
    OrganizationNotFoundError,
    OwnershipTransferError,
    SettingsExceedCurrentMembersError,
    UserCannotJoinError,
    UserNotFoundError,
    UserOrganizationLimitError,
)
from tenancy.modules.organization.domain.services import OrganizationDomainService
from tenancy.modules.organization.domain.value_objects import (
    OrganizationId,
    OrganizationName,
    OrganizationSettings,
    UserId,
)

from tests.factories import UserFactory


def make_organization(owner_id: UserId, name: str = "Acme") -> Organization:
    organization = Organization.create(
        OrganizationId.generate(), OrganizationName(name), None, owner_id
    )
    organization.clear_events()
    return organization


@pytest.fixture
def organization_repository():
    repository = Mock()
    repository.exists_by_name = AsyncMock(return_value=False)
    repository.find_by_member_user_id = AsyncMock(return_value=[])
    repository.find_by_id = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def user_repository():
    repository = Mock()
    repository.find_by_id = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def service(organization_repository, user_repository):
    return OrganizationDomainService(
        organization_repository,
        user_repository,
        MembershipPolicy(max_organizations_per_user=2, max_members_limit=500),
    )


class TestNameAndEligibility:
    """Test suite for uniqueness and join rules."""

    @pytest.mark.asyncio
    async def test_name_available(self, service, organization_repository):
        name = OrganizationName("Acme")

        assert await service.is_organization_name_available(name)
        organization_repository.exists_by_name.assert_awaited_once_with(name)

    @pytest.mark.asyncio
    async def test_name_taken(self, service, organization_repository):
        organization_repository.exists_by_name.return_value = True

        assert not await service.is_organization_name_available(OrganizationName("Acme"))

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        with pytest.raises(UserNotFoundError):
            await service.validate_user_can_join_organization(
                UserId.generate(), OrganizationId.generate()
            )

    @pytest.mark.asyncio
    async def test_unverified_user_cannot_join(self, service, user_repository):
        user = UserFactory(email_verified=False)
        user_repository.find_by_id.return_value = user

        with pytest.raises(UserCannotJoinError) as exc_info:
            await service.validate_user_can_join_organization(
                user.user_id, OrganizationId.generate()
            )

        assert exc_info.value.details["reason"] == "email not verified"

    @pytest.mark.asyncio
    async def test_suspended_user_cannot_join(self, service, user_repository):
        user = UserFactory(status=UserStatus.SUSPENDED)
        user_repository.find_by_id.return_value = user

        with pytest.raises(UserCannotJoinError) as exc_info:
            await service.validate_user_can_join_organization(
                user.user_id, OrganizationId.generate()
            )

        assert exc_info.value.code == "user.cannotJoin"
        assert exc_info.value.details["reason"] == "status suspended"

    @pytest.mark.asyncio
    async def test_organization_limit(
        self, service, user_repository, organization_repository
    ):
        user = UserFactory()
        user_repository.find_by_id.return_value = user
        organization_repository.find_by_member_user_id.return_value = [
            make_organization(user.user_id, "One"),
            make_organization(user.user_id, "Two"),
        ]

        with pytest.raises(UserOrganizationLimitError) as exc_info:
            await service.validate_user_can_join_organization(
                user.user_id, OrganizationId.generate()
            )

        assert exc_info.value.details["limit"] == 2

    @pytest.mark.asyncio
    async def test_eligible_user(self, service, user_repository):
        user = UserFactory()
        user_repository.find_by_id.return_value = user

        await service.validate_user_can_join_organization(
            user.user_id, OrganizationId.generate()
        )


class TestSettingsValidation:
    """Test suite for settings policy checks."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "max_members,code",
        [(0, "settings.maxMembers.tooLow"), (501, "settings.maxMembers.tooHigh")],
    )
    async def test_limit_out_of_range(self, service, max_members, code):
        settings = OrganizationSettings.default(max_members=max_members)

        with pytest.raises(InvalidSettingsError) as exc_info:
            await service.validate_organization_settings(
                settings, OrganizationId.generate()
            )

        assert exc_info.value.code == code

    @pytest.mark.asyncio
    async def test_non_integer_limit(self, service):
        settings = OrganizationSettings({"max_members": "lots"})

        with pytest.raises(InvalidSettingsError) as exc_info:
            await service.validate_organization_settings(
                settings, OrganizationId.generate()
            )

        assert exc_info.value.code == "settings.maxMembers.invalid"

    @pytest.mark.asyncio
    async def test_missing_organization(self, service):
        with pytest.raises(OrganizationNotFoundError):
            await service.validate_organization_settings(
                OrganizationSettings.default(max_members=10), OrganizationId.generate()
            )

    @pytest.mark.asyncio
    async def test_limit_below_member_count(self, service, organization_repository):
        organization = make_organization(UserId.generate())
        organization.add_user(UserId.generate(), Role.MEMBER)
        organization_repository.find_by_id.return_value = organization

        with pytest.raises(SettingsExceedCurrentMembersError):
            await service.validate_organization_settings(
                OrganizationSettings.default(max_members=1), organization.id
            )

    @pytest.mark.asyncio
    async def test_invalid_default_role(self, service, organization_repository):
        organization = make_organization(UserId.generate())
        organization_repository.find_by_id.return_value = organization
        settings = OrganizationSettings.default().with_value(
            OrganizationSettings.DEFAULT_USER_ROLE, "emperor"
        )

        with pytest.raises(InvalidSettingsError) as exc_info:
            await service.validate_organization_settings(settings, organization.id)

        assert exc_info.value.code == "settings.defaultRole.invalid"

    def test_policy_only_validation_skips_lookup(self, service, organization_repository):
        service.validate_settings_policy(OrganizationSettings.default(max_members=10))

        organization_repository.find_by_id.assert_not_called()

    def test_limits_and_suggested_role(self, service):
        organization = make_organization(UserId.generate())
        organization.update_settings(
            OrganizationSettings.default(max_members=1).with_value(
                OrganizationSettings.DEFAULT_USER_ROLE, "Guest"
            )
        )

        assert service.has_reached_organization_limits(organization)
        assert (
            service.suggest_role_for_new_member(organization, UserId.generate())
            is Role.GUEST
        )
        assert str(service) == "OrganizationDomainService"


class TestMerge:
    """Test suite for merging organizations."""

    def test_higher_target_role_survives(self, service):
        requester = UserId.generate()
        shared = UserId.generate()
        source = make_organization(requester, "Source")
        target = make_organization(requester, "Target")
        source.add_user(shared, Role.MEMBER)
        target.add_user(shared, Role.ADMIN)

        merged = service.merge_organizations(source, target, requester)

        assert merged is target
        assert target.get_user_role(shared) is Role.ADMIN
        assert not source.is_active()

    def test_higher_source_role_wins(self, service):
        requester = UserId.generate()
        shared = UserId.generate()
        source = make_organization(requester, "Source")
        target = make_organization(requester, "Target")
        source.add_user(shared, Role.ADMIN)
        target.add_user(shared, Role.GUEST)

        service.merge_organizations(source, target, requester)

        assert target.get_user_role(shared) is Role.ADMIN

    def test_source_only_members_are_added_with_their_role(self, service):
        requester = UserId.generate()
        newcomer = UserId.generate()
        source = make_organization(requester, "Source")
        target = make_organization(requester, "Target")
        source.add_user(newcomer, Role.ADMIN)

        service.merge_organizations(source, target, requester)

        assert target.get_user_role(newcomer) is Role.ADMIN
        assert target.member_count == 2

    def test_requester_must_own_both(self, service):
        requester = UserId.generate()
        source = make_organization(requester, "Source")
        target = make_organization(UserId.generate(), "Target")
        source.add_user(UserId.generate(), Role.MEMBER)

        with pytest.raises(MergeRejectedError) as exc_info:
            service.merge_organizations(source, target, requester)

        assert exc_info.value.violations == ["User must be owner of target organization"]
        assert source.is_active()
        assert target.member_count == 1
        assert not source.has_events() and not target.has_events()

    def test_all_violations_are_reported(self, service):
        requester = UserId.generate()
        source = make_organization(UserId.generate(), "Source")
        target = make_organization(UserId.generate(), "Target")
        source.deactivate()
        target.update_settings(OrganizationSettings.default(max_members=1))

        violations = service.validate_organization_merge(source, target, requester)

        assert violations == [
            "User must be owner of source organization",
            "User must be owner of target organization",
            "Source organization is not active",
            "Merge would exceed target organization's member limit",
        ]

    def test_cannot_merge_into_itself(self, service):
        requester = UserId.generate()
        organization = make_organization(requester)

        with pytest.raises(MergeRejectedError) as exc_info:
            service.merge_organizations(organization, organization, requester)

        assert "Source and target organizations must differ" in exc_info.value.violations
        assert organization.is_active()
        assert not organization.has_events()


class TestTransferOwnership:
    """Test suite for ownership transfer."""

    @pytest.mark.asyncio
    async def test_promotes_member_and_demotes_owner(self, service, user_repository):
        owner_id = UserId.generate()
        new_owner = UserFactory()
        organization = make_organization(owner_id)
        organization.add_user(new_owner.user_id, Role.MEMBER)
        user_repository.find_by_id.return_value = new_owner

        await service.transfer_ownership(organization, owner_id, new_owner.user_id)

        assert organization.get_user_role(new_owner.user_id) is Role.OWNER
        assert organization.get_user_role(owner_id) is Role.ADMIN
        organization.validate_invariants()

    @pytest.mark.asyncio
    async def test_adds_non_member_as_owner(self, service, user_repository):
        owner_id = UserId.generate()
        new_owner = UserFactory()
        organization = make_organization(owner_id)
        user_repository.find_by_id.return_value = new_owner

        await service.transfer_ownership(organization, owner_id, new_owner.user_id)

        assert organization.member_count == 2
        assert organization.owner_count == 1

    @pytest.mark.asyncio
    async def test_requires_current_owner(self, service):
        organization = make_organization(UserId.generate())

        with pytest.raises(OwnershipTransferError) as exc_info:
            await service.transfer_ownership(
                organization, UserId.generate(), UserId.generate()
            )

        assert exc_info.value.code == "organization.transfer.notOwner"

    @pytest.mark.asyncio
    async def test_new_owner_must_exist(self, service):
        owner_id = UserId.generate()

        with pytest.raises(UserNotFoundError):
            await service.transfer_ownership(
                make_organization(owner_id), owner_id, UserId.generate()
            )

    @pytest.mark.asyncio
    async def test_new_owner_must_be_active(self, service, user_repository):
        owner_id = UserId.generate()
        banned = UserFactory(status=UserStatus.BANNED)
        user_repository.find_by_id.return_value = banned
        organization = make_organization(owner_id)

        with pytest.raises(InactiveUserError):
            await service.transfer_ownership(organization, owner_id, banned.user_id)

        assert organization.get_user_role(owner_id) is Role.OWNER
