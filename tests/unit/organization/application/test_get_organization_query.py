"""Unit tests for the get organization query."""

import pytest

from tenancy.modules.organization.application.queries import GetOrganizationQuery
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.errors import (
    OrganizationNotFoundError,
    UnauthorizedOrganizationAccessError,
)
from tenancy.modules.organization.domain.value_objects import OrganizationId, UserId


class TestGetOrganizationQueryHandler:
    """Test suite for organization reads."""

    @pytest.mark.asyncio
    async def test_member_reads_organization(self, module, owner, users, acme, add_member):
        await add_member(users[0], Role.ADMIN)

        view = await module.get_organization.handle(
            GetOrganizationQuery(organization_id=acme, requesting_user_id=users[0].user_id)
        )

        assert view.id == acme.value
        assert view.name == "Acme"
        assert view.active is True
        assert view.member_count == 2
        assert view.settings["max_members"] == 100

        roles = {member.user_id: member.role for member in view.members}
        assert roles == {owner.user_id.value: "owner", users[0].user_id.value: "admin"}
        owner_view = next(m for m in view.members if m.user_id == owner.user_id.value)
        assert owner_view.email == str(owner.email)
        assert owner_view.full_name == owner.full_name

    @pytest.mark.asyncio
    async def test_non_member_is_denied(self, module, users, acme):
        with pytest.raises(UnauthorizedOrganizationAccessError) as exc_info:
            await module.get_organization.handle(
                GetOrganizationQuery(
                    organization_id=acme, requesting_user_id=users[0].user_id
                )
            )

        assert exc_info.value.code == "organization.access.denied"

    @pytest.mark.asyncio
    async def test_unknown_organization(self, module, owner):
        with pytest.raises(OrganizationNotFoundError) as exc_info:
            await module.get_organization.handle(
                GetOrganizationQuery(
                    organization_id=OrganizationId.generate(),
                    requesting_user_id=owner.user_id,
                )
            )

        assert exc_info.value.code == "organization.notFound"

    @pytest.mark.asyncio
    async def test_members_without_user_record_are_skipped(self, module, owner, acme):
        organization = await module.organization_repository.find_by_id(acme)
        organization.add_user(UserId.generate(), Role.MEMBER)
        await module.organization_repository.save(organization)

        view = await module.get_organization.handle(
            GetOrganizationQuery(organization_id=acme, requesting_user_id=owner.user_id)
        )

        assert view.member_count == 2
        assert [member.user_id for member in view.members] == [owner.user_id.value]

    @pytest.mark.asyncio
    async def test_read_does_not_publish(self, module, owner, acme):
        await module.get_organization.handle(
            GetOrganizationQuery(organization_id=acme, requesting_user_id=owner.user_id)
        )

        assert module.event_publisher.published_events == []
        assert module.notification_service.method_calls == []
