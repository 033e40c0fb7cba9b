"""Unit tests for member role changes and ownership transfer."""

from unittest.mock import ANY

import pytest

from tenancy.modules.organization.application.commands import (
    ChangeMemberRoleCommand,
    TransferOwnershipCommand,
)
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.errors import (
    LastOwnerError,
    NotMemberError,
    OwnershipTransferError,
    UnauthorizedOrganizationAccessError,
)
from tenancy.modules.organization.domain.events import OrganizationMemberRoleChanged


def change_command(organization_id, user, new_role, changed_by):
    return ChangeMemberRoleCommand(
        organization_id=organization_id,
        user_id=user.user_id,
        new_role=new_role,
        changed_by=changed_by.user_id,
    )


class TestChangeMemberRoleCommandHandler:
    """Test suite for role changes."""

    @pytest.mark.asyncio
    async def test_promote_member(self, module, owner, users, acme, add_member):
        await add_member(users[0])

        old_role = await module.change_member_role.handle(
            change_command(acme, users[0], Role.ADMIN, owner)
        )

        assert old_role is Role.MEMBER
        organization = await module.organization_repository.find_by_id(acme)
        assert organization.get_user_role(users[0].user_id) is Role.ADMIN

        published = module.event_publisher.published_events
        assert [type(event) for event in published] == [OrganizationMemberRoleChanged]
        assert (published[0].old_role, published[0].new_role) == ("member", "admin")
        module.notification_service.notify_role_changed.assert_awaited_once_with(
            ANY, users[0], Role.MEMBER, Role.ADMIN
        )

    @pytest.mark.asyncio
    async def test_unchanged_role_sends_nothing(
        self, module, owner, users, acme, add_member
    ):
        await add_member(users[0])

        old_role = await module.change_member_role.handle(
            change_command(acme, users[0], "member", owner)
        )

        assert old_role is Role.MEMBER
        assert module.event_publisher.published_events == []
        module.notification_service.notify_role_changed.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_cannot_promote_to_owner(self, module, users, acme, add_member):
        await add_member(users[0], Role.ADMIN)
        await add_member(users[1])

        with pytest.raises(UnauthorizedOrganizationAccessError) as exc_info:
            await module.change_member_role.handle(
                change_command(acme, users[1], Role.OWNER, users[0])
            )

        assert exc_info.value.code == "organization.role.cannotAssign"

    @pytest.mark.asyncio
    async def test_admin_cannot_demote_admin(self, module, users, acme, add_member):
        await add_member(users[0], Role.ADMIN)
        await add_member(users[1], Role.ADMIN)

        with pytest.raises(UnauthorizedOrganizationAccessError) as exc_info:
            await module.change_member_role.handle(
                change_command(acme, users[1], Role.MEMBER, users[0])
            )

        assert exc_info.value.code == "organization.role.cannotAssign"

    @pytest.mark.asyncio
    async def test_member_cannot_change_roles(self, module, users, acme, add_member):
        await add_member(users[0])
        await add_member(users[1])

        with pytest.raises(UnauthorizedOrganizationAccessError) as exc_info:
            await module.change_member_role.handle(
                change_command(acme, users[1], Role.GUEST, users[0])
            )

        assert exc_info.value.code == "organization.changeRole.unauthorized"

    @pytest.mark.asyncio
    async def test_target_must_be_member(self, module, owner, users, acme):
        with pytest.raises(NotMemberError):
            await module.change_member_role.handle(
                change_command(acme, users[0], Role.ADMIN, owner)
            )

    @pytest.mark.asyncio
    async def test_last_owner_cannot_be_demoted(self, module, owner, acme):
        with pytest.raises(LastOwnerError):
            await module.change_member_role.handle(
                change_command(acme, owner, Role.ADMIN, owner)
            )

        organization = await module.organization_repository.find_by_id(acme)
        assert organization.get_user_role(owner.user_id) is Role.OWNER


class TestTransferOwnershipCommandHandler:
    """Test suite for ownership transfer."""

    @pytest.mark.asyncio
    async def test_transfer_to_member(self, module, owner, users, acme, add_member):
        await add_member(users[0])

        await module.transfer_ownership.handle(
            TransferOwnershipCommand(
                organization_id=acme,
                new_owner_id=users[0].user_id,
                requested_by=owner.user_id,
            )
        )

        organization = await module.organization_repository.find_by_id(acme)
        assert organization.get_user_role(users[0].user_id) is Role.OWNER
        assert organization.get_user_role(owner.user_id) is Role.ADMIN

        notify_role_changed = module.notification_service.notify_role_changed
        assert notify_role_changed.await_count == 2
        first, second = (call.args for call in notify_role_changed.await_args_list)
        assert first[1:] == (users[0], Role.MEMBER, Role.OWNER)
        assert second[1:] == (owner, Role.OWNER, Role.ADMIN)

    @pytest.mark.asyncio
    async def test_transfer_to_outsider_adds_them(self, module, owner, users, acme):
        await module.transfer_ownership.handle(
            TransferOwnershipCommand(
                organization_id=acme,
                new_owner_id=users[1].user_id,
                requested_by=owner.user_id,
            )
        )

        organization = await module.organization_repository.find_by_id(acme)
        assert organization.get_user_role(users[1].user_id) is Role.OWNER
        assert organization.member_count == 2
        notify = module.notification_service.notify_user_added_to_organization
        notify.assert_awaited_once_with(
            ANY, users[1], Role.OWNER
        )

    @pytest.mark.asyncio
    async def test_only_owner_can_transfer(self, module, users, acme, add_member):
        await add_member(users[0], Role.ADMIN)

        with pytest.raises(OwnershipTransferError):
            await module.transfer_ownership.handle(
                TransferOwnershipCommand(
                    organization_id=acme,
                    new_owner_id=users[0].user_id,
                    requested_by=users[0].user_id,
                )
            )

        organization = await module.organization_repository.find_by_id(acme)
        assert organization.get_user_role(users[0].user_id) is Role.ADMIN
