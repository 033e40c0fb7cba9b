"""
Integration tests for the organization module.

Drive the wired module end to end: use cases, in-memory stores,
transactions, event publication and notifications together.
"""

from collections import Counter

import pytest

from tenancy.modules.organization.application.commands import (
    AddUserToOrganizationCommand,
    ChangeMemberRoleCommand,
    CreateOrganizationCommand,
    RemoveUserFromOrganizationCommand,
    TransferOwnershipCommand,
    UpdateOrganizationCommand,
)
from tenancy.modules.organization.application.queries import GetOrganizationQuery
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.errors import (
    AlreadyMemberError,
    UnauthorizedOrganizationAccessError,
)
from tenancy.modules.organization.infrastructure.adapters import ALL_EVENTS
from tenancy.modules.organization.infrastructure.dependencies import OrganizationModule

from tests.factories import UserFactory


@pytest.fixture
def alice():
    return UserFactory()


@pytest.fixture
def bob():
    return UserFactory()


@pytest.fixture
def carol():
    return UserFactory()


@pytest.fixture
def app(policy, alice, bob, carol):
    """Module with the logging notification adapter."""
    return OrganizationModule(policy=policy, users=[alice, bob, carol])


def add(organization_id, user, added_by, role=Role.MEMBER):
    return AddUserToOrganizationCommand(
        organization_id=organization_id,
        user_id=user.user_id,
        added_by=added_by.user_id,
        role=role,
    )


class TestOrganizationLifecycle:
    @pytest.mark.asyncio
    async def test_membership_scenario(self, app, alice, bob, carol):
        # Alice founds Acme
        acme = await app.create_organization.handle(
            CreateOrganizationCommand(name="Acme", creator_id=alice.user_id)
        )
        organization = await app.organization_repository.find_by_id(acme)
        assert organization.get_user_role(alice.user_id) is Role.OWNER
        assert organization.member_count == 1

        # Alice adds Bob as a member
        await app.add_user.handle(add(acme, bob, alice))

        # Bob cannot add anyone yet
        with pytest.raises(UnauthorizedOrganizationAccessError) as exc_info:
            await app.add_user.handle(add(acme, carol, bob))
        assert exc_info.value.code == "organization.addUser.unauthorized"

        # promoted to admin, Bob can add members but not owners
        await app.change_member_role.handle(
            ChangeMemberRoleCommand(
                organization_id=acme,
                user_id=bob.user_id,
                new_role=Role.ADMIN,
                changed_by=alice.user_id,
            )
        )
        with pytest.raises(UnauthorizedOrganizationAccessError) as exc_info:
            await app.add_user.handle(add(acme, carol, bob, role=Role.OWNER))
        assert exc_info.value.code == "organization.role.cannotAssign"

        await app.add_user.handle(add(acme, carol, bob))

        view = await app.get_organization.handle(
            GetOrganizationQuery(organization_id=acme, requesting_user_id=carol.user_id)
        )
        assert view.member_count == 3
        assert {member.role for member in view.members} == {"owner", "admin", "member"}

        event_types = [
            event.metadata.event_type for event in app.event_publisher.published_events
        ]
        assert event_types == [
            "organization.created",
            "organization.user.added",
            "organization.user.roleChanged",
            "organization.user.added",
        ]

        notification_types = [
            n["type"] for n in app.notification_service.sent_notifications
        ]
        assert notification_types == [
            "organization_created",
            "user_added",
            "role_changed",
            "user_added",
        ]

    @pytest.mark.asyncio
    async def test_ownership_handover_and_departure(self, app, alice, bob):
        acme = await app.create_organization.handle(
            CreateOrganizationCommand(name="Acme", creator_id=alice.user_id)
        )
        await app.add_user.handle(add(acme, bob, alice))

        await app.transfer_ownership.handle(
            TransferOwnershipCommand(
                organization_id=acme,
                new_owner_id=bob.user_id,
                requested_by=alice.user_id,
            )
        )
        await app.remove_user.handle(
            RemoveUserFromOrganizationCommand(
                organization_id=acme, user_id=alice.user_id, removed_by=alice.user_id
            )
        )

        organization = await app.organization_repository.find_by_id(acme)
        assert [member.user_id for member in organization.get_members()] == [bob.user_id]
        assert organization.get_user_role(bob.user_id) is Role.OWNER
        assert await app.organization_repository.find_by_member_user_id(alice.user_id) == []

    @pytest.mark.asyncio
    async def test_events_are_published_once_per_change(self, app, alice, bob, carol):
        acme = await app.create_organization.handle(
            CreateOrganizationCommand(name="Acme", creator_id=alice.user_id)
        )
        await app.add_user.handle(add(acme, bob, alice))
        await app.add_user.handle(add(acme, carol, alice))
        await app.update_organization.handle(
            UpdateOrganizationCommand(
                organization_id=acme, requester_id=alice.user_id, name="Acme Corp"
            )
        )

        published = app.event_publisher.published_events
        assert len({event.event_id for event in published}) == len(published)
        assert Counter(event.metadata.event_type for event in published) == {
            "organization.created": 1,
            "organization.user.added": 2,
            "organization.updated": 1,
        }
        organization = await app.organization_repository.find_by_id(acme)
        assert not organization.has_events()


class TestTransactionalBehaviour:
    @pytest.mark.asyncio
    async def test_failing_subscriber_rolls_back_the_change(self, app, alice, bob):
        acme = await app.create_organization.handle(
            CreateOrganizationCommand(name="Acme", creator_id=alice.user_id)
        )

        async def reject(event):
            raise RuntimeError("projection unavailable")

        app.event_publisher.subscribe("organization.user.added", reject)

        with pytest.raises(RuntimeError):
            await app.add_user.handle(add(acme, bob, alice))

        organization = await app.organization_repository.find_by_id(acme)
        assert not organization.is_member(bob.user_id)
        assert organization.version == 1
        assert [n["type"] for n in app.notification_service.sent_notifications] == [
            "organization_created"
        ]
        assert [
            event.metadata.event_type for event in app.event_publisher.published_events
        ] == ["organization.created"]

        # the same command succeeds once the subscriber is gone
        app.event_publisher.unsubscribe("organization.user.added", reject)
        await app.add_user.handle(add(acme, bob, alice))

        organization = await app.organization_repository.find_by_id(acme)
        assert organization.is_member(bob.user_id)
        with pytest.raises(AlreadyMemberError):
            await app.add_user.handle(add(acme, bob, alice))

    @pytest.mark.asyncio
    async def test_subscribers_observe_committed_order(self, app, alice, bob):
        seen = []

        async def record(event):
            seen.append(event.metadata.event_type)

        app.event_publisher.subscribe(ALL_EVENTS, record)

        acme = await app.create_organization.handle(
            CreateOrganizationCommand(name="Acme", creator_id=alice.user_id)
        )
        await app.add_user.handle(add(acme, bob, alice))

        assert seen == ["organization.created", "organization.user.added"]

    @pytest.mark.asyncio
    async def test_failing_notifications_never_undo_commits(
        self, policy, alice, bob, notification_service
    ):
        notification_service.notify_organization_created.side_effect = RuntimeError
        notification_service.notify_user_added_to_organization.side_effect = RuntimeError
        app = OrganizationModule(
            policy=policy, users=[alice, bob], notification_service=notification_service
        )

        acme = await app.create_organization.handle(
            CreateOrganizationCommand(name="Acme", creator_id=alice.user_id)
        )
        await app.add_user.handle(add(acme, bob, alice))

        organization = await app.organization_repository.find_by_id(acme)
        assert organization.member_count == 2
        assert len(app.event_publisher.published_events) == 2
