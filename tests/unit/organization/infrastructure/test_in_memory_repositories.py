"""Unit tests for the in-memory organization and user repositories."""

import pytest

from tenancy.core.infrastructure import (
    ConcurrencyConflictError,
    UnitOfWork,
    UnitOfWorkError,
)
from tenancy.modules.organization.domain.enums import Role
from tenancy.modules.organization.domain.value_objects import (
    OrganizationId,
    OrganizationName,
    UserId,
)
from tenancy.modules.organization.infrastructure.repositories import (
    InMemoryOrganizationRepository,
    InMemoryUserRepository,
)

from tests.factories import OrganizationFactory, UserFactory


@pytest.fixture
def repository():
    return InMemoryOrganizationRepository()


class TestInMemoryOrganizationRepository:
    @pytest.mark.asyncio
    async def test_save_new_keeps_initial_version(self, repository):
        organization = OrganizationFactory()

        await repository.save(organization)

        stored = await repository.find_by_id(organization.id)
        assert stored.version == 1
        assert await repository.count() == 1

    @pytest.mark.asyncio
    async def test_found_copies_are_isolated(self, repository):
        organization = OrganizationFactory()
        await repository.save(organization)

        loaded = await repository.find_by_id(organization.id)
        loaded.add_user(UserId.generate(), Role.MEMBER)

        reloaded = await repository.find_by_id(organization.id)
        assert reloaded.member_count == 1
        assert reloaded is not loaded

    @pytest.mark.asyncio
    async def test_stored_copy_has_no_pending_events(self, repository):
        organization = OrganizationFactory()
        organization.add_user(UserId.generate(), Role.MEMBER)

        await repository.save(organization)

        assert organization.has_events()
        assert not (await repository.find_by_id(organization.id)).has_events()

    @pytest.mark.asyncio
    async def test_update_bumps_version(self, repository):
        organization = OrganizationFactory()
        await repository.save(organization)

        loaded = await repository.find_by_id(organization.id)
        loaded.add_user(UserId.generate(), Role.MEMBER)
        await repository.save(loaded)

        assert loaded.version == 2
        assert (await repository.find_by_id(organization.id)).version == 2

    @pytest.mark.asyncio
    async def test_stale_write_is_rejected(self, repository):
        organization = OrganizationFactory()
        await repository.save(organization)
        first = await repository.find_by_id(organization.id)
        second = await repository.find_by_id(organization.id)

        first.add_user(UserId.generate(), Role.MEMBER)
        await repository.save(first)
        second.add_user(UserId.generate(), Role.ADMIN)

        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await repository.save(second)

        assert exc_info.value.details["expected_version"] == 1
        assert exc_info.value.details["actual_version"] == 2
        assert (await repository.find_by_id(organization.id)).member_count == 2

    @pytest.mark.asyncio
    async def test_lookup_by_name_and_member(self, repository):
        organization = OrganizationFactory(name=OrganizationName("Globex"))
        other = OrganizationFactory()
        await repository.save(organization)
        await repository.save(other)
        owner_id = organization.get_members()[0].user_id

        assert await repository.exists_by_name(OrganizationName("Globex"))
        assert not await repository.exists_by_name(OrganizationName("Initech"))
        assert (await repository.find_by_name(OrganizationName("Globex"))).id == (
            organization.id
        )
        memberships = await repository.find_by_member_user_id(owner_id)
        assert [org.id for org in memberships] == [organization.id]

    @pytest.mark.asyncio
    async def test_find_all_active_skips_deactivated(self, repository):
        active = OrganizationFactory()
        inactive = OrganizationFactory()
        inactive.deactivate()
        await repository.save(active)
        await repository.save(inactive)

        assert [org.id for org in await repository.find_all_active()] == [active.id]
        assert len(await repository.find_by_member_user_id(
            inactive.get_members()[0].user_id
        )) == 1

    @pytest.mark.asyncio
    async def test_delete(self, repository):
        organization = OrganizationFactory()
        await repository.save(organization)

        assert await repository.delete(organization.id) is True
        assert await repository.delete(organization.id) is False
        assert await repository.find_by_id(organization.id) is None

    @pytest.mark.asyncio
    async def test_unknown_id(self, repository):
        assert await repository.find_by_id(OrganizationId.generate()) is None

    @pytest.mark.asyncio
    async def test_writes_rejected_in_read_only_unit_of_work(self, repository):
        organization = OrganizationFactory()

        with pytest.raises(UnitOfWorkError) as exc_info:
            async with UnitOfWork([repository], read_only=True):
                await repository.save(organization)

        assert exc_info.value.code == "transaction.readOnly"
        assert await repository.count() == 0

    @pytest.mark.asyncio
    async def test_unit_of_work_rollback_restores_store(self, repository):
        kept = OrganizationFactory()
        await repository.save(kept)

        with pytest.raises(RuntimeError):
            async with UnitOfWork([repository]):
                await repository.save(OrganizationFactory())
                await repository.delete(kept.id)
                raise RuntimeError("boom")

        assert await repository.count() == 1
        assert await repository.find_by_id(kept.id) is not None


class TestInMemoryUserRepository:
    @pytest.mark.asyncio
    async def test_find_by_ids_keeps_request_order(self):
        alice, bob, carol = UserFactory.build_batch(3)
        repository = InMemoryUserRepository([alice, bob, carol])

        found = await repository.find_by_ids(
            [carol.user_id, UserId.generate(), alice.user_id]
        )

        assert found == [carol, alice]

    @pytest.mark.asyncio
    async def test_find_by_email(self):
        user = UserFactory()
        repository = InMemoryUserRepository([user])

        assert await repository.find_by_email(user.email) == user
        assert await repository.exists_by_email(user.email)

    @pytest.mark.asyncio
    async def test_stored_users_are_copies(self):
        user = UserFactory()
        repository = InMemoryUserRepository([user])

        user.suspend()

        stored = await repository.find_by_id(user.user_id)
        assert stored.is_active()
        assert [u.user_id for u in await repository.find_all_active()] == [user.user_id]

    @pytest.mark.asyncio
    async def test_save_rejected_in_read_only_unit_of_work(self):
        repository = InMemoryUserRepository()

        with pytest.raises(UnitOfWorkError):
            async with UnitOfWork([repository], read_only=True):
                await repository.save(UserFactory())

        assert await repository.find_all_active() == []
