"""Fixtures for organization use case tests."""

import pytest_asyncio

from tenancy.modules.organization.application.commands import (
    AddUserToOrganizationCommand,
    CreateOrganizationCommand,
)
from tenancy.modules.organization.domain.enums import Role


@pytest_asyncio.fixture
async def acme(module, owner):
    """Id of an organization named Acme owned by ``owner``."""
    organization_id = await module.create_organization.handle(
        CreateOrganizationCommand(name="Acme", creator_id=owner.user_id)
    )
    module.event_publisher.clear()
    module.notification_service.reset_mock()
    return organization_id


@pytest_asyncio.fixture
async def add_member(module, owner, acme):
    """Add a user to Acme on behalf of the owner."""

    async def add(user, role: Role = Role.MEMBER):
        await module.add_user.handle(
            AddUserToOrganizationCommand(
                organization_id=acme,
                user_id=user.user_id,
                added_by=owner.user_id,
                role=role,
            )
        )
        module.event_publisher.clear()
        module.notification_service.reset_mock()

    return add
