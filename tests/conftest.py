"""
Shared test configuration and fixtures.

Provides a membership policy, seeded users, and a fully wired in-memory
organization module.
"""

from unittest.mock import AsyncMock

import pytest

from tenancy.core.config import MembershipPolicy
from tenancy.core.enums import LogLevel
from tenancy.core.logging import LogConfig, configure_logging
from tenancy.modules.organization.infrastructure.dependencies import OrganizationModule

from tests.factories import UserFactory

configure_logging(LogConfig(level=LogLevel.DEBUG))


@pytest.fixture
def policy():
    return MembershipPolicy()


@pytest.fixture
def owner():
    return UserFactory()


@pytest.fixture
def users():
    return UserFactory.build_batch(4)


@pytest.fixture
def notification_service():
    """Notification port double whose calls can be inspected."""
    return AsyncMock()


@pytest.fixture
def module(policy, owner, users, notification_service):
    """Organization module over in-memory stores seeded with the test users."""
    return OrganizationModule(
        policy=policy,
        users=[owner, *users],
        notification_service=notification_service,
    )
