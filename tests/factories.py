"""
Test factories for users and organizations.

Built with factory_boy and Faker; value objects are generated valid.
"""

import factory
from faker import Faker

from tenancy.modules.organization.domain.aggregates import Organization
from tenancy.modules.organization.domain.entities import OrganizationMember, User
from tenancy.modules.organization.domain.enums import Role, UserStatus
from tenancy.modules.organization.domain.value_objects import (
    EmailAddress,
    OrganizationId,
    OrganizationName,
    PersonName,
    UserId,
)

fake = Faker()


class UserFactory(factory.Factory):
    """Factory for active users with a verified e-mail address."""

    class Meta:
        model = User

    user_id = factory.LazyFunction(UserId.generate)
    email = factory.LazyFunction(lambda: EmailAddress(fake.unique.email()))
    first_name = factory.LazyFunction(lambda: PersonName(fake.first_name()))
    last_name = factory.LazyFunction(lambda: PersonName(fake.last_name()))
    status = UserStatus.ACTIVE
    email_verified = True


class OrganizationFactory(factory.Factory):
    """Factory for reconstituted organizations owned by a generated user."""

    class Meta:
        model = Organization

    organization_id = factory.LazyFunction(OrganizationId.generate)
    name = factory.Sequence(lambda n: OrganizationName(f"Organization {n}"))
    members = factory.LazyFunction(
        lambda: [OrganizationMember(user_id=UserId.generate(), role=Role.OWNER)]
    )


__all__ = ["OrganizationFactory", "UserFactory", "fake"]
