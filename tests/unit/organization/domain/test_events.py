"""Unit tests for organization domain events."""

from uuid import uuid4

import pytest

from tenancy.core.errors import ValidationError
from tenancy.modules.organization.domain.events import (
    OrganizationCreated,
    UserAddedToOrganization,
)


class TestOrganizationEvents:
    def test_metadata_is_derived_from_event(self):
        organization_id = uuid4()

        event = UserAddedToOrganization(
            organization_id=organization_id, user_id=uuid4(), role="member"
        )

        assert event.metadata.event_type == "organization.user.added"
        assert event.metadata.aggregate_type == "Organization"
        assert event.aggregate_id == organization_id

    def test_missing_required_field_is_rejected(self):
        with pytest.raises(ValidationError):
            UserAddedToOrganization(organization_id=uuid4(), user_id=None, role="member")

    def test_to_dict_uses_primitives(self):
        organization_id = uuid4()
        created_by = uuid4()

        data = OrganizationCreated(
            organization_id=organization_id,
            name="Acme",
            description=None,
            created_by=created_by,
        ).to_dict()

        assert data["event_type"] == "organization.created"
        assert data["payload"] == {
            "organization_id": str(organization_id),
            "name": "Acme",
            "description": None,
            "created_by": str(created_by),
        }
        assert data["metadata"]["aggregate_id"] == str(organization_id)
