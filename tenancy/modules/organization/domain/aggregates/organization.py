"""
Organization Aggregate

A tenant with members holding organization roles and an open settings map.
Creation makes the creator the first owner; reconstitution from storage
stages no events.
"""

from collections.abc import Iterable
from datetime import datetime

from ..entities.member import OrganizationMember
from ..enums import Role
from ..errors import SettingsExceedCurrentMembersError
from ..events import (
    OrganizationCreated,
    OrganizationMemberRoleChanged,
    OrganizationUpdated,
    UserAddedToOrganization,
    UserRemovedFromOrganization,
)
from ..value_objects import (
    OrganizationDescription,
    OrganizationId,
    OrganizationName,
    OrganizationSettings,
    UserId,
)
from .roled_membership import RoledMembershipAggregate


class Organization(RoledMembershipAggregate[Role, OrganizationMember]):
    """Organization aggregate root."""

    AGGREGATE_NAME = "organization"
    MEMBER_TYPE = OrganizationMember
    GUARDED_ROLE = Role.OWNER

    def __init__(
        self,
        organization_id: OrganizationId,
        name: OrganizationName,
        description: OrganizationDescription | None = None,
        settings: OrganizationSettings | None = None,
        members: Iterable[OrganizationMember] = (),
        active: bool = True,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 1,
    ):
        super().__init__(
            entity_id=organization_id,
            name=name,
            description=description or OrganizationDescription.empty(),
            members=members,
            active=active,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
        self.settings = settings or OrganizationSettings.default()

    @classmethod
    def create(
        cls,
        organization_id: OrganizationId,
        name: OrganizationName,
        description: OrganizationDescription | None,
        creator_id: UserId,
    ) -> "Organization":
        """Create a new organization owned by ``creator_id``."""
        organization = cls(
            organization_id=organization_id,
            name=name,
            description=description,
            members=[OrganizationMember(user_id=creator_id, role=Role.OWNER)],
        )
        organization.add_event(
            OrganizationCreated(
                organization_id=organization_id.value,
                name=str(organization.name),
                description=organization.description.value,
                created_by=creator_id.value,
            )
        )
        return organization

    @classmethod
    def reconstitute(
        cls,
        organization_id: OrganizationId,
        name: OrganizationName,
        description: OrganizationDescription | None,
        settings: OrganizationSettings | None,
        members: Iterable[OrganizationMember],
        active: bool,
        created_at: datetime,
        updated_at: datetime,
        version: int = 1,
    ) -> "Organization":
        """Rebuild persisted state without staging events."""
        return cls(
            organization_id=organization_id,
            name=name,
            description=description,
            settings=settings,
            members=members,
            active=active,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )

    @property
    def organization_id(self) -> OrganizationId:
        return self.id

    # =========================================================================
    # Settings
    # =========================================================================

    def update_settings(self, new_settings: OrganizationSettings) -> None:
        """
        Replace the settings map.

        Raises:
            InactiveAggregateError: If the organization is inactive
            SettingsExceedCurrentMembersError: If the new member limit is below
                the current member count
        """
        self._ensure_active("update settings for")
        limit = new_settings.max_members
        if limit is not None and limit < self.member_count:
            raise SettingsExceedCurrentMembersError(
                self.AGGREGATE_NAME, self.id, limit, self.member_count
            )
        self.settings = new_settings
        self.mark_modified()

    def member_limit(self) -> int | None:
        return self.settings.max_members

    # =========================================================================
    # Event factories
    # =========================================================================

    def _empty_description(self) -> OrganizationDescription:
        return OrganizationDescription.empty()

    def _updated_event(self) -> OrganizationUpdated:
        return OrganizationUpdated(
            organization_id=self.id.value,
            name=str(self.name),
            description=self.description.value,
        )

    def _member_added_event(self, member: OrganizationMember) -> UserAddedToOrganization:
        return UserAddedToOrganization(
            organization_id=self.id.value,
            user_id=member.user_id.value,
            role=member.role.value,
        )

    def _member_removed_event(
        self, member: OrganizationMember
    ) -> UserRemovedFromOrganization:
        return UserRemovedFromOrganization(
            organization_id=self.id.value, user_id=member.user_id.value
        )

    def _member_role_changed_event(
        self, old: OrganizationMember, new: OrganizationMember
    ) -> OrganizationMemberRoleChanged:
        return OrganizationMemberRoleChanged(
            organization_id=self.id.value,
            user_id=new.user_id.value,
            old_role=old.role.value,
            new_role=new.role.value,
        )

    def __repr__(self) -> str:
        return (
            f"Organization(id={self.id}, name={self.name!s}, "
            f"members={self.member_count}, active={self.active})"
        )
