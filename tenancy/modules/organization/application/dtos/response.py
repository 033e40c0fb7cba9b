"""
Response DTOs for organization queries.

Read models returned by use cases; no domain objects leak through them.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from tenancy.modules.organization.domain.aggregates import Organization
from tenancy.modules.organization.domain.entities import OrganizationMember, User


class MemberView(BaseModel):
    """A member of an organization joined with the user's profile."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    email: str
    first_name: str
    last_name: str
    role: str
    joined_at: datetime
    full_name: str

    @classmethod
    def from_member(cls, member: OrganizationMember, user: User) -> "MemberView":
        return cls(
            user_id=member.user_id.value,
            email=str(user.email),
            first_name=str(user.first_name),
            last_name=str(user.last_name),
            role=member.role.value,
            joined_at=member.joined_at,
            full_name=user.full_name,
        )


class OrganizationView(BaseModel):
    """Read model of an organization and its resolvable members."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str | None = None
    settings: dict[str, Any] = Field(default_factory=dict)
    active: bool
    member_count: int
    members: list[MemberView] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_organization(
        cls, organization: Organization, members: list[MemberView]
    ) -> "OrganizationView":
        return cls(
            id=organization.id.value,
            name=str(organization.name),
            description=organization.description.value,
            settings=organization.settings.to_dict(),
            active=organization.active,
            member_count=organization.member_count,
            members=members,
            created_at=organization.created_at,
            updated_at=organization.updated_at,
        )
