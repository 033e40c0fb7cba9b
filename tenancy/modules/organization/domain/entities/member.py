"""
Member Snapshots

Immutable records of a user's membership in an organization or team. Only
the owning aggregate replaces a member, by way of ``with_role``.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Generic, TypeVar

from ..enums import RankedRole, Role, TeamRole
from ..value_objects import UserId

RoleT = TypeVar("RoleT", bound=RankedRole)


@dataclass(frozen=True)
class Member(Generic[RoleT]):
    """A user's membership with a role; identity is the user id."""

    user_id: UserId
    role: RoleT
    joined_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        if not isinstance(self.user_id, UserId):
            raise TypeError("Member user_id must be a UserId")
        if not isinstance(self.role, RankedRole):
            raise TypeError("Member role must be a role enum")

    def with_role(self, role: RoleT):
        """Return a copy holding ``role``; ``joined_at`` is preserved."""
        return replace(self, role=role)

    def has_permission(self, required: RoleT) -> bool:
        return self.role.has_permission(required)

    def can_manage(self, other: "Member[RoleT]") -> bool:
        return self.role.can_manage(other.role)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Member) or type(other) is not type(self):
            return False
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.user_id))


@dataclass(frozen=True, eq=False)
class OrganizationMember(Member[Role]):
    """Membership of a user in an organization."""

    @property
    def is_owner(self) -> bool:
        return self.role is Role.OWNER

    @property
    def is_admin(self) -> bool:
        return self.role.has_permission(Role.ADMIN)


@dataclass(frozen=True, eq=False)
class TeamMember(Member[TeamRole]):
    """Membership of a user in a team."""

    @property
    def is_admin(self) -> bool:
        return self.role is TeamRole.ADMIN

    @property
    def is_lead(self) -> bool:
        return self.role is TeamRole.LEAD
