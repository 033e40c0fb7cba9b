"""
Roled Membership Aggregate

Generic aggregate holding a map of users to role-carrying member snapshots.
Organizations and teams specialize it with their own role enum, the role
that must never disappear while members exist, and their events.

Rules enforced on every mutation:
- at most one member per user
- while there are members, at least one holds the guarded role
- the member count never exceeds the member limit when one is set
- only active aggregates change membership
"""

from abc import abstractmethod
from collections.abc import Iterable
from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

from tenancy.core.events.types import DomainEvent

from ..entities.member import Member
from ..enums import RankedRole
from ..errors import (
    AlreadyMemberError,
    InvariantViolationError,
    LastOwnerError,
    MemberLimitExceededError,
    NotMemberError,
)
from ..value_objects import UserId
from .tenant import TenantAggregate

RoleT = TypeVar("RoleT", bound=RankedRole)
MemberT = TypeVar("MemberT", bound=Member)


class RoledMembershipAggregate(TenantAggregate, Generic[RoleT, MemberT]):
    """Aggregate whose members each hold a role from a ranked hierarchy."""

    MEMBER_TYPE: ClassVar[type[Member]] = Member
    GUARDED_ROLE: ClassVar[RankedRole]

    def __init__(
        self,
        entity_id: Any,
        name: Any,
        description: Any,
        members: Iterable[MemberT] = (),
        active: bool = True,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 1,
    ):
        super().__init__(
            entity_id, name, description, active, created_at, updated_at, version
        )
        self._members: dict[UserId, MemberT] = {}
        for member in members:
            if member.user_id in self._members:
                raise AlreadyMemberError(self.AGGREGATE_NAME, self.id, member.user_id)
            self._members[member.user_id] = member

    # =========================================================================
    # Hooks
    # =========================================================================

    def member_limit(self) -> int | None:
        """Maximum number of members, or None for unlimited."""
        return None

    @abstractmethod
    def _member_added_event(self, member: MemberT) -> DomainEvent:
        """Event staged when a member joins."""

    @abstractmethod
    def _member_removed_event(self, member: MemberT) -> DomainEvent:
        """Event staged when a member leaves."""

    @abstractmethod
    def _member_role_changed_event(self, old: MemberT, new: MemberT) -> DomainEvent:
        """Event staged when a member's role changes."""

    # =========================================================================
    # Membership mutations
    # =========================================================================

    def add_user(self, user_id: UserId, role: RoleT) -> MemberT:
        """
        Add a user with the given role.

        Raises:
            InactiveAggregateError: If the aggregate is inactive
            AlreadyMemberError: If the user is already a member
            MemberLimitExceededError: If the member limit has been reached
        """
        self._ensure_active("add users to")
        if user_id in self._members:
            raise AlreadyMemberError(self.AGGREGATE_NAME, self.id, user_id)
        self._ensure_capacity()

        member = self.MEMBER_TYPE(user_id=user_id, role=role)
        self._members[user_id] = member
        self.mark_modified()
        self.add_event(self._member_added_event(member))
        return member

    def update_user_role(self, user_id: UserId, new_role: RoleT) -> MemberT:
        """
        Change a member's role.

        Raises:
            InactiveAggregateError: If the aggregate is inactive
            NotMemberError: If the user is not a member
            LastOwnerError: If this would demote the last holder of the guarded role
        """
        self._ensure_active("update user roles in")
        current = self._require_member(user_id)
        if current.role == new_role:
            return current
        if current.role == self.GUARDED_ROLE:
            self._ensure_not_last_guarded(user_id)

        updated = current.with_role(new_role)
        self._members[user_id] = updated
        self.mark_modified()
        self.add_event(self._member_role_changed_event(current, updated))
        return updated

    def remove_user(self, user_id: UserId) -> MemberT:
        """
        Remove a member.

        Raises:
            InactiveAggregateError: If the aggregate is inactive
            NotMemberError: If the user is not a member
            LastOwnerError: If this would remove the last holder of the guarded role
        """
        self._ensure_active("remove users from")
        member = self._require_member(user_id)
        if member.role == self.GUARDED_ROLE:
            self._ensure_not_last_guarded(user_id)

        del self._members[user_id]
        self.mark_modified()
        self.add_event(self._member_removed_event(member))
        return member

    # =========================================================================
    # Queries
    # =========================================================================

    def is_member(self, user_id: UserId) -> bool:
        return user_id in self._members

    def get_member(self, user_id: UserId) -> MemberT | None:
        return self._members.get(user_id)

    def get_members(self) -> tuple[MemberT, ...]:
        """Immutable snapshots of all members in join order."""
        return tuple(self._members.values())

    def get_user_role(self, user_id: UserId) -> RoleT | None:
        member = self._members.get(user_id)
        return member.role if member else None

    def has_role(self, user_id: UserId, minimum_role: RoleT) -> bool:
        """True when the user is a member holding at least ``minimum_role``."""
        role = self.get_user_role(user_id)
        return role is not None and role.has_permission(minimum_role)

    @property
    def member_count(self) -> int:
        return len(self._members)

    @property
    def owner_count(self) -> int:
        return sum(1 for m in self._members.values() if m.role == self.GUARDED_ROLE)

    def has_capacity(self) -> bool:
        limit = self.member_limit()
        return limit is None or self.member_count < limit

    # =========================================================================
    # Invariants
    # =========================================================================

    def validate_invariants(self) -> None:
        """
        Re-check every aggregate rule against the current state.

        Raises:
            InvariantViolationError: If any rule does not hold
        """
        if self.name is None or not str(self.name):
            raise InvariantViolationError(
                f"{self.AGGREGATE_NAME}.name.required",
                f"{self.AGGREGATE_NAME.title()} must have a name",
            )
        if self._members and self.owner_count == 0:
            raise InvariantViolationError(
                f"{self.AGGREGATE_NAME}.{self.GUARDED_ROLE.value}.required",
                f"{self.AGGREGATE_NAME.title()} must have at least one "
                f"{self.GUARDED_ROLE.value}",
            )
        limit = self.member_limit()
        if limit is not None and self.member_count > limit:
            raise MemberLimitExceededError(
                self.AGGREGATE_NAME, self.id, limit, self.member_count
            )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_member(self, user_id: UserId) -> MemberT:
        member = self._members.get(user_id)
        if member is None:
            raise NotMemberError(self.AGGREGATE_NAME, self.id, user_id)
        return member

    def _ensure_capacity(self) -> None:
        limit = self.member_limit()
        if limit is not None and self.member_count >= limit:
            raise MemberLimitExceededError(
                self.AGGREGATE_NAME, self.id, limit, self.member_count
            )

    def _ensure_not_last_guarded(self, user_id: UserId) -> None:
        if self.owner_count <= 1:
            raise LastOwnerError(
                self.AGGREGATE_NAME, self.id, user_id, self.GUARDED_ROLE.value
            )
