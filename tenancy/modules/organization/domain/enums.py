"""
Organization domain enumerations.

Role enums are totally ordered by permission level; comparison operators
follow that level rather than the string value.
"""

from enum import Enum


class RankedRole(str, Enum):
    """
    Base for role enumerations ordered by permission level.

    Subclasses must override ``_level_table`` and ``can_manage``; enum
    classes cannot use ``ABCMeta``, so the base versions raise.
    """

    def _level_table(self) -> dict["RankedRole", int]:
        """Permission level of every member. Required override."""
        raise NotImplementedError(f"{type(self).__name__} must define _level_table")

    @property
    def level(self) -> int:
        return self._level_table()[self]

    def has_permission(self, required: "RankedRole") -> bool:
        """True when this role is at least as privileged as ``required``."""
        self._ensure_same_kind(required)
        return self.level >= required.level

    def can_manage(self, target: "RankedRole") -> bool:
        """True when this role may assign or revoke ``target``. Required override."""
        raise NotImplementedError(f"{type(self).__name__} must define can_manage")

    @classmethod
    def from_string(cls, value: str) -> "RankedRole":
        """
        Parse a role name case-insensitively.

        Raises:
            ValueError: If the value does not name a role
        """
        if value is None:
            raise ValueError(f"{cls.__name__} cannot be empty")
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Invalid {cls.__name__.lower()}: {value}")

    @classmethod
    def highest(cls) -> "RankedRole":
        return max(cls, key=lambda member: member.level)

    def _ensure_same_kind(self, other: "RankedRole") -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot compare {type(self).__name__} with {type(other).__name__}"
            )

    def __lt__(self, other):
        if not isinstance(other, RankedRole):
            return NotImplemented
        self._ensure_same_kind(other)
        return self.level < other.level

    def __le__(self, other):
        if not isinstance(other, RankedRole):
            return NotImplemented
        self._ensure_same_kind(other)
        return self.level <= other.level

    def __gt__(self, other):
        if not isinstance(other, RankedRole):
            return NotImplemented
        self._ensure_same_kind(other)
        return self.level > other.level

    def __ge__(self, other):
        if not isinstance(other, RankedRole):
            return NotImplemented
        self._ensure_same_kind(other)
        return self.level >= other.level

    def __str__(self) -> str:
        return self.value


class Role(RankedRole):
    """Organization membership roles."""

    GUEST = "guest"
    MEMBER = "member"
    ADMIN = "admin"
    OWNER = "owner"

    def _level_table(self) -> dict[RankedRole, int]:
        return _ROLE_LEVELS

    def can_manage(self, target: "Role") -> bool:
        """Owners manage everyone, admins manage strictly lower roles."""
        self._ensure_same_kind(target)
        if self is Role.OWNER:
            return True
        if self is Role.ADMIN:
            return target.level < self.level
        return False

    @property
    def display_name(self) -> str:
        return self.value.title()


_ROLE_LEVELS: dict[RankedRole, int] = {
    Role.GUEST: 0,
    Role.MEMBER: 1,
    Role.ADMIN: 2,
    Role.OWNER: 3,
}


class TeamRole(RankedRole):
    """Team membership roles."""

    MEMBER = "member"
    LEAD = "lead"
    ADMIN = "admin"

    def _level_table(self) -> dict[RankedRole, int]:
        return _TEAM_ROLE_LEVELS

    def can_manage(self, target: "TeamRole") -> bool:
        """Admins manage everyone, leads manage plain members."""
        self._ensure_same_kind(target)
        if self is TeamRole.ADMIN:
            return True
        if self is TeamRole.LEAD:
            return target is TeamRole.MEMBER
        return False

    def can_invite_members(self) -> bool:
        return self in (TeamRole.ADMIN, TeamRole.LEAD)

    def can_remove_members(self) -> bool:
        return self in (TeamRole.ADMIN, TeamRole.LEAD)

    def can_modify_settings(self) -> bool:
        return self is TeamRole.ADMIN


_TEAM_ROLE_LEVELS: dict[RankedRole, int] = {
    TeamRole.MEMBER: 0,
    TeamRole.LEAD: 1,
    TeamRole.ADMIN: 2,
}


class UserStatus(str, Enum):
    """Account status of a user."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"
    PENDING = "pending"

    @property
    def allows_membership(self) -> bool:
        return self == UserStatus.ACTIVE


__all__ = ["RankedRole", "Role", "TeamRole", "UserStatus"]
