"""
Organization Settings Value Object

An open key/value map with a handful of well-known keys. Instances are
immutable; every change returns a new instance.
"""

from collections.abc import Mapping
from typing import Any

from tenancy.core.domain.base import ValueObject


class OrganizationSettings(ValueObject):
    """Immutable organization settings map."""

    MAX_MEMBERS = "max_members"
    DEFAULT_USER_ROLE = "default_user_role"
    REQUIRE_EMAIL_VERIFICATION = "require_email_verification"
    ALLOW_PUBLIC_DEBATES = "allow_public_debates"
    DEFAULT_DEBATE_VISIBILITY = "default_debate_visibility"

    DEFAULTS: Mapping[str, Any] = {
        MAX_MEMBERS: 100,
        DEFAULT_USER_ROLE: "member",
        REQUIRE_EMAIL_VERIFICATION: True,
        ALLOW_PUBLIC_DEBATES: False,
        DEFAULT_DEBATE_VISIBILITY: "organization",
    }

    def __init__(self, values: Mapping[str, Any] | None = None):
        object.__setattr__(
            self,
            "_values",
            {key: value for key, value in (values or {}).items() if value is not None},
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Cannot modify immutable {self.__class__.__name__}")

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def default(cls, max_members: int | None = None) -> "OrganizationSettings":
        """Default settings, optionally with a different member limit."""
        values = dict(cls.DEFAULTS)
        if max_members is not None:
            values[cls.MAX_MEMBERS] = max_members
        return cls(values)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any] | None) -> "OrganizationSettings":
        return cls(values)

    # =========================================================================
    # Copy-on-write updates
    # =========================================================================

    def with_value(self, key: str, value: Any) -> "OrganizationSettings":
        """Return a copy with ``key`` set, or removed when ``value`` is None."""
        values = dict(self._values)
        if value is None:
            values.pop(key, None)
        else:
            values[key] = value
        return OrganizationSettings(values)

    def with_all(self, updates: Mapping[str, Any]) -> "OrganizationSettings":
        """Return a copy with every entry of ``updates`` applied."""
        values = dict(self._values)
        for key, value in updates.items():
            if value is None:
                values.pop(key, None)
            else:
                values[key] = value
        return OrganizationSettings(values)

    # =========================================================================
    # Accessors
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def get_typed(self, key: str, expected: type, default: Any = None) -> Any:
        """Return the value when it has the expected type, otherwise ``default``."""
        value = self._values.get(key)
        if value is None or not isinstance(value, expected):
            return default
        if expected is int and isinstance(value, bool):
            return default
        return value

    def has(self, key: str) -> bool:
        return key in self._values

    @property
    def max_members(self) -> int | None:
        """Member limit; ``None`` means unlimited."""
        return self.get_typed(self.MAX_MEMBERS, int)

    @property
    def default_user_role(self) -> str:
        return self.get_typed(self.DEFAULT_USER_ROLE, str, "member")

    @property
    def require_email_verification(self) -> bool:
        return self.get_typed(self.REQUIRE_EMAIL_VERIFICATION, bool, True)

    @property
    def allow_public_debates(self) -> bool:
        return self.get_typed(self.ALLOW_PUBLIC_DEBATES, bool, False)

    @property
    def default_debate_visibility(self) -> str:
        return self.get_typed(self.DEFAULT_DEBATE_VISIBILITY, str, "organization")

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    # =========================================================================
    # Value semantics
    # =========================================================================

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, OrganizationSettings):
            return False
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(
            (self.__class__.__name__, tuple(sorted((k, repr(v)) for k, v in self._values.items())))
        )

    def __repr__(self) -> str:
        return f"OrganizationSettings({self._values!r})"

    def __str__(self) -> str:
        return ", ".join(f"{key}={value}" for key, value in sorted(self._values.items()))
