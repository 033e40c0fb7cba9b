"""
User profile value objects.

E-mail addresses are normalized to lower case; person names are trimmed and
bounded.
"""

import re
from dataclasses import dataclass

from tenancy.core.domain.base import ValueObject

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


@dataclass(frozen=True)
class EmailAddress(ValueObject):
    """Value object for e-mail addresses."""

    value: str

    def __post_init__(self):
        self.validate_not_empty(self.value, "Email", "user.email.empty")
        normalized = self.value.strip().lower()
        self.validate_pattern(normalized, EMAIL_PATTERN, "Email", "user.email.invalid")
        object.__setattr__(self, "value", normalized)

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PersonName(ValueObject):
    """A first or last name of at most 255 characters."""

    value: str

    def __post_init__(self):
        self.validate_not_empty(self.value, "Name", "user.name.empty")
        trimmed = self.value.strip()
        self.validate_max_length(trimmed, 255, "Name", "user.name.tooLong")
        object.__setattr__(self, "value", trimmed)

    @property
    def initial(self) -> str:
        return self.value[0].upper()

    def __str__(self) -> str:
        return self.value
