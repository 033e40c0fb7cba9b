"""
Base text value objects.

Names and descriptions for organizations, teams and applications share the
same shape and differ only in their limits, allowed characters and error
code prefix.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

from tenancy.core.domain.base import ValueObject


@dataclass(frozen=True)
class BoundedName(ValueObject):
    """Trimmed, length-bounded name restricted to an allowed character set."""

    value: str

    MIN_LENGTH: ClassVar[int] = 2
    MAX_LENGTH: ClassVar[int] = 255
    PATTERN: ClassVar[re.Pattern] = re.compile(r"[a-zA-Z0-9\s\-_]+")
    LABEL: ClassVar[str] = "Name"
    CODE_PREFIX: ClassVar[str] = "name"

    def __post_init__(self):
        self.validate_not_empty(self.value, self.LABEL, f"{self.CODE_PREFIX}.empty")
        trimmed = self.value.strip()
        object.__setattr__(self, "value", trimmed)
        self._validate()

    def _validate(self) -> None:
        self.validate_min_length(
            self.value, self.MIN_LENGTH, self.LABEL, f"{self.CODE_PREFIX}.tooShort"
        )
        self.validate_max_length(
            self.value, self.MAX_LENGTH, self.LABEL, f"{self.CODE_PREFIX}.tooLong"
        )
        self.validate_pattern(
            self.value,
            self.PATTERN,
            self.LABEL,
            f"{self.CODE_PREFIX}.invalidCharacters",
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BoundedDescription(ValueObject):
    """Optional free text; blank input normalizes to ``None``."""

    value: str | None = None

    MAX_LENGTH: ClassVar[int] = 1000
    LABEL: ClassVar[str] = "Description"
    CODE_PREFIX: ClassVar[str] = "description"

    def __post_init__(self):
        if self.value is None:
            return
        trimmed = self.value.strip()
        object.__setattr__(self, "value", trimmed or None)
        if trimmed:
            self.validate_max_length(
                trimmed, self.MAX_LENGTH, self.LABEL, f"{self.CODE_PREFIX}.tooLong"
            )

    @classmethod
    def empty(cls):
        return cls(None)

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        return self.value or ""
