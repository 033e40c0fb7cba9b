"""
Organization Name Value Object

Encapsulates and validates organization names.
"""

import re
from dataclasses import dataclass

from .base import BoundedName


@dataclass(frozen=True)
class OrganizationName(BoundedName):
    """Organization name: 2-100 letters, digits, spaces, hyphens, underscores or dots."""

    MIN_LENGTH = 2
    MAX_LENGTH = 100
    PATTERN = re.compile(r"[a-zA-Z0-9\s\-_.]+")
    LABEL = "Organization name"
    CODE_PREFIX = "organization.name"
