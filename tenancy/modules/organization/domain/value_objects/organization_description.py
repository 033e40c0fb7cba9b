"""Organization Description Value Object"""

from dataclasses import dataclass

from .base import BoundedDescription


@dataclass(frozen=True)
class OrganizationDescription(BoundedDescription):
    """Optional organization description of at most 500 characters."""

    MAX_LENGTH = 500
    LABEL = "Organization description"
    CODE_PREFIX = "organization.description"
