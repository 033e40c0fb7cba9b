"""
Identifier Value Objects

Typed UUID wrappers so organization, user, team and application ids cannot
be mixed up.
"""

from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID, uuid4

from tenancy.core.domain.base import ValueObject
from tenancy.core.errors import ValidationError

IdT = TypeVar("IdT", bound="EntityId")


@dataclass(frozen=True)
class EntityId(ValueObject):
    """Base identifier wrapping a UUID."""

    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValidationError(
                f"{self.__class__.__name__} requires a UUID value",
                field="id",
                code="id.invalid",
            )

    @classmethod
    def generate(cls: type[IdT]) -> IdT:
        return cls(uuid4())

    @classmethod
    def from_string(cls: type[IdT], raw: str) -> IdT:
        """
        Parse the external string form.

        Raises:
            ValidationError: If ``raw`` is not a valid UUID
        """
        try:
            return cls(UUID(str(raw)))
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Invalid {cls.__name__}: {raw}",
                field="id",
                code="id.invalid",
            ) from e

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OrganizationId(EntityId):
    """Organization identifier."""


@dataclass(frozen=True)
class UserId(EntityId):
    """User identifier."""


@dataclass(frozen=True)
class TeamId(EntityId):
    """Team identifier."""


@dataclass(frozen=True)
class ApplicationId(EntityId):
    """Application identifier."""
