"""Domain primitives shared by every tenancy aggregate.

Architecture:
- ValueObject: immutable, validated objects compared by value
- Entity: mutable objects with identity and lifecycle timestamps
- AggregateRoot: entities that stage domain events and carry a version
- DomainService: stateless coordinators of rules spanning aggregates
"""

import re
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any, TypeVar
from uuid import UUID, uuid4

from tenancy.core.errors import ValidationError
from tenancy.core.events.types import DomainEvent

# =====================================================================================
# VALUE OBJECT BASE CLASS
# =====================================================================================


class ValueObject(ABC):
    """
    Base value object.

    Concrete value objects are ``@dataclass(frozen=True)`` subclasses that
    validate in ``__post_init__`` using the helpers below. Each helper raises
    ``ValidationError`` carrying the dotted error code supplied by the caller.

    Usage Example:
        @dataclass(frozen=True)
        class Slug(ValueObject):
            value: str

            def __post_init__(self):
                self.validate_pattern(self.value, r"^[a-z-]+$", "Slug", "slug.invalid")

            def __str__(self) -> str:
                return self.value
    """

    @abstractmethod
    def __str__(self) -> str:
        """String representation. Must be implemented by subclasses."""

    def to_dict(self) -> dict[str, Any]:
        """Convert value object to dictionary."""
        result = {}
        for key, value in self.__dict__.items():
            if key.startswith("_"):
                continue
            if hasattr(value, "to_dict"):
                result[key] = value.to_dict()
            elif isinstance(value, UUID | datetime):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    @classmethod
    def validate_not_empty(cls, value: Any, field_name: str, code: str) -> None:
        """
        Validate that a value is present and not blank.

        Raises:
            ValidationError: If value is empty
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(
                f"{field_name} cannot be empty", field=field_name, code=code
            )

    @classmethod
    def validate_max_length(
        cls, value: str, max_length: int, field_name: str, code: str
    ) -> None:
        """
        Validate an upper length bound.

        Raises:
            ValidationError: If value is longer than ``max_length``
        """
        if len(value) > max_length:
            raise ValidationError(
                f"{field_name} cannot exceed {max_length} characters",
                field=field_name,
                code=code,
            )

    @classmethod
    def validate_min_length(
        cls, value: str, min_length: int, field_name: str, code: str
    ) -> None:
        """
        Validate a lower length bound.

        Raises:
            ValidationError: If value is shorter than ``min_length``
        """
        if len(value) < min_length:
            raise ValidationError(
                f"{field_name} must be at least {min_length} characters long",
                field=field_name,
                code=code,
            )

    @classmethod
    def validate_pattern(
        cls, value: str, pattern: str | re.Pattern, field_name: str, code: str
    ) -> None:
        """
        Validate a string against a regex pattern.

        Raises:
            ValidationError: If the pattern does not match the whole value
        """
        if not re.fullmatch(pattern, value):
            raise ValidationError(
                f"{field_name} contains invalid characters",
                field=field_name,
                code=code,
            )


# =====================================================================================
# ENTITY BASE CLASS
# =====================================================================================


class Entity(ABC):
    """
    Base entity with identity and lifecycle timestamps.

    Entities are equal when they share type and id. Timestamps may be supplied
    when an entity is reconstructed from storage.
    """

    def __init__(
        self,
        entity_id: Any = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self.id = entity_id if entity_id is not None else uuid4()
        self.created_at = created_at or datetime.now(UTC)
        self.updated_at = updated_at or self.created_at

    def mark_modified(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now(UTC)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id}, created_at={self.created_at})"

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.id})"


# =====================================================================================
# AGGREGATE ROOT CLASS
# =====================================================================================


class AggregateRoot(Entity):
    """
    Aggregate root with domain event management.

    Aggregate roots are the consistency boundary for a cluster of objects.
    They stage domain events until the application layer has persisted the
    aggregate, and carry a version number used for optimistic locking.

    Usage Example:
        class Order(AggregateRoot):
            def confirm(self) -> None:
                if self.status != OrderStatus.PENDING:
                    raise BusinessRuleError("order.notPending", "Only pending orders can be confirmed")
                self.status = OrderStatus.CONFIRMED
                self.add_event(OrderConfirmed(order_id=self.id))
    """

    def __init__(
        self,
        entity_id: Any = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 1,
    ):
        super().__init__(entity_id, created_at, updated_at)
        if not isinstance(version, int) or version < 1:
            raise ValidationError("Aggregate version must be a positive integer")
        self._events: list[DomainEvent] = []
        self._version = version

    def add_event(self, event: DomainEvent) -> None:
        """
        Stage a domain event on the aggregate.

        Raises:
            ValidationError: If event is not a DomainEvent
        """
        if not isinstance(event, DomainEvent):
            raise ValidationError("Event must be a DomainEvent instance")
        self._events.append(event)

    def clear_events(self) -> list[DomainEvent]:
        """Clear and return all uncommitted events."""
        events = self._events.copy()
        self._events.clear()
        return events

    def get_events(self) -> list[DomainEvent]:
        """Get copy of uncommitted events without clearing them."""
        return self._events.copy()

    def has_events(self) -> bool:
        return len(self._events) > 0

    def event_count(self) -> int:
        return len(self._events)

    def increment_version(self) -> None:
        """Increment aggregate version for optimistic locking."""
        self._version += 1

    def check_version(self, expected_version: int) -> bool:
        return self._version == expected_version

    @property
    def version(self) -> int:
        """Get current aggregate version."""
        return self._version

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"id={self.id}, "
            f"version={self._version}, "
            f"events={len(self._events)})"
        )


# =====================================================================================
# DOMAIN SERVICE BASE CLASS
# =====================================================================================


class DomainService(ABC):
    """
    Base class for domain services.

    Domain services hold rules that do not belong to a single aggregate.
    They are stateless apart from their injected collaborators.
    """

    @abstractmethod
    def __str__(self) -> str:
        """String representation of the service."""


EntityT = TypeVar("EntityT", bound=Entity)
AggregateT = TypeVar("AggregateT", bound=AggregateRoot)

__all__ = [
    "AggregateRoot",
    "AggregateT",
    "DomainService",
    "Entity",
    "EntityT",
    "ValueObject",
]
