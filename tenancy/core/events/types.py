"""Domain event primitives.

Events are immutable facts staged by aggregates. Each event carries an
``EventMetadata`` record for tracing and a payload made of plain attributes
set by the concrete event class.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID, uuid4

from tenancy.core.errors import ValidationError

# =====================================================================================
# EVENT METADATA
# =====================================================================================


@dataclass
class EventMetadata:
    """
    Event metadata for tracing, versioning, and correlation.

    Usage Example:
        metadata = EventMetadata(
            event_type="organization.created",
            aggregate_id=organization_id,
            aggregate_type="Organization",
        )
    """

    event_id: UUID = field(default_factory=uuid4)
    event_type: str = field(default="")

    aggregate_id: UUID | None = field(default=None)
    aggregate_type: str | None = field(default=None)
    aggregate_version: int = field(default=1)

    user_id: UUID | None = field(default=None)
    correlation_id: str | None = field(default=None)
    causation_id: UUID | None = field(default=None)

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    version: int = field(default=1)
    source: str = field(default="tenancy")

    def __post_init__(self):
        self.validate()
        if not self.correlation_id:
            self.correlation_id = str(uuid4())

    def validate(self) -> None:
        """
        Validate event metadata fields.

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(self.event_id, UUID):
            raise ValidationError("event_id must be a UUID", field="event_id")
        if not self.event_type or len(self.event_type) > 100:
            raise ValidationError(
                "event_type must be between 1 and 100 characters", field="event_type"
            )
        for name in ("aggregate_id", "user_id", "causation_id"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, UUID):
                raise ValidationError(f"{name} must be a UUID", field=name)
        if self.aggregate_version < 1 or self.version < 1:
            raise ValidationError("Event versions must be positive integers")

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "aggregate_id": str(self.aggregate_id) if self.aggregate_id else None,
            "aggregate_type": self.aggregate_type,
            "aggregate_version": self.aggregate_version,
            "user_id": str(self.user_id) if self.user_id else None,
            "correlation_id": self.correlation_id,
            "causation_id": str(self.causation_id) if self.causation_id else None,
            "timestamp": self.timestamp.isoformat(),
            "version": self.version,
            "source": self.source,
        }


# =====================================================================================
# DOMAIN EVENT
# =====================================================================================


class DomainEvent(ABC):
    """
    Base domain event.

    Concrete events declare a dotted ``event_type`` and assign their payload
    attributes before calling ``super().__init__`` so that payload
    validation sees a complete event.

    Usage Example:
        class MemberJoined(DomainEvent):
            event_type = "group.member.joined"

            def __init__(self, group_id: UUID, user_id: UUID, **kwargs):
                self.user_id = user_id
                super().__init__(aggregate_id=group_id, **kwargs)

            def validate_payload(self) -> None:
                if not self.user_id:
                    raise ValidationError("user_id is required")
    """

    event_type: ClassVar[str] = ""
    aggregate_type: ClassVar[str | None] = None

    def __init__(
        self,
        aggregate_id: UUID | None = None,
        metadata: EventMetadata | None = None,
    ):
        if metadata is None:
            metadata = EventMetadata(
                event_type=self.event_type or self.__class__.__name__,
                aggregate_id=aggregate_id,
                aggregate_type=self.aggregate_type,
            )
        self.metadata = metadata
        self.validate()

    @property
    def event_id(self) -> UUID:
        return self.metadata.event_id

    @property
    def aggregate_id(self) -> UUID | None:
        return self.metadata.aggregate_id

    @property
    def occurred_at(self) -> datetime:
        return self.metadata.timestamp

    @property
    def correlation_id(self) -> str | None:
        return self.metadata.correlation_id

    def validate(self) -> None:
        """
        Validate metadata and payload.

        Raises:
            ValidationError: If validation fails
        """
        self.metadata.validate()
        self.validate_payload()

    @abstractmethod
    def validate_payload(self) -> None:
        """Validate event-specific payload data."""

    def payload(self) -> dict[str, Any]:
        """Return the event payload as primitive values."""
        data = {}
        for key, value in self.__dict__.items():
            if key == "metadata" or key.startswith("_"):
                continue
            if isinstance(value, UUID):
                data[key] = str(value)
            elif isinstance(value, datetime):
                data[key] = value.isoformat()
            elif isinstance(value, Enum):
                data[key] = value.value
            else:
                data[key] = value
        return data

    def to_dict(self) -> dict[str, Any]:
        """Serialize event payload together with its metadata."""
        return {
            "event_type": self.metadata.event_type,
            "payload": self.payload(),
            "metadata": self.metadata.to_dict(),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(event_id={self.event_id}, "
            f"aggregate_id={self.aggregate_id})"
        )


__all__ = ["DomainEvent", "EventMetadata"]
