"""
Domain Event Publisher Interface

Protocol for publishing staged domain events after an aggregate is saved.
"""

from collections.abc import Iterable
from typing import Protocol

from tenancy.core.events.types import DomainEvent


class IDomainEventPublisher(Protocol):
    """Protocol for domain event publishing."""

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single event.

        Args:
            event: Domain event to publish
        """
        ...

    async def publish_all(self, events: Iterable[DomainEvent]) -> None:
        """
        Publish events in order.

        Args:
            events: Domain events to publish
        """
        ...
