"""
Event Publisher Adapter

In-process domain event publisher. Handlers subscribe by event type (or
``"*"`` for every event) and are awaited in subscription order. A failing
handler propagates, which rolls back the surrounding transaction. The
published-event log is a transactional resource, so a rollback also drops
events recorded inside the failed transaction.
"""

from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable

from tenancy.core.events.types import DomainEvent
from tenancy.core.logging import get_logger

logger = get_logger(__name__)

EventHandler = Callable[[DomainEvent], Awaitable[None]]

ALL_EVENTS = "*"


class InMemoryDomainEventPublisher:
    """Implementation of ``IDomainEventPublisher`` dispatching in-process."""

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._published: list[DomainEvent] = []

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Register a handler.

        Args:
            event_type: Dotted event type, or ``"*"`` for all events
            handler: Coroutine function receiving the event
        """
        self._handlers[event_type].append(handler)
        logger.debug("Event handler subscribed", event_type=event_type)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    async def publish(self, event: DomainEvent) -> None:
        """Await every matching handler, then record the event."""
        event_type = event.metadata.event_type

        logger.info(
            "Publishing domain event",
            event_type=event_type,
            event_id=str(event.event_id),
            aggregate_id=str(event.aggregate_id) if event.aggregate_id else None,
        )

        handlers = [
            *self._handlers.get(event_type, []),
            *self._handlers.get(ALL_EVENTS, []),
        ]
        for handler in handlers:
            await handler(event)
        self._published.append(event)

    async def publish_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            await self.publish(event)

    @property
    def published_events(self) -> list[DomainEvent]:
        """Events published so far, in order."""
        return list(self._published)

    def clear(self) -> None:
        self._published.clear()

    def snapshot(self) -> list[DomainEvent]:
        return list(self._published)

    def restore(self, state: list[DomainEvent]) -> None:
        self._published = list(state)
