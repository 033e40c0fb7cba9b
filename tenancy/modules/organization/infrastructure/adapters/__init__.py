"""Organization module adapters."""

from .event_publisher_adapter import ALL_EVENTS, InMemoryDomainEventPublisher
from .notification_adapter import LoggingNotificationAdapter
from .transaction_manager_adapter import InMemoryTransactionManager

__all__ = [
    "ALL_EVENTS",
    "InMemoryDomainEventPublisher",
    "InMemoryTransactionManager",
    "LoggingNotificationAdapter",
]
