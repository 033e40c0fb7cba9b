from tenancy.core.events.types import DomainEvent, EventMetadata

__all__ = ["DomainEvent", "EventMetadata"]
