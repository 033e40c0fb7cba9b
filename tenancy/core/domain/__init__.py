from tenancy.core.domain.base import (
    AggregateRoot,
    DomainService,
    Entity,
    ValueObject,
)

__all__ = ["AggregateRoot", "DomainService", "Entity", "ValueObject"]
