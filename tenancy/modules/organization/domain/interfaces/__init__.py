"""Ports the organization module depends on."""

from .repositories import IOrganizationRepository, IUserRepository
from .services import IDomainEventPublisher, INotificationService, ITransactionManager

__all__ = [
    "IDomainEventPublisher",
    "INotificationService",
    "IOrganizationRepository",
    "ITransactionManager",
    "IUserRepository",
]
