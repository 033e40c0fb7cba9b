from .event_publisher import IDomainEventPublisher
from .notification_service import INotificationService
from .transaction_manager import ITransactionManager

__all__ = ["IDomainEventPublisher", "INotificationService", "ITransactionManager"]
