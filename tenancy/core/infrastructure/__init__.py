from tenancy.core.infrastructure.unit_of_work import (
    ConcurrencyConflictError,
    TransactionalResource,
    TransactionError,
    UnitOfWork,
    UnitOfWorkError,
    current_unit_of_work,
)

__all__ = [
    "ConcurrencyConflictError",
    "TransactionError",
    "TransactionalResource",
    "UnitOfWork",
    "UnitOfWorkError",
    "current_unit_of_work",
]
