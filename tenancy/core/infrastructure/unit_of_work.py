"""
Unit of Work for in-process transactional resources.

A unit of work snapshots every registered resource when it is entered and
restores those snapshots when the block raises, so a failed transaction
leaves no partial state behind. Read-only units reject writes from
resources that consult ``current_unit_of_work()``.

Usage Examples:
    async with UnitOfWork([organization_store, user_store]) as uow:
        await organization_repository.save(organization)
        # committed on normal exit, restored on exception

    async with UnitOfWork([organization_store], read_only=True):
        await organization_repository.find_by_id(organization_id)
"""

import asyncio
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable
from uuid import uuid4

from tenancy.core.errors import InfrastructureError
from tenancy.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWorkError(InfrastructureError):
    """Base exception for Unit of Work operations."""

    default_code = "transaction.failed"
    retryable = False


class TransactionError(UnitOfWorkError):
    """Raised when a transaction cannot be completed."""

    default_code = "transaction.aborted"
    retryable = True


class ConcurrencyConflictError(TransactionError):
    """Raised when a save is based on a stale aggregate version."""

    default_code = "concurrency.conflict"
    status_code = 409

    def __init__(
        self,
        aggregate_type: str,
        aggregate_id: Any,
        expected_version: int,
        actual_version: int,
    ):
        super().__init__(
            f"{aggregate_type} {aggregate_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
            user_message="The record was changed by someone else. Please retry.",
            details={
                "aggregate_type": aggregate_type,
                "aggregate_id": str(aggregate_id),
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )


@runtime_checkable
class TransactionalResource(Protocol):
    """A store whose full state can be captured and restored."""

    def snapshot(self) -> Any:
        ...

    def restore(self, state: Any) -> None:
        ...


_current_unit_of_work: ContextVar["UnitOfWork | None"] = ContextVar(
    "current_unit_of_work", default=None
)


def current_unit_of_work() -> "UnitOfWork | None":
    """Return the unit of work active in the current task, if any."""
    return _current_unit_of_work.get()


class UnitOfWork:
    """
    Transaction boundary over snapshot-capable resources.

    Transaction Semantics:
    - Resources are snapshotted on entry
    - Normal exit commits (snapshots are discarded)
    - Any exception restores every snapshot and propagates
    - A lock, when supplied, serializes outermost units of work
    """

    def __init__(
        self,
        resources: list[TransactionalResource],
        read_only: bool = False,
        lock: asyncio.Lock | None = None,
    ):
        self.transaction_id = str(uuid4())
        self.read_only = read_only
        self._resources = list(resources)
        self._lock = lock
        self._snapshots: list[tuple[TransactionalResource, Any]] = []
        self._token: Token | None = None
        self._committed = False
        self._rolled_back = False
        self._start_time: datetime | None = None

    async def __aenter__(self) -> "UnitOfWork":
        if self._token is not None:
            raise UnitOfWorkError("Unit of Work already in transaction context")

        if self._lock is not None:
            await self._lock.acquire()

        self._start_time = datetime.now(UTC)
        self._snapshots = [(resource, resource.snapshot()) for resource in self._resources]
        self._token = _current_unit_of_work.set(self)

        logger.debug(
            "Unit of Work started",
            transaction_id=self.transaction_id,
            read_only=self.read_only,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        try:
            if exc_type is not None:
                logger.info(
                    "Rolling back due to exception",
                    transaction_id=self.transaction_id,
                    exception_type=exc_type.__name__,
                    exception_message=str(exc_val) if exc_val else None,
                )
                self.rollback()
            else:
                self._committed = True
        finally:
            _current_unit_of_work.reset(self._token)
            self._token = None
            self._snapshots = []
            if self._lock is not None:
                self._lock.release()
            self._log_transaction_completion()
        return False

    def rollback(self) -> None:
        """Restore every resource to its state at transaction start."""
        if self._rolled_back:
            return
        for resource, state in reversed(self._snapshots):
            resource.restore(state)
        self._rolled_back = True

    def ensure_writable(self) -> None:
        """
        Reject writes inside a read-only transaction.

        Raises:
            UnitOfWorkError: If the unit of work is read-only
        """
        if self.read_only:
            raise UnitOfWorkError(
                "Write attempted inside a read-only transaction",
                code="transaction.readOnly",
                details={"transaction_id": self.transaction_id},
            )

    def _log_transaction_completion(self) -> None:
        if self._start_time:
            duration = (datetime.now(UTC) - self._start_time).total_seconds()
            logger.debug(
                "Unit of Work completed",
                transaction_id=self.transaction_id,
                duration_seconds=duration,
                committed=self._committed,
                rolled_back=self._rolled_back,
            )

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back


__all__ = [
    "ConcurrencyConflictError",
    "TransactionError",
    "TransactionalResource",
    "UnitOfWork",
    "UnitOfWorkError",
    "current_unit_of_work",
]
