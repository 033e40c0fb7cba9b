"""
Transaction Manager Interface

Protocol demarcating the atomic unit of a use case. Any exception raised by
the wrapped function rolls the transaction back and propagates.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

T = TypeVar("T")


class ITransactionManager(Protocol):
    """Protocol for transaction demarcation."""

    async def execute_in_transaction(self, fn: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``fn`` inside a transaction, joining one already in progress.

        Args:
            fn: Coroutine function performing the work

        Returns:
            Result of ``fn``
        """
        ...

    async def execute_in_read_only_transaction(
        self, fn: Callable[[], Awaitable[T]]
    ) -> T:
        """Run ``fn`` inside a transaction that rejects writes."""
        ...

    async def execute_in_new_transaction(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` inside a fresh transaction independent of any outer one."""
        ...
