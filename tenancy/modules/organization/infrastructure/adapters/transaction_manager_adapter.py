"""
Transaction Manager Adapter

Runs use-case work inside ``UnitOfWork`` blocks over the in-memory stores.
Outermost transactions are serialized by a shared lock; nested calls join
the transaction already in progress.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from tenancy.core.infrastructure import (
    TransactionalResource,
    UnitOfWork,
    current_unit_of_work,
)
from tenancy.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class InMemoryTransactionManager:
    """Implementation of ``ITransactionManager`` for in-process resources."""

    def __init__(self, resources: Iterable[TransactionalResource]):
        self._resources = list(resources)
        self._lock = asyncio.Lock()

    async def execute_in_transaction(self, fn: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``fn`` atomically.

        A writable transaction already active in this task is joined, so its
        outcome decides whether ``fn``'s writes survive.
        """
        current = current_unit_of_work()
        if current is not None and not current.read_only:
            return await fn()
        return await self._run(fn, read_only=False, nested=current is not None)

    async def execute_in_read_only_transaction(
        self, fn: Callable[[], Awaitable[T]]
    ) -> T:
        """Run ``fn`` in a transaction whose repositories reject writes."""
        current = current_unit_of_work()
        return await self._run(fn, read_only=True, nested=current is not None)

    async def execute_in_new_transaction(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` in its own unit of work, even inside another one."""
        current = current_unit_of_work()
        return await self._run(fn, read_only=False, nested=current is not None)

    async def _run(
        self, fn: Callable[[], Awaitable[T]], read_only: bool, nested: bool
    ) -> T:
        # the outer unit already holds the lock
        lock = None if nested else self._lock
        async with UnitOfWork(self._resources, read_only=read_only, lock=lock):
            return await fn()
