"""CQRS base classes.

Commands express an intent to change state, queries ask for information.
Both are handled by async handlers that receive their collaborators through
the constructor.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID, uuid4

TCommand = TypeVar("TCommand", bound="Command")
TQuery = TypeVar("TQuery", bound="Query")
TResult = TypeVar("TResult")


# =====================================================================================
# MESSAGES
# =====================================================================================


class _Message(ABC):
    """Shared metadata and serialization for commands and queries."""

    def __init__(self):
        self.message_id = uuid4()
        self.created_at = datetime.now(UTC)
        self.correlation_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = {}
        for key, value in self.__dict__.items():
            if key.startswith("_"):
                continue
            if isinstance(value, UUID):
                result[key] = str(value)
            elif isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, Enum):
                result[key] = value.value
            else:
                result[key] = value
        result["message_type"] = self.__class__.__name__
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.message_id})"


class Command(_Message):
    """
    Base command class representing an intent to change system state.

    Usage Example:
        class ArchiveGroupCommand(Command):
            def __init__(self, group_id: UUID, archived_by: UUID):
                super().__init__()
                self.group_id = group_id
                self.archived_by = archived_by
    """


class Query(_Message):
    """Base query class representing a request for information."""


# =====================================================================================
# HANDLERS
# =====================================================================================


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """Base class for command handlers."""

    @abstractmethod
    async def handle(self, command: TCommand) -> TResult:
        """Handle the command and return its result."""


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Base class for query handlers."""

    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        """Handle the query and return its result."""


__all__ = ["Command", "CommandHandler", "Query", "QueryHandler"]
