"""
Tenant Aggregate Base

Shared lifecycle for organizations, teams and applications: a name, an
optional description and an active flag. Every mutation other than
reactivation requires the aggregate to be active.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Any, ClassVar

from tenancy.core.domain.base import AggregateRoot
from tenancy.core.events.types import DomainEvent

from ..errors import InactiveAggregateError


class TenantAggregate(AggregateRoot):
    """Named aggregate with an Active/Inactive lifecycle."""

    AGGREGATE_NAME: ClassVar[str] = "tenant"

    def __init__(
        self,
        entity_id: Any,
        name: Any,
        description: Any,
        active: bool = True,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 1,
    ):
        super().__init__(entity_id, created_at, updated_at, version)
        self.name = name
        self.description = description
        self.active = active

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def is_active(self) -> bool:
        return self.active

    def deactivate(self) -> None:
        """Deactivate; calling again has no effect."""
        if not self.active:
            return
        self.active = False
        self.mark_modified()
        event = self._deactivated_event()
        if event is not None:
            self.add_event(event)

    def reactivate(self) -> None:
        """Reactivate; calling again has no effect."""
        if self.active:
            return
        self.active = True
        self.mark_modified()

    def _deactivated_event(self) -> DomainEvent | None:
        return None

    def _ensure_active(self, action: str) -> None:
        """
        Guard every mutation other than reactivation.

        Raises:
            InactiveAggregateError: If the aggregate is inactive
        """
        if not self.active:
            raise InactiveAggregateError(self.AGGREGATE_NAME, self.id, action)

    # =========================================================================
    # Profile
    # =========================================================================

    def update(self, new_name: Any, new_description: Any) -> bool:
        """
        Replace name and description.

        Returns True and stages an update event when something changed.

        Raises:
            InactiveAggregateError: If the aggregate is inactive
        """
        self._ensure_active("update")
        new_description = (
            new_description if new_description is not None else self._empty_description()
        )

        changed = False
        if new_name is not None and new_name != self.name:
            self.name = new_name
            changed = True
        if new_description != self.description:
            self.description = new_description
            changed = True

        if changed:
            self.mark_modified()
            self.add_event(self._updated_event())
        return changed

    @abstractmethod
    def _empty_description(self) -> Any:
        """Description value meaning "no description"."""

    @abstractmethod
    def _updated_event(self) -> DomainEvent:
        """Event staged when name or description changed."""
