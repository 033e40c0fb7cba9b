"""Base class for organization module domain events."""

from tenancy.core.errors import ValidationError
from tenancy.core.events.types import DomainEvent


class TenancyDomainEvent(DomainEvent):
    """Base class for organization, team and application events."""

    required_fields: tuple[str, ...] = ()

    def validate_payload(self) -> None:
        for name in self.required_fields:
            if getattr(self, name, None) is None:
                raise ValidationError(
                    f"{name} is required for {self.event_type}", field=name
                )
