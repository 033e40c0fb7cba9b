"""Application Events"""

from uuid import UUID

from .base import TenancyDomainEvent


class ApplicationEvent(TenancyDomainEvent):
    aggregate_type = "Application"

    def __init__(self, application_id: UUID, organization_id: UUID, **kwargs):
        self.application_id = application_id
        self.organization_id = organization_id
        super().__init__(aggregate_id=application_id, **kwargs)


class ApplicationCreated(ApplicationEvent):
    event_type = "application.created"
    required_fields = ("application_id", "organization_id", "name", "created_by")

    def __init__(
        self,
        application_id: UUID,
        organization_id: UUID,
        name: str,
        description: str | None,
        created_by: UUID,
        **kwargs,
    ):
        self.name = name
        self.description = description
        self.created_by = created_by
        super().__init__(application_id, organization_id, **kwargs)


class ApplicationUpdated(ApplicationEvent):
    event_type = "application.updated"
    required_fields = ("application_id", "organization_id", "name")

    def __init__(
        self,
        application_id: UUID,
        organization_id: UUID,
        name: str,
        description: str | None,
        **kwargs,
    ):
        self.name = name
        self.description = description
        super().__init__(application_id, organization_id, **kwargs)


class ApplicationDeactivated(ApplicationEvent):
    event_type = "application.deactivated"
    required_fields = ("application_id", "organization_id", "name")

    def __init__(
        self, application_id: UUID, organization_id: UUID, name: str, **kwargs
    ):
        self.name = name
        super().__init__(application_id, organization_id, **kwargs)
