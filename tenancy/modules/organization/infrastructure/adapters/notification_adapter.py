"""
Notification Adapter

Implementation of the organization notification port that writes each
notification to the structured log and keeps an in-memory record of what
was sent. A real deployment swaps this for an e-mail or messaging adapter.
"""

from datetime import UTC, datetime
from typing import Any

from tenancy.core.logging import get_logger
from tenancy.modules.organization.domain.aggregates import Organization
from tenancy.modules.organization.domain.entities import User
from tenancy.modules.organization.domain.enums import Role

logger = get_logger(__name__)


class LoggingNotificationAdapter:
    """Implementation of ``INotificationService`` backed by the log."""

    def __init__(self):
        self._notification_log: list[dict[str, Any]] = []

    async def notify_organization_created(
        self, organization: Organization, owner: User
    ) -> None:
        self._record(
            "organization_created",
            owner,
            organization,
            subject=f"Your organization {organization.name} is ready",
        )

    async def notify_user_added_to_organization(
        self, organization: Organization, user: User, role: Role
    ) -> None:
        self._record(
            "user_added",
            user,
            organization,
            subject=f"You were added to {organization.name}",
            role=role.value,
        )

    async def notify_user_removed_from_organization(
        self, organization: Organization, user: User
    ) -> None:
        self._record(
            "user_removed",
            user,
            organization,
            subject=f"You were removed from {organization.name}",
        )

    async def notify_role_changed(
        self, organization: Organization, user: User, old_role: Role, new_role: Role
    ) -> None:
        self._record(
            "role_changed",
            user,
            organization,
            subject=f"Your role in {organization.name} is now {new_role.value}",
            old_role=old_role.value,
            new_role=new_role.value,
        )

    async def send_email_verification(self, user: User, verification_token: str) -> None:
        # the token itself is never logged
        self._record(
            "email_verification",
            user,
            None,
            subject="Verify your e-mail address",
        )

    @property
    def sent_notifications(self) -> list[dict[str, Any]]:
        return list(self._notification_log)

    def _record(
        self,
        notification_type: str,
        user: User,
        organization: Organization | None,
        subject: str,
        **data: Any,
    ) -> None:
        notification = {
            "type": notification_type,
            "recipient": str(user.email),
            "user_id": str(user.user_id),
            "organization_id": str(organization.id) if organization else None,
            "subject": subject,
            "data": data,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        self._notification_log.append(notification)
        logger.info(
            "Notification sent",
            notification_type=notification_type,
            user_id=notification["user_id"],
            organization_id=notification["organization_id"],
        )
