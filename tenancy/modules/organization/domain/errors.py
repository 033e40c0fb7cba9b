"""
Organization Domain Errors

Error classes with rich context for organization, team and application
operations. Every error carries a dotted ``code`` naming the violated rule
(for example ``organization.owner.lastOwner``).
"""

from typing import Any
from uuid import UUID

from tenancy.core.errors import (
    BusinessRuleError,
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)

# =============================================================================
# INVARIANT VIOLATIONS
# =============================================================================


class InvariantViolationError(BusinessRuleError):
    """Raised when an operation would break an aggregate or policy rule."""

    def __init__(
        self,
        rule: str,
        message: str,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            rule,
            message,
            user_message=user_message or message,
            details=dict(details or {}),
        )


class InactiveAggregateError(InvariantViolationError):
    """Raised when mutating an inactive organization, team or application."""

    def __init__(self, aggregate: str, aggregate_id: Any, action: str):
        super().__init__(
            rule=f"{aggregate}.inactive",
            message=f"Cannot {action} inactive {aggregate}",
            user_message=f"This {aggregate} has been deactivated.",
            details={f"{aggregate}_id": str(aggregate_id)},
        )


class LastOwnerError(InvariantViolationError):
    """Raised when an operation would leave members without an owner."""

    def __init__(self, aggregate: str, aggregate_id: Any, user_id: Any, owner_role: str):
        super().__init__(
            rule=f"{aggregate}.{owner_role}.last{owner_role.title()}",
            message=f"Cannot remove or demote the last {owner_role} of {aggregate} {aggregate_id}",
            user_message=f"Every {aggregate} needs at least one {owner_role}. Assign another {owner_role} first.",
            details={
                f"{aggregate}_id": str(aggregate_id),
                "user_id": str(user_id),
            },
        )


class MemberLimitExceededError(InvariantViolationError):
    """Raised when adding a member would exceed the member limit."""

    def __init__(self, aggregate: str, aggregate_id: Any, limit: int, current: int):
        super().__init__(
            rule=f"{aggregate}.members.limitExceeded",
            message=f"{aggregate.title()} has reached maximum member limit: {limit}",
            user_message=f"This {aggregate} has reached its maximum capacity of {limit} members.",
            details={
                f"{aggregate}_id": str(aggregate_id),
                "limit": limit,
                "current": current,
            },
        )


class InvalidSettingsError(InvariantViolationError):
    """Raised when settings values fall outside the allowed policy."""

    def __init__(self, rule: str, message: str, setting: str, value: Any = None):
        super().__init__(
            rule=rule,
            message=message,
            details={"setting": setting, "value": value},
        )


class SettingsExceedCurrentMembersError(InvariantViolationError):
    """Raised when a member limit is set below the current member count."""

    def __init__(self, aggregate: str, aggregate_id: Any, limit: int, current: int):
        super().__init__(
            rule=f"{aggregate}.settings.maxMembers.exceedsCurrent",
            message=f"Cannot set max members below current member count: {current}",
            user_message=f"This {aggregate} already has {current} members.",
            details={
                f"{aggregate}_id": str(aggregate_id),
                "limit": limit,
                "current": current,
            },
        )


class UserCannotJoinError(InvariantViolationError):
    """Raised when a user is not eligible to join organizations."""

    def __init__(self, user_id: Any, reason: str | None = None):
        super().__init__(
            rule="user.cannotJoin",
            message=f"User {user_id} cannot join organizations"
            + (f": {reason}" if reason else ""),
            user_message="The user must be active with a verified email address to join.",
            details={"user_id": str(user_id), "reason": reason},
        )


class UserOrganizationLimitError(InvariantViolationError):
    """Raised when a user already belongs to the maximum number of organizations."""

    def __init__(self, user_id: Any, limit: int):
        super().__init__(
            rule="user.organizationLimit",
            message=f"User {user_id} has reached maximum organization limit: {limit}",
            user_message=f"A user can belong to at most {limit} organizations.",
            details={"user_id": str(user_id), "limit": limit},
        )


class MergeRejectedError(InvariantViolationError):
    """Raised when a merge request violates one or more merge rules."""

    def __init__(self, violations: list[str]):
        super().__init__(
            rule="organization.merge.invalid",
            message="Cannot merge organizations: " + ", ".join(violations),
            details={"violations": list(violations)},
        )
        self.violations = list(violations)


class OwnershipTransferError(InvariantViolationError):
    """Raised when ownership cannot be transferred."""


class InactiveUserError(InvariantViolationError):
    """Raised when an inactive user is selected for a privileged role."""

    def __init__(self, user_id: Any):
        super().__init__(
            rule="user.inactive",
            message=f"User {user_id} is not active",
            details={"user_id": str(user_id)},
        )


class TeamLimitExceededError(InvariantViolationError):
    """Raised when an application cannot hold more teams."""

    def __init__(self, application_id: Any, limit: int):
        super().__init__(
            rule="application.teams.limitExceeded",
            message=f"Application has reached maximum team limit: {limit}",
            details={"application_id": str(application_id), "limit": limit},
        )


class UserBannedError(InvariantViolationError):
    """Raised when reactivating a banned user."""

    def __init__(self, user_id: Any):
        super().__init__(
            rule="user.banned.cannotReactivate",
            message="Cannot reactivate a banned user",
            details={"user_id": str(user_id)},
        )


# =============================================================================
# MEMBERSHIP ERRORS
# =============================================================================


class MembershipError(DomainError):
    """Base error for membership lookups that fail."""

    status_code = 409

    def __init__(
        self,
        message: str,
        code: str,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message, code=code, user_message=user_message, details=details
        )


class AlreadyMemberError(MembershipError):
    """Raised when user is already a member."""

    def __init__(self, aggregate: str, aggregate_id: Any, user_id: Any):
        super().__init__(
            message=f"User {user_id} is already a member of {aggregate} {aggregate_id}",
            code=f"{aggregate}.user.alreadyMember",
            user_message=f"The user is already a member of this {aggregate}.",
            details={f"{aggregate}_id": str(aggregate_id), "user_id": str(user_id)},
        )


class NotMemberError(MembershipError):
    """Raised when user is not a member."""

    status_code = 404

    def __init__(self, aggregate: str, aggregate_id: Any, user_id: Any):
        super().__init__(
            message=f"User {user_id} is not a member of {aggregate} {aggregate_id}",
            code=f"{aggregate}.user.notMember",
            user_message=f"The user is not a member of this {aggregate}.",
            details={f"{aggregate}_id": str(aggregate_id), "user_id": str(user_id)},
        )


class TeamAlreadyAttachedError(MembershipError):
    """Raised when a team is already part of an application."""

    def __init__(self, application_id: Any, team_id: Any):
        super().__init__(
            message=f"Team {team_id} is already part of application {application_id}",
            code="application.team.alreadyExists",
            details={"application_id": str(application_id), "team_id": str(team_id)},
        )


class TeamNotAttachedError(MembershipError):
    """Raised when a team is not part of an application."""

    status_code = 404

    def __init__(self, application_id: Any, team_id: Any):
        super().__init__(
            message=f"Team {team_id} is not part of application {application_id}",
            code="application.team.notFound",
            details={"application_id": str(application_id), "team_id": str(team_id)},
        )


# =============================================================================
# LOOKUP / ACCESS ERRORS
# =============================================================================


class OrganizationNotFoundError(NotFoundError):
    """Raised when an organization cannot be found."""

    def __init__(self, organization_id: Any):
        super().__init__(
            "Organization", organization_id, code="organization.notFound"
        )


class UserNotFoundError(NotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: Any):
        super().__init__("User", user_id, code="user.notFound")


class OrganizationNameTakenError(ConflictError):
    """Raised when an organization name is already in use."""

    def __init__(self, name: str):
        super().__init__(
            f"Organization name '{name}' is already taken",
            resource="Organization",
            code="organization.name.taken",
            user_message=f"An organization named '{name}' already exists. Please choose a different name.",
        )
        self.details["name"] = name


class UnauthorizedOrganizationAccessError(ForbiddenError):
    """Raised when the acting user lacks the role an operation requires."""

    def __init__(
        self,
        message: str,
        code: str = "organization.access.denied",
        organization_id: UUID | None = None,
        user_id: UUID | None = None,
        required_role: str | None = None,
    ):
        super().__init__(message, code=code)
        self.details.update(
            {
                "organization_id": str(organization_id) if organization_id else None,
                "user_id": str(user_id) if user_id else None,
                "required_role": required_role,
            }
        )


__all__ = [
    "AlreadyMemberError",
    "InactiveAggregateError",
    "InactiveUserError",
    "InvalidSettingsError",
    "InvariantViolationError",
    "LastOwnerError",
    "MemberLimitExceededError",
    "MembershipError",
    "MergeRejectedError",
    "NotMemberError",
    "OrganizationNameTakenError",
    "OrganizationNotFoundError",
    "OwnershipTransferError",
    "SettingsExceedCurrentMembersError",
    "TeamAlreadyAttachedError",
    "TeamLimitExceededError",
    "TeamNotAttachedError",
    "UnauthorizedOrganizationAccessError",
    "UserBannedError",
    "UserCannotJoinError",
    "UserNotFoundError",
    "UserOrganizationLimitError",
]
