"""
Error hierarchy shared by every layer of the tenancy service.

Errors carry a dotted ``code`` callers can branch on, ``details`` for
diagnostics and a ``user_message`` safe to show to end users. Each error
logs itself when created, at a level derived from its severity.

Layers:
    DomainError         broken business rules
    ApplicationError    bad input, missing resources, denied access
    InfrastructureError storage, transactions, configuration
"""

import logging
import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any

SENSITIVE_KEYS = frozenset({"password", "token", "secret", "credential", "authorization"})
REDACTED = "***REDACTED***"


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and alerting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


_SEVERITY_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def redact(details: dict[str, Any]) -> dict[str, Any]:
    """Copy ``details`` with credential-like values masked, recursively."""
    redacted = {}
    for key, value in details.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            redacted[key] = REDACTED
        elif isinstance(value, dict):
            redacted[key] = redact(value)
        else:
            redacted[key] = value
    return redacted


class TenancyError(Exception):
    """Base exception for all tenancy errors."""

    default_code: str = "error"
    status_code: int = 500
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
        correlation_id: str | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details or {})
        self.user_message = user_message or message
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.error_id = str(uuid.uuid4())
        self.occurred_at = datetime.now(UTC)
        self.context = dict(context or {})
        if cause is not None:
            self.__cause__ = cause

        logging.getLogger(f"tenancy.errors.{type(self).__name__}").log(
            _SEVERITY_LOG_LEVELS[self.severity],
            "%s raised",
            type(self).__name__,
            extra={
                "error_id": self.error_id,
                "correlation_id": self.correlation_id,
                "code": self.code,
                "error_message": self.message,
                "severity": self.severity.value,
                "details": redact(self.details),
            },
        )

    def to_dict(
        self, include_details: bool = True, include_internal: bool = False
    ) -> dict[str, Any]:
        """
        Serialize for API responses and logs.

        Args:
            include_details: Include public details; keys starting with ``_``
                are never included
            include_internal: Include ids, severity, internal message and context
        """
        data: dict[str, Any] = {
            "error": self.code,
            "message": self.user_message,
            "occurred_at": self.occurred_at.isoformat(),
        }
        if include_details and self.details:
            data["details"] = redact(
                {k: v for k, v in self.details.items() if not k.startswith("_")}
            )
        if self.retryable:
            data["retryable"] = True
        if include_internal:
            data["error_id"] = self.error_id
            data["correlation_id"] = self.correlation_id
            data["severity"] = self.severity.value
            data["internal_message"] = self.message
            data["context"] = self.context
        return data

    def with_context(self, **context: Any) -> "TenancyError":
        """Attach context and return self for chaining."""
        self.context.update(context)
        return self

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


# =====================================================================================
# LAYERS
# =====================================================================================


class DomainError(TenancyError):
    default_code = "domain.error"
    status_code = 400


class ApplicationError(TenancyError):
    default_code = "application.error"
    status_code = 400


class InfrastructureError(TenancyError):
    default_code = "infrastructure.error"
    severity = ErrorSeverity.HIGH
    retryable = True


# =====================================================================================
# CONCRETE KINDS
# =====================================================================================


class ValidationError(ApplicationError):
    """Malformed input; ``field`` or ``field_errors`` name what was wrong."""

    default_code = "validation.failed"
    status_code = 422
    severity = ErrorSeverity.LOW

    def __init__(
        self,
        message: str,
        field: str | None = None,
        field_errors: dict[str, list[str]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        if field:
            self.details["field"] = field
        if field_errors:
            self.details["field_errors"] = field_errors

    @classmethod
    def from_fields(
        cls, field_errors: dict[str, list[str]], **kwargs: Any
    ) -> "ValidationError":
        total = sum(len(errors) for errors in field_errors.values())
        return cls(
            f"Validation failed for {len(field_errors)} field(s) with {total} error(s)",
            field_errors=field_errors,
            **kwargs,
        )


class NotFoundError(ApplicationError):
    default_code = "resource.notFound"
    status_code = 404
    severity = ErrorSeverity.LOW

    def __init__(self, resource: str, identifier: Any, **kwargs: Any) -> None:
        kwargs.setdefault("user_message", f"The requested {resource.lower()} was not found")
        super().__init__(f"{resource} not found: {identifier}", **kwargs)
        self.details.update({"resource": resource, "identifier": str(identifier)})


class ConflictError(ApplicationError):
    default_code = "resource.conflict"
    status_code = 409

    def __init__(self, message: str, resource: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        if resource:
            self.details["resource"] = resource


class UnauthorizedError(ApplicationError):
    """The caller could not be identified."""

    default_code = "access.unauthenticated"
    status_code = 401

    def __init__(self, message: str = "Authentication required", **kwargs: Any) -> None:
        kwargs.setdefault("user_message", "Please log in to access this resource")
        super().__init__(message, **kwargs)


class ForbiddenError(ApplicationError):
    """The caller is known but lacks permission."""

    default_code = "access.forbidden"
    status_code = 403

    def __init__(self, message: str = "Access denied", **kwargs: Any) -> None:
        kwargs.setdefault(
            "user_message", "You don't have permission to perform this action"
        )
        super().__init__(message, **kwargs)


class BusinessRuleError(DomainError):
    """A business rule was violated; the rule name doubles as the code."""

    default_code = "rule.violated"
    status_code = 422

    def __init__(self, rule: str, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("code", rule)
        super().__init__(message, **kwargs)
        self.details["rule"] = rule


class ConfigurationError(InfrastructureError):
    default_code = "configuration.invalid"
    severity = ErrorSeverity.CRITICAL
    retryable = False

    def __init__(self, message: str, config_key: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("user_message", "Service configuration issue")
        super().__init__(message, **kwargs)
        if config_key:
            self.details["config_key"] = config_key


__all__ = [
    "ApplicationError",
    "BusinessRuleError",
    "ConfigurationError",
    "ConflictError",
    "DomainError",
    "ErrorSeverity",
    "ForbiddenError",
    "InfrastructureError",
    "NotFoundError",
    "TenancyError",
    "UnauthorizedError",
    "ValidationError",
    "redact",
]
