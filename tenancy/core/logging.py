# ruff: noqa: A005
"""Structured logging built on structlog.

Provides a configured structlog processor chain, a thin ``StructuredLogger``
wrapper that accepts keyword context on every call, sensitive-value
redaction, and helpers for binding request-scoped context through
contextvars.

Architecture:
- LogConfig: logging configuration with validation
- SensitiveDataFilter: redacts credentials before rendering
- LoggerFactory: configures structlog once and caches loggers
- StructuredLogger: logger with ``info(message, **context)`` style calls
"""

import logging
import re
import sys
from dataclasses import dataclass
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars

from tenancy.core.enums import Environment, LogFormat, LogLevel
from tenancy.core.errors import ConfigurationError

# =====================================================================================
# CONFIGURATION
# =====================================================================================


@dataclass
class LogConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.CONSOLE
    environment: Environment = Environment.DEVELOPMENT
    enable_timestamps: bool = True
    enable_exception_info: bool = True
    enable_sensitive_data_filtering: bool = True
    max_message_length: int = 10000

    def __post_init__(self):
        if self.max_message_length < 100:
            raise ConfigurationError(
                "max_message_length must be at least 100",
                config_key="max_message_length",
            )
        if self.environment.is_production and self.format == LogFormat.CONSOLE:
            self.format = LogFormat.JSON


# =====================================================================================
# FILTERS
# =====================================================================================


class SensitiveDataFilter:
    """Redacts values of sensitive keys and inline secrets in messages."""

    SENSITIVE_KEYS = frozenset(
        {"password", "token", "secret", "api_key", "authorization", "credential"}
    )
    _INLINE_PATTERN = re.compile(
        r"(password|token|secret|api_key)=([^\s&]+)", re.IGNORECASE
    )

    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        filtered = {}
        for key, value in record.items():
            if any(sensitive in key.lower() for sensitive in self.SENSITIVE_KEYS):
                filtered[key] = "***REDACTED***"
            elif isinstance(value, str):
                filtered[key] = self._INLINE_PATTERN.sub(r"\1=***REDACTED***", value)
            else:
                filtered[key] = value
        return filtered


# =====================================================================================
# STRUCTURED LOGGER
# =====================================================================================


class StructuredLogger:
    """
    Structured logger wrapping a structlog bound logger.

    Every call takes a message plus arbitrary keyword context, which is
    filtered for sensitive values before it reaches the processor chain.
    """

    def __init__(self, name: str, config: LogConfig):
        self.name = name
        self.config = config
        self._filter = (
            SensitiveDataFilter() if config.enable_sensitive_data_filtering else None
        )
        self._logger = structlog.get_logger(name)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log error message with the active exception's traceback."""
        kwargs["exc_info"] = True
        self._log(LogLevel.ERROR, message, **kwargs)

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """Return a logger that always includes the given context."""
        bound = StructuredLogger(self.name, self.config)
        bound._logger = self._logger.bind(**kwargs)
        return bound

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        if level < self.config.level:
            return

        if len(message) > self.config.max_message_length:
            message = message[: self.config.max_message_length] + "...[truncated]"

        if self._filter is not None:
            kwargs = self._filter.filter(kwargs)

        getattr(self._logger, level.method_name)(message, **kwargs)


# =====================================================================================
# LOGGER FACTORY
# =====================================================================================


class LoggerFactory:
    """Configures structlog once and hands out cached loggers."""

    def __init__(self, config: LogConfig):
        self.config = config
        self._loggers: dict[str, StructuredLogger] = {}
        self._configured = False

    def configure_logging(self) -> None:
        """Configure global logging settings."""
        if self._configured:
            return

        processors: list[Any] = [
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
        ]

        if self.config.enable_timestamps:
            processors.append(structlog.processors.TimeStamper(fmt="iso"))

        if self.config.enable_exception_info:
            processors.extend(
                [
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                ]
            )

        processors.append(structlog.processors.UnicodeDecoder())

        if self.config.format == LogFormat.JSON:
            processors.append(structlog.processors.JSONRenderer())
        elif self.config.format == LogFormat.CONSOLE:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.KeyValueRenderer())

        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=int(self.config.level),
        )

        self._configured = True

    def get_logger(self, name: str) -> StructuredLogger:
        """Get or create structured logger."""
        if not self._configured:
            self.configure_logging()

        if name not in self._loggers:
            self._loggers[name] = StructuredLogger(name, self.config)

        return self._loggers[name]


# =====================================================================================
# GLOBAL CONFIGURATION AND FACTORY
# =====================================================================================

_logger_factory: LoggerFactory | None = None


def configure_logging(config: LogConfig | None = None) -> None:
    """
    Configure global logging system.

    Args:
        config: Logging configuration; derived from settings when omitted
    """
    global _logger_factory  # noqa: PLW0603

    if config is None:
        from tenancy.core.config import get_settings

        config = get_settings().logging.to_log_config()

    _logger_factory = LoggerFactory(config)
    _logger_factory.configure_logging()


def get_logger(name: str) -> StructuredLogger:
    """
    Get structured logger instance.

    Args:
        name: Logger name (usually __name__)
    """
    if _logger_factory is None:
        configure_logging()

    return _logger_factory.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """Bind context that is merged into every log line of the current task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear context bound with ``log_context``."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "LogConfig",
    "LoggerFactory",
    "SensitiveDataFilter",
    "StructuredLogger",
    "clear_context",
    "configure_logging",
    "get_logger",
    "log_context",
]
