"""Enumerations shared by configuration and logging."""

import logging
from enum import Enum, IntEnum


class Environment(Enum):
    """Deployment environment the service runs in."""

    DEVELOPMENT = "dev"
    TESTING = "test"
    STAGING = "staging"
    PRODUCTION = "prod"

    @property
    def is_production(self) -> bool:
        return self is Environment.PRODUCTION


class LogLevel(IntEnum):
    """Log levels, valued like the standard ``logging`` constants."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @property
    def method_name(self) -> str:
        """Name of the logger method emitting at this level."""
        return self.name.lower()


class LogFormat(Enum):
    """Renderer used for log output."""

    JSON = "json"
    CONSOLE = "console"
    KEY_VALUE = "key_value"
