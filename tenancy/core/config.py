"""Application configuration management.

Settings are plain dataclasses populated from environment variables
(optionally seeded from a ``.env`` file). All variables share the
``TENANCY_`` prefix.

Architecture:
- EnvironmentLoader: environment variable loading with type conversion
- MembershipPolicy: product limits applied by the organization domain service
- LoggingSettings: logging level, format and environment
- Settings: root configuration object
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

from tenancy.core.enums import Environment, LogFormat, LogLevel
from tenancy.core.errors import ConfigurationError

ENV_PREFIX = "TENANCY_"

# =====================================================================================
# ENVIRONMENT LOADER
# =====================================================================================


class EnvironmentLoader:
    """
    Environment variable loader with type conversion and validation.

    Values already present in the process environment win over values read
    from the environment file.
    """

    _TRUE_VALUES = ("true", "1", "yes", "on")
    _FALSE_VALUES = ("false", "0", "no", "off")

    def __init__(self, env_file: str | None = ".env", prefix: str = ENV_PREFIX):
        self.env_file = env_file
        self.prefix = prefix
        self._load_env_file()

    def _load_env_file(self) -> None:
        """Load environment variables from file if it exists."""
        if not self.env_file or not os.path.exists(self.env_file):
            return

        try:
            with open(self.env_file, encoding="utf-8") as f:
                for raw_line in f:
                    line = raw_line.strip()
                    if not line or line.startswith("#") or "=" not in line:
                        continue

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if (value.startswith('"') and value.endswith('"')) or (
                        value.startswith("'") and value.endswith("'")
                    ):
                        value = value[1:-1]

                    if key not in os.environ:
                        os.environ[key] = value
        except OSError as e:
            raise ConfigurationError(
                f"Failed to load environment file {self.env_file}: {e}"
            ) from e

    def _raw(self, key: str) -> str | None:
        return os.environ.get(f"{self.prefix}{key}")

    def get_string(self, key: str, default: str | None = None) -> str | None:
        """Get string value from environment."""
        value = self._raw(key)
        return default if value is None else value

    def get_integer(
        self,
        key: str,
        default: int | None = None,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> int | None:
        """Get integer value from environment, enforcing optional bounds."""
        raw = self._raw(key)
        if raw is None:
            return default

        try:
            value = int(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"{self.prefix}{key} must be an integer, got {raw!r}",
                config_key=f"{self.prefix}{key}",
            ) from e

        if min_value is not None and value < min_value:
            raise ConfigurationError(
                f"{self.prefix}{key} must be >= {min_value}",
                config_key=f"{self.prefix}{key}",
            )
        if max_value is not None and value > max_value:
            raise ConfigurationError(
                f"{self.prefix}{key} must be <= {max_value}",
                config_key=f"{self.prefix}{key}",
            )
        return value

    def get_boolean(self, key: str, default: bool | None = None) -> bool | None:
        """Get boolean value from environment."""
        raw = self._raw(key)
        if raw is None:
            return default

        lowered = raw.strip().lower()
        if lowered in self._TRUE_VALUES:
            return True
        if lowered in self._FALSE_VALUES:
            return False
        raise ConfigurationError(
            f"{self.prefix}{key} must be a boolean, got {raw!r}",
            config_key=f"{self.prefix}{key}",
        )

    def get_enum(self, key: str, enum_class: type, default):
        """Get enum member from environment by value or by name."""
        raw = self._raw(key)
        if raw is None:
            return default

        for member in enum_class:
            if raw.lower() in (str(member.value).lower(), member.name.lower()):
                return member
        raise ConfigurationError(
            f"{self.prefix}{key} must be one of {[m.name for m in enum_class]}",
            config_key=f"{self.prefix}{key}",
        )


# =====================================================================================
# CONFIGURATION SECTIONS
# =====================================================================================


@dataclass(frozen=True)
class MembershipPolicy:
    """Product limits for organization membership."""

    max_organizations_per_user: int = 10
    min_members_limit: int = 1
    max_members_limit: int = 1000
    default_max_members: int = 100

    def __post_init__(self):
        if self.max_organizations_per_user < 1:
            raise ConfigurationError(
                "max_organizations_per_user must be at least 1",
                config_key="max_organizations_per_user",
            )
        if self.min_members_limit < 1:
            raise ConfigurationError(
                "min_members_limit must be at least 1",
                config_key="min_members_limit",
            )
        if self.max_members_limit < self.min_members_limit:
            raise ConfigurationError(
                "max_members_limit must not be below min_members_limit",
                config_key="max_members_limit",
            )
        if not self.min_members_limit <= self.default_max_members <= self.max_members_limit:
            raise ConfigurationError(
                "default_max_members must lie within the member limits",
                config_key="default_max_members",
            )

    @classmethod
    def from_env(cls, loader: EnvironmentLoader) -> "MembershipPolicy":
        return cls(
            max_organizations_per_user=loader.get_integer(
                "MAX_ORGANIZATIONS_PER_USER", default=10, min_value=1
            ),
            min_members_limit=loader.get_integer(
                "MIN_MEMBERS_LIMIT", default=1, min_value=1
            ),
            max_members_limit=loader.get_integer(
                "MAX_MEMBERS_LIMIT", default=1000, min_value=1
            ),
            default_max_members=loader.get_integer(
                "DEFAULT_MAX_MEMBERS", default=100, min_value=1
            ),
        )


@dataclass(frozen=True)
class LoggingSettings:
    """Logging configuration section."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.CONSOLE
    environment: Environment = Environment.DEVELOPMENT

    @classmethod
    def from_env(cls, loader: EnvironmentLoader) -> "LoggingSettings":
        return cls(
            level=loader.get_enum("LOG_LEVEL", LogLevel, LogLevel.INFO),
            format=loader.get_enum("LOG_FORMAT", LogFormat, LogFormat.CONSOLE),
            environment=loader.get_enum(
                "ENVIRONMENT", Environment, Environment.DEVELOPMENT
            ),
        )

    def to_log_config(self):
        from tenancy.core.logging import LogConfig

        return LogConfig(
            level=self.level, format=self.format, environment=self.environment
        )


@dataclass(frozen=True)
class Settings:
    """Root configuration object."""

    membership: MembershipPolicy = field(default_factory=MembershipPolicy)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "Settings":
        loader = EnvironmentLoader(env_file)
        return cls(
            membership=MembershipPolicy.from_env(loader),
            logging=LoggingSettings.from_env(loader),
        )


# =====================================================================================
# FACTORY FUNCTIONS
# =====================================================================================


@lru_cache
def get_settings(env_file: str | None = ".env") -> Settings:
    """
    Get cached settings instance.

    Args:
        env_file: Environment file to load
    """
    return Settings.from_env(env_file)


__all__ = [
    "ENV_PREFIX",
    "EnvironmentLoader",
    "LoggingSettings",
    "MembershipPolicy",
    "Settings",
    "get_settings",
]
