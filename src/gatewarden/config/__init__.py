"""gatewarden configuration.

This module provides the public API for configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from gatewarden.config import load_config
    >>> config = load_config()
    >>> config.supervisor.max_retries
    10
"""

from gatewarden.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._load import find_config_file, load_config
from ._loader import deep_merge, parse_env_vars, parse_string_value, read_toml_file
from ._models import (
    BackupConfig,
    Config,
    GatewayConfig,
    HealthConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ScheduleConfig,
    StudyConfig,
    SupervisorConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "BackupConfig",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "GatewayConfig",
    "HealthConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ScheduleConfig",
    "StudyConfig",
    "SupervisorConfig",
    "deep_merge",
    "find_config_file",
    "load_config",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
]
