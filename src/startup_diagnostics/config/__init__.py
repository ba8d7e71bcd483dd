"""Configuration loading and validation module."""

from startup_diagnostics.config.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigValidationError,
    PlaceholderResolutionError,
)
from startup_diagnostics.config.loader import (
    deep_merge,
    load_config,
    settings_from_env,
    validate_settings,
)
from startup_diagnostics.config.models import (
    BrokerSettings,
    DatabaseSettings,
    DiagnosticsSettings,
    LoggingSettings,
    PataviSettings,
    ServerCertificateSettings,
)

__all__ = [
    "BrokerSettings",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigValidationError",
    "DatabaseSettings",
    "DiagnosticsSettings",
    "LoggingSettings",
    "PataviSettings",
    "PlaceholderResolutionError",
    "ServerCertificateSettings",
    "deep_merge",
    "load_config",
    "settings_from_env",
    "validate_settings",
]
