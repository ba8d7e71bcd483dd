"""Custom exceptions for startup diagnostics."""


class StartupDiagnosticsError(Exception):
    """Base exception for this package."""


class MissingDependencyError(StartupDiagnosticsError):
    """Raised when an optional dependency is required but not installed."""


class ConfigurationError(StartupDiagnosticsError):
    """Raised when the diagnostics battery itself is misconfigured."""


class UnknownApplicationError(ConfigurationError):
    """Raised when an application identifier has no registered checks."""

    def __init__(self, application: str) -> None:
        self.application = application
        super().__init__(f"No startup checks registered for application: {application}")
