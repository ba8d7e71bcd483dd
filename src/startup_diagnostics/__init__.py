"""Startup diagnostics: fail fast when an application's environment is misconfigured."""

from startup_diagnostics.applications import ApplicationId
from startup_diagnostics.checks import (
    BrokerCheck,
    Check,
    CheckContext,
    CheckKind,
    DatabaseCheck,
    PataviConnectionCheck,
    ServerCertificatesCheck,
)
from startup_diagnostics.errors import (
    ConfigurationError,
    MissingDependencyError,
    StartupDiagnosticsError,
    UnknownApplicationError,
)
from startup_diagnostics.registry import DEFAULT_CHECKS, CheckRegistry
from startup_diagnostics.report import render_report
from startup_diagnostics.runner import (
    CheckOutcome,
    DiagnosticsResult,
    DiagnosticsRunner,
    flatten_messages,
    run_startup_diagnostics,
)

__all__ = [
    "DEFAULT_CHECKS",
    "ApplicationId",
    "BrokerCheck",
    "Check",
    "CheckContext",
    "CheckKind",
    "CheckOutcome",
    "CheckRegistry",
    "ConfigurationError",
    "DatabaseCheck",
    "DiagnosticsResult",
    "DiagnosticsRunner",
    "MissingDependencyError",
    "PataviConnectionCheck",
    "ServerCertificatesCheck",
    "StartupDiagnosticsError",
    "UnknownApplicationError",
    "flatten_messages",
    "render_report",
    "run_startup_diagnostics",
]
