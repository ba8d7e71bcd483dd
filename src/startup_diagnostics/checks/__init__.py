"""Startup probes and the closed mapping from check kind to implementation."""

from collections.abc import Callable

from startup_diagnostics.checks.base import Check, CheckContext, CheckKind, describe_error
from startup_diagnostics.checks.broker import BrokerCheck
from startup_diagnostics.checks.certificates import ServerCertificatesCheck
from startup_diagnostics.checks.database import DatabaseCheck
from startup_diagnostics.checks.patavi import PataviConnectionCheck

CheckFactory = Callable[[], Check]

CHECK_TYPES: dict[CheckKind, CheckFactory] = {
    CheckKind.DATABASE: DatabaseCheck,
    CheckKind.PATAVI_CONNECTION: PataviConnectionCheck,
    CheckKind.SERVER_CERTIFICATES: ServerCertificatesCheck,
    CheckKind.BROKER: BrokerCheck,
}

__all__ = [
    "CHECK_TYPES",
    "BrokerCheck",
    "Check",
    "CheckContext",
    "CheckFactory",
    "CheckKind",
    "DatabaseCheck",
    "PataviConnectionCheck",
    "ServerCertificatesCheck",
    "describe_error",
]
