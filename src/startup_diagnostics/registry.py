"""Mapping from application variant to its ordered startup check battery."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from startup_diagnostics.applications import ApplicationId
from startup_diagnostics.checks import CHECK_TYPES, Check, CheckFactory, CheckKind
from startup_diagnostics.errors import ConfigurationError, UnknownApplicationError

DEFAULT_CHECKS: dict[ApplicationId, tuple[CheckKind, ...]] = {
    ApplicationId.MCDA: (CheckKind.DATABASE, CheckKind.PATAVI_CONNECTION),
    ApplicationId.GEMTC: (CheckKind.DATABASE, CheckKind.PATAVI_CONNECTION),
    ApplicationId.PATAVI: (
        CheckKind.DATABASE,
        CheckKind.SERVER_CERTIFICATES,
        CheckKind.BROKER,
    ),
}


@dataclass(slots=True)
class CheckRegistry:
    """Resolves the checks to run for an application, in registry order.

    Example usage::

        registry = CheckRegistry()
        checks = registry.get_checks("MCDA")  # [DatabaseCheck(), PataviConnectionCheck()]

    Registry order is the order messages appear in the final report,
    whatever order the checks finish in.
    """

    table: Mapping[ApplicationId, Sequence[CheckKind]] = field(
        default_factory=lambda: dict(DEFAULT_CHECKS)
    )
    factories: Mapping[CheckKind, CheckFactory] = field(
        default_factory=lambda: dict(CHECK_TYPES)
    )

    def __post_init__(self) -> None:
        for application, kinds in self.table.items():
            if not kinds:
                raise ConfigurationError(f"No startup checks configured for {application}")
            unknown = [kind for kind in kinds if kind not in self.factories]
            if unknown:
                names = ", ".join(str(kind) for kind in unknown)
                raise ConfigurationError(f"No implementation registered for checks: {names}")

    def applications(self) -> list[ApplicationId]:
        """Return the applications with a registered battery."""
        return list(self.table.keys())

    def kinds_for(self, application: ApplicationId | str) -> tuple[CheckKind, ...]:
        """Return the ordered check kinds for an application."""
        app = ApplicationId.parse(application)
        if app not in self.table:
            raise UnknownApplicationError(str(app))
        return tuple(self.table[app])

    def get_checks(self, application: ApplicationId | str) -> list[Check]:
        """Instantiate the ordered checks for an application.

        Raises:
            UnknownApplicationError: If the application has no registered checks.
        """
        return [self.factories[kind]() for kind in self.kinds_for(application)]
