"""Check contract shared by every startup probe."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Protocol, runtime_checkable

from startup_diagnostics.config.models import DiagnosticsSettings


class CheckKind(StrEnum):
    """Closed set of probes a registry may schedule."""

    DATABASE = "database"
    PATAVI_CONNECTION = "patavi_connection"
    SERVER_CERTIFICATES = "server_certificates"
    BROKER = "broker"


@dataclass(slots=True, frozen=True)
class CheckContext:
    """Settings and shared collaborator handles handed to every check.

    ``database`` only needs an awaitable ``fetchval(query)``; ``http_session``
    an aiohttp-style ``get`` usable as an async context manager. Checks open
    and close their own short-lived connections when a handle is absent.
    """

    settings: DiagnosticsSettings
    database: Any | None = None
    http_session: Any | None = None


@runtime_checkable
class Check(Protocol):
    """Contract for a startup probe.

    ``run`` returns one message per detected failure and an empty list on
    success. Anything raised out of ``run`` is treated as a hard failure of
    the diagnostics run.
    """

    kind: ClassVar[CheckKind]

    async def run(self, context: CheckContext) -> list[str]:
        ...


def describe_error(exc: BaseException) -> str:
    """Return the text embedded in user-facing failure messages."""
    return str(exc) or type(exc).__name__


def missing_file_errors(files: Iterable[tuple[Path | None, str]]) -> list[str]:
    """Return one message per absent file, keeping the given order."""
    return [message for path, message in files if path is None or not path.exists()]
