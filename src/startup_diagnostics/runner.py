"""Concurrent execution and aggregation of an application's startup checks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

from startup_diagnostics.applications import ApplicationId
from startup_diagnostics.checks import Check, CheckContext, CheckKind, describe_error
from startup_diagnostics.observability.logging import run_scope
from startup_diagnostics.registry import CheckRegistry
from startup_diagnostics.report import render_report

logger = logging.getLogger(__name__)

HARD_FAILURE_MESSAGE = "Could not execute diagnostics, unknown error: {error}"


@dataclass(slots=True, frozen=True)
class CheckOutcome:
    """What a single check produced during one run."""

    kind: CheckKind
    messages: tuple[str, ...]
    latency_ms: float
    error: Exception | None = None

    @property
    def passed(self) -> bool:
        return self.error is None and not self.messages

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "check": self.kind.value,
            "passed": self.passed,
            "latency_ms": max(0.0, float(self.latency_ms)),
            "messages": list(self.messages),
        }
        if self.error is not None:
            payload["error_type"] = type(self.error).__name__
        return payload


@dataclass(slots=True, frozen=True)
class DiagnosticsResult:
    """Aggregate outcome of one diagnostics run.

    ``messages`` follows registry order, then each check's own order, with
    the hard-failure message (if any) last.
    """

    application: ApplicationId
    outcomes: tuple[CheckOutcome, ...]
    messages: tuple[str, ...]
    latency_ms: float
    run_id: str | None = None

    @property
    def clean(self) -> bool:
        return not self.messages

    def report(self) -> str | None:
        """Return the rendered error report, or None when every check passed."""
        if self.clean:
            return None
        return render_report(self.application.value, self.messages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "application": self.application.value,
            "run_id": self.run_id,
            "clean": self.clean,
            "latency_ms": max(0.0, float(self.latency_ms)),
            "messages": list(self.messages),
            "checks": [outcome.to_dict() for outcome in self.outcomes],
        }


def flatten_messages(results: Iterable[Iterable[str | None] | None]) -> list[str]:
    """Merge per-check message lists in order, dropping empty or absent entries."""
    return [message for messages in results if messages for message in messages if message]


@dataclass(slots=True)
class DiagnosticsRunner:
    """Runs an application's checks concurrently and joins their results.

    Example usage::

        runner = DiagnosticsRunner(CheckContext(settings=settings, database=pool))
        result = await runner.run("Patavi")
        if not result.clean:
            serve_error_page(result.report())

    Every check is awaited to completion; there is no timeout, cancellation
    or retry at this level.
    """

    context: CheckContext
    registry: CheckRegistry = field(default_factory=CheckRegistry)

    async def run(self, application: ApplicationId | str) -> DiagnosticsResult:
        """Execute the battery for ``application`` and aggregate its messages.

        Raises:
            UnknownApplicationError: If no checks are registered for the
                application. Raised before any check starts.
        """
        app = ApplicationId.parse(application)
        checks = self.registry.get_checks(app)

        started = perf_counter()
        with run_scope() as run_id:
            logger.info(
                "Running %d startup checks for %s",
                len(checks),
                app.value,
                extra={"application": app.value},
            )
            outcomes = await asyncio.gather(*(_run_check(check, self.context) for check in checks))

            messages = flatten_messages(outcome.messages for outcome in outcomes)
            hard_failure = next(
                (outcome.error for outcome in outcomes if outcome.error is not None), None
            )
            if hard_failure is not None:
                messages.append(HARD_FAILURE_MESSAGE.format(error=describe_error(hard_failure)))

            for message in messages:
                logger.error(message, extra={"application": app.value})

        return DiagnosticsResult(
            application=app,
            outcomes=tuple(outcomes),
            messages=tuple(messages),
            latency_ms=(perf_counter() - started) * 1000,
            run_id=run_id,
        )

    async def run_report(self, application: ApplicationId | str) -> str | None:
        """Return the rendered report for a failed run, or None on success."""
        result = await self.run(application)
        return result.report()


async def run_startup_diagnostics(
    application: ApplicationId | str,
    context: CheckContext,
    *,
    registry: CheckRegistry | None = None,
) -> str | None:
    """Run the startup battery once; a string return means do not start."""
    runner = DiagnosticsRunner(context, registry or CheckRegistry())
    return await runner.run_report(application)


async def _run_check(check: Check, context: CheckContext) -> CheckOutcome:
    started = perf_counter()
    try:
        messages = await check.run(context)
    except Exception as exc:
        logger.warning(
            "Startup check %s could not be executed",
            check.kind.value,
            exc_info=exc,
            extra={"check": check.kind.value},
        )
        return CheckOutcome(
            kind=check.kind,
            messages=(),
            latency_ms=(perf_counter() - started) * 1000,
            error=exc,
        )

    return CheckOutcome(
        kind=check.kind,
        messages=tuple(flatten_messages([messages])),
        latency_ms=(perf_counter() - started) * 1000,
    )
