"""Observability helpers for diagnostics runs."""

from startup_diagnostics.observability.logging import (
    JsonFormatter,
    TextFormatter,
    bootstrap_logging,
    bootstrap_logging_from_settings,
    get_run_id,
    run_scope,
)

__all__ = [
    "JsonFormatter",
    "TextFormatter",
    "bootstrap_logging",
    "bootstrap_logging_from_settings",
    "get_run_id",
    "run_scope",
]
