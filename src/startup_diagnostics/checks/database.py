"""PostgreSQL reachability probe backed by asyncpg."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from startup_diagnostics.checks.base import CheckContext, CheckKind, describe_error
from startup_diagnostics.config.models import DatabaseSettings
from startup_diagnostics.errors import MissingDependencyError

logger = logging.getLogger(__name__)

VERSION_QUERY = "SELECT version() AS postgresql_version"
SETTINGS_MISSING_MESSAGE = "Database connection settings not found"


def _import_asyncpg() -> Any:
    try:
        import asyncpg
    except ImportError as exc:  # pragma: no cover - exercised when extras are absent
        raise MissingDependencyError(
            "Database check requires dependency 'asyncpg'. Install with: pip install asyncpg"
        ) from exc
    return asyncpg


def connection_failed_message(error: str) -> str:
    return (
        f"Connection to database unsuccessful. <i>{error}</i>.<br> Please make sure the "
        "database is running and the environment variables are set correctly."
    )


class DatabaseCheck:
    """Issue a single version query against the configured database."""

    kind: ClassVar[CheckKind] = CheckKind.DATABASE

    async def run(self, context: CheckContext) -> list[str]:
        settings = context.settings.database
        if context.database is None and settings is None:
            return [SETTINGS_MISSING_MESSAGE]

        asyncpg = _import_asyncpg() if context.database is None else None
        try:
            if context.database is not None:
                await context.database.fetchval(VERSION_QUERY)
            elif settings is not None:
                await _query_version(asyncpg, settings)
        except Exception as exc:
            return [connection_failed_message(describe_error(exc))]

        logger.info("Connection to database successful", extra={"check": self.kind.value})
        return []


async def _query_version(asyncpg: Any, settings: DatabaseSettings) -> Any:
    connection = await asyncpg.connect(
        dsn=settings.dsn.get_secret_value(),
        timeout=settings.command_timeout_seconds,
        command_timeout=settings.command_timeout_seconds,
    )
    try:
        return await connection.fetchval(VERSION_QUERY)
    finally:
        await connection.close()
