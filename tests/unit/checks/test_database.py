"""Tests for the database reachability check."""

from __future__ import annotations

import logging
from typing import Any

import pytest

import startup_diagnostics.checks.database as database_module
from startup_diagnostics.checks import CheckContext, CheckKind, DatabaseCheck
from startup_diagnostics.config import DatabaseSettings, DiagnosticsSettings
from startup_diagnostics.errors import MissingDependencyError


class FakeDatabase:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.queries: list[str] = []

    async def fetchval(self, query: str) -> Any:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return "PostgreSQL 16.2"


class FakeConnection:
    def __init__(self) -> None:
        self.queries: list[str] = []
        self.closed = False

    async def fetchval(self, query: str) -> str:
        self.queries.append(query)
        return "PostgreSQL 16.2"

    async def close(self) -> None:
        self.closed = True


class FakeAsyncpgModule:
    def __init__(self, connection: FakeConnection | None = None, error: Exception | None = None):
        self._connection = connection
        self._error = error
        self.connect_calls: list[dict[str, Any]] = []

    async def connect(self, **kwargs: Any) -> FakeConnection:
        self.connect_calls.append(kwargs)
        if self._error is not None:
            raise self._error
        assert self._connection is not None
        return self._connection


def _settings(*, dsn: str | None = "postgresql://user:pass@db:5432/mcda") -> DiagnosticsSettings:
    return DiagnosticsSettings(
        application="MCDA",
        database=DatabaseSettings(dsn=dsn) if dsn is not None else None,
    )


async def test_injected_handle_success_reports_nothing(caplog: pytest.LogCaptureFixture) -> None:
    database = FakeDatabase()
    caplog.set_level(logging.INFO, logger="startup_diagnostics.checks.database")

    errors = await DatabaseCheck().run(CheckContext(settings=_settings(), database=database))

    assert errors == []
    assert database.queries == ["SELECT version() AS postgresql_version"]
    assert "Connection to database successful" in caplog.messages
    assert not [record for record in caplog.records if record.levelno >= logging.ERROR]


async def test_query_failure_embeds_underlying_error() -> None:
    database = FakeDatabase(error=RuntimeError("connection refused"))

    errors = await DatabaseCheck().run(CheckContext(settings=_settings(), database=database))

    assert errors == [
        "Connection to database unsuccessful. <i>connection refused</i>.<br> Please make sure "
        "the database is running and the environment variables are set correctly."
    ]


async def test_error_without_text_uses_exception_type() -> None:
    database = FakeDatabase(error=TimeoutError())

    errors = await DatabaseCheck().run(CheckContext(settings=_settings(), database=database))

    assert errors == [database_module.connection_failed_message("TimeoutError")]


async def test_missing_settings_and_handle_is_reported() -> None:
    errors = await DatabaseCheck().run(CheckContext(settings=_settings(dsn=None)))

    assert errors == ["Database connection settings not found"]


async def test_opens_and_closes_own_connection(monkeypatch: pytest.MonkeyPatch) -> None:
    connection = FakeConnection()
    fake_asyncpg = FakeAsyncpgModule(connection=connection)
    monkeypatch.setattr(database_module, "_import_asyncpg", lambda: fake_asyncpg)

    errors = await DatabaseCheck().run(CheckContext(settings=_settings()))

    assert errors == []
    assert fake_asyncpg.connect_calls[0]["dsn"] == "postgresql://user:pass@db:5432/mcda"
    assert connection.queries == [database_module.VERSION_QUERY]
    assert connection.closed is True


async def test_connect_failure_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_asyncpg = FakeAsyncpgModule(error=OSError("Connect call failed ('db', 5432)"))
    monkeypatch.setattr(database_module, "_import_asyncpg", lambda: fake_asyncpg)

    errors = await DatabaseCheck().run(CheckContext(settings=_settings()))

    assert len(errors) == 1
    assert "<i>Connect call failed ('db', 5432)</i>" in errors[0]


async def test_missing_driver_is_a_hard_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _missing() -> Any:
        raise MissingDependencyError("asyncpg is not installed")

    monkeypatch.setattr(database_module, "_import_asyncpg", _missing)

    with pytest.raises(MissingDependencyError):
        await DatabaseCheck().run(CheckContext(settings=_settings()))


def test_kind() -> None:
    assert DatabaseCheck.kind is CheckKind.DATABASE
