"""AMQP broker reachability probe backed by aio-pika."""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Any, ClassVar

from startup_diagnostics.checks.base import CheckContext, CheckKind, describe_error
from startup_diagnostics.errors import MissingDependencyError

logger = logging.getLogger(__name__)

SETTINGS_MISSING_MESSAGE = "AMQP broker settings not found"


def _import_aio_pika() -> Any:
    try:
        import aio_pika
    except ImportError as exc:  # pragma: no cover - exercised when extras are absent
        raise MissingDependencyError(
            "Broker check requires dependency 'aio-pika'. Install with: pip install aio-pika"
        ) from exc
    return aio_pika


def connection_failed_message(error: str) -> str:
    return (
        f"AMQP connection to Rabbit unsuccessful. <i>{error}</i>.<br> Please make sure the "
        "Rabbit is running and the environment variables are set correctly."
    )


class BrokerCheck:
    """Open and immediately close one plain (non-robust) AMQP connection."""

    kind: ClassVar[CheckKind] = CheckKind.BROKER

    async def run(self, context: CheckContext) -> list[str]:
        settings = context.settings.broker
        if settings is None:
            return [SETTINGS_MISSING_MESSAGE]

        aio_pika = _import_aio_pika()
        try:
            connection = await aio_pika.connect(
                settings.url,
                timeout=settings.connect_timeout_seconds,
            )
        except Exception as exc:
            return [connection_failed_message(describe_error(exc))]

        with suppress(Exception):
            await connection.close()

        logger.info("AMQP connection to Rabbit successful", extra={"check": self.kind.value})
        return []
