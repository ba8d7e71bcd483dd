"""Companion Patavi server reachability probe backed by aiohttp."""

from __future__ import annotations

import logging
import ssl
from typing import Any, ClassVar

from startup_diagnostics.checks.base import (
    CheckContext,
    CheckKind,
    describe_error,
    missing_file_errors,
)
from startup_diagnostics.config.models import PataviSettings
from startup_diagnostics.errors import MissingDependencyError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-api-key"
HTTP_OK = 200

SETTINGS_MISSING_MESSAGE = "Patavi connection settings not found"
API_KEY_MISSING_MESSAGE = "Patavi API key not found"
CLIENT_KEY_MISSING_MESSAGE = (
    "Patavi client key not found. Please make sure it is accessible at the specified location."
)
CLIENT_CERTIFICATE_MISSING_MESSAGE = (
    "Patavi client certificate not found. "
    "Please make sure it is accessible at the specified location."
)
CERTIFICATE_AUTHORITY_MISSING_MESSAGE = (
    "Patavi certificate authority not found. "
    "Please make sure it is accessible at the specified location."
)


def _import_aiohttp() -> Any:
    try:
        import aiohttp
    except ImportError as exc:  # pragma: no cover - exercised when extras are absent
        raise MissingDependencyError(
            "Patavi check requires dependency 'aiohttp'. Install with: pip install aiohttp"
        ) from exc
    return aiohttp


def connection_failed_message(error: str) -> str:
    return (
        f"Connection to Patavi unsuccessful: <i>{error}</i>.<br> Please make sure the Patavi "
        "server is running and the environment variables are set correctly."
    )


def unexpected_status_message(status: int) -> str:
    return f"Connection to Patavi successful but received incorrect status code: <i>{status}</i>."


def client_certificate_errors(settings: PataviSettings) -> list[str]:
    """Report absent client credential files in key, certificate, CA order."""
    return missing_file_errors(
        [
            (settings.client_key, CLIENT_KEY_MISSING_MESSAGE),
            (settings.client_crt, CLIENT_CERTIFICATE_MISSING_MESSAGE),
            (settings.ca, CERTIFICATE_AUTHORITY_MISSING_MESSAGE),
        ]
    )


class PataviConnectionCheck:
    """GET the configured Patavi endpoint and expect HTTP 200.

    Local credential problems short-circuit the request so the report names
    the missing credential instead of a secondary transport error.
    """

    kind: ClassVar[CheckKind] = CheckKind.PATAVI_CONNECTION

    async def run(self, context: CheckContext) -> list[str]:
        settings = context.settings.patavi
        if settings is None:
            return [SETTINGS_MISSING_MESSAGE]

        headers: dict[str, str] = {}
        if settings.auth_mode == "api_key":
            api_key = settings.api_key.get_secret_value() if settings.api_key else ""
            if not api_key:
                return [API_KEY_MISSING_MESSAGE]
            headers[API_KEY_HEADER] = api_key
            if settings.ca is not None:
                errors = missing_file_errors(
                    [(settings.ca, CERTIFICATE_AUTHORITY_MISSING_MESSAGE)]
                )
                if errors:
                    return errors
        else:
            errors = client_certificate_errors(settings)
            if errors:
                return errors
            logger.info("All certificates found", extra={"check": self.kind.value})

        session = context.http_session
        owns_session = session is None
        if owns_session:
            aiohttp = _import_aiohttp()
            session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=settings.timeout_seconds)
            )

        try:
            status = await _fetch_status(
                session,
                settings.url,
                headers=headers,
                ssl_context=_build_ssl_context(settings),
            )
        except Exception as exc:
            return [connection_failed_message(describe_error(exc))]
        finally:
            if owns_session:
                await session.close()

        if status != HTTP_OK:
            return [unexpected_status_message(status)]

        logger.info("Connection to Patavi server successful", extra={"check": self.kind.value})
        return []


def _build_ssl_context(settings: PataviSettings) -> ssl.SSLContext | None:
    if settings.auth_mode == "client_certificate":
        context = ssl.create_default_context(cafile=str(settings.ca))
        context.load_cert_chain(certfile=str(settings.client_crt), keyfile=str(settings.client_key))
        return context
    if settings.ca is not None:
        return ssl.create_default_context(cafile=str(settings.ca))
    return None


async def _fetch_status(
    session: Any,
    url: str,
    *,
    headers: dict[str, str],
    ssl_context: ssl.SSLContext | None,
) -> int:
    async with session.get(
        url,
        headers=headers,
        ssl=ssl_context if ssl_context is not None else True,
    ) as response:
        return int(response.status)
