"""Presence probe for the TLS material a Patavi server serves with."""

from __future__ import annotations

import logging
from typing import ClassVar

from startup_diagnostics.checks.base import CheckContext, CheckKind, missing_file_errors

logger = logging.getLogger(__name__)

SERVER_KEY_MISSING_MESSAGE = (
    "Patavi server key not found. Please make sure it is accessible at the specified location."
)
SERVER_CERTIFICATE_MISSING_MESSAGE = (
    "Patavi server certificate not found. "
    "Please make sure it is accessible at the specified location."
)
CERTIFICATE_AUTHORITY_MISSING_MESSAGE = (
    "Patavi certificate authority not found. "
    "Please make sure it is accessible at the specified location."
)


class ServerCertificatesCheck:
    """Report each server key, certificate or CA file that does not exist."""

    kind: ClassVar[CheckKind] = CheckKind.SERVER_CERTIFICATES

    async def run(self, context: CheckContext) -> list[str]:
        paths = context.settings.certificates
        errors = missing_file_errors(
            [
                (paths.resolve(paths.server_key), SERVER_KEY_MISSING_MESSAGE),
                (paths.resolve(paths.server_crt), SERVER_CERTIFICATE_MISSING_MESSAGE),
                (paths.resolve(paths.ca), CERTIFICATE_AUTHORITY_MISSING_MESSAGE),
            ]
        )
        if not errors:
            logger.info("All server certificates found", extra={"check": self.kind.value})
        return errors
