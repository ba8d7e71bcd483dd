"""HTML rendering of a failed diagnostics run."""

from __future__ import annotations

from collections.abc import Iterable

REPORT_HEADER = "<h3>{application} could not be started. The following errors occured:</h3>"
MESSAGE_BLOCK = '<div style="padding: 10px">{message}</div>'


def render_report(application: str, messages: Iterable[str]) -> str:
    """Render the error page body shown instead of the application.

    Messages may carry inline markup and are inserted verbatim.
    """
    blocks = "".join(MESSAGE_BLOCK.format(message=message) for message in messages)
    return REPORT_HEADER.format(application=application) + blocks
