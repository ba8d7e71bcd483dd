"""Known application variants that run startup diagnostics."""

from __future__ import annotations

from enum import StrEnum

from startup_diagnostics.errors import UnknownApplicationError


class ApplicationId(StrEnum):
    """Application variants with a registered check battery."""

    MCDA = "MCDA"
    GEMTC = "GeMTC"
    PATAVI = "Patavi"

    @classmethod
    def parse(cls, name: str | ApplicationId) -> ApplicationId:
        """Resolve an application name, matching case-insensitively."""
        if isinstance(name, ApplicationId):
            return name
        cleaned = str(name).strip()
        for member in cls:
            if member.value == cleaned:
                return member
        lowered = cleaned.lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        raise UnknownApplicationError(cleaned)
