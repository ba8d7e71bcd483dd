"""Errors raised while loading diagnostics settings, before any check runs."""

from __future__ import annotations

from startup_diagnostics.errors import StartupDiagnosticsError


class ConfigError(StartupDiagnosticsError):
    """Settings could not be assembled; the CLI maps it to exit code 2."""


class ConfigFileNotFoundError(ConfigError):
    """The base appsettings.json is missing from the config directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Configuration file not found: {path}")


class ConfigValidationError(ConfigError):
    """Merged settings failed pydantic validation; one line per failing field."""

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        messages = []
        for err in errors:
            loc = err.get("loc", "unknown")
            msg = err.get("msg", "validation error")
            messages.append(f"  - {loc}: {msg}")
        detail = "\n".join(messages)
        super().__init__(f"Configuration validation failed:\n{detail}")


class PlaceholderResolutionError(ConfigError):
    """A ${VAR} placeholder names an unset variable and strict resolution was asked for."""

    def __init__(self, placeholder: str, key_path: str) -> None:
        self.placeholder = placeholder
        self.key_path = key_path
        super().__init__(
            f"Cannot resolve placeholder '{placeholder}' at '{key_path}': "
            f"environment variable not set"
        )
