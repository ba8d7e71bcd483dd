"""Configuration loader with hierarchical merge, env fallbacks and validation."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from startup_diagnostics.config.errors import (
    ConfigFileNotFoundError,
    ConfigValidationError,
)
from startup_diagnostics.config.models import DiagnosticsSettings
from startup_diagnostics.config.placeholders import drop_unresolved, resolve_placeholders

DEFAULT_CONFIG_DIR = Path("config")
DEFAULT_BASE_FILE = "appsettings.json"
ENV_VAR_NAME = "DIAGNOSTICS_ENV"
DEFAULT_ENV = "development"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries. Override values take precedence.

    Args:
        base: Base dictionary.
        override: Override dictionary (values take precedence).

    Returns:
        New merged dictionary.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any]:
    """Load and parse a JSON configuration file.

    Raises:
        ConfigFileNotFoundError: If the file does not exist.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(str(path))

    with path.open(encoding="utf-8") as f:
        return json.load(f)


def load_config(
    *,
    config_dir: Path | str | None = None,
    env: str | None = None,
    strict_placeholders: bool = True,
) -> DiagnosticsSettings:
    """Load diagnostics configuration with hierarchical merging.

    Configuration is loaded in the following order (later sources override earlier):
    1. config/appsettings.json (base configuration)
    2. config/appsettings.<environment>.json (environment-specific overrides)
    3. Environment variable placeholder resolution

    Args:
        config_dir: Directory containing configuration files. Defaults to "config".
        env: Environment name. Defaults to DIAGNOSTICS_ENV or "development".
        strict_placeholders: If True, raise error for unresolved placeholders.
            Otherwise unresolved values are dropped and read as unset.

    Returns:
        Validated and frozen DiagnosticsSettings instance.

    Raises:
        ConfigFileNotFoundError: If base configuration file is not found.
        ConfigValidationError: If configuration validation fails.
        PlaceholderResolutionError: If strict_placeholders=True and a placeholder
            cannot be resolved.
    """
    config_dir = DEFAULT_CONFIG_DIR if config_dir is None else Path(config_dir)

    if env is None:
        env = os.environ.get(ENV_VAR_NAME, DEFAULT_ENV)

    config = load_json_file(config_dir / DEFAULT_BASE_FILE)

    env_path = config_dir / f"appsettings.{env}.json"
    if env_path.exists():
        config = deep_merge(config, load_json_file(env_path))

    config = resolve_placeholders(config, strict=strict_placeholders)
    if not strict_placeholders:
        config = drop_unresolved(config)
    return validate_settings(config)


def settings_from_env(
    application: str,
    *,
    environ: Mapping[str, str] | None = None,
) -> DiagnosticsSettings:
    """Build settings from the flat environment variables used by deployments.

    Recognised variables: ``DATABASE_URL``, ``PATAVI_HOST``, ``PATAVI_PORT``,
    ``PATAVI_API_KEY``, ``PATAVI_CLIENT_KEY``, ``PATAVI_CLIENT_CRT``,
    ``PATAVI_CA``, ``PATAVI_BROKER_HOST``, ``LOG_LEVEL`` and ``LOG_FORMAT``.
    A section is omitted when its required variable is unset, which the
    corresponding check later reports as a configuration error.
    """
    values = os.environ if environ is None else environ

    def read(name: str) -> str | None:
        value = values.get(name)
        if value is None or value.strip() == "":
            return None
        return value.strip()

    config: dict[str, Any] = {"application": application}

    logging_section = {
        key: value
        for key, value in (
            ("level", (read("LOG_LEVEL") or "").upper() or None),
            ("format", read("LOG_FORMAT")),
        )
        if value is not None
    }
    if logging_section:
        config["logging"] = logging_section

    dsn = read("DATABASE_URL")
    if dsn is not None:
        config["database"] = {"dsn": dsn}

    patavi_host = read("PATAVI_HOST")
    if patavi_host is not None:
        api_key = read("PATAVI_API_KEY")
        client_key = read("PATAVI_CLIENT_KEY")
        patavi: dict[str, Any] = {
            "host": patavi_host,
            "auth_mode": (
                "client_certificate" if api_key is None and client_key is not None else "api_key"
            ),
            "api_key": api_key,
            "client_key": client_key,
            "client_crt": read("PATAVI_CLIENT_CRT"),
            "ca": read("PATAVI_CA"),
        }
        port = read("PATAVI_PORT")
        if port is not None:
            patavi["port"] = port
        config["patavi"] = patavi

    broker_host = read("PATAVI_BROKER_HOST")
    if broker_host is not None:
        config["broker"] = {"host": broker_host}

    return validate_settings(config)


def validate_settings(config: Mapping[str, Any]) -> DiagnosticsSettings:
    """Validate raw configuration, translating pydantic errors."""
    try:
        return DiagnosticsSettings.model_validate(dict(config))
    except ValidationError as e:
        errors = [
            {"loc": " -> ".join(str(loc) for loc in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        raise ConfigValidationError(errors) from e
