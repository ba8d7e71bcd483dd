"""Environment variable placeholder resolution."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any

from startup_diagnostics.config.errors import PlaceholderResolutionError

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")


def resolve_placeholders(
    data: dict[str, Any],
    *,
    strict: bool = True,
    environ: Mapping[str, str] | None = None,
    _path: str = "",
) -> dict[str, Any]:
    """Resolve ${ENV_VAR} placeholders in configuration data.

    Args:
        data: Configuration dictionary to process.
        strict: If True, raise error for unresolved placeholders.
        environ: Variables to resolve against. Defaults to ``os.environ``.
        _path: Internal path tracker for error messages.

    Returns:
        New dictionary with placeholders resolved.

    Raises:
        PlaceholderResolutionError: If strict=True and a placeholder cannot be resolved.
    """
    variables = os.environ if environ is None else environ
    result: dict[str, Any] = {}

    for key, value in data.items():
        current_path = f"{_path}.{key}" if _path else key
        result[key] = _resolve_any(value, current_path, strict, variables)

    return result


def _resolve_any(value: Any, path: str, strict: bool, environ: Mapping[str, str]) -> Any:
    if isinstance(value, dict):
        return resolve_placeholders(value, strict=strict, environ=environ, _path=path)
    if isinstance(value, list):
        return [
            _resolve_any(item, f"{path}[{i}]", strict, environ) for i, item in enumerate(value)
        ]
    return _resolve_value(value, path, strict, environ)


def _resolve_value(value: Any, path: str, strict: bool, environ: Mapping[str, str]) -> Any:
    if not isinstance(value, str):
        return value

    def replace_match(match: re.Match[str]) -> str:
        env_var = match.group(1)
        env_value = environ.get(env_var)

        if env_value is None:
            if strict:
                raise PlaceholderResolutionError(f"${{{env_var}}}", path)
            return match.group(0)

        return env_value

    return PLACEHOLDER_PATTERN.sub(replace_match, value)


def drop_unresolved(data: dict[str, Any]) -> dict[str, Any]:
    """Remove values still carrying a ``${VAR}`` placeholder.

    A section emptied this way is removed as well, so an unset variable reads
    as absent configuration rather than as a literal placeholder string.
    """
    result: dict[str, Any] = {}

    for key, value in data.items():
        if isinstance(value, dict):
            pruned = drop_unresolved(value)
            if value and not pruned:
                continue
            result[key] = pruned
        elif isinstance(value, str) and PLACEHOLDER_PATTERN.search(value):
            continue
        else:
            result[key] = value

    return result
