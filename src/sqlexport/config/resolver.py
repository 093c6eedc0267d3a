"""
Environment variable substitution for profile values.
"""

import os
import re
from typing import Any

_ENV_VAR = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def resolve_config(config_data: dict[str, Any]) -> dict[str, Any]:
    """
    Resolve ``${VAR_NAME}`` and ``${VAR_NAME:-default}`` placeholders.

    Unset variables without a default are left as written, so a missing
    password shows up verbatim in the connection error rather than as an
    empty string.

    Args:
        config_data: Profile dictionary

    Returns:
        Resolved copy of the dictionary
    """
    return _resolve_value(config_data)


def _resolve_value(value: Any) -> Any:
    """Recursively resolve values in configuration."""
    if isinstance(value, dict):
        return {k: _resolve_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_value(item) for item in value]
    elif isinstance(value, str):
        return _ENV_VAR.sub(_replace, value)
    else:
        return value


def _replace(match: re.Match) -> str:
    name, default = match.group(1), match.group(2)
    value = os.getenv(name)
    if value is not None:
        return value
    return default if default is not None else match.group(0)
