"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import InvalidSettingError

if TYPE_CHECKING:
    from collections.abc import Collection


def optional_env_var(name: str) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_int(name: str, default: int) -> int:
    value = optional_env_var(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise InvalidSettingError(name, value, "an integer") from exc
    if parsed <= 0:
        raise InvalidSettingError(name, value, "positive")
    return parsed


def env_float(name: str, default: float) -> float:
    value = optional_env_var(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise InvalidSettingError(name, value, "a number") from exc
    if parsed <= 0:
        raise InvalidSettingError(name, value, "positive")
    return parsed


def env_choice(name: str, choices: Collection[str], default: str) -> str:
    """Return the lower-cased value of ``name`` if it is one of ``choices``."""

    value = optional_env_var(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered not in choices:
        raise InvalidSettingError(name, value, f"one of {', '.join(sorted(choices))}")
    return lowered
