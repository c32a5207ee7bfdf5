"""Environment variable loaders for configuration overrides."""

from __future__ import annotations

import os

from .errors import ConfigurationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _read(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_float(name: str) -> float | None:
    """Return ``name`` parsed as a float, ``None`` when unset or blank."""

    value = _read(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc


def env_int(name: str) -> int | None:
    """Return ``name`` parsed as an integer, ``None`` when unset or blank."""

    value = _read(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def env_bool(name: str) -> bool | None:
    value = _read(name)
    if value is None:
        return None
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {value!r}")


def env_list(name: str) -> tuple[str, ...] | None:
    """Return a comma separated variable as a tuple of lowercase tokens."""

    value = _read(name)
    if value is None:
        return None
    return tuple(token.strip().lower() for token in value.split(",") if token.strip())
