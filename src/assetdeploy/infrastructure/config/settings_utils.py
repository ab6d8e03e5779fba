"""Environment parsing helpers used by the settings object."""

from __future__ import annotations

import os
from typing import Sequence


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", "relaxed", "skip", "disabled"}


def parse_bool(value: object, *, default: bool = False) -> bool:
    """Parse a loose boolean value."""
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    raw = str(value).strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def env_str(name: str, default: str = "") -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return str(value).strip()


def env_bool(name: str, default: bool = False) -> bool:
    return parse_bool(os.environ.get(name), default=default)


def env_list(name: str, default: Sequence[str] | None = None) -> list[str]:
    """Parse comma-separated env list values.

    An unset variable yields ``default``; a set but blank variable yields an
    empty list so a deployment can switch a list off explicitly.
    """
    value = os.environ.get(name)
    if value is None:
        return list(default or [])
    return [item.strip() for item in str(value).split(",") if item.strip()]
