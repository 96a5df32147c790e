"""Typed access to configuration held in environment variables."""

from __future__ import annotations

import json
import os
from typing import Callable, TypeVar

T = TypeVar("T")


def parse_var(name: str, convert: Callable[[str], T]) -> T | None:
    """Return the variable converted with ``convert``, or None if unset or unparsable."""
    raw = os.environ.get(name)
    if raw is None:
        return None
    try:
        return convert(raw)
    except (ValueError, TypeError):
        return None


def parse_strings_from_var(name: str) -> list[str] | None:
    """Return the variable read as a JSON array of strings, or None."""
    raw = os.environ.get(name)
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        return None
    return value