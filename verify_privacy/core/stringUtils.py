"""Defaulting helpers for optional string fields."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def has(obj: Mapping[str, Any] | None, key: str) -> bool:
    """Return ``True`` if *obj* holds a non-empty string under *key*."""
    if obj is None:
        return False
    value = obj.get(key)
    return isinstance(value, str) and len(value) > 0


def get_or_default(value: Any, default: str) -> str:
    """Return *value* when it is a non-empty string, else *default*."""
    if isinstance(value, str) and value:
        return value
    return default
