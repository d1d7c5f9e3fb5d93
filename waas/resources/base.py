"""Shared plumbing for resource handles."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..client import Waas


def require_str(value: Any, name: str) -> str:
    """Return ``value`` if it is a non-empty string, raise otherwise."""
    if not isinstance(value, str):
        raise TypeError(f"'{name}' must be a string, got {type(value).__name__}")
    if not value:
        raise ValueError(f"'{name}' must not be empty")
    return value


def optional_str(value: Any, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"'{name}' must be a string, got {type(value).__name__}")
    return value


class Resource:
    """A handle addressing one API endpoint; holds no network state."""

    def __init__(self, waas: Waas) -> None:
        self.waas = waas
