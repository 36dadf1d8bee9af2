"""core/contracts/settings.py
=========================

Key-value store contract used for dependency injection.

Features receive an ``ISettingsManager`` from the composition root and never
construct their own store; tests pass a private in-memory instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ISettingsManager(ABC):
    """Namespaced key-value store (scalars JSON-encoded, bytes kept raw)."""

    @abstractmethod
    def get(self, key: str, fallback: Any | None = None, *, namespace: str = "defaults") -> Any | None:
        """Return a stored value or fallback."""

    @abstractmethod
    def set(self, key: str, value: Any, *, namespace: str = "defaults") -> None:
        """Persist a value."""

    @abstractmethod
    def delete(self, key: str, *, namespace: str = "defaults") -> bool:
        """Delete a stored value; True if something was removed."""
