"""External key/value store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Store(ABC):
    """Flat string store that entries are read from and written back to."""

    @abstractmethod
    def entries(self) -> list[str]:
        """Return every entry as ``KEY=VALUE`` in sorted key order."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value for key."""

    @abstractmethod
    def unset(self, key: str) -> None:
        """Remove key if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
