"""In-memory store implementation."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING


if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from .protocol import Store


if TYPE_CHECKING:
    from collections.abc import Mapping


class InMemoryStore(Store):
    """Dict-backed store for local development and tests."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self._store: dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str) -> str | None:
        """Return value for key, or None when key does not exist."""
        return self._store.get(key)

    @override
    def entries(self) -> list[str]:
        return [f"{key}={self._store[key]}" for key in sorted(self._store)]

    @override
    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    @override
    def unset(self, key: str) -> None:
        _ = self._store.pop(key, None)

    @override
    def clear(self) -> None:
        self._store.clear()
