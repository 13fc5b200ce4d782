"""Process environment store implementation."""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING


if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from .protocol import Store


if TYPE_CHECKING:
    from collections.abc import MutableMapping


class OSEnvironStore(Store):
    """Store backed by ``os.environ`` or an injected mutable mapping.

    Callers must serialise concurrent use; the process environment is
    shared global state.
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        """Create a store over ``environ``, defaulting to :data:`os.environ`."""
        super().__init__()
        self._environ = os.environ if environ is None else environ

    @override
    def entries(self) -> list[str]:
        return [f"{key}={self._environ[key]}" for key in sorted(self._environ)]

    @override
    def set(self, key: str, value: str) -> None:
        self._environ[key] = value

    @override
    def unset(self, key: str) -> None:
        _ = self._environ.pop(key, None)

    @override
    def clear(self) -> None:
        self._environ.clear()
