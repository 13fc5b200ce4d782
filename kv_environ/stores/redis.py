"""Redis-compatible store implementation."""

from __future__ import annotations

import sys
from typing import Any


if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override


try:
    import redis as redis_module
except ImportError:  # pragma: no cover - exercised when dependency is absent
    redis_module = None

from .protocol import Store


def _normalize_string(value: str | bytes | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode()
    return value


class RedisStore(Store):
    """Redis-compatible store using the synchronous ``redis`` client API.

    Every key is kept under ``namespace`` in Redis; the namespace is not
    visible through :meth:`entries`, so one Redis database can hold the flat
    entries of several applications.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        namespace: str = "",
        client: Any | None = None,
    ) -> None:
        """Create a store from URL or an injected client.

        Parameters
        ----------
        url
            Redis connection URL used when ``client`` is not provided.
        namespace
            Literal key prefix for every stored entry.
        client
            Optional injected client with ``get/mget/set/delete/scan_iter/close`` API.
        """
        super().__init__()
        self._url = url
        self._namespace = namespace
        if client is not None:
            self._client = client
            return

        if redis_module is None:
            msg = "redis dependency is required for RedisStore; install with `pip install kv-environ[redis]`"
            raise RuntimeError(msg)

        self._client = redis_module.Redis.from_url(url, decode_responses=True)

    def _keys(self) -> list[str]:
        keys: list[str] = []
        for key in self._client.scan_iter(match=f"{self._namespace}*"):
            normalized = _normalize_string(key)
            if normalized is not None and normalized.startswith(self._namespace):
                keys.append(normalized)
        return sorted(keys)

    @override
    def entries(self) -> list[str]:
        keys = self._keys()
        if not keys:
            return []

        out: list[str] = []
        for key, value in zip(keys, self._client.mget(keys), strict=True):
            normalized = _normalize_string(value)
            if normalized is None:
                continue
            out.append(f"{key.removeprefix(self._namespace)}={normalized}")
        return out

    def get(self, key: str) -> str | None:
        """Return value for key, or None when key does not exist."""
        return _normalize_string(self._client.get(self._namespace + key))

    @override
    def set(self, key: str, value: str) -> None:
        self._client.set(self._namespace + key, value)

    @override
    def unset(self, key: str) -> None:
        self._client.delete(self._namespace + key)

    @override
    def clear(self) -> None:
        """Delete every key under the namespace."""
        keys = self._keys()
        if keys:
            self._client.delete(*keys)

    def close(self) -> None:
        """Release client resources."""
        close_method = getattr(self._client, "close", None)
        if close_method is not None:
            close_method()
