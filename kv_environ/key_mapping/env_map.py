"""Consumable view over flat key/value entries."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from .mapper import KeyMapper


if TYPE_CHECKING:
    from collections.abc import Iterable

    from kv_environ.stores import Store


logger = logging.getLogger(__name__)


class EnvMap:
    """Prefix-filtered flat entries with one-shot consumption tracking.

    Entries whose key does not start with the prefix are dropped; the rest
    are stored under their prefix-relative key. Every key moves from
    ``remaining`` to ``found`` the first time it is read with :meth:`get`.
    """

    def __init__(self, entries: Iterable[str] | Mapping[str, str], prefix: str = "", *, sep: str = ".") -> None:
        super().__init__()
        self.mapper = KeyMapper(prefix=prefix, sep=sep)
        self._data: dict[str, str] = {}
        self._remaining: dict[str, str] = {}
        self._found: dict[str, str] = {}

        pairs = entries.items() if isinstance(entries, Mapping) else self._split_entries(entries)
        for store_key, value in pairs:
            if not self.mapper.matches(store_key):
                continue
            key = self.mapper.relative_key(store_key)
            self._data[key] = value
            self._remaining[key] = value

    def _split_entries(self, entries: Iterable[str]) -> Iterable[tuple[str, str]]:
        for entry in entries:
            pair = self.mapper.split_entry(entry)
            if pair is not None:
                yield pair

    @property
    def prefix(self) -> str:
        return self.mapper.prefix

    @property
    def data(self) -> Mapping[str, str]:
        """All visible entries, consumed or not."""
        return MappingProxyType(self._data)

    @property
    def remaining(self) -> Mapping[str, str]:
        return MappingProxyType(self._remaining)

    @property
    def found(self) -> Mapping[str, str]:
        return MappingProxyType(self._found)

    def get(self, key: str) -> str:
        """Consume and return the value of ``key``; empty string when absent or already consumed."""
        if key not in self._remaining:
            return ""
        value = self._remaining.pop(key)
        self._found[key] = value
        return value

    def has_key(self, key: str) -> bool:
        return key in self._remaining

    def has_key_with_prefix(self, prefix: str) -> bool:
        """Return True when any remaining key starts with ``prefix``."""
        return any(key.startswith(prefix) for key in self._remaining)

    def has_member(self, key: str) -> bool:
        """Return True when ``key`` or anything nested below it remains."""
        return self.has_key(key) or self.has_key_with_prefix(self.mapper.member_path(key))

    def sorted_remaining_keys(self) -> list[str]:
        """Snapshot of the remaining keys in lexicographic order."""
        return sorted(self._remaining)

    def purge_consumed(self, store: Store) -> None:
        """Unset every consumed key from ``store``.

        All removals are attempted; when several fail, the last failure is
        raised.
        """
        last_error: Exception | None = None
        for key in self._found:
            store_key = self.mapper.full_key(key)
            try:
                store.unset(store_key)
            except Exception as error:
                logger.warning("failed to unset %s: %s", store_key, error)
                last_error = error
        logger.debug("purged %d consumed keys with prefix %r", len(self._found), self.prefix)
        if last_error is not None:
            raise last_error
