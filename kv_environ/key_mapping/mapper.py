"""Key mapping utilities for prefixed flat keys and nested key paths."""

from __future__ import annotations


class KeyMapper:
    """Map between store keys, prefix-relative keys and nested key paths.

    A key path is built left to right from upper-cased field names,
    upper-cased map keys and decimal sequence indices, joined by ``sep``.
    """

    def __init__(self, prefix: str = "", sep: str = ".") -> None:
        super().__init__()
        if not sep:
            msg = "sep must not be empty"
            raise ValueError(msg)
        if "=" in sep:
            msg = "sep must not contain '='"
            raise ValueError(msg)
        if "=" in prefix:
            msg = "prefix must not contain '='"
            raise ValueError(msg)

        self.prefix = prefix
        self.sep = sep

    def full_key(self, relative: str) -> str:
        """Build a store key from a prefix-relative key."""
        return self.prefix + relative

    def matches(self, store_key: str) -> bool:
        """Return True when a store key is visible under this prefix."""
        return store_key.startswith(self.prefix)

    def relative_key(self, store_key: str) -> str:
        """Strip the prefix from a store key."""
        if not self.matches(store_key):
            msg = f"key does not match prefix: {store_key}"
            raise ValueError(msg)
        return store_key.removeprefix(self.prefix)

    def member_key(self, path: str, name: str) -> str:
        """Key of a struct field or map entry named ``name`` below ``path``."""
        return path + name.upper()

    def member_path(self, key: str) -> str:
        """Path prefix under which the members of ``key`` live."""
        return key + self.sep

    def index_key(self, key: str, index: int) -> str:
        """Key of the sequence element ``index`` of ``key``."""
        return f"{key}{self.sep}{index}"

    def head_segment(self, suffix: str) -> str:
        """Return the first path segment of ``suffix``."""
        return suffix.split(self.sep, 1)[0]

    @staticmethod
    def split_entry(entry: str) -> tuple[str, str] | None:
        """Split ``KEY=VALUE`` at the first ``=``; None when there is no ``=``."""
        key, found, value = entry.partition("=")
        if not found:
            return None
        return key, value

    @staticmethod
    def join_entry(key: str, value: str) -> str:
        return f"{key}={value}"
