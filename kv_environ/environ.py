"""Public call API: marshal typed values to flat entries and back."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kv_environ.codec import decode, decode_env_map, encode
from kv_environ.key_mapping import EnvMap, KeyMapper
from kv_environ.stores import OSEnvironStore, Store


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


logger = logging.getLogger(__name__)


def marshal(value: Any, prefix: str = "", *, annotation: Any = None) -> list[str]:
    """Flatten a dataclass instance or dict into ``KEY=VALUE`` strings."""
    return encode(value, prefix, annotation=annotation)


def marshal_map(value: Any, prefix: str = "", *, annotation: Any = None) -> dict[str, str]:
    """Flatten a dataclass instance or dict into a key/value dict."""
    out: dict[str, str] = {}
    for entry in encode(value, prefix, annotation=annotation):
        pair = KeyMapper.split_entry(entry)
        if pair is not None:
            out[pair[0]] = pair[1]
    return out


def marshal_and_set(value: Any, prefix: str = "", *, annotation: Any = None, store: Store | None = None) -> None:
    """Flatten ``value`` and set every entry on ``store`` (the process environment by default).

    The first failing ``set`` aborts the call; entries set before it stay set.
    """
    store = OSEnvironStore() if store is None else store
    entries = marshal_map(value, prefix, annotation=annotation)
    for key, item in entries.items():
        store.set(key, item)
    logger.debug("set %d entries with prefix %r", len(entries), prefix)


def unmarshal(target: Any, entries: Iterable[str] | Mapping[str, str], prefix: str = "") -> Any:
    """Decode a ``target`` dataclass type or ``dict[K, V]`` annotation from flat entries."""
    return decode(target, entries, prefix)


def unmarshal_os(target: Any, prefix: str = "", *, store: Store | None = None) -> Any:
    """Decode ``target`` from ``store`` (the process environment by default)."""
    store = OSEnvironStore() if store is None else store
    return decode(target, store.entries(), prefix)


def unmarshal_os_and_unset(target: Any, prefix: str = "", *, store: Store | None = None) -> Any:
    """Decode ``target`` from ``store`` and then unset every key that was read.

    Keys are only unset after a successful decode.
    """
    store = OSEnvironStore() if store is None else store
    env = EnvMap(store.entries(), prefix)
    value = decode_env_map(target, env)
    env.purge_consumed(store)
    return value
