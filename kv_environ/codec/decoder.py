"""Reconstruct typed values from flat ``KEY=VALUE`` entries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, get_origin

from kv_environ.errors import EnvironError, InvalidRootKindError, UnsupportedKeyTypeError
from kv_environ.key_mapping import EnvMap
from kv_environ.kinds import (
    MapType,
    OptionalType,
    ScalarType,
    SequenceType,
    StructType,
    TypeDescriptor,
    UnsupportedType,
    describe,
    is_scalar,
    unwrap_optional,
)

from .scalars import coerce_scalar, split_sequence


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


logger = logging.getLogger(__name__)

_SKIP = object()


class _Decoder:
    """Walks the key space of an :class:`EnvMap` guided by a type descriptor."""

    def __init__(self, env: EnvMap) -> None:
        super().__init__()
        self.env = env
        self.mapper = env.mapper

    def decode_struct(self, descriptor: StructType, path: str) -> Any:
        kwargs: dict[str, Any] = {}
        for field in descriptor.fields:
            value = _SKIP
            if field.exported:
                value = self._decode_member(field.descriptor, self.mapper.member_key(path, field.name))

            if value is _SKIP:
                if field.init and not field.has_default:
                    kwargs[field.name] = None
                continue
            kwargs[field.name] = value
        return descriptor.python_type(**kwargs)

    def decode_map(self, descriptor: MapType, path: str) -> dict[Any, Any]:
        if not is_scalar(descriptor.key):
            msg = "map keys must be bool, int, str or a custom scalar"
            raise UnsupportedKeyTypeError(msg, key=path)

        result: dict[Any, Any] = {}
        value_descriptor = unwrap_optional(descriptor.value)
        if isinstance(value_descriptor, UnsupportedType):
            return result

        # scalar values own their whole key; nested values own one segment
        whole_suffix = is_scalar(value_descriptor) or (
            isinstance(value_descriptor, SequenceType) and is_scalar(unwrap_optional(value_descriptor.element))
        )
        decoded: set[str] = set()
        for key in self.env.sorted_remaining_keys():
            if not key.startswith(path) or not self.env.has_key(key):
                continue
            suffix = key.removeprefix(path)
            raw_key = suffix if whole_suffix else self.mapper.head_segment(suffix)
            if not raw_key or raw_key in decoded:
                continue
            decoded.add(raw_key)

            map_key = self._coerce(descriptor.key, raw_key, key)
            result[map_key] = self._decode_child(value_descriptor, path + raw_key)
        return result

    def decode_sequence(self, descriptor: SequenceType, key: str) -> list[Any]:
        element = unwrap_optional(descriptor.element)
        if isinstance(element, ScalarType):
            try:
                fields = split_sequence(self.env.get(key))
            except EnvironError as error:
                error.key = key
                raise
            return [self._coerce(element, field, key) for field in fields]

        items: list[Any] = []
        index = 0
        # indices are contiguous from 0; the first gap ends the sequence
        while self.env.has_member(self.mapper.index_key(key, index)):
            items.append(self._decode_child(element, self.mapper.index_key(key, index)))
            index += 1
        return items

    def _decode_member(self, descriptor: TypeDescriptor, key: str) -> Any:
        if isinstance(descriptor, OptionalType):
            if not self.env.has_member(key):
                return None
            descriptor = descriptor.inner
        return self._decode_child(descriptor, key)

    def _decode_child(self, descriptor: TypeDescriptor, key: str) -> Any:
        if isinstance(descriptor, ScalarType):
            return self._coerce(descriptor, self.env.get(key), key)
        if isinstance(descriptor, StructType):
            return self.decode_struct(descriptor, self.mapper.member_path(key))
        if isinstance(descriptor, MapType):
            return self.decode_map(descriptor, self.mapper.member_path(key))
        if isinstance(descriptor, SequenceType):
            return self.decode_sequence(descriptor, key)
        return _SKIP

    @staticmethod
    def _coerce(descriptor: TypeDescriptor, raw: str, key: str) -> Any:
        try:
            return coerce_scalar(descriptor, raw)
        except EnvironError as error:
            if error.key is None:
                error.key = key
            raise


def decode_env_map(target: Any, env: EnvMap) -> Any:
    """Decode ``target`` from an existing :class:`EnvMap`, consuming its entries.

    ``target`` is a dataclass type or a ``dict[K, V]`` annotation.
    """
    if not isinstance(target, type) and get_origin(target) is None:
        msg = f"target must be a dataclass type or a dict annotation, not {target!r}"
        raise InvalidRootKindError(msg)

    descriptor = describe(target)
    decoder = _Decoder(env)
    if isinstance(descriptor, StructType):
        value = decoder.decode_struct(descriptor, "")
    elif isinstance(descriptor, MapType):
        value = decoder.decode_map(descriptor, "")
    else:
        msg = f"target must be a dataclass type or a dict annotation, not {target!r}"
        raise InvalidRootKindError(msg)

    logger.debug(
        "decoded %s from %d of %d entries with prefix %r", target, len(env.found), len(env.data), env.prefix
    )
    return value


def decode(target: Any, entries: Iterable[str] | Mapping[str, str], prefix: str = "", *, sep: str = ".") -> Any:
    """Decode ``target`` from ``KEY=VALUE`` entries visible under ``prefix``."""
    return decode_env_map(target, EnvMap(entries, prefix, sep=sep))
