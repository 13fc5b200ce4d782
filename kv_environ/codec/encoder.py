"""Flatten typed values into ``KEY=VALUE`` entries."""

from __future__ import annotations

import logging
from typing import Any

from kv_environ.errors import AbsentElementError, InvalidRootKindError, UnsupportedKeyTypeError
from kv_environ.key_mapping import KeyMapper
from kv_environ.kinds import (
    MapType,
    ScalarType,
    SequenceType,
    StructType,
    TypeDescriptor,
    describe,
    is_scalar,
    runtime_annotation,
    unwrap_optional,
)

from .scalars import format_scalar, join_sequence


logger = logging.getLogger(__name__)


class _Encoder:
    """Walks a value top-down and collects prefix-relative entries."""

    def __init__(self, mapper: KeyMapper) -> None:
        super().__init__()
        self.mapper = mapper
        self.entries: list[tuple[str, str]] = []

    def _emit(self, key: str, value: str) -> None:
        self.entries.append((key.upper(), value))

    def encode_struct(self, descriptor: StructType, value: Any, path: str) -> None:
        for field in descriptor.fields:
            if not field.exported:
                continue
            key = self.mapper.member_key(path, field.name)
            self._encode_member(field.descriptor, getattr(value, field.name), key)

    def encode_map(self, descriptor: MapType, value: dict[Any, Any], path: str) -> None:
        if not is_scalar(descriptor.key):
            msg = "map keys must be bool, int, str or a custom scalar"
            raise UnsupportedKeyTypeError(msg, key=path)

        for map_key, item in value.items():
            key = self.mapper.member_key(path, format_scalar(map_key))
            self._encode_member(descriptor.value, item, key)

    def encode_sequence(self, descriptor: SequenceType, value: list[Any], key: str) -> None:
        element = unwrap_optional(descriptor.element)
        if isinstance(element, ScalarType):
            fields: list[str] = []
            for index, item in enumerate(value):
                if item is None:
                    msg = "scalar sequence elements must be present"
                    raise AbsentElementError(msg, key=self.mapper.index_key(key, index))
                fields.append(format_scalar(item))
            self._emit(key, join_sequence(fields))
            return

        for index, item in enumerate(value):
            self._encode_member(element, item, self.mapper.index_key(key, index))

    def _encode_member(self, descriptor: TypeDescriptor, value: Any, key: str) -> None:
        if value is None:
            return

        descriptor = unwrap_optional(descriptor)
        if isinstance(descriptor, ScalarType):
            self._emit(key, format_scalar(value))
        elif isinstance(descriptor, StructType):
            self.encode_struct(descriptor, value, self.mapper.member_path(key))
        elif isinstance(descriptor, MapType):
            self.encode_map(descriptor, value, self.mapper.member_path(key))
        elif isinstance(descriptor, SequenceType):
            self.encode_sequence(descriptor, value, key)
        # unsupported member kinds are skipped


def encode(value: Any, prefix: str = "", *, annotation: Any = None, sep: str = ".") -> list[str]:
    """Flatten a dataclass instance or dict into ``KEY=VALUE`` entries.

    Parameters
    ----------
    value
        Root value; must be a dataclass instance or a ``dict``.
    prefix
        Literal prefix prepended to every produced key.
    annotation
        Type of ``value``. Inferred from the runtime contents when omitted,
        which is only reliable for homogeneous dicts.
    sep
        Key path separator.
    """
    if annotation is None:
        annotation = runtime_annotation(value)
    descriptor = describe(annotation)
    mapper = KeyMapper(prefix=prefix, sep=sep)
    encoder = _Encoder(mapper)

    if isinstance(descriptor, StructType):
        encoder.encode_struct(descriptor, value, "")
    elif isinstance(descriptor, MapType):
        encoder.encode_map(descriptor, value, "")
    else:
        msg = f"root value must be a dataclass instance or a dict, not {type(value).__name__}"
        raise InvalidRootKindError(msg)

    logger.debug("encoded %s into %d entries with prefix %r", annotation, len(encoder.entries), prefix)
    return [mapper.join_entry(mapper.full_key(key), item) for key, item in encoder.entries]
