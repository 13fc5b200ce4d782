"""Classification of type annotations into transcodable shapes.

Every annotation the encoder or decoder meets is reduced to one variant of
:data:`TypeDescriptor`:

* :class:`ScalarType` - ``bool``, the ``int`` family (including fixed widths
  and ``IntEnum``), ``str``, or a class with a custom ``decode_env`` hook;
* :class:`OptionalType` - ``T | None`` around any other variant;
* :class:`StructType` - a dataclass, with its fields in declaration order;
* :class:`MapType` - ``dict[K, V]``;
* :class:`SequenceType` - ``list[T]``;
* :class:`UnsupportedType` - everything else.

Descriptors are cached per annotation, so repeated calls for the same
dataclass are cheap.
"""

from __future__ import annotations

import dataclasses
import functools
import types
from dataclasses import dataclass
from enum import Enum, auto
from typing import Annotated, Any, Protocol, Self, Union, get_args, get_origin, get_type_hints, runtime_checkable


class Kind(Enum):
    """Shape of a type as seen by the transcoder."""

    BOOL = auto()
    INT = auto()
    STRING = auto()
    CUSTOM = auto()
    OPTIONAL = auto()
    STRUCT = auto()
    MAP = auto()
    SEQUENCE = auto()
    UNSUPPORTED = auto()


@runtime_checkable
class EnvDecodable(Protocol):
    """Scalar type that parses itself from a flat value.

    Classes implementing ``decode_env`` are treated as scalar leaves and the
    decoder calls the hook instead of the built-in coercion. They are encoded
    with ``str()``.
    """

    @classmethod
    def decode_env(cls, raw: str) -> Self: ...


@dataclass(frozen=True)
class IntWidth:
    """Fixed integer width used with ``Annotated[int, IntWidth(...)]``."""

    bits: int
    signed: bool = True

    def __post_init__(self) -> None:
        if self.bits <= 0:
            msg = "bits must be positive"
            raise ValueError(msg)

    def narrow(self, value: int) -> int:
        """Wrap ``value`` into this width, discarding overflowing high bits."""
        modulus = 1 << self.bits
        value %= modulus
        if self.signed and value >= modulus >> 1:
            value -= modulus
        return value


Int8 = Annotated[int, IntWidth(8)]
Int16 = Annotated[int, IntWidth(16)]
Int32 = Annotated[int, IntWidth(32)]
Int64 = Annotated[int, IntWidth(64)]
UInt8 = Annotated[int, IntWidth(8, signed=False)]
UInt16 = Annotated[int, IntWidth(16, signed=False)]
UInt32 = Annotated[int, IntWidth(32, signed=False)]
UInt64 = Annotated[int, IntWidth(64, signed=False)]


@dataclass(frozen=True)
class ScalarType:
    kind: Kind
    python_type: type
    width: IntWidth | None = None


@dataclass(frozen=True)
class OptionalType:
    inner: TypeDescriptor

    @property
    def kind(self) -> Kind:
        return Kind.OPTIONAL


@dataclass(frozen=True)
class StructType:
    python_type: type

    @property
    def kind(self) -> Kind:
        return Kind.STRUCT

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        """Fields of the dataclass in declaration order."""
        return struct_fields(self.python_type)


@dataclass(frozen=True)
class MapType:
    key: TypeDescriptor
    value: TypeDescriptor

    @property
    def kind(self) -> Kind:
        return Kind.MAP


@dataclass(frozen=True)
class SequenceType:
    element: TypeDescriptor

    @property
    def kind(self) -> Kind:
        return Kind.SEQUENCE


@dataclass(frozen=True)
class UnsupportedType:
    annotation: Any

    @property
    def kind(self) -> Kind:
        return Kind.UNSUPPORTED


TypeDescriptor = ScalarType | OptionalType | StructType | MapType | SequenceType | UnsupportedType


@dataclass(frozen=True)
class FieldSpec:
    """One dataclass field as seen by the transcoder."""

    name: str
    descriptor: TypeDescriptor
    init: bool
    has_default: bool

    @property
    def exported(self) -> bool:
        """Underscore-prefixed and non-init fields are never transcoded."""
        return self.init and not self.name.startswith("_")


def is_scalar(descriptor: TypeDescriptor) -> bool:
    return isinstance(descriptor, ScalarType)


def unwrap_optional(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Strip at most one optional layer."""
    if isinstance(descriptor, OptionalType):
        return descriptor.inner
    return descriptor


def is_transcodable(descriptor: TypeDescriptor) -> bool:
    return not isinstance(unwrap_optional(descriptor), UnsupportedType)


@functools.cache
def describe(annotation: Any) -> TypeDescriptor:
    """Classify ``annotation`` into a :data:`TypeDescriptor`."""
    origin = get_origin(annotation)

    if origin is Annotated:
        base, *metadata = get_args(annotation)
        inner = describe(base)
        width = next((item for item in metadata if isinstance(item, IntWidth)), None)
        if width is not None and isinstance(inner, ScalarType) and inner.kind is Kind.INT:
            return ScalarType(Kind.INT, inner.python_type, width)
        return inner

    if origin is Union or origin is types.UnionType:
        members = get_args(annotation)
        present = [member for member in members if member is not types.NoneType]
        if len(present) != 1 or len(present) == len(members):
            return UnsupportedType(annotation)
        inner = describe(present[0])
        if isinstance(inner, (OptionalType, UnsupportedType)):
            return UnsupportedType(annotation)
        return OptionalType(inner)

    if origin is list:
        (element_annotation,) = get_args(annotation)
        element = describe(element_annotation)
        if not is_transcodable(element):
            return UnsupportedType(annotation)
        return SequenceType(element)

    if origin is dict:
        key_annotation, value_annotation = get_args(annotation)
        return MapType(describe(key_annotation), describe(value_annotation))

    if isinstance(annotation, type):
        return _describe_class(annotation)

    return UnsupportedType(annotation)


def _describe_class(cls: type) -> TypeDescriptor:
    if isinstance(cls, EnvDecodable):
        return ScalarType(Kind.CUSTOM, cls)
    if issubclass(cls, bool):
        return ScalarType(Kind.BOOL, cls)
    if issubclass(cls, int):
        return ScalarType(Kind.INT, cls)
    if issubclass(cls, str) and not issubclass(cls, Enum):
        return ScalarType(Kind.STRING, cls)
    if dataclasses.is_dataclass(cls):
        return StructType(cls)
    return UnsupportedType(cls)


@functools.cache
def struct_fields(cls: type) -> tuple[FieldSpec, ...]:
    hints = get_type_hints(cls, include_extras=True)
    field_specs: list[FieldSpec] = []
    for field in dataclasses.fields(cls):
        has_default = field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING
        field_specs.append(
            FieldSpec(
                name=field.name,
                descriptor=describe(hints[field.name]),
                init=field.init,
                has_default=has_default,
            )
        )
    return tuple(field_specs)


def runtime_annotation(value: Any) -> Any:
    """Infer an annotation for ``value`` from its runtime contents.

    Containers are typed after their first non-``None`` member; empty
    containers default to ``str`` members.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return type(value)
    if isinstance(value, dict):
        key_annotation = _members_annotation(list(value.keys()))
        return dict[key_annotation, _members_annotation(list(value.values()))]
    if isinstance(value, list):
        return list[_members_annotation(value)]
    return type(value)


def _members_annotation(members: list[Any]) -> Any:
    present = [member for member in members if member is not None]
    annotation = runtime_annotation(present[0]) if present else str
    if len(present) != len(members):
        return annotation | None
    return annotation
