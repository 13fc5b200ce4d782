"""Scalar formatting, coercion and CSV encoding of scalar sequences."""

from __future__ import annotations

import csv
import io
import re
from typing import Any

from kv_environ.errors import IntegerParseError, MalformedSequenceEncodingError, UnknownScalarKindError
from kv_environ.kinds import Kind, ScalarType, TypeDescriptor


_INTEGER = re.compile(r"[+-]?[0-9]+")


def format_scalar(value: Any) -> str:
    """Render a scalar the way it appears in a flat value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    return str(value)


def coerce_scalar(descriptor: TypeDescriptor, raw: str) -> Any:
    """Convert the flat value ``raw`` into the scalar described by ``descriptor``.

    Booleans are true only for a case-insensitive ``"true"`` and never fail.
    Integers must be base 10 and are narrowed to the declared width without
    overflow checks. Strings are returned unchanged. Custom scalars are
    delegated to their ``decode_env`` hook.
    """
    if not isinstance(descriptor, ScalarType):
        msg = f"cannot coerce a string into {descriptor.kind.name.lower()}"
        raise UnknownScalarKindError(msg)

    if descriptor.kind is Kind.CUSTOM:
        return descriptor.python_type.decode_env(raw)  # type: ignore[attr-defined]
    if descriptor.kind is Kind.BOOL:
        return raw.lower() == "true"
    if descriptor.kind is Kind.INT:
        return _coerce_int(descriptor, raw)
    if descriptor.kind is Kind.STRING:
        if descriptor.python_type is str:
            return raw
        return descriptor.python_type(raw)

    msg = f"unknown scalar kind {descriptor.kind.name}"
    raise UnknownScalarKindError(msg)


def _coerce_int(descriptor: ScalarType, raw: str) -> int:
    if not _INTEGER.fullmatch(raw):
        msg = f"invalid integer {raw!r}"
        raise IntegerParseError(msg)

    value = int(raw)
    if descriptor.width is not None:
        value = descriptor.width.narrow(value)
    if descriptor.python_type is int:
        return value
    try:
        return descriptor.python_type(value)
    except ValueError as error:
        msg = f"{value} is not a valid {descriptor.python_type.__name__}"
        raise IntegerParseError(msg) from error


def join_sequence(fields: list[str]) -> str:
    """Encode ``fields`` as one CSV record without its record terminator."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    _ = writer.writerow(fields)
    return buffer.getvalue().removesuffix("\r\n")


def split_sequence(raw: str) -> list[str]:
    """Split one CSV record into its fields; an empty value has no fields."""
    if not raw:
        return []
    reader = csv.reader(io.StringIO(raw, newline=""), strict=True)
    try:
        return next(reader)
    except csv.Error as error:
        msg = f"malformed sequence {raw!r}: {error}"
        raise MalformedSequenceEncodingError(msg) from error
