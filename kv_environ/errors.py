"""Errors raised while transcoding between typed values and flat entries."""

from __future__ import annotations


class EnvironError(Exception):
    """Base class for transcoding failures.

    ``key`` names the flat key being processed when the failure happened,
    or ``None`` when the failure is not tied to a single key.
    """

    def __init__(self, msg: str, *, key: str | None = None) -> None:
        super().__init__(msg)
        self.key = key

    def __str__(self) -> str:
        message = super().__str__()
        if self.key is None:
            return message
        return f"{message} (key: {self.key!r})"


class InvalidRootKindError(EnvironError, TypeError):
    """Top-level value or target is neither a dataclass nor a dict."""


class UnsupportedKeyTypeError(EnvironError, TypeError):
    """Map key type cannot be coerced from a string."""


class UnknownScalarKindError(EnvironError, TypeError):
    """Scalar coercion was requested for a non-scalar type."""


class IntegerParseError(EnvironError, ValueError):
    """Value cannot be parsed as a base-10 integer of the target type."""


class MalformedSequenceEncodingError(EnvironError, ValueError):
    """CSV record of a scalar sequence cannot be parsed."""


class AbsentElementError(EnvironError, ValueError):
    """Scalar sequence element is ``None`` and cannot be encoded."""
