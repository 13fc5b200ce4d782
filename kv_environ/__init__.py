"""kv-environ - typed values to and from flat KEY=VALUE entries such as environment variables"""

import logging

from ._version import version as __version__
from .codec import decode, encode
from .environ import marshal, marshal_and_set, marshal_map, unmarshal, unmarshal_os, unmarshal_os_and_unset
from .errors import (
    AbsentElementError,
    EnvironError,
    IntegerParseError,
    InvalidRootKindError,
    MalformedSequenceEncodingError,
    UnknownScalarKindError,
    UnsupportedKeyTypeError,
)
from .key_mapping import EnvMap, KeyMapper
from .kinds import EnvDecodable, Int8, Int16, Int32, Int64, IntWidth, UInt8, UInt16, UInt32, UInt64, describe
from .stores import InMemoryStore, OSEnvironStore, RedisStore, Store


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "AbsentElementError",
    "EnvDecodable",
    "EnvMap",
    "EnvironError",
    "InMemoryStore",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "IntWidth",
    "IntegerParseError",
    "InvalidRootKindError",
    "KeyMapper",
    "MalformedSequenceEncodingError",
    "OSEnvironStore",
    "RedisStore",
    "Store",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UnknownScalarKindError",
    "UnsupportedKeyTypeError",
    "__version__",
    "decode",
    "describe",
    "encode",
    "marshal",
    "marshal_and_set",
    "marshal_map",
    "unmarshal",
    "unmarshal_os",
    "unmarshal_os_and_unset",
]
