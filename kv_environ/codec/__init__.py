"""Encoder and decoder between typed values and flat entries."""

from .decoder import decode, decode_env_map
from .encoder import encode
from .scalars import coerce_scalar, format_scalar, join_sequence, split_sequence


__all__ = ["coerce_scalar", "decode", "decode_env_map", "encode", "format_scalar", "join_sequence", "split_sequence"]
