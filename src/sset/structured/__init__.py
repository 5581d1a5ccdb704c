"""Serialized form of sets for transport between processes."""

from .codec import decode_state, encode_state, parse_envelope
from .schema import SerializedSSet, SSetProps

__all__ = [
    "SerializedSSet",
    "SSetProps",
    "decode_state",
    "encode_state",
    "parse_envelope",
]
