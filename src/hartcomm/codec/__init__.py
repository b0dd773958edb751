"""Primitive value codec for hartcomm.

This module maps the fixed set of HART data field types (text, float32,
float64, uint16, uint24, date, flag set) to and from their byte encodings.
"""

from __future__ import annotations

from .decoder import decode
from .encoder import UINT16_MAX, UINT24_MAX, encode
from .types import MAX_FLAGS, FlagSet, ValueType

__all__ = [
    "encode",
    "decode",
    "ValueType",
    "FlagSet",
    "MAX_FLAGS",
    "UINT16_MAX",
    "UINT24_MAX",
]
