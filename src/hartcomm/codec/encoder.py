"""Primitive value encoder.

This module provides the encode() function that converts a single Python value
to the byte sequence HART carries in a frame's data field. All multi-byte values
are written little-endian.
"""

from __future__ import annotations

import datetime
import struct
from collections.abc import Callable
from typing import Any

from ..exceptions import UnsupportedTypeError, ValueRangeError
from .types import MAX_FLAGS, FlagSet, ValueType, infer_value_type, resolve_value_type

UINT16_MAX = 0xFFFF
UINT24_MAX = 0xFFFFFF  # 16,777,215


def encode(value: Any, value_type: ValueType | str | type | None = None) -> bytes:
    """Encode a value to bytes.

    When ``value_type`` is omitted the wire type is inferred from the Python
    type of ``value``: ``str`` -> text, ``float`` -> float64, ``datetime.date``
    -> date, :class:`FlagSet` -> flags, ``bytes`` -> raw. Integers have no
    inferred width and must name ``ValueType.UINT16`` or ``ValueType.UINT24``.

    Args:
        value: Value to encode. ``None`` encodes to an empty byte string.
        value_type: Wire type to encode as

    Returns:
        Encoded bytes

    Raises:
        UnsupportedTypeError: If the type is outside the supported set
        ValueRangeError: If the value does not fit the wire type

    Examples:
        >>> encode("PT-101")
        b'PT-101'
        >>> encode(2345, ValueType.UINT16)
        b')\\t'
        >>> encode(None)
        b''
    """
    if value is None:
        return b""

    if value_type is None:
        resolved = infer_value_type(value)
    else:
        resolved = resolve_value_type(value_type)

    return _ENCODERS[resolved](value)


def _encode_text(value: Any) -> bytes:
    if not isinstance(value, str):
        raise UnsupportedTypeError(f"Text expects str, got {type(value).__name__}")
    try:
        return value.encode("ascii")
    except UnicodeEncodeError as err:
        raise ValueRangeError(f"Text must be ASCII: {err}") from err


def _require_number(value: Any, type_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnsupportedTypeError(f"{type_name} expects a number, got {type(value).__name__}")
    return float(value)


def _encode_float32(value: Any) -> bytes:
    number = _require_number(value, "float32")
    try:
        return struct.pack("<f", number)
    except OverflowError as err:
        raise ValueRangeError(f"Value {value} does not fit in float32") from err


def _encode_float64(value: Any) -> bytes:
    return struct.pack("<d", _require_number(value, "float64"))


def _require_uint(value: Any, type_name: str, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnsupportedTypeError(f"{type_name} expects int, got {type(value).__name__}")
    if value < 0 or value > maximum:
        raise ValueRangeError(f"{type_name} value must be 0-{maximum}, got {value}")
    return value


def _encode_uint16(value: Any) -> bytes:
    return struct.pack("<H", _require_uint(value, "uint16", UINT16_MAX))


def _encode_uint24(value: Any) -> bytes:
    # Packed as uint32 with the high byte dropped
    number = _require_uint(value, "uint24", UINT24_MAX)
    return struct.pack("<I", number)[:3]


def _encode_date(value: Any) -> bytes:
    if not isinstance(value, datetime.date):
        raise UnsupportedTypeError(f"Date expects datetime.date, got {type(value).__name__}")
    return bytes([value.day & 0xFF, value.month & 0xFF, (value.year - 1900) & 0xFF])


def _encode_flags(value: Any) -> bytes:
    if not isinstance(value, FlagSet):
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            raise UnsupportedTypeError(
                f"Flags expect FlagSet or an iterable of bool, got {type(value).__name__}"
            )
        value = list(value)
        if len(value) > MAX_FLAGS:
            raise ValueRangeError(
                f"Flag set holds at most {MAX_FLAGS} flags, got {len(value)}"
            )
        value = FlagSet(value)
    return bytes([value.to_byte()])


def _encode_raw(value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise UnsupportedTypeError(f"Raw expects bytes, got {type(value).__name__}")
    return bytes(value)


_ENCODERS: dict[ValueType, Callable[[Any], bytes]] = {
    ValueType.TEXT: _encode_text,
    ValueType.FLOAT32: _encode_float32,
    ValueType.FLOAT64: _encode_float64,
    ValueType.UINT16: _encode_uint16,
    ValueType.UINT24: _encode_uint24,
    ValueType.DATE: _encode_date,
    ValueType.FLAGS: _encode_flags,
    ValueType.RAW: _encode_raw,
}
