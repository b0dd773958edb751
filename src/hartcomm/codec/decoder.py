"""Primitive value decoder.

This module provides the decode() function that converts bytes taken from a
frame's data field back to a Python value.
"""

from __future__ import annotations

import datetime
import struct
from collections.abc import Callable
from typing import Any

from ..exceptions import MissingInputError, ValueRangeError
from .types import FlagSet, ValueType, resolve_value_type


def decode(data: bytes | bytearray | None, value_type: ValueType | str | type) -> Any:
    """Decode bytes to a value of the given wire type.

    Fixed-width types (float32, float64, uint16, date, flags) require a buffer
    of exactly their width. uint24 accepts up to four bytes and zero-extends
    them; a fourth byte is read as the high byte of a uint32.

    Args:
        data: Bytes to decode
        value_type: Wire type to decode as (a ValueType, its name, or one of
            ``str``, ``float``, ``bytes``, ``datetime.date``, ``FlagSet``)

    Returns:
        Decoded value

    Raises:
        MissingInputError: If ``data`` is None
        UnsupportedTypeError: If the type is outside the supported set
        ValueRangeError: If the buffer length does not match the type

    Examples:
        >>> decode(b"PT-101", ValueType.TEXT)
        'PT-101'
        >>> decode(b"\\xff\\xff\\xff", ValueType.UINT24)
        16777215
    """
    if data is None:
        raise MissingInputError("Cannot decode None; a byte buffer is required")

    resolved = resolve_value_type(value_type)
    buffer = bytes(data)

    width = resolved.width
    if width is not None and resolved is not ValueType.UINT24 and len(buffer) != width:
        raise ValueRangeError(
            f"{resolved.value} requires exactly {width} bytes, got {len(buffer)}"
        )

    return _DECODERS[resolved](buffer)


def _decode_text(data: bytes) -> str:
    # Non-ASCII bytes map to U+FFFD rather than failing the whole field
    return data.decode("ascii", errors="replace")


def _decode_float32(data: bytes) -> float:
    return struct.unpack("<f", data)[0]


def _decode_float64(data: bytes) -> float:
    return struct.unpack("<d", data)[0]


def _decode_uint16(data: bytes) -> int:
    return struct.unpack("<H", data)[0]


def _decode_uint24(data: bytes) -> int:
    if len(data) > 4:
        raise ValueRangeError(f"uint24 accepts at most 4 bytes, got {len(data)}")
    return struct.unpack("<I", data.ljust(4, b"\x00"))[0]


def _decode_date(data: bytes) -> datetime.date:
    day, month, year = data
    try:
        return datetime.date(year + 1900, month, day)
    except ValueError as err:
        raise ValueRangeError(f"Invalid date bytes {data.hex(' ')}: {err}") from err


def _decode_flags(data: bytes) -> FlagSet:
    return FlagSet.from_byte(data[0])


def _decode_raw(data: bytes) -> bytes:
    return data


_DECODERS: dict[ValueType, Callable[[bytes], Any]] = {
    ValueType.TEXT: _decode_text,
    ValueType.FLOAT32: _decode_float32,
    ValueType.FLOAT64: _decode_float64,
    ValueType.UINT16: _decode_uint16,
    ValueType.UINT24: _decode_uint24,
    ValueType.DATE: _decode_date,
    ValueType.FLAGS: _decode_flags,
    ValueType.RAW: _decode_raw,
}
