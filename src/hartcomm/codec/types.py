"""Value types supported by the primitive codec.

The codec works on a closed set of wire types. ``ValueType`` names them and
carries their fixed width where one exists; ``FlagSet`` is the Python value
type for a single byte of up to eight boolean flags.
"""

from __future__ import annotations

import datetime
import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..exceptions import UnsupportedTypeError, ValueRangeError

MAX_FLAGS = 8


class ValueType(str, enum.Enum):
    """Wire types understood by :func:`hartcomm.codec.encode`/:func:`decode`."""

    TEXT = "text"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    UINT16 = "uint16"
    UINT24 = "uint24"
    DATE = "date"
    FLAGS = "flags"
    RAW = "raw"

    @property
    def width(self) -> int | None:
        """Fixed encoded width in bytes, or None for variable-length types."""
        return _WIDTHS.get(self)


_WIDTHS: dict[ValueType, int] = {
    ValueType.FLOAT32: 4,
    ValueType.FLOAT64: 8,
    ValueType.UINT16: 2,
    ValueType.UINT24: 3,
    ValueType.DATE: 3,
    ValueType.FLAGS: 1,
}

# Accepted aliases when a Python type is given instead of a ValueType.
# int is deliberately absent: its wire width is ambiguous.
PYTHON_TYPES: dict[type, ValueType] = {
    str: ValueType.TEXT,
    float: ValueType.FLOAT64,
    bytes: ValueType.RAW,
    datetime.date: ValueType.DATE,
}


@dataclass(frozen=True, init=False)
class FlagSet:
    """Up to eight boolean flags packed into one byte.

    ``bits[0]`` is the least significant bit of the packed byte. Fewer than
    eight flags are padded with False, so a set always holds eight flags and
    equals its decoded byte.

    Example:
        >>> flags = FlagSet.from_byte(0x81)
        >>> flags[0], flags[7]
        (True, True)
        >>> flags.to_byte()
        129
    """

    bits: tuple[bool, ...] = ()

    def __init__(self, bits: Iterable[bool] = ()) -> None:
        values = tuple(bool(bit) for bit in bits)
        if len(values) > MAX_FLAGS:
            raise ValueRangeError(
                f"Flag set holds at most {MAX_FLAGS} flags, got {len(values)}"
            )
        values += (False,) * (MAX_FLAGS - len(values))
        object.__setattr__(self, "bits", values)

    @classmethod
    def from_byte(cls, value: int) -> FlagSet:
        """Unpack a byte into a full set of eight flags."""
        if not 0 <= value <= 0xFF:
            raise ValueRangeError(f"Flag byte must be 0-255, got {value}")
        return cls((value >> bit) & 1 == 1 for bit in range(MAX_FLAGS))

    def to_byte(self) -> int:
        result = 0
        for index, bit in enumerate(self.bits):
            if bit:
                result |= 1 << index
        return result

    def __len__(self) -> int:
        return len(self.bits)

    def __getitem__(self, index: int) -> bool:
        return self.bits[index]

    def __iter__(self) -> Iterator[bool]:
        return iter(self.bits)


def resolve_value_type(target: ValueType | str | type) -> ValueType:
    """Map a ValueType, its name, or a Python type onto a ValueType.

    Raises:
        UnsupportedTypeError: If the target is outside the supported set
    """
    if isinstance(target, ValueType):
        return target
    if isinstance(target, str):
        try:
            return ValueType(target.lower())
        except ValueError as err:
            raise UnsupportedTypeError(f"Unsupported value type: {target!r}") from err
    if isinstance(target, type):
        if issubclass(target, FlagSet):
            return ValueType.FLAGS
        if target in PYTHON_TYPES:
            return PYTHON_TYPES[target]
        raise UnsupportedTypeError(
            f"Conversion to {target.__name__} is not supported; "
            f"pass a ValueType to name the wire format"
        )
    raise UnsupportedTypeError(f"Unsupported value type: {target!r}")


def infer_value_type(value: object) -> ValueType:
    """Pick the wire type for a value whose Python type is unambiguous."""
    if isinstance(value, FlagSet):
        return ValueType.FLAGS
    if isinstance(value, bool):
        raise UnsupportedTypeError("Conversion from bool is not supported; use FlagSet")
    if isinstance(value, (bytes, bytearray)):
        return ValueType.RAW
    if isinstance(value, str):
        return ValueType.TEXT
    if isinstance(value, float):
        return ValueType.FLOAT64
    if isinstance(value, datetime.date):
        return ValueType.DATE
    raise UnsupportedTypeError(
        f"Conversion from {type(value).__name__} is not supported; "
        f"pass a ValueType to name the wire format"
    )
