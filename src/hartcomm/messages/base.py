"""Base message class shared by requests and responses.

This module provides the Message model holding the fields every HART frame
carries. The data field is kept as raw bytes and decoded on demand through the
primitive codec.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..codec import ValueType, decode, encode
from ..codec.types import resolve_value_type
from ..constants import DEFAULT_PREAMBLE, MAX_COMMAND, MIN_PREAMBLE, FrameFormat


class Message(BaseModel):
    """Fields common to every HART frame.

    Attributes:
        preamble: Number of 0xFF synchronization bytes before the limiter
        frame_format: Short (1-byte) or long (5-byte) address
        address: Device address bytes, not interpreted further
        command: Command number (0-509; 254 and above use the extension byte)
        data: Raw data field bytes

    Example:
        >>> from hartcomm import Request, ValueType
        >>> request = Request(command=18)
        >>> request.set_data("PT-101")
        >>> request.get_data(ValueType.TEXT)
        'PT-101'
    """

    model_config = ConfigDict(
        strict=False,
        validate_assignment=True,
        extra="forbid",
    )

    preamble: int = Field(default=DEFAULT_PREAMBLE, ge=MIN_PREAMBLE)
    frame_format: FrameFormat = FrameFormat.SHORT
    address: bytes = b"\x00"
    command: int = Field(default=0, ge=0, le=MAX_COMMAND)
    data: bytes = b""

    def set_data(self, value: Any, value_type: ValueType | str | type | None = None) -> None:
        """Replace the data field with an encoded value.

        Args:
            value: Value to encode (``None`` clears the data field)
            value_type: Wire type, inferred from ``value`` when omitted
        """
        self.data = encode(value, value_type)

    def get_data(self, value_type: ValueType | str | type, offset: int = 0) -> Any:
        """Decode a value from the data field.

        Fixed-width types read exactly their width starting at ``offset``;
        text and raw bytes read from ``offset`` to the end of the data field.

        Raises:
            UnsupportedTypeError: If the type is outside the supported set
            ValueRangeError: If fewer bytes than the type's width remain
        """
        resolved = resolve_value_type(value_type)
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")

        width = resolved.width
        if width is None:
            return decode(self.data[offset:], resolved)
        return decode(self.data[offset : offset + width], resolved)
