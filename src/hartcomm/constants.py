"""HART data-link constants.

Frame layout::

    +-----------+---------+---------+---------+---------+---------------+---------+----------+
    | Preamble  | Limiter | Address | Command |  Count  | Response code |  Data   | Checksum |
    | >= 2 x FF | 1 byte  | 1 or 5  | 1 or 2  | 1 byte  | 2 (responses) | 0..N    | 1 byte   |
    +-----------+---------+---------+---------+---------+---------------+---------+----------+

- Limiter: frame mode in the low bits, 0x80 set for the long (5-byte) address
- Command: a first byte of 254 is followed by one extension byte
- Count: number of bytes between the count byte and the checksum
- Checksum: XOR of limiter through last data byte
"""

from __future__ import annotations

import enum

from .exceptions import MalformedFrameError

PREAMBLE_SYMBOL = 0xFF
MIN_PREAMBLE = 2
DEFAULT_PREAMBLE = 5

LONG_FRAME_BIT = 0x80
EXTENDED_COMMAND = 254
MAX_COMMAND = EXTENDED_COMMAND + 0xFF  # 509
MAX_BYTE_COUNT = 0xFF
RESPONSE_CODE_LENGTH = 2

SHORT_ADDRESS_LENGTH = 1
LONG_ADDRESS_LENGTH = 5


class FrameFormat(enum.Enum):
    """Address format selected by the limiter's high bit."""

    SHORT = "short"
    LONG = "long"

    @property
    def address_length(self) -> int:
        return LONG_ADDRESS_LENGTH if self is FrameFormat.LONG else SHORT_ADDRESS_LENGTH


class FrameMode(enum.IntEnum):
    """Frame type carried in the limiter's low bits.

    BATCH is the burst-mode (BACK) frame a device emits unpolled, REQUEST is a
    master-to-device (STX) frame and ON_DEMAND is a device reply (ACK).
    """

    BATCH = 0x01
    REQUEST = 0x02
    ON_DEMAND = 0x06


# Limiters that may open a frame arriving from a field device
RESPONSE_LIMITERS = frozenset({0x01, 0x06, 0x81, 0x86})

VALID_LIMITERS = frozenset(
    mode | high for mode in FrameMode for high in (0x00, LONG_FRAME_BIT)
)


def make_limiter(frame_format: FrameFormat, mode: FrameMode) -> int:
    """Build the limiter byte for a frame format and mode."""
    limiter = int(mode)
    if frame_format is FrameFormat.LONG:
        limiter |= LONG_FRAME_BIT
    return limiter


def parse_limiter(limiter: int) -> tuple[FrameFormat, FrameMode]:
    """Split a limiter byte into frame format and mode.

    Raises:
        MalformedFrameError: If the byte is not a recognized limiter
    """
    if limiter not in VALID_LIMITERS:
        raise MalformedFrameError(f"Unrecognized limiter 0x{limiter:02X}")
    frame_format = FrameFormat.LONG if limiter & LONG_FRAME_BIT else FrameFormat.SHORT
    return frame_format, FrameMode(limiter & ~LONG_FRAME_BIT)


def encode_command(command: int) -> bytes:
    """Encode a command number, using the 254 extension byte above 253."""
    if not 0 <= command <= MAX_COMMAND:
        raise ValueError(f"Command must be 0-{MAX_COMMAND}, got {command}")
    if command >= EXTENDED_COMMAND:
        return bytes([EXTENDED_COMMAND, command - EXTENDED_COMMAND])
    return bytes([command])


def decode_command(command_bytes: bytes) -> int:
    """Inverse of :func:`encode_command`."""
    if command_bytes[0] == EXTENDED_COMMAND:
        return EXTENDED_COMMAND + command_bytes[1]
    return command_bytes[0]
