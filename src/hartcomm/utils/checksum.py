"""Longitudinal parity (XOR) checksum.

HART frames end with a single check byte: the exclusive-OR of every byte from
the limiter through the last data byte. Preamble bytes are not included.
"""

from __future__ import annotations

from functools import reduce
from operator import xor


def xor_checksum(data: bytes | bytearray, init: int = 0) -> int:
    """Calculate the XOR checksum of a byte sequence.

    Args:
        data: Bytes to fold, limiter through last data byte
        init: Initial value (default 0)

    Returns:
        Checksum byte value (0-255)

    Example:
        >>> xor_checksum(b"\\x02\\x00\\x00\\x00")
        2
    """
    return reduce(xor, data, init) & 0xFF


def verify_checksum(data: bytes | bytearray, expected: int) -> bool:
    """Verify a checksum byte against a byte sequence.

    Args:
        data: Bytes covered by the checksum
        expected: Checksum byte read from the frame

    Returns:
        True if the checksum matches, False otherwise

    Example:
        >>> verify_checksum(b"\\x06\\x80", 0x86)
        True
    """
    return xor_checksum(data) == expected
