"""Exception hierarchy for hartcomm.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from HartError for easy catching of any hartcomm-specific error.
"""

from __future__ import annotations


class HartError(Exception):
    """Base exception for all hartcomm errors."""

    pass


class UnsupportedTypeError(HartError, TypeError):
    """Raised when the primitive codec is asked for a type outside its fixed set.

    Examples:
        - Encoding a plain ``int`` without naming its wire width
        - Decoding into ``list`` or ``dict``
    """

    pass


class ValueRangeError(HartError, ValueError):
    """Raised when a value does not fit its wire representation.

    Examples:
        - uint24 value above 16,777,215
        - Flag set with more than 8 flags
        - Decode buffer of the wrong length
    """

    pass


class MissingInputError(HartError, ValueError):
    """Raised when ``None`` is passed where a byte buffer is required."""

    pass


class FramingError(HartError):
    """Base class for errors in a single received frame.

    A framing error only concerns the frame it was raised for; framer state
    for subsequent frames is unaffected.
    """

    pass


class MalformedFrameError(FramingError):
    """Raised when a frame's structure cannot be interpreted.

    Examples:
        - Unrecognized limiter byte
        - Frame too short for its address/command/response code fields
        - Byte count inconsistent with the frame length
    """

    pass


class IntegrityError(FramingError):
    """Raised when the trailing checksum byte does not match the frame contents."""

    pass


class TransportError(HartError, ConnectionError):
    """Raised when the transport is not connected or has no frame to hand out."""

    pass
