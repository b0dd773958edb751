"""hartcomm: HART Field-Device Protocol Master Library

A Python library for talking to HART process-instrumentation devices from the
master side. It recovers frames from the half-duplex serial byte stream,
validates and parses responses, serializes requests, and converts data field
values to and from their wire encodings.

Key Features:
- Byte-at-a-time framer that resumes across any I/O chunking
- Short (1-byte) and long (5-byte) address frames, extended commands
- Pydantic-based Request/Response models
- pyserial transport plus an in-process mock for tests

Quick Start:
    >>> from hartcomm import Request, Response, ValueType
    >>>
    >>> request = Request(preamble=5, command=0)
    >>> request.serialize().hex(" ")
    'ff ff ff ff ff 02 00 00 00 02'
    >>>
    >>> response = Response.deserialize(bytes.fromhex("ff ff 06 80 00 02 00 00 84"))
    >>> response.communication_error
    'No command-specific errors'
"""

from __future__ import annotations

from .codec import FlagSet, ValueType, decode, encode
from .constants import FrameFormat, FrameMode
from .exceptions import (
    FramingError,
    HartError,
    IntegrityError,
    MalformedFrameError,
    MissingInputError,
    TransportError,
    UnsupportedTypeError,
    ValueRangeError,
)
from .framing import ByteStreamFramer, FramerState, deserialize_response, serialize_request
from .messages import Message, Request, Response, get_error_description
from .session import ProtocolSession
from .utils import verify_checksum, xor_checksum

__version__ = "0.1.0"

__all__ = [
    # Messages
    "Message",
    "Request",
    "Response",
    "FrameFormat",
    "FrameMode",
    "get_error_description",
    # Primitive codec
    "encode",
    "decode",
    "ValueType",
    "FlagSet",
    # Framing
    "ByteStreamFramer",
    "FramerState",
    "serialize_request",
    "deserialize_response",
    # Session
    "ProtocolSession",
    # Exceptions
    "HartError",
    "UnsupportedTypeError",
    "ValueRangeError",
    "MissingInputError",
    "FramingError",
    "MalformedFrameError",
    "IntegrityError",
    "TransportError",
    # Checksum
    "xor_checksum",
    "verify_checksum",
    # Version
    "__version__",
]
