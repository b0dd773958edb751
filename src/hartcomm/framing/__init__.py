"""Frame recognition and serialization for hartcomm.

This module provides the byte-stream framer that recovers frame boundaries
from a serial byte stream, and the codec that turns raw frames into Response
objects and Request objects into raw frames.
"""

from __future__ import annotations

from .frame import count_preamble, deserialize_response, serialize_request
from .framer import ByteStreamFramer, FramerState

__all__ = [
    "ByteStreamFramer",
    "FramerState",
    "serialize_request",
    "deserialize_response",
    "count_preamble",
]
