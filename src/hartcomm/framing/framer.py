"""Incremental frame recovery from a continuous byte stream.

A serial line delivers bytes in arbitrary chunks with no delimiter beyond the
preamble and limiter. ByteStreamFramer advances a finite-state machine by one
transition per byte, so deliveries may split a frame anywhere (one byte at a
time, many frames at once, or anything in between) without losing a partial
frame.

State flow::

    SEEK_PREAMBLE -> COUNT_PREAMBLE -> ADDRESS -> COMMAND [-> COMMAND_EXTENSION]
        -> BYTE_COUNT -> DATA -> CHECKSUM -> (frame emitted) -> SEEK_PREAMBLE

Noise before a frame, a single stray preamble byte or an unknown limiter
resynchronizes silently: the accumulated bytes are discarded and the machine
returns to SEEK_PREAMBLE. This is not an error.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable

from ..constants import (
    EXTENDED_COMMAND,
    LONG_FRAME_BIT,
    MIN_PREAMBLE,
    PREAMBLE_SYMBOL,
    RESPONSE_LIMITERS,
    FrameFormat,
)

logger = logging.getLogger(__name__)

FrameCallback = Callable[[bytes], None]


class FramerState(enum.Enum):
    """Position of the framer within the frame currently being assembled."""

    SEEK_PREAMBLE = enum.auto()
    COUNT_PREAMBLE = enum.auto()
    ADDRESS = enum.auto()
    COMMAND = enum.auto()
    COMMAND_EXTENSION = enum.auto()
    BYTE_COUNT = enum.auto()
    DATA = enum.auto()
    CHECKSUM = enum.auto()


class ByteStreamFramer:
    """Byte-at-a-time HART frame recognizer.

    The framer is synchronous and does no I/O. It is not reentrant: deliveries
    for one stream must be serialized by the owner.

    Attributes:
        frames_completed: Number of frames emitted since construction
        bytes_discarded: Number of bytes dropped while resynchronizing

    Examples:
        ```python
        framer = ByteStreamFramer()
        frames = framer.feed(b"\\x00\\xff\\xff\\xff\\x06\\x80\\x00\\x02\\x00\\x00\\x84")
        assert len(frames) == 1
        ```
    """

    def __init__(self, on_frame: FrameCallback | None = None) -> None:
        self._callbacks: list[FrameCallback] = []
        if on_frame is not None:
            self._callbacks.append(on_frame)

        self._buffer = bytearray()
        self._state = FramerState.SEEK_PREAMBLE
        self._preamble_count = 0
        self._frame_format = FrameFormat.SHORT
        self._remaining = 0

        self.frames_completed = 0
        self.bytes_discarded = 0

    @property
    def state(self) -> FramerState:
        return self._state

    @property
    def pending(self) -> bytes:
        """Bytes accumulated for the frame in progress."""
        return bytes(self._buffer)

    @property
    def in_frame(self) -> bool:
        """True once a valid limiter has been seen and the frame is not yet complete."""
        return self._state not in (FramerState.SEEK_PREAMBLE, FramerState.COUNT_PREAMBLE)

    def attach_frame_callback(self, callback: FrameCallback) -> None:
        """Register a callback invoked with each completed frame."""
        self._callbacks.append(callback)

    def reset(self) -> None:
        """Abandon any partial frame and return to SEEK_PREAMBLE.

        Owners call this after a transport read timeout; the framer itself
        has no timeout.
        """
        if self._buffer:
            logger.debug(
                "Framer reset in %s, dropping %d pending bytes",
                self._state.name,
                len(self._buffer),
            )
            self.bytes_discarded += len(self._buffer)
        self._clear()

    def feed(self, data: bytes | bytearray | Iterable[int]) -> list[bytes]:
        """Consume a chunk of bytes.

        Args:
            data: Bytes received from the line, any length

        Returns:
            Frames completed within this chunk, in order (possibly empty)
        """
        completed: list[bytes] = []
        for value in data:
            frame = self.feed_byte(value)
            if frame is not None:
                completed.append(frame)
        return completed

    def feed_byte(self, value: int) -> bytes | None:
        """Consume exactly one byte.

        Returns:
            The complete raw frame if this byte was its checksum, else None
        """
        state = self._state

        if state is FramerState.SEEK_PREAMBLE:
            if value == PREAMBLE_SYMBOL:
                self._buffer.append(value)
                self._preamble_count = 1
                self._state = FramerState.COUNT_PREAMBLE
            else:
                self.bytes_discarded += 1
            return None

        if state is FramerState.COUNT_PREAMBLE:
            if value == PREAMBLE_SYMBOL:
                self._buffer.append(value)
                self._preamble_count += 1
                return None
            if self._preamble_count >= MIN_PREAMBLE and value in RESPONSE_LIMITERS:
                self._buffer.append(value)
                if value & LONG_FRAME_BIT:
                    self._frame_format = FrameFormat.LONG
                else:
                    self._frame_format = FrameFormat.SHORT
                self._remaining = self._frame_format.address_length
                self._state = FramerState.ADDRESS
                return None
            self._resync(value)
            return None

        self._buffer.append(value)

        if state is FramerState.ADDRESS:
            self._remaining -= 1
            if self._remaining == 0:
                self._state = FramerState.COMMAND
        elif state is FramerState.COMMAND:
            if value == EXTENDED_COMMAND:
                self._state = FramerState.COMMAND_EXTENSION
            else:
                self._state = FramerState.BYTE_COUNT
        elif state is FramerState.COMMAND_EXTENSION:
            self._state = FramerState.BYTE_COUNT
        elif state is FramerState.BYTE_COUNT:
            self._remaining = value
            self._state = FramerState.DATA if value else FramerState.CHECKSUM
        elif state is FramerState.DATA:
            self._remaining -= 1
            if self._remaining == 0:
                self._state = FramerState.CHECKSUM
        elif state is FramerState.CHECKSUM:
            return self._emit()

        return None

    def _resync(self, value: int) -> None:
        logger.debug(
            "Resync: byte 0x%02X after %d preamble bytes is not a limiter",
            value,
            self._preamble_count,
        )
        self.bytes_discarded += len(self._buffer) + 1
        self._clear()

    def _emit(self) -> bytes:
        frame = bytes(self._buffer)
        self._clear()
        self.frames_completed += 1
        logger.debug("Frame complete (%d bytes): %s", len(frame), frame.hex(" "))

        for callback in self._callbacks:
            callback(frame)

        return frame

    def _clear(self) -> None:
        self._buffer.clear()
        self._state = FramerState.SEEK_PREAMBLE
        self._preamble_count = 0
        self._frame_format = FrameFormat.SHORT
        self._remaining = 0
