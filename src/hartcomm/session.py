"""HART master session.

ProtocolSession ties a transport to the frame codec: each frame the transport
announces is deserialized on the delivering thread and appended to a FIFO that
application code drains with ``dequeue()``. Sending is fire-and-forget; the
session does no retries, timeouts or request/response pairing.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from typing import Any

from .exceptions import FramingError
from .framing.frame import deserialize_response, serialize_request
from .messages.request import Request
from .messages.response import Response
from .transport.driver import Transport

logger = logging.getLogger(__name__)

MessageCallback = Callable[[Response], None]


class ProtocolSession:
    """Master-side HART session over a transport.

    Frames that fail deserialization (checksum mismatch, unknown limiter) are
    dropped and counted in ``dropped_frames``.

    Attributes:
        transport: Underlying transport
        dropped_frames: Number of received frames discarded as invalid

    Examples:
        ```python
        from hartcomm import ProtocolSession, Request
        from hartcomm.transport import SerialConfig, SerialTransport

        with ProtocolSession(SerialTransport(SerialConfig(port="/dev/ttyUSB0"))) as session:
            session.send(Request(command=0))
            response = session.dequeue(block=True, timeout=2.0)
        ```
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        self.dropped_frames = 0
        self._messages: queue.Queue[Response] = queue.Queue()
        self._callbacks: list[MessageCallback] = []
        self._lock = threading.Lock()

        transport.attach_frame_callback(self._on_frame_ready)

    @property
    def is_connected(self) -> bool:
        return self.transport.is_connected

    @property
    def pending(self) -> int:
        """Number of responses waiting to be dequeued."""
        return self._messages.qsize()

    def connect(self) -> None:
        self.transport.connect()

    def disconnect(self) -> None:
        self.transport.disconnect()

    def send(self, request: Request, include_payload: bool = True) -> bytes:
        """Serialize a request and hand it to the transport.

        Returns:
            The bytes written

        Raises:
            TransportError: If the transport is not connected
        """
        frame = serialize_request(request, include_payload=include_payload)
        self.transport.send(frame)
        return frame

    def dequeue(self, block: bool = False, timeout: float | None = None) -> Response | None:
        """Take the oldest received response.

        Args:
            block: Wait for a response if none is queued
            timeout: Maximum seconds to wait when blocking (None = forever)

        Returns:
            The oldest response, or None if none arrived
        """
        try:
            return self._messages.get(block=block, timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> list[Response]:
        """Take every queued response in arrival order."""
        responses: list[Response] = []
        while True:
            response = self.dequeue()
            if response is None:
                return responses
            responses.append(response)

    def attach_message_callback(self, callback: MessageCallback) -> None:
        """Register a callback invoked with each new response after it is queued."""
        self._callbacks.append(callback)

    def _on_frame_ready(self) -> None:
        raw = self.transport.receive()
        try:
            response = deserialize_response(raw)
        except FramingError as e:
            with self._lock:
                self.dropped_frames += 1
            logger.warning("Dropped frame %s: %s", raw.hex(" "), e)
            return

        self._messages.put(response)

        for callback in self._callbacks:
            try:
                callback(response)
            except Exception as e:
                logger.warning("Message callback %r raised: %s", callback, e)

    def __enter__(self) -> ProtocolSession:
        self.connect()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.disconnect()
