"""Abstract interface for HART transports.

A transport moves bytes between the master and the line. Each transport embeds
a ByteStreamFramer on its receive path: raw bytes go in, and the transport
announces each complete frame through a payload-less "frame ready" callback.
The frame itself is collected with ``receive()``.

Design Pattern: Adapter Pattern
- Transport: Abstract interface plus the shared receive path
- SerialTransport: pyserial adapter (real modem, or pyserial URL handlers)
- MockTransport: In-process simulation for tests
"""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

from ..exceptions import TransportError
from ..framing.framer import ByteStreamFramer

logger = logging.getLogger(__name__)

FrameReadyCallback = Callable[[], None]


class Transport(ABC):
    """Abstract interface for HART transports.

    Subclasses open and close the line and write bytes. Incoming bytes are
    handed to :meth:`_deliver`, which runs the framer under a lock, so
    concurrent deliveries for one transport are serialized.

    Examples:
        ```python
        transport = SerialTransport(SerialConfig(port="/dev/ttyUSB0"))
        transport.attach_frame_callback(lambda: print(transport.receive().hex(" ")))
        transport.connect()
        transport.send(request_bytes)
        ```
    """

    def __init__(self) -> None:
        self.framer = ByteStreamFramer(on_frame=self._on_frame)
        self.frame_queue: queue.Queue[bytes] = queue.Queue()
        self.frame_callbacks: list[FrameReadyCallback] = []
        self._rx_lock = threading.RLock()

    @abstractmethod
    def connect(self) -> None:
        """Open the line.

        Raises:
            serial.SerialException: If the port cannot be opened (serial only)
        """

    @abstractmethod
    def disconnect(self) -> None:
        """Close the line. Safe to call when already disconnected."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True while the line is open."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Write one serialized frame to the line.

        Raises:
            TransportError: If the transport is not connected
        """

    def receive(self, timeout: float | None = None) -> bytes:
        """Take the oldest complete raw frame.

        Args:
            timeout: Seconds to wait for a frame; None returns immediately

        Raises:
            TransportError: If no frame is available
        """
        try:
            if timeout is None:
                return self.frame_queue.get_nowait()
            return self.frame_queue.get(timeout=timeout)
        except queue.Empty:
            raise TransportError("No complete frame available") from None

    def attach_frame_callback(self, callback: FrameReadyCallback) -> None:
        """Register a callback invoked once per complete frame.

        Callbacks run on the thread that delivered the frame's last byte.
        """
        self.frame_callbacks.append(callback)

    def reset_framer(self) -> None:
        """Abandon any partially received frame."""
        with self._rx_lock:
            self.framer.reset()

    def _deliver(self, data: bytes) -> None:
        """Feed bytes received from the line through the framer."""
        with self._rx_lock:
            self.framer.feed(data)

    def _on_frame(self, frame: bytes) -> None:
        self.frame_queue.put(frame)

        for callback in self.frame_callbacks:
            try:
                callback()
            except Exception as e:
                logger.warning("Frame callback %r raised: %s", callback, e)
