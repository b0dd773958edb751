"""In-process mock transport for tests and examples.

MockTransport needs no hardware. Bytes "arrive from the line" either through
``inject()`` or as the reply of a ``responder`` function that plays the part of
a field device. Deliveries can be split into chunks and prefixed with noise to
exercise the framer's resynchronization.

Design Patterns:
- Responder callback: pluggable simulated field device
- Background threads: delayed replies when ``response_delay`` > 0
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Thread
from time import sleep
from typing import Optional

from ..exceptions import TransportError
from .config import MockTransportConfig
from .driver import Transport

logger = logging.getLogger(__name__)

Responder = Callable[[bytes], Optional[bytes]]


class MockTransport(Transport):
    """Simulated HART line.

    Attributes:
        config: Mock transport configuration
        responder: Optional simulated device; called with every sent frame and
            returning the bytes it answers with, or None for no reply
        sent_frames: Every frame passed to ``send()``, in order

    Examples:
        ```python
        from hartcomm import ProtocolSession, Request
        from hartcomm.transport import MockTransport

        def device(frame: bytes) -> bytes:
            return bytes.fromhex("ff ff 06 80 00 02 00 00 84")

        session = ProtocolSession(MockTransport(responder=device))
        session.connect()
        session.send(Request(command=0))
        response = session.dequeue()
        ```
    """

    def __init__(
        self,
        config: MockTransportConfig | None = None,
        responder: Responder | None = None,
    ) -> None:
        super().__init__()
        self.config = config if config is not None else MockTransportConfig()
        self.responder = responder
        self.sent_frames: list[bytes] = []
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        if self._connected:
            logger.info("Mock transport already connected")
            return
        self._connected = True
        logger.info("Mock transport connected")

    def disconnect(self) -> None:
        if not self._connected:
            logger.info("Mock transport already disconnected")
            return
        self._connected = False
        logger.info("Mock transport disconnected")

    def send(self, data: bytes) -> None:
        """Record a frame and, if a responder is set, schedule its reply.

        Raises:
            TransportError: If the transport is not connected
        """
        if not self._connected:
            raise TransportError("Mock transport not connected. Call connect() before send().")

        frame = bytes(data)
        self.sent_frames.append(frame)
        logger.debug("Sent %d bytes: %s", len(frame), frame.hex(" "))

        if self.responder is None:
            return

        reply = self.responder(frame)
        if not reply:
            return

        if self.config.response_delay == 0:
            self.inject(reply)
            return

        def delayed_rx() -> None:
            sleep(self.config.response_delay)
            if self._connected:
                self.inject(reply)

        Thread(target=delayed_rx, daemon=True, name="MockTransport-Delayed-RX").start()

    def inject(self, data: bytes) -> None:
        """Simulate bytes arriving from the line.

        ``leading_noise`` is prepended and the result is delivered in
        ``chunk_size`` pieces.
        """
        stream = self.config.leading_noise + bytes(data)
        size = self.config.chunk_size or len(stream) or 1
        for start in range(0, len(stream), size):
            self._deliver(stream[start : start + size])
