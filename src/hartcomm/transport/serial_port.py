"""Serial transport for HART modems.

Wraps pyserial. The port is opened with ``serial.serial_for_url`` so device
paths and pyserial URL handlers (``loop://``, ``socket://``, ``rfc2217://``)
work alike. A background thread reads whatever bytes are waiting and feeds
them to the framer; a read that times out in the middle of a frame resets the
framer when ``reset_on_timeout`` is set.
"""

from __future__ import annotations

import logging
from threading import Event, Thread

import serial

from ..exceptions import TransportError
from .config import SerialConfig
from .driver import Transport

logger = logging.getLogger(__name__)


class SerialTransport(Transport):
    """HART transport over a serial port.

    Attributes:
        config: Serial line settings

    Examples:
        ```python
        from hartcomm.transport import SerialConfig, SerialTransport

        transport = SerialTransport(SerialConfig(port="/dev/ttyUSB0"))
        transport.connect()
        transport.send(frame_bytes)
        transport.disconnect()
        ```
    """

    def __init__(self, config: SerialConfig) -> None:
        super().__init__()
        self.config = config
        self._port: serial.SerialBase | None = None
        self._stop = Event()
        self._rx_thread: Thread | None = None

    @property
    def is_connected(self) -> bool:
        return self._port is not None and self._port.is_open

    def connect(self) -> None:
        """Open the port and start the reader thread.

        Raises:
            serial.SerialException: If the port cannot be opened
        """
        if self.is_connected:
            logger.info("Serial port %s already open", self.config.port)
            return

        self._port = serial.serial_for_url(
            self.config.port,
            baudrate=self.config.baudrate,
            parity=self.config.parity,
            bytesize=self.config.bytesize,
            stopbits=self.config.stopbits,
            timeout=self.config.read_timeout,
            write_timeout=self.config.write_timeout,
        )
        logger.info(
            "Opened %s @ %d baud (%d%s%s)",
            self.config.port,
            self.config.baudrate,
            self.config.bytesize,
            self.config.parity,
            self.config.stopbits,
        )

        self._stop.clear()
        self._rx_thread = Thread(target=self._rx_loop, daemon=True, name="SerialTransport-RX")
        self._rx_thread.start()

    def disconnect(self) -> None:
        """Stop the reader thread and close the port."""
        if self._port is None:
            logger.info("Serial port %s already closed", self.config.port)
            return

        self._stop.set()
        if self._rx_thread is not None:
            self._rx_thread.join(timeout=self.config.read_timeout + 1.0)
            self._rx_thread = None

        self._port.close()
        self._port = None
        self.reset_framer()
        logger.info("Closed %s", self.config.port)

    def send(self, data: bytes) -> None:
        """Write a frame and wait until it has left the output buffer.

        Raises:
            TransportError: If the port is not open
            serial.SerialException: On write failure or timeout
        """
        if self._port is None or not self._port.is_open:
            raise TransportError(f"Serial port {self.config.port} not open. Call connect() first.")

        self._port.write(data)
        self._port.flush()
        logger.debug("Sent %d bytes: %s", len(data), bytes(data).hex(" "))

    @staticmethod
    def is_port_accessible(port: str) -> bool:
        """Check whether a port exists and can be opened right now."""
        try:
            probe = serial.serial_for_url(port)
        except (serial.SerialException, ValueError):
            return False
        probe.close()
        return True

    def _rx_loop(self) -> None:
        """Background thread reading bytes from the port."""
        port = self._port
        logger.debug("Reader thread started on %s", self.config.port)

        while not self._stop.is_set() and port is not None:
            try:
                chunk = port.read(port.in_waiting or 1)
            except (serial.SerialException, OSError) as e:
                if not self._stop.is_set():
                    logger.error("Read from %s failed: %s", self.config.port, e)
                break

            if chunk:
                self._deliver(chunk)
            elif self.config.reset_on_timeout and self.framer.in_frame:
                logger.debug("Read timeout mid-frame, resetting framer")
                self.reset_framer()

        logger.debug("Reader thread stopped on %s", self.config.port)
