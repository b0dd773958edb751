"""Configuration for HART transports.

This module provides configuration dataclasses for the serial transport and
for the in-process mock transport used in tests.
"""

from __future__ import annotations

from dataclasses import dataclass

import serial


@dataclass
class SerialConfig:
    """Serial line settings for a HART modem.

    HART FSK modems run at 1200 baud with 8 data bits, odd parity and one stop
    bit; those are the defaults.

    Attributes:
        port: Device path (``"/dev/ttyUSB0"``, ``"COM3"``) or pyserial URL
            (``"loop://"``, ``"socket://host:port"``)
        baudrate: Baud rate (default 1200)
        parity: pyserial parity code, one of ``"N"``, ``"E"``, ``"O"``, ``"M"``, ``"S"``
        bytesize: Data bits, 5-8
        stopbits: Stop bits, 1, 1.5 or 2
        read_timeout: Seconds a single read waits for data (default 1.0)
        write_timeout: Seconds a write may block (default 1.0)
        reset_on_timeout: Abandon a partial frame when a read times out

    Examples:
        ```python
        from hartcomm.transport import SerialConfig, SerialTransport

        config = SerialConfig(port="/dev/ttyUSB0", read_timeout=0.5)
        transport = SerialTransport(config)
        ```
    """

    port: str
    baudrate: int = 1200
    parity: str = serial.PARITY_ODD
    bytesize: int = serial.EIGHTBITS
    stopbits: float = serial.STOPBITS_ONE
    read_timeout: float = 1.0
    write_timeout: float = 1.0
    reset_on_timeout: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.port:
            raise ValueError("port must not be empty")

        if self.baudrate <= 0:
            raise ValueError(f"baudrate must be > 0, got {self.baudrate}")

        if self.parity not in serial.Serial.PARITIES:
            raise ValueError(
                f"parity must be one of {', '.join(serial.Serial.PARITIES)}, got {self.parity!r}"
            )

        if self.bytesize not in serial.Serial.BYTESIZES:
            raise ValueError(f"bytesize must be 5-8, got {self.bytesize}")

        if self.stopbits not in serial.Serial.STOPBITS:
            raise ValueError(f"stopbits must be 1, 1.5 or 2, got {self.stopbits}")

        if self.read_timeout <= 0:
            raise ValueError(f"read_timeout must be > 0, got {self.read_timeout}")

        if self.write_timeout <= 0:
            raise ValueError(f"write_timeout must be > 0, got {self.write_timeout}")


@dataclass
class MockTransportConfig:
    """Configuration for the in-process mock transport.

    Attributes:
        response_delay: Seconds before a simulated reply arrives (default 0.0).
            With 0 the reply is delivered synchronously inside ``send()``;
            otherwise it arrives on a background thread.
        chunk_size: Deliver incoming bytes in chunks of this size instead of
            all at once (default None = one chunk)
        leading_noise: Bytes prepended to every delivery, exercising resync

    Examples:
        ```python
        from hartcomm.transport import MockTransport, MockTransportConfig

        config = MockTransportConfig(chunk_size=1, leading_noise=b"\\x00\\x13")
        transport = MockTransport(config)
        ```
    """

    response_delay: float = 0.0
    chunk_size: int | None = None
    leading_noise: bytes = b""

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.response_delay < 0:
            raise ValueError(f"response_delay must be >= 0, got {self.response_delay}")

        if self.chunk_size is not None and self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {self.chunk_size}")
