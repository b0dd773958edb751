"""Transport layer for hartcomm.

This module provides the transport abstraction the protocol session talks to,
and two implementations:

## SerialTransport
pyserial adapter for HART modems (1200 baud, 8 data bits, odd parity, 1 stop
bit by default). Any pyserial URL works as the port, including ``loop://``.

## MockTransport
In-process simulation with a pluggable responder standing in for a field
device. Supports chunked delivery, leading noise and delayed replies.

## Quick Start

```python
from hartcomm import ProtocolSession, Request
from hartcomm.transport import SerialConfig, SerialTransport

session = ProtocolSession(SerialTransport(SerialConfig(port="/dev/ttyUSB0")))
session.connect()
session.send(Request(preamble=5, command=0))
response = session.dequeue(block=True, timeout=2.0)
session.disconnect()
```
"""

from hartcomm.transport.config import MockTransportConfig, SerialConfig
from hartcomm.transport.driver import Transport
from hartcomm.transport.mock import MockTransport
from hartcomm.transport.serial_port import SerialTransport

__all__ = [
    "Transport",
    "MockTransport",
    "MockTransportConfig",
    "SerialTransport",
    "SerialConfig",
]
