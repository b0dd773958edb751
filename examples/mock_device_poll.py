"""Polling a simulated field device.

This example demonstrates using MockTransport to talk to a HART device
without a modem. Useful for:
- CI testing
- Development before the loop is wired up
- Reproducing framing problems (chunked delivery, line noise)

The simulated transmitter answers command 0 (identify) and command 1
(primary variable). Replies arrive after a short delay, a few bytes at a
time, behind a burst of noise.

Run this example:
    python examples/mock_device_poll.py

Against real hardware, swap the transport:
    SerialTransport(SerialConfig(port="/dev/ttyUSB0"))
"""

from __future__ import annotations

import logging
import math
import time

from hartcomm import FrameFormat, ProtocolSession, Request, ValueType, encode, xor_checksum
from hartcomm.framing import count_preamble
from hartcomm.transport import MockTransport, MockTransportConfig


def transmitter(frame: bytes) -> bytes | None:
    """Simulated pressure transmitter."""
    start = count_preamble(frame)
    long_frame = bool(frame[start] & 0x80)
    address = frame[start + 1 : start + (6 if long_frame else 2)]
    command = frame[start + 1 + len(address)]

    if command == 0:
        payload = b"\xfe\x26\x06\x05\x05\x01\x04\x01\x00\x12\x34\x56"
    elif command == 1:
        pressure = 101.325 + 0.5 * math.sin(time.time())
        payload = bytes([12]) + encode(pressure, ValueType.FLOAT32)  # 12 = kPa
    else:
        return None

    limiter = 0x86 if long_frame else 0x06
    body = bytes([limiter]) + address + bytes([command, len(payload) + 2, 0x00, 0x00]) + payload
    return b"\xff" * 5 + body + bytes([xor_checksum(body)])


def main() -> None:
    """Run the polling demo."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 70)
    print("hartcomm Simulated Device Poll")
    print("=" * 70)
    print()

    config = MockTransportConfig(
        response_delay=0.2,  # modem turnaround
        chunk_size=4,  # serial driver hands over 4 bytes at a time
        leading_noise=b"\x00\x7f\xff",  # carrier detect glitch
    )
    transport = MockTransport(config, responder=transmitter)

    with ProtocolSession(transport) as session:
        session.attach_message_callback(
            lambda r: print(f"  <- command {r.command} response ({len(r.data)} data bytes)")
        )

        # Step 1: identify the device on polling address 0
        print("Step 1: Identify device (command 0, short frame)")
        print("-" * 70)
        frame = session.send(Request(address=b"\x80", command=0))
        print(f"  -> {frame.hex(' ')}")

        identity = session.dequeue(block=True, timeout=2.0)
        if identity is None:
            print("  No reply")
            return

        long_address = bytes([identity.data[1] | 0x80, identity.data[2]]) + identity.data[9:12]
        print(f"  Long address: {long_address.hex(' ')}")
        print()

        # Step 2: poll the primary variable with the long address
        print("Step 2: Poll primary variable (command 1, long frame)")
        print("-" * 70)
        for _ in range(3):
            session.send(Request(frame_format=FrameFormat.LONG, address=long_address, command=1))
            reading = session.dequeue(block=True, timeout=2.0)
            if reading is None:
                print("  No reply")
                continue
            value = reading.get_data(ValueType.FLOAT32, offset=1)
            print(f"  PV = {value:.3f} kPa  ({reading.communication_error})")
        print()

        print(f"Frames dropped: {session.dropped_frames}")
        print(f"Noise discarded: {transport.framer.bytes_discarded} bytes")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
