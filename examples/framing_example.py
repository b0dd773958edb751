#!/usr/bin/env python3
"""Stream framing example for hartcomm.

This example demonstrates:
1. Recovering frames from a byte stream delivered in arbitrary chunks
2. Silent resynchronization after line noise
3. Error detection with the XOR checksum
"""

from __future__ import annotations

import random

from hartcomm import ByteStreamFramer, IntegrityError, Response

CAPTURED = bytes.fromhex("ff ff ff ff ff ff ff 06 80 00 0e 00 00 fe fe 96 08 05 4e 04 01 00 00 00 00 58")
BURST = bytes.fromhex("ff ff ff 81 26 00 11 22 33 fe 05 06 00 40 00 00 80 3f")


def with_checksum(frame: bytes) -> bytes:
    checksum = 0
    for value in frame[3:]:
        checksum ^= value
    return frame + bytes([checksum])


def main() -> None:
    """Run the framing example."""
    print("=" * 60)
    print("hartcomm Stream Framing Example")
    print("=" * 60)
    print()

    burst = with_checksum(BURST)
    stream = b"\x00\x13\x37" + CAPTURED + b"\xff\x42" + burst + CAPTURED

    print("1. Line contents:")
    print(f"   {len(stream)} bytes, 3 frames plus 5 bytes of noise")
    print()

    # Feed the stream in random chunks
    print("2. Feeding the stream in random chunks...")
    rng = random.Random(7)
    framer = ByteStreamFramer()
    frames: list[bytes] = []
    position = 0
    while position < len(stream):
        size = rng.randint(1, 9)
        chunk = stream[position : position + size]
        completed = framer.feed(chunk)
        frames.extend(completed)
        print(f"   chunk {chunk.hex(' '):27s} -> {framer.state.name}" + (" (frame!)" if completed else ""))
        position += size
    print()

    print(f"   Frames recovered: {framer.frames_completed}")
    print(f"   Noise discarded:  {framer.bytes_discarded} bytes")
    print()

    # Deserialize what came out
    print("3. Deserializing recovered frames...")
    for frame in frames:
        response = Response.deserialize(frame)
        print(
            f"   command {response.command:3d}  {response.frame_format.value:5s}  "
            f"batch={response.is_batch_mode!s:5s}  {len(response.data)} data bytes"
        )
    print()

    # Corruption detection
    print("4. Testing checksum error detection...")
    corrupted = bytearray(CAPTURED)
    corrupted[15] ^= 0x01
    try:
        Response.deserialize(bytes(corrupted))
        print("   ✗ Corruption not detected!")
    except IntegrityError as e:
        print(f"   ✓ Corruption detected: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
