#!/usr/bin/env python3
"""Basic usage example for hartcomm.

This example demonstrates:
1. Building a request and serializing it to wire bytes
2. Encoding primitive values into a request's data field
3. Deserializing a response captured from a transmitter
4. Decoding typed values from the response data field
"""

from __future__ import annotations

import datetime

from hartcomm import FlagSet, FrameFormat, Request, Response, ValueType, decode, encode


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("hartcomm Basic Usage Example")
    print("=" * 60)
    print()

    # Build a request
    print("1. Building a command 0 request (read unique identifier)...")
    request = Request(preamble=5, address=b"\x80", command=0)
    frame = request.serialize()

    print(f"   Frame format: {request.frame_format.value}")
    print(f"   Wire bytes:   {frame.hex(' ')}")
    print()

    # Long-frame request with a data field
    print("2. Building a long-frame write-tag request (command 18)...")
    write_tag = Request(
        frame_format=FrameFormat.LONG,
        address=b"\xa6\x06\x12\x34\x56",
        command=18,
    )
    write_tag.set_data("PT-101")
    frame = write_tag.serialize()

    print(f"   Data field:   {write_tag.data!r}")
    print(f"   Wire bytes:   {frame.hex(' ')}")
    print(f"   Without data: {write_tag.serialize(include_payload=False).hex(' ')}")
    print()

    # Primitive codec
    print("3. Encoding primitive values...")
    samples = [
        ("float32", 101.325, ValueType.FLOAT32),
        ("uint16", 1200, ValueType.UINT16),
        ("uint24", 16_000_000, ValueType.UINT24),
        ("date", datetime.date(2024, 3, 15), None),
        ("flags", FlagSet([True, False, True]), None),
    ]
    for name, value, value_type in samples:
        data = encode(value, value_type)
        back = decode(data, value_type or type(value))
        print(f"   {name:8s} {value!s:>22} -> {data.hex(' '):12s} -> {back}")
    print()

    # Deserialize a captured response
    print("4. Deserializing a captured command 0 response...")
    raw = bytes.fromhex("ff ff ff ff ff ff ff 06 80 00 0e 00 00 fe fe 96 08 05 4e 04 01 00 00 00 00 58")
    response = Response.deserialize(raw)

    print(f"   Preamble:      {response.preamble}")
    print(f"   Frame format:  {response.frame_format.value}")
    print(f"   Batch mode:    {response.is_batch_mode}")
    print(f"   Command:       {response.command}")
    print(f"   Response code: 0x{response.response_code:04X} ({response.communication_error})")
    print(f"   Data:          {response.data.hex(' ')}")
    print()

    # Typed access
    print("5. Reading typed values from the data field...")
    print(f"   Device type:   0x{response.get_data(ValueType.UINT16, offset=1):04X}")
    print(f"   Device ID:     {response.get_data(ValueType.UINT24, offset=9)}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
