"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from hartcomm.utils.checksum import xor_checksum

FrameBuilder = Callable[..., bytes]


def build_response_frame(
    *,
    preamble: int = 5,
    limiter: int = 0x06,
    address: bytes = b"\x80",
    command: bytes = b"\x00",
    code: bytes = b"\x00\x00",
    data: bytes = b"",
) -> bytes:
    """Assemble a response frame the way a field device would."""
    body = bytes([limiter]) + address + command + bytes([len(code) + len(data)]) + code + data
    return b"\xff" * preamble + body + bytes([xor_checksum(body)])


@pytest.fixture
def make_response_frame() -> FrameBuilder:
    """Factory for well-formed response frames."""
    return build_response_frame


@pytest.fixture
def sample_response_frame() -> bytes:
    """Command 0 response captured from a pressure transmitter."""
    return bytes(
        [
            0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF,  # preamble
            0x06,  # limiter: short frame, on-demand
            0x80,  # address
            0x00,  # command
            0x0E,  # byte count
            0x00, 0x00,  # response code
            0xFE, 0xFE, 0x96, 0x08, 0x05, 0x4E, 0x04, 0x01, 0x00, 0x00, 0x00, 0x00,  # data
            0x58,  # checksum
        ]
    )


@pytest.fixture
def long_response_frame() -> bytes:
    """Long-frame burst response with extended command and a float payload."""
    return build_response_frame(
        preamble=3,
        limiter=0x81,
        address=b"\x26\x00\x11\x22\x33",
        command=b"\xfe\x05",
        code=b"\x00\x40",
        data=b"\x00\x00\x80\x3f",
    )
