"""Property-based tests using hypothesis."""

from __future__ import annotations

import datetime

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from hartcomm import (
    ByteStreamFramer,
    FlagSet,
    FrameFormat,
    IntegrityError,
    Request,
    Response,
    ValueType,
    decode,
    encode,
)
from hartcomm.framing import count_preamble
from hartcomm.utils.checksum import xor_checksum

short_addresses = st.binary(min_size=1, max_size=1)
long_addresses = st.binary(min_size=5, max_size=5)


@st.composite
def response_frames(draw: st.DrawFn) -> bytes:
    """Well-formed response frames of either format."""
    long_frame = draw(st.booleans())
    limiter = draw(st.sampled_from([0x01, 0x06])) | (0x80 if long_frame else 0x00)
    command = draw(st.integers(min_value=0, max_value=509))
    if command >= 254:
        command_bytes = bytes([254, command - 254])
    else:
        command_bytes = bytes([command])
    address = draw(long_addresses if long_frame else short_addresses)
    code = draw(st.binary(min_size=2, max_size=2))
    payload = draw(st.binary(max_size=253))
    preamble = draw(st.integers(min_value=2, max_value=20))

    count = bytes([len(code) + len(payload)])
    body = bytes([limiter]) + address + command_bytes + count + code + payload
    return b"\xff" * preamble + body + bytes([xor_checksum(body)])


class TestCodecProperties:
    """Property-based tests for the primitive codec."""

    @given(value=st.integers(min_value=0, max_value=0xFFFF))
    def test_uint16_roundtrip(self, value: int) -> None:
        """Test uint16 encode/decode is invertible."""
        assert decode(encode(value, ValueType.UINT16), ValueType.UINT16) == value

    @given(value=st.integers(min_value=0, max_value=0xFFFFFF))
    def test_uint24_roundtrip(self, value: int) -> None:
        """Test uint24 encode/decode is invertible in three bytes."""
        data = encode(value, ValueType.UINT24)

        assert len(data) == 3
        assert decode(data, ValueType.UINT24) == value

    @given(value=st.floats(allow_nan=False))
    def test_float64_roundtrip(self, value: float) -> None:
        """Test float64 encode/decode is exact."""
        assert decode(encode(value), ValueType.FLOAT64) == value

    @given(value=st.floats(width=32, allow_nan=False))
    def test_float32_roundtrip(self, value: float) -> None:
        """Test representable float32 values survive exactly."""
        assert decode(encode(value, ValueType.FLOAT32), ValueType.FLOAT32) == value

    @given(value=st.text(alphabet=st.characters(max_codepoint=0x7F), max_size=64))
    def test_text_roundtrip(self, value: str) -> None:
        """Test ASCII text round-trips at one byte per character."""
        data = encode(value)

        assert len(data) == len(value)
        assert decode(data, str) == value

    @given(
        value=st.dates(
            min_value=datetime.date(1900, 1, 1),
            max_value=datetime.date(2155, 12, 31),
        )
    )
    def test_date_roundtrip(self, value: datetime.date) -> None:
        """Test dates within the representable years round-trip."""
        assert decode(encode(value), ValueType.DATE) == value

    @given(value=st.integers(min_value=0, max_value=0xFF))
    def test_flags_roundtrip(self, value: int) -> None:
        """Test every flag byte round-trips."""
        flags = decode(bytes([value]), ValueType.FLAGS)

        assert len(flags) == 8
        assert encode(flags) == bytes([value])
        assert FlagSet.from_byte(value) == flags

    @given(bits=st.lists(st.booleans(), max_size=8))
    def test_flag_set_roundtrip(self, bits: list[bool]) -> None:
        """Test flag sets of any size up to eight round-trip."""
        flags = FlagSet(bits)

        assert decode(encode(flags), ValueType.FLAGS) == flags
        assert list(flags) == bits + [False] * (8 - len(bits))


class TestFramingProperties:
    """Property-based tests for the framer and frame codec."""

    @given(frames=st.lists(response_frames(), min_size=1, max_size=5), data=st.data())
    def test_chunking_invariance(self, frames: list[bytes], data: st.DataObject) -> None:
        """Test any split of a stream yields the same frames."""
        stream = b"".join(frames)
        cuts = data.draw(
            st.lists(st.integers(min_value=1, max_value=len(stream) - 1), unique=True, max_size=20)
        )
        bounds = [0, *sorted(cuts), len(stream)]

        notified: list[bytes] = []
        framer = ByteStreamFramer(on_frame=notified.append)
        for start, end in zip(bounds, bounds[1:]):
            framer.feed(stream[start:end])

        assert notified == frames

    @given(noise=st.binary(max_size=64), frame=response_frames())
    def test_resync_after_noise(self, noise: bytes, frame: bytes) -> None:
        """Test a frame is found after noise that cannot open a frame."""
        assume(b"\xff" not in noise)
        framer = ByteStreamFramer()

        assert framer.feed(noise + frame) == [frame]

    @given(frame=response_frames())
    def test_deserialize_accepts_every_generated_frame(self, frame: bytes) -> None:
        """Test well-formed frames always parse."""
        response = Response.deserialize(frame)

        end = len(frame) - 1 - len(response.data)
        assert response.response_code == int.from_bytes(frame[end - 2 : end], "little")

    @given(frame=response_frames(), data=st.data())
    def test_single_bit_flip_detected(self, frame: bytes, data: st.DataObject) -> None:
        """Test any one flipped bit after the preamble fails the checksum."""
        start = count_preamble(frame)
        position = data.draw(st.integers(min_value=start, max_value=len(frame) - 1))
        bit = data.draw(st.integers(min_value=0, max_value=7))

        tampered = bytearray(frame)
        tampered[position] ^= 1 << bit

        with pytest.raises(IntegrityError):
            Response.deserialize(bytes(tampered))

    @given(
        address=short_addresses,
        command=st.integers(min_value=0, max_value=509),
        payload=st.binary(max_size=255),
    )
    def test_request_checksum(self, address: bytes, command: int, payload: bytes) -> None:
        """Test serialized requests always end in a valid checksum."""
        frame = Request(preamble=2, address=address, command=command, data=payload).serialize()

        assert xor_checksum(frame[2:-1]) == frame[-1]
        assert frame[2] == 0x02

    @given(address=long_addresses, command=st.integers(min_value=0, max_value=509))
    def test_long_request_layout(self, address: bytes, command: int) -> None:
        """Test long requests carry the full 5-byte address."""
        request = Request(preamble=2, frame_format=FrameFormat.LONG, address=address, command=command)
        frame = request.serialize()

        assert frame[2] == 0x82
        assert frame[3:8] == address
