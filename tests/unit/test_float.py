"""Test IEEE-754 float encoding."""

import math
import struct
import sys

import pytest

from hartcomm import ValueRangeError, ValueType, decode, encode

FLOAT32_MAX = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]
FLOAT32_EPSILON = struct.unpack("<f", b"\x01\x00\x00\x00")[0]  # smallest subnormal
FLOAT64_EPSILON = 5e-324


class TestFloat32:
    """Test single-precision floats."""

    @pytest.mark.parametrize(
        "value",
        [
            2345.234619140625,
            -0.3423423469066620,
            FLOAT32_MAX,
            -FLOAT32_MAX,
            math.inf,
            -math.inf,
            FLOAT32_EPSILON,
            0.0,
        ],
    )
    def test_float32_roundtrip(self, value):
        """Representable float32 values survive bit-exactly."""
        data = encode(value, ValueType.FLOAT32)

        assert len(data) == 4
        decoded = decode(data, ValueType.FLOAT32)
        assert struct.pack("<f", decoded) == data
        assert decoded == struct.unpack("<f", struct.pack("<f", value))[0]

    def test_float32_nan(self):
        """NaN stays NaN."""
        assert math.isnan(decode(encode(math.nan, ValueType.FLOAT32), ValueType.FLOAT32))

    def test_float32_rounds_to_single_precision(self):
        """Doubles are narrowed to the nearest float32."""
        decoded = decode(encode(0.1, ValueType.FLOAT32), ValueType.FLOAT32)

        assert decoded == pytest.approx(0.1, rel=1e-7)
        assert decoded != 0.1

    def test_float32_known_bytes(self):
        """1.0 has the little-endian IEEE-754 layout."""
        assert encode(1.0, ValueType.FLOAT32) == b"\x00\x00\x80\x3f"

    def test_float32_accepts_int(self):
        """Integers are accepted as float values."""
        assert decode(encode(3, ValueType.FLOAT32), ValueType.FLOAT32) == 3.0

    def test_float32_overflow(self):
        """Finite doubles beyond float32 range raise a range error."""
        with pytest.raises(ValueRangeError):
            encode(1e300, ValueType.FLOAT32)

    def test_float32_wrong_length(self):
        """Decode requires four bytes."""
        with pytest.raises(ValueRangeError):
            decode(b"\x00\x00\x80", ValueType.FLOAT32)


class TestFloat64:
    """Test double-precision floats."""

    @pytest.mark.parametrize(
        "value",
        [
            2345.23456,
            -0.342342342342342342342,
            sys.float_info.max,
            -sys.float_info.max,
            math.inf,
            -math.inf,
            FLOAT64_EPSILON,
        ],
    )
    def test_float64_roundtrip(self, value):
        """float64 round-trips exactly."""
        data = encode(value)

        assert len(data) == 8
        assert decode(data, ValueType.FLOAT64) == value
        assert decode(data, float) == value

    def test_float64_nan(self):
        """NaN stays NaN."""
        assert math.isnan(decode(encode(math.nan), ValueType.FLOAT64))

    def test_float64_wrong_length(self):
        """Decode requires eight bytes."""
        with pytest.raises(ValueRangeError):
            decode(b"\x00" * 4, ValueType.FLOAT64)
