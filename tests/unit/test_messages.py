"""Unit tests for request and response messages."""

from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError

from hartcomm import (
    FlagSet,
    FrameFormat,
    FrameMode,
    Request,
    Response,
    UnsupportedTypeError,
    ValueRangeError,
    ValueType,
    get_error_description,
)
from hartcomm.messages import COMMUNICATION_ERRORS, UNKNOWN_ERROR, is_communication_error


class TestMessageFields:
    """Test field validation."""

    def test_defaults(self) -> None:
        """Test default request fields."""
        request = Request()

        assert request.preamble == 5
        assert request.frame_format is FrameFormat.SHORT
        assert request.address == b"\x00"
        assert request.command == 0
        assert request.data == b""
        assert request.mode is FrameMode.REQUEST

    def test_preamble_minimum(self) -> None:
        """Test fewer than two preamble bytes are rejected."""
        with pytest.raises(ValidationError):
            Request(preamble=1)

    @pytest.mark.parametrize("command", [-1, 510])
    def test_command_range(self, command: int) -> None:
        """Test commands outside 0-509."""
        with pytest.raises(ValidationError):
            Request(command=command)

    def test_assignment_validated(self) -> None:
        """Test fields are validated on assignment too."""
        request = Request()

        with pytest.raises(ValidationError):
            request.command = 600

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            Request(payload=b"\x00")

    def test_request_empty_short_address_allowed(self) -> None:
        """Test a short-frame request may carry no address byte."""
        request = Request(frame_format=FrameFormat.SHORT, address=b"")

        assert request.address == b""

    def test_request_address_too_long(self) -> None:
        """Test a request address longer than the format length."""
        with pytest.raises(ValidationError, match="at most 1 bytes"):
            Request(address=b"\x01\x02")

    @pytest.mark.parametrize("address", [b"", b"\x01", b"\x01\x02\x03\x04", b"\x01" * 6])
    def test_long_request_address_exact(self, address: bytes) -> None:
        """Test a long-frame request needs exactly five address bytes."""
        with pytest.raises(ValidationError, match="must be 5 bytes"):
            Request(frame_format=FrameFormat.LONG, address=address)

    def test_long_request_default_address_rejected(self) -> None:
        """Test switching to long frames without a long address fails."""
        with pytest.raises(ValidationError):
            Request(frame_format=FrameFormat.LONG, command=0)

        request = Request(address=b"\x80")
        with pytest.raises(ValidationError):
            request.frame_format = FrameFormat.LONG

    def test_long_request_address_serialized(self) -> None:
        """Test all five address bytes follow the long-frame limiter."""
        request = Request(frame_format=FrameFormat.LONG, address=b"\xa6\x06\x12\x34\x56")

        assert request.serialize()[5:11] == b"\x82\xa6\x06\x12\x34\x56"

    def test_response_address_exact(self) -> None:
        """Test a response address must match the format length."""
        with pytest.raises(ValidationError):
            Response(frame_format=FrameFormat.LONG, address=b"\x01")

        Response(frame_format=FrameFormat.LONG, address=b"\x01\x02\x03\x04\x05")

    def test_response_status_split(self) -> None:
        """Test the two response code bytes."""
        response = Response(address=b"\x80", response_code=0x4005)

        assert response.response_status == 0x05
        assert response.device_status == 0x40

    @pytest.mark.parametrize(
        ("code", "expected"),
        [(0x0000, False), (0x4040, False), (0x0088, True), (0x00C2, True)],
    )
    def test_has_communication_error(self, code: int, expected: bool) -> None:
        """Test only the first code byte decides a communication fault."""
        response = Response(address=b"\x80", response_code=code)

        assert response.has_communication_error is expected


class TestDataAccess:
    """Test typed access to the data field."""

    def test_set_and_get_text(self) -> None:
        """Test text fills the whole data field."""
        request = Request(command=18)
        request.set_data("PT-101")

        assert request.data == b"PT-101"
        assert request.get_data(ValueType.TEXT) == "PT-101"

    def test_explicit_type(self) -> None:
        """Test setting data with an explicit wire type."""
        request = Request()
        request.set_data(1200, ValueType.UINT16)

        assert request.data == b"\xb0\x04"
        assert request.get_data("uint16") == 1200

    def test_set_none_clears(self) -> None:
        """Test None clears the data field."""
        request = Request(data=b"\x01\x02")
        request.set_data(None)

        assert request.data == b""

    def test_offset_reads(self, make_response_frame) -> None:
        """Test reading several fields from one data field."""
        data = (
            b"\x00\x00\x80\x3f"  # float32 1.0
            + b"\x10\x27"  # uint16 10000
            + bytes([3, 5, 121])  # 2021-05-03
            + b"\x81"  # flags
            + b"TT-7"
        )
        response = Response.deserialize(make_response_frame(data=data))

        assert response.get_data(ValueType.FLOAT32) == 1.0
        assert response.get_data(ValueType.UINT16, offset=4) == 10000
        assert response.get_data(datetime.date, offset=6) == datetime.date(2021, 5, 3)
        flags = response.get_data(FlagSet, offset=9)
        assert flags[0] and flags[7] and not any(flags[1:7])
        assert response.get_data(str, offset=10) == "TT-7"

    def test_get_data_short(self) -> None:
        """Test reading past the end of the data field."""
        request = Request(data=b"\x01")

        with pytest.raises(ValueRangeError):
            request.get_data(ValueType.UINT16)

    def test_get_data_unsupported(self) -> None:
        """Test reading an unsupported type."""
        with pytest.raises(UnsupportedTypeError):
            Request(data=b"\x01").get_data(int)

    def test_negative_offset(self) -> None:
        """Test a negative offset is rejected."""
        with pytest.raises(ValueError):
            Request(data=b"\x01\x02").get_data(ValueType.UINT16, offset=-1)


class TestErrorTable:
    """Test response code descriptions."""

    def test_success(self) -> None:
        """Test code 0."""
        assert get_error_description(0) == "No command-specific errors"

    @pytest.mark.parametrize(
        ("code", "text"),
        [
            (5, "Too few data bytes received"),
            (7, "In write protect mode"),
            (16, "Access restricted"),
            (32, "Busy"),
            (64, "Command not implemented"),
        ],
    )
    def test_command_responses(self, code: int, text: str) -> None:
        """Test well-known command response codes."""
        assert get_error_description(code) == text

    def test_combined_communication_faults(self) -> None:
        """Test several communication fault bits are all listed."""
        description = get_error_description(0xC2)

        assert description.startswith("Communication error: ")
        assert "Vertical parity error" in description
        assert "Buffer overflow" in description

    @pytest.mark.parametrize("code", [0x80, 0x7F, 0x100, -1])
    def test_unknown(self, code: int) -> None:
        """Test unmapped codes never raise."""
        assert get_error_description(code) == UNKNOWN_ERROR

    @pytest.mark.parametrize(
        ("code", "expected"),
        [(0x00, False), (0x7F, False), (0x80, True), (0xFF, True)],
    )
    def test_is_communication_error(self, code: int, expected: bool) -> None:
        """Test bit 7 of the first code byte marks a communication fault."""
        assert is_communication_error(code) is expected

    def test_table_is_total_over_fault_bits(self) -> None:
        """Test every code with a fault bit set has a description."""
        for code in range(0x80, 0x100):
            if code & 0x7A:
                assert code in COMMUNICATION_ERRORS
