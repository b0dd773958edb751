"""Frame serialization and deserialization.

Request layout::

    [preamble x P][limiter][address][command x 1|2][count][data ...][checksum]

Response layout::

    [preamble x P][limiter][address][command x 1|2][count][code x 2][data ...][checksum]

The count byte holds the number of bytes that follow it, excluding the
checksum. The checksum is the XOR of limiter through the last data byte.
"""

from __future__ import annotations

import logging

from ..codec import ValueType, decode
from ..constants import (
    EXTENDED_COMMAND,
    MAX_BYTE_COUNT,
    MIN_PREAMBLE,
    PREAMBLE_SYMBOL,
    RESPONSE_CODE_LENGTH,
    FrameMode,
    encode_command,
    make_limiter,
    parse_limiter,
)
from ..exceptions import IntegrityError, MalformedFrameError, ValueRangeError
from ..messages.errors import get_error_description
from ..messages.request import Request
from ..messages.response import Response
from ..utils.checksum import verify_checksum, xor_checksum

logger = logging.getLogger(__name__)


def serialize_request(request: Request, *, include_payload: bool = True) -> bytes:
    """Serialize a request to wire bytes.

    Args:
        request: Request to serialize
        include_payload: If False, the data field is left out and the count
            byte is zero

    Returns:
        Complete frame including preamble and checksum

    Raises:
        ValueRangeError: If the data field is longer than a count byte allows

    Example:
        >>> from hartcomm import Request
        >>> serialize_request(Request(preamble=3, address=b"", command=0)).hex(" ")
        'ff ff ff 02 00 00 02'
    """
    payload = request.data if include_payload else b""
    if len(payload) > MAX_BYTE_COUNT:
        raise ValueRangeError(
            f"Data field holds at most {MAX_BYTE_COUNT} bytes, got {len(payload)}"
        )

    body = bytearray()
    body.append(make_limiter(request.frame_format, request.mode))
    body.extend(request.address)
    body.extend(encode_command(request.command))
    body.append(len(payload))
    body.extend(payload)

    body.append(xor_checksum(body))

    frame = bytes([PREAMBLE_SYMBOL]) * request.preamble + bytes(body)
    logger.debug("Serialized command %d (%d bytes)", request.command, len(frame))
    return frame


def count_preamble(raw: bytes) -> int:
    """Count the leading preamble bytes of a frame."""
    count = 0
    for value in raw:
        if value != PREAMBLE_SYMBOL:
            break
        count += 1
    return count


def deserialize_response(raw: bytes | bytearray) -> Response:
    """Parse and validate a response frame.

    The checksum is verified before any other field is read, so a corrupted
    frame never yields partial data.

    Args:
        raw: One complete frame as produced by :class:`ByteStreamFramer`

    Returns:
        The parsed Response; its data field is decoded on demand

    Raises:
        IntegrityError: If the checksum byte does not match
        MalformedFrameError: If the limiter is unknown or the frame is
            truncated or inconsistent

    Example:
        >>> raw = bytes.fromhex("ff ff 06 80 00 02 00 00 84")
        >>> deserialize_response(raw).response_code
        0
    """
    raw = bytes(raw)
    if not raw:
        raise MalformedFrameError("Cannot deserialize empty frame")

    preamble = count_preamble(raw)
    offset = preamble

    # Limiter and checksum at minimum
    if len(raw) - offset < 2:
        raise MalformedFrameError(f"Frame too short: {len(raw)} bytes")

    covered = raw[offset:-1]
    if not verify_checksum(covered, raw[-1]):
        raise IntegrityError(
            f"Checksum mismatch: frame carries 0x{raw[-1]:02X}, "
            f"computed 0x{xor_checksum(covered):02X}"
        )

    if preamble < MIN_PREAMBLE:
        raise MalformedFrameError(
            f"Frame has {preamble} preamble bytes, at least {MIN_PREAMBLE} required"
        )

    limiter = raw[offset]
    frame_format, mode = parse_limiter(limiter)
    offset += 1

    end = len(raw) - 1  # index of the checksum byte

    address_length = frame_format.address_length
    _require(raw, offset, address_length, end, "address")
    address = raw[offset : offset + address_length]
    offset += address_length

    _require(raw, offset, 1, end, "command")
    if raw[offset] == EXTENDED_COMMAND:
        _require(raw, offset, 2, end, "extended command")
        command = EXTENDED_COMMAND + raw[offset + 1]
        offset += 2
    else:
        command = raw[offset]
        offset += 1

    _require(raw, offset, 1, end, "byte count")
    byte_count = raw[offset]
    offset += 1

    if offset + byte_count != end:
        raise MalformedFrameError(
            f"Byte count {byte_count} does not match the {end - offset} bytes before the checksum"
        )

    _require(raw, offset, RESPONSE_CODE_LENGTH, end, "response code")
    code = raw[offset : offset + RESPONSE_CODE_LENGTH]
    offset += RESPONSE_CODE_LENGTH

    return Response(
        preamble=preamble,
        frame_format=frame_format,
        address=address,
        command=command,
        data=raw[offset:end],
        response_code=decode(code, ValueType.UINT16),
        communication_error=get_error_description(code[0]),
        is_batch_mode=mode is FrameMode.BATCH,
        mode=mode,
    )


def _require(raw: bytes, offset: int, length: int, end: int, field: str) -> None:
    if offset + length > end:
        raise MalformedFrameError(
            f"Frame too short for {field}: need {length} bytes at offset {offset}, "
            f"frame is {len(raw)} bytes"
        )
