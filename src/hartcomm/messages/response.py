"""Device-to-master response message."""

from __future__ import annotations

from pydantic import Field, model_validator

from ..constants import FrameMode
from .base import Message
from .errors import is_communication_error


class Response(Message):
    """A response frame received from a field device.

    Responses are built by :meth:`deserialize`; the checksum has been verified
    before any field is populated.

    Attributes:
        response_code: Both response code bytes read as a little-endian uint16
        communication_error: Description of the first response code byte
        is_batch_mode: True for burst (BACK) frames
        mode: Frame mode taken from the limiter
    """

    response_code: int = Field(default=0, ge=0, le=0xFFFF)
    communication_error: str = ""
    is_batch_mode: bool = False
    mode: FrameMode = FrameMode.ON_DEMAND

    @model_validator(mode="after")
    def _check_address(self) -> Response:
        expected = self.frame_format.address_length
        if len(self.address) != expected:
            raise ValueError(
                f"{self.frame_format.value} frame address must be {expected} bytes, "
                f"got {len(self.address)}"
            )
        return self

    @property
    def response_status(self) -> int:
        """First response code byte (command outcome or communication fault)."""
        return self.response_code & 0xFF

    @property
    def device_status(self) -> int:
        """Second response code byte (field device status flags)."""
        return self.response_code >> 8

    @property
    def has_communication_error(self) -> bool:
        """True when the device reports a fault in the request it received.

        In that case ``device_status`` carries no field device status.
        """
        return is_communication_error(self.response_status)

    @classmethod
    def deserialize(cls, raw: bytes) -> Response:
        """Parse wire bytes; see :func:`hartcomm.framing.deserialize_response`."""
        # Import here to avoid circular dependency
        from ..framing.frame import deserialize_response

        return deserialize_response(raw)
