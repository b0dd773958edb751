"""Master-to-device request message."""

from __future__ import annotations

from pydantic import model_validator

from ..constants import FrameFormat, FrameMode
from .base import Message


class Request(Message):
    """A request frame sent by the master.

    The address is written verbatim. A long-frame address is exactly 5 bytes;
    a short-frame address is 1 byte or empty.

    Example:
        >>> request = Request(preamble=5, command=0)
        >>> request.serialize().hex(" ")
        'ff ff ff ff ff 02 00 00 00 02'
    """

    mode: FrameMode = FrameMode.REQUEST

    @model_validator(mode="after")
    def _check_address(self) -> Request:
        limit = self.frame_format.address_length
        if self.frame_format is FrameFormat.LONG and len(self.address) != limit:
            raise ValueError(
                f"long frame address must be {limit} bytes, got {len(self.address)}"
            )
        if len(self.address) > limit:
            raise ValueError(
                f"{self.frame_format.value} frame address holds at most {limit} bytes, "
                f"got {len(self.address)}"
            )
        return self

    def serialize(self, include_payload: bool = True) -> bytes:
        """Serialize to wire bytes; see :func:`hartcomm.framing.serialize_request`."""
        # Import here to avoid circular dependency
        from ..framing.frame import serialize_request

        return serialize_request(self, include_payload=include_payload)
