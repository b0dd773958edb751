"""HART message models for hartcomm.

This module provides the Request and Response models and the response code
description table.
"""

from __future__ import annotations

from .base import Message
from .errors import (
    COMMUNICATION_ERRORS,
    UNKNOWN_ERROR,
    get_error_description,
    is_communication_error,
)
from .request import Request
from .response import Response

__all__ = [
    "Message",
    "Request",
    "Response",
    "COMMUNICATION_ERRORS",
    "UNKNOWN_ERROR",
    "get_error_description",
    "is_communication_error",
]
