"""Utility functions for hartcomm.

This module provides the frame checksum helpers.
"""

from __future__ import annotations

from .checksum import verify_checksum, xor_checksum

__all__ = [
    "xor_checksum",
    "verify_checksum",
]
