"""Response code descriptions.

The first response code byte either reports a command outcome (bit 7 clear)
or, with bit 7 set, a communication fault the device detected in the request
it received. ``COMMUNICATION_ERRORS`` covers all 256 values that have a
defined meaning; anything else resolves to ``UNKNOWN_ERROR``.
"""

from __future__ import annotations

UNKNOWN_ERROR = "Unknown error"

COMMUNICATION_ERROR_BIT = 0x80

_COMMAND_RESPONSES: dict[int, str] = {
    0: "No command-specific errors",
    1: "Undefined",
    2: "Invalid selection",
    3: "Passed parameter too large",
    4: "Passed parameter too small",
    5: "Too few data bytes received",
    6: "Device-specific command error",
    7: "In write protect mode",
    8: "Update failure",
    9: "Applied process too high",
    10: "Applied process too low",
    11: "Upper range value too high",
    12: "Lower range value too low",
    13: "Upper and lower range values out of limits",
    14: "Span too small",
    15: "Invalid analog channel code number",
    16: "Access restricted",
    17: "Invalid device variable index",
    18: "Invalid units code",
    19: "Device variable index not allowed",
    28: "Invalid range units code",
    29: "Invalid span",
    32: "Busy",
    33: "Delayed response initiated",
    34: "Delayed response running",
    35: "Delayed response dead",
    36: "Delayed response conflict",
    60: "Payload too long",
    64: "Command not implemented",
    65: "Invalid burst message index",
}

_COMMUNICATION_FLAGS: dict[int, str] = {
    0x40: "Vertical parity error",
    0x20: "Overrun error",
    0x10: "Framing error",
    0x08: "Longitudinal parity error",
    0x02: "Buffer overflow",
}


def _build_table() -> dict[int, str]:
    table = dict(_COMMAND_RESPONSES)
    for code in range(COMMUNICATION_ERROR_BIT, 0x100):
        faults = [text for bit, text in _COMMUNICATION_FLAGS.items() if code & bit]
        if faults:
            table[code] = "Communication error: " + ", ".join(faults)
    return table


COMMUNICATION_ERRORS: dict[int, str] = _build_table()


def get_error_description(code: int) -> str:
    """Look up the description of a response code's first byte.

    Never raises; unmapped codes yield ``UNKNOWN_ERROR``.

    Example:
        >>> get_error_description(0)
        'No command-specific errors'
        >>> get_error_description(0x88)
        'Communication error: Longitudinal parity error'
    """
    return COMMUNICATION_ERRORS.get(code, UNKNOWN_ERROR)


def is_communication_error(code: int) -> bool:
    """True if a first response code byte reports a communication fault."""
    return bool(code & COMMUNICATION_ERROR_BIT)
