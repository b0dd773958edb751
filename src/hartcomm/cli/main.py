"""Main CLI entry point for hartcomm."""

from __future__ import annotations

import argparse
import sys

from .. import __version__
from ..constants import DEFAULT_PREAMBLE, FrameFormat
from ..exceptions import HartError
from ..framing.frame import deserialize_response, serialize_request
from ..messages.request import Request
from ..messages.response import Response


def _parse_hex(text: str) -> bytes:
    return bytes.fromhex(text.replace(":", " "))


def format_response(response: Response) -> str:
    """Render a response's fields one per line."""
    lines = [
        f"Preamble:        {response.preamble}",
        f"Frame format:    {response.frame_format.value}",
        f"Mode:            {response.mode.name}",
        f"Batch mode:      {response.is_batch_mode}",
        f"Address:         {response.address.hex(' ')}",
        f"Command:         {response.command}",
        f"Response code:   0x{response.response_code:04X}",
        f"Status:          {response.communication_error}",
        f"Comm. fault:     {response.has_communication_error}",
        f"Device status:   0x{response.device_status:02X}",
        f"Data ({len(response.data)} bytes): {response.data.hex(' ') or '(empty)'}",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the hartcomm CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="hartcomm",
        description="hartcomm: HART Field-Device Protocol Master Library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hartcomm --decode "ff ff 06 80 00 02 00 00 84"   Decode a response frame
  hartcomm --request 0 --address 80                  Build a command 0 request
  hartcomm --request 1 --long --address 2600112233   Long-frame request
        """,
    )

    parser.add_argument(
        "--decode",
        metavar="HEX",
        type=str,
        help="Decode a response frame given as hex",
    )
    parser.add_argument(
        "--request",
        metavar="COMMAND",
        type=int,
        help="Serialize a request for COMMAND and print it as hex",
    )
    parser.add_argument(
        "--address", metavar="HEX", default="00", help="Device address (hex); 5 bytes with --long"
    )
    parser.add_argument(
        "--preamble",
        type=int,
        default=DEFAULT_PREAMBLE,
        help=f"Number of preamble bytes (default {DEFAULT_PREAMBLE})",
    )
    parser.add_argument("--long", action="store_true", help="Use the 5-byte long address format")
    parser.add_argument("--data", metavar="HEX", default="", help="Request data field (hex)")
    parser.add_argument(
        "--version",
        action="version",
        version=f"hartcomm {__version__}",
    )

    args = parser.parse_args(argv)

    if args.decode:
        try:
            response = deserialize_response(_parse_hex(args.decode))
        except (HartError, ValueError) as e:
            print(f"Error decoding frame: {e}", file=sys.stderr)
            return 1
        print(format_response(response))
        return 0

    if args.request is not None:
        try:
            request = Request(
                preamble=args.preamble,
                frame_format=FrameFormat.LONG if args.long else FrameFormat.SHORT,
                address=_parse_hex(args.address),
                command=args.request,
                data=_parse_hex(args.data),
            )
            frame = serialize_request(request)
        except (HartError, ValueError) as e:
            print(f"Error building request: {e}", file=sys.stderr)
            return 1
        print(frame.hex(" "))
        return 0

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
