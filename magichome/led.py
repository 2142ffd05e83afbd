#!/usr/bin/env python3
"""
MagicHome LED command line
Usage:
  magichome -a 192.168.1.105 status        # Show power, color, mode and speed
  magichome -a 192.168.1.105 on/off        # Explicit on/off
  magichome -a 192.168.1.105 red           # Named static color
  magichome -a 192.168.1.105 chaos         # Preset animation
  magichome -a 192.168.1.105 rgb 255 0 80  # Arbitrary color
  magichome -a 192.168.1.105 hex FF0050    # Hex color
  magichome -a 192.168.1.105 serve         # HTTP bridge for this device
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .color_utils import hex_to_rgb
from .config import Settings
from .exceptions import DeviceConnectionError, MagicHomeError
from .led_controller import LEDController
from .protocol import Action

log = logging.getLogger("magichome")


def setup_debug_logging(debug_mode: bool, log_file: Optional[str] = None):
    """Setup debug logging to console and optionally a file"""
    if not debug_mode:
        return

    # Already configured by an earlier call
    if log.handlers:
        return

    log.setLevel(logging.DEBUG)
    log.propagate = False

    formatter = logging.Formatter(
        "%(asctime)s.%(msecs)03d | %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    log.addHandler(console_handler)

    if log_file:
        # Start each run with a fresh file
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    log.debug("=== MagicHome debug logging started ===")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="magichome", description="Control a MagicHome LED controller"
    )
    parser.add_argument(
        "-a", "--address", default=settings.address,
        help="Address of controller (default: $MAGICHOME_ADDRESS)",
    )
    parser.add_argument(
        "-p", "--port", type=int, default=settings.port,
        help=f"Port to access on the controller (default: {settings.port})",
    )
    parser.add_argument(
        "--timeout", type=float, default=settings.timeout,
        help="Connect timeout in seconds",
    )
    parser.add_argument(
        "--debug", "--verbose", action="store_true",
        help="Enable debug logging to the console",
    )
    parser.add_argument("--log-file", help="Also write debug logging to this file")

    actions = parser.add_subparsers(dest="action", metavar="ACTION", required=True)
    for action in Action:
        actions.add_parser(action.value, help=action.description)

    rgb = actions.add_parser("rgb", help="Static color from red, green, blue values")
    for component in ("red", "green", "blue"):
        rgb.add_argument(component, type=int, help=f"{component} 0-255")

    hex_parser = actions.add_parser("hex", help="Static color from a hex code")
    hex_parser.add_argument("color", help="RRGGBB, #RRGGBB or 0xRRGGBB")

    serve = actions.add_parser("serve", help="Run the HTTP bridge for this controller")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--http-port", type=int, default=8000)

    return parser


async def run_action(args: argparse.Namespace, settings: Settings) -> int:
    """Connect, perform one action, print the result"""
    try:
        led = await LEDController.connect(
            args.address, args.port,
            timeout=args.timeout, read_timeout=settings.read_timeout,
        )
    except DeviceConnectionError as e:
        print(f"Failed creating session: {e}", file=sys.stderr)
        return 1
    print("Connection successful")

    async with led:
        try:
            if args.action == "rgb":
                await led.set_color(args.red, args.green, args.blue)
                performed = f"rgb({args.red}, {args.green}, {args.blue})"
            elif args.action == "hex":
                r, g, b = hex_to_rgb(args.color)
                await led.set_color(r, g, b)
                performed = f"hex({args.color})"
            else:
                status = await led.perform(Action(args.action))
                if status:
                    print(status)
                performed = Action(args.action).name.capitalize()
        except (MagicHomeError, ValueError) as e:
            print(f"Failed performing action: {e}", file=sys.stderr)
            return 1

    print(f"Performed action: {performed}")
    return 0


def serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from .main import create_app

    settings.address = args.address
    settings.port = args.port
    settings.timeout = args.timeout
    uvicorn.run(
        create_app(settings),
        host=args.host,
        port=args.http_port,
        log_level="debug" if args.debug else "info",
        access_log=False,  # Reduce log spam
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Invalid MAGICHOME_* environment setting: {e}", file=sys.stderr)
        return 2

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if not args.address:
        parser.error("the following arguments are required: -a/--address")

    setup_debug_logging(args.debug, args.log_file)

    if args.action == "serve":
        return serve(args, settings)
    return asyncio.run(run_action(args, settings))


if __name__ == "__main__":
    sys.exit(main())
