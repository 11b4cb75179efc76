"""
Key Light Toggle - switch the Elgato Key Light on the local network
on, off, or toggle it, optionally setting brightness and colour temperature.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import Settings
from .core.commands import (
    DEFAULT_COMMAND,
    compute_desired_state,
    parse_command,
    validate_overrides,
)
from .core.discovery import KeyLightDiscovery
from .core.errors import KeyLightError, UsageError
from .core.models import DeviceAddress, DeviceState
from .core.service import KeyLightService
from .utils.color_utils import mired_to_kelvin

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(filename)s:%(lineno)d: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keylight-toggle",
        description="Control the Elgato Key Light on the local network",
    )
    parser.add_argument(
        "commands",
        nargs="*",
        metavar="command",
        help="on, off or toggle (default: toggle)",
    )
    parser.add_argument(
        "--brightness", type=int, help="set brightness (between 0 and 100)"
    )
    parser.add_argument(
        "--temperature",
        type=int,
        help="set color temperature (between 2900 (reddish) and 7000 (blueish))",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="seconds to wait for discovery and each HTTP request (default: forever)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    # zeroconf logs every packet at DEBUG
    logging.getLogger("zeroconf").setLevel(logging.INFO)


def select_command(commands: List[str]) -> str:
    """Pick the single positional command, defaulting to toggle."""
    if len(commands) > 1:
        raise UsageError("only one command may be specified: on, off or toggle (default)")
    if not commands:
        return DEFAULT_COMMAND.value
    return commands[0]


async def control(
    address: DeviceAddress,
    command: str,
    settings: Settings,
    brightness: Optional[int] = None,
    temperature: Optional[int] = None,
) -> DeviceState:
    """Compute the new state for the light at ``address`` and push it."""
    async with KeyLightService(settings) as service:
        desired = await compute_desired_state(
            command,
            lambda: service.fetch_state(address),
            brightness=brightness,
            temperature=temperature,
        )
        return await service.push_state(address, desired)


def run(args: argparse.Namespace) -> DeviceState:
    settings = Settings.from_args(args)
    command = select_command(args.commands)
    # Fail on bad input before touching the network
    parse_command(command)
    validate_overrides(args.brightness, args.temperature)

    address = KeyLightDiscovery(settings).resolve()
    result = asyncio.run(
        control(address, command, settings, args.brightness, args.temperature)
    )

    temperature = result.lights[0].temperature if result.lights else None
    if temperature:
        _LOGGER.info("temperature: %dK", mired_to_kelvin(temperature))
    return result


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        run(args)
    except KeyLightError as err:
        _LOGGER.error("%s", err)
        sys.exit(1)


if __name__ == "__main__":
    main()
