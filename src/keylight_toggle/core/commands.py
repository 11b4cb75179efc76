from __future__ import annotations

import logging
from enum import Enum
from typing import Awaitable, Callable

from ..utils.color_utils import MAX_KELVIN, MIN_KELVIN, kelvin_to_mired
from .errors import ValidationError
from .models import DeviceState

_LOGGER = logging.getLogger(__name__)

StateFetcher = Callable[[], Awaitable[DeviceState]]


class Command(str, Enum):
    ON = "on"
    OFF = "off"
    TOGGLE = "toggle"


DEFAULT_COMMAND = Command.TOGGLE


def parse_command(command: str) -> Command:
    """Match a command name case-insensitively."""
    try:
        return Command(command.lower())
    except ValueError:
        raise ValidationError(f"bad command: {command}") from None


def validate_overrides(
    brightness: int | None = None, temperature: int | None = None
) -> None:
    """Check brightness (percent) and temperature (Kelvin) overrides."""
    if brightness is not None and not 0 <= brightness <= 100:
        raise ValidationError("brightness must be between 0 and 100")
    if temperature and not MIN_KELVIN <= temperature <= MAX_KELVIN:
        raise ValidationError(
            f"temperature must be between {MIN_KELVIN} and {MAX_KELVIN} (in Kelvins)"
        )


def toggled(current: DeviceState) -> DeviceState:
    """Flip the power of a fetched state, dropping its other attributes."""
    light = current.light
    return DeviceState.single(on=not light.on)


async def compute_desired_state(
    command: str,
    fetch_current: StateFetcher,
    brightness: int | None = None,
    temperature: int | None = None,
) -> DeviceState:
    """Work out the state to send to the light.

    ``on`` and ``off`` need no device round trip. ``toggle`` awaits
    ``fetch_current`` and flips its power flag; brightness and temperature
    from the fetched state are cleared so they are not written back.

    ``brightness`` is a percentage and is sent whenever it is not ``None``,
    including an explicit ``0``. ``temperature`` is in Kelvin; ``None`` and
    ``0`` both mean no override.
    """
    cmd = parse_command(command)
    validate_overrides(brightness, temperature)

    if cmd is Command.ON:
        state = DeviceState.single(on=True)
    elif cmd is Command.OFF:
        state = DeviceState.single(on=False)
    else:
        state = toggled(await fetch_current())
    _LOGGER.debug("%s -> on=%s", cmd.value, state.light.on)

    light = state.light
    if brightness is not None:
        light.brightness = brightness
    if temperature:
        light.temperature = kelvin_to_mired(temperature)
    return state
