from __future__ import annotations

KELVIN_FACTOR = 1_000_000

MIN_KELVIN = 2900
MAX_KELVIN = 7000


def convert_temperature(value: int) -> int:
    """Convert between Kelvin and Elgato mired units.

    The conversion is its own inverse, so the same function maps Kelvin to
    mired and mired back to Kelvin. Integer division means Kelvin values can
    drift up by a few tens of degrees on a round trip; mired values in the
    device range (143-344) round-trip exactly.
    """
    if value <= 0:
        raise ValueError(f"temperature must be positive, got {value}")
    return KELVIN_FACTOR // value


def kelvin_to_mired(kelvin: int) -> int:
    """Convert a Kelvin temperature (2900K-7000K) to device units."""
    return convert_temperature(kelvin)


def mired_to_kelvin(value: int) -> int:
    """Convert a device temperature value (143-344) to Kelvin."""
    return convert_temperature(value)
