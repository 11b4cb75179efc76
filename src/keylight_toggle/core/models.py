from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .errors import DecodeError, ValidationError

DeviceAddress = str


@dataclass
class LightState:
    """State of one light on a Key Light fixture.

    ``None`` marks an attribute that is not set; it is left out of the JSON
    sent to the device. ``temperature`` is in device units (143-344).
    """

    on: bool = False
    brightness: int | None = None
    temperature: int | None = None

    def to_dict(self) -> Dict[str, int]:
        data = {"on": 1 if self.on else 0}
        if self.brightness is not None:
            data["brightness"] = self.brightness
        if self.temperature is not None:
            data["temperature"] = self.temperature
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "LightState":
        if not isinstance(data, dict):
            raise DecodeError(f"light entry is not an object: {data!r}")
        if "on" not in data:
            raise DecodeError(f"light entry has no 'on' field: {data!r}")
        return cls(
            on=bool(_int_field(data, "on")),
            brightness=_optional_int_field(data, "brightness"),
            temperature=_optional_int_field(data, "temperature"),
        )


@dataclass
class DeviceState:
    """Body of the ``/elgato/lights`` endpoint."""

    number_of_lights: int = 1
    lights: List[LightState] = field(default_factory=list)

    @classmethod
    def single(cls, on: bool) -> "DeviceState":
        """Build a fresh one-light state with only the power flag set."""
        return cls(number_of_lights=1, lights=[LightState(on=on)])

    @property
    def light(self) -> LightState:
        """The only light of the fixture."""
        if self.number_of_lights != 1 or len(self.lights) != 1:
            raise ValidationError(
                f"expected one light, got {self.number_of_lights}"
            )
        return self.lights[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "numberOfLights": self.number_of_lights,
            "lights": [light.to_dict() for light in self.lights],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "DeviceState":
        if not isinstance(data, dict):
            raise DecodeError(f"state is not an object: {data!r}")
        if "numberOfLights" not in data:
            raise DecodeError("state has no 'numberOfLights' field")
        lights = data.get("lights", [])
        if not isinstance(lights, list):
            raise DecodeError(f"'lights' is not a list: {lights!r}")
        return cls(
            number_of_lights=_int_field(data, "numberOfLights"),
            lights=[LightState.from_dict(entry) for entry in lights],
        )


def _int_field(data: Dict[str, Any], key: str) -> int:
    value = data[key]
    if isinstance(value, bool):
        return int(value)
    if not isinstance(value, int):
        raise DecodeError(f"'{key}' is not an integer: {value!r}")
    return value


def _optional_int_field(data: Dict[str, Any], key: str) -> int | None:
    if data.get(key) is None:
        return None
    return _int_field(data, key)
