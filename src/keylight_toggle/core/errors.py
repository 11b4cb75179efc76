from __future__ import annotations


class KeyLightError(Exception):
    """Base class for every failure the tool reports."""


class DiscoveryError(KeyLightError):
    """No Key Light address could be resolved over mDNS."""


class TransportError(KeyLightError):
    """The HTTP request to the device could not be completed."""


class DecodeError(KeyLightError):
    """The device answered with a body that is not a light state."""

    def __init__(self, message: str, body: str | None = None) -> None:
        super().__init__(message)
        self.body = body


class ValidationError(KeyLightError):
    """A command, override or device state is outside what is supported."""


class UsageError(KeyLightError):
    """The command line was malformed."""
