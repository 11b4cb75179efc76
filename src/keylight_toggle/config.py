"""
Runtime settings for the Key Light command-line tool.

Settings are built once from the command line and passed to each component;
nothing is read from or written to disk.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

SERVICE_TYPE = "_elg._tcp.local."
LIGHTS_PATH = "/elgato/lights"


@dataclass
class Settings:
    verbose: bool = False
    timeout_s: float | None = None  # None waits forever
    service_type: str = SERVICE_TYPE

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Settings":
        """Build settings from parsed command-line arguments."""
        return cls(
            verbose=bool(getattr(args, "verbose", False)),
            timeout_s=getattr(args, "timeout", None),
        )
