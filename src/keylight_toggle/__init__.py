"""Command-line control for a single Elgato Key Light found over mDNS."""

__version__ = "1.0.0"
__license__ = "GPL-3.0"
