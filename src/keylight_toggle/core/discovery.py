from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError

from zeroconf import (
    Error as ZeroconfError,
    IPVersion,
    ServiceBrowser,
    ServiceInfo,
    ServiceStateChange,
    Zeroconf,
)

from ..config import Settings
from .errors import DiscoveryError
from .models import DeviceAddress

_LOGGER = logging.getLogger(__name__)

# How long to wait for the SRV/A records of an announced service, in ms.
SERVICE_INFO_TIMEOUT_MS = 3000


class KeyLightDiscovery:
    """Finds the Key Light on the network using mDNS.

    The zeroconf browser calls back on its own thread; the first resolved
    service completes a one-shot future that :meth:`resolve` blocks on.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self.zeroconf: Zeroconf | None = None
        self.browser: ServiceBrowser | None = None
        self._found: Future = Future()
        self._lock = threading.Lock()

    def resolve(self) -> DeviceAddress:
        """Block until one device answers and return it as ``host:port``."""
        self.start_discovery()
        try:
            address = self._wait()
        finally:
            self.stop_discovery()
        if not address:
            raise DiscoveryError("empty hostname")
        _LOGGER.debug("Hostname: %s", address)
        return address

    def start_discovery(self) -> None:
        """Start browsing for Key Light devices."""
        self._found = Future()
        try:
            self.zeroconf = Zeroconf()
        except (OSError, ZeroconfError) as err:
            raise DiscoveryError(f"cannot start mDNS resolver: {err}") from err
        try:
            self.browser = ServiceBrowser(
                self.zeroconf,
                self._settings.service_type,
                handlers=[self._on_service_state_change],
            )
        except (OSError, ZeroconfError) as err:
            self.stop_discovery()
            raise DiscoveryError(
                f"cannot browse for {self._settings.service_type}: {err}"
            ) from err

    def stop_discovery(self) -> None:
        """Stop discovery and cleanup."""
        if self.browser:
            self.browser.cancel()
            self.browser = None
        if self.zeroconf:
            self.zeroconf.close()
            self.zeroconf = None

    def _wait(self) -> str:
        timeout = self._settings.timeout_s
        try:
            return self._found.result(timeout=timeout)
        except FutureTimeoutError as err:
            with self._lock:
                self._found.cancel()
            raise DiscoveryError(
                f"no {self._settings.service_type} device answered "
                f"within {timeout:g}s"
            ) from err

    def _on_service_state_change(self, zeroconf, service_type, name, state_change):
        """Handle service discovery events."""
        if state_change != ServiceStateChange.Added or self._found.done():
            return
        try:
            info = zeroconf.get_service_info(
                service_type, name, timeout=SERVICE_INFO_TIMEOUT_MS
            )
        except (OSError, ZeroconfError) as err:
            self._complete(error=DiscoveryError(f"cannot resolve {name}: {err}"))
            return
        if info is None:
            _LOGGER.debug("Service %s did not answer, still browsing", name)
            return
        _LOGGER.debug("Service: %r", info)
        self._complete(address=format_address(info))

    def _complete(
        self, address: str | None = None, error: Exception | None = None
    ) -> None:
        with self._lock:
            if self._found.done():
                return
            if error is not None:
                self._found.set_exception(error)
            else:
                self._found.set_result(address)


def format_address(info: ServiceInfo) -> DeviceAddress:
    """Format a resolved service as ``host:port``, preferring its IPv4 address."""
    addresses = info.parsed_addresses(IPVersion.V4Only)
    if addresses:
        host = addresses[0]
    else:
        host = (info.server or "").rstrip(".")
    if not host:
        return ""
    return f"{host}:{info.port}"
