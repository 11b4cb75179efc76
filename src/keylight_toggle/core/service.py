from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

from ..config import LIGHTS_PATH, Settings
from .errors import DecodeError, TransportError
from .models import DeviceAddress, DeviceState

_LOGGER = logging.getLogger(__name__)

HEADERS = {"Content-Type": "application/json; charset=utf-8"}


class KeyLightService:
    """HTTP service for interacting with an Elgato Key Light device.

    Use as an async context manager so the underlying session is closed::

        async with KeyLightService(settings) as service:
            state = await service.fetch_state("192.168.1.20:9123")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "KeyLightService":
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self._settings.timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    @staticmethod
    def lights_url(address: DeviceAddress) -> str:
        return f"http://{address}{LIGHTS_PATH}"

    async def fetch_state(self, address: DeviceAddress) -> DeviceState:
        """Fetch the current device state."""
        body = await self._request("GET", address)
        try:
            return DeviceState.from_dict(json.loads(body))
        except json.JSONDecodeError as err:
            raise DecodeError(f"bad JSON state: {err}", body=body) from err

    async def push_state(
        self, address: DeviceAddress, desired: DeviceState
    ) -> DeviceState:
        """Send a state update and return the state the device reports back."""
        payload = json.dumps(desired.to_dict(), separators=(",", ":"))
        _LOGGER.debug("request: %s", payload)
        body = await self._request("PUT", address, payload)
        _LOGGER.debug("JSON response: %s", body)
        try:
            return DeviceState.from_dict(json.loads(body))
        except (json.JSONDecodeError, DecodeError) as err:
            raise DecodeError(f"bad JSON response: {body}", body=body) from err

    async def _request(
        self, method: str, address: DeviceAddress, data: str | None = None
    ) -> str:
        if self._session is None:
            raise RuntimeError("KeyLightService used outside 'async with'")
        url = self.lights_url(address)
        try:
            async with self._session.request(
                method, url, data=data, headers=HEADERS
            ) as response:
                raw = await response.read()
        except asyncio.TimeoutError as err:
            raise TransportError(f"{method} {url} timed out") from err
        except aiohttp.ClientError as err:
            raise TransportError(f"{method} {url} failed: {err}") from err
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise DecodeError(f"response is not UTF-8: {raw!r}") from err
