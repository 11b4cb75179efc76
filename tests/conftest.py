"""Shared fixtures: an in-process fake Key Light HTTP endpoint."""

from __future__ import annotations

import json
from typing import Any

import pytest
from aiohttp import web


class FakeKeyLight:
    """Minimal stand-in for the ``/elgato/lights`` endpoint of a Key Light."""

    def __init__(self, state: dict[str, Any]) -> None:
        self.state = state
        self.requests: list[tuple[str, Any, str | None]] = []
        self.put_response: str | None = None

    async def handle_get(self, request: web.Request) -> web.Response:
        self.requests.append(("GET", None, request.headers.get("Content-Type")))
        return web.json_response(self.state)

    async def handle_put(self, request: web.Request) -> web.Response:
        body = json.loads(await request.text())
        self.requests.append(("PUT", body, request.headers.get("Content-Type")))
        if self.put_response is not None:
            return web.Response(text=self.put_response)
        light = dict(self.state["lights"][0])
        light.update(body["lights"][0])
        self.state = {"numberOfLights": 1, "lights": [light]}
        return web.json_response(self.state)

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/elgato/lights", self.handle_get)
        app.router.add_put("/elgato/lights", self.handle_put)
        return app

    def methods(self) -> list[str]:
        return [method for method, _, _ in self.requests]

    def put_bodies(self) -> list[Any]:
        return [body for method, body, _ in self.requests if method == "PUT"]


@pytest.fixture
def fake_light() -> FakeKeyLight:
    return FakeKeyLight(
        {
            "numberOfLights": 1,
            "lights": [{"on": 0, "brightness": 50, "temperature": 200}],
        }
    )
