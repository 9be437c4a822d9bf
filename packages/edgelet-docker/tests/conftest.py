"""Shared pytest fixtures for the edgelet-docker test suite."""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from edgelet_docker.runtime import DockerModuleRuntime

ENGINE_URL = "http://localhost/"

Route = httpx.Response | Callable[[httpx.Request], httpx.Response]


class FakeEngine:
    """In-memory engine behind an ``httpx.MockTransport``.

    Routes are keyed by ``(method, path)``; unknown routes answer 404 the way
    the engine does for a missing container.  Every request is recorded.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, response: Route) -> None:
        self.routes[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"No such route: {request.url.path}"})
        if callable(route):
            return route(request)
        return route

    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def transport(engine: FakeEngine) -> httpx.MockTransport:
    return httpx.MockTransport(engine.handler)


@pytest_asyncio.fixture
async def runtime(transport: httpx.MockTransport) -> AsyncGenerator[DockerModuleRuntime, None]:
    rt = DockerModuleRuntime.build(ENGINE_URL, transport)
    yield rt
    await rt.aclose()
