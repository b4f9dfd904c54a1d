"""Shared fixtures: an in-memory Modrinth served through httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from adapters.http_client import build_client
from adapters.modrinth_api import ModrinthApi
from core.config import AppSettings

API = "https://api.modrinth.com/v2"
CDN = "https://cdn.modrinth.com"


class FakeModrinth:
    """Routes requests by URL path and records every request it sees."""

    def __init__(self) -> None:
        self.routes: dict[str, httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, payload: Any = None, *, status: int = 200, content: bytes | None = None) -> None:
        if content is None:
            content = json.dumps(payload).encode("utf-8")
        self.routes[path] = httpx.Response(status, content=content)

    def fail(self, path: str, exc: Exception) -> None:
        self.routes[path] = exc

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, content=b'{"error":"not_found"}')
        if isinstance(route, Exception):
            raise route
        return httpx.Response(route.status_code, content=route.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_base_url=API)


@pytest.fixture
def fake() -> FakeModrinth:
    return FakeModrinth()


@pytest.fixture
def api(fake: FakeModrinth, settings: AppSettings) -> Iterator[ModrinthApi]:
    with build_client(settings, transport=fake.transport) as client:
        yield ModrinthApi(client, settings)


def project_payload(slug: str, title: str, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": f"id-{slug}",
        "slug": slug,
        "title": title,
        "project_type": "mod",
        "body": f"# {title}\nLong description.",
        "categories": ["optimization", "rendering"],
        "downloads": 123,
    }
    payload.update(extra)
    return payload
