"""Fixtures compartidas: settings aislados y backend falso con httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.http_client import HttpClient
from adapters.token_store import MemoryTokenStore
from core.config import AppSettings

API_URL = "http://api.test/api"
COMPANY_ID = "7dd16aaa-793d-4017-8513-936df5e3010b"


def json_response(payload: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(
        status,
        content=json.dumps(payload).encode("utf-8"),
        headers={"content-type": "application/json; charset=utf-8"},
    )


class FakeBackend:
    """Routes `(METHOD, path)` to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, payload: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = lambda _request: json_response(payload, status)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return json_response({"message": "not found"}, 404)
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last(self, path: str) -> httpx.Request:
        matches = [r for r in self.requests if r.url.path == path]
        assert matches, f"no request to {path}"
        return matches[-1]


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_url=API_URL,
        app_url="http://panel.test",
        company_id=COMPANY_ID,
        storage_path=tmp_path / "storage.json",
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def http(settings, backend, store) -> HttpClient:
    return HttpClient(settings, token_provider=lambda: store.get("auth_token"), transport=backend.transport)
