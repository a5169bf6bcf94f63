"""Tests for the HTTP client wrapper."""

import json

import httpx
import pytest

from adapters.http_client import HttpClient, RequestConfig
from core.domain.models import LoginCredentials
from core.errors import (
    HttpNetworkError,
    HttpStatusError,
    HttpTimeoutError,
    ResponseParseError,
)


@pytest.mark.asyncio
async def test_bearer_header_present_when_token_stored(http, backend, store):
    """Test Authorization is attached when the store holds a token."""
    backend.add("GET", "/api/v1/ping", {"ok": True})
    store.set("auth_token", "abc")

    assert await http.get("/v1/ping") == {"ok": True}
    assert backend.last("/api/v1/ping").headers["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
async def test_bearer_header_absent_without_token(http, backend):
    """Test no Authorization header is sent without a token."""
    backend.add("GET", "/api/v1/ping", {"ok": True})

    await http.get("/v1/ping")
    assert "Authorization" not in backend.last("/api/v1/ping").headers


@pytest.mark.asyncio
async def test_token_read_on_every_call(http, backend, store):
    """Test a token change is visible on the next request."""
    backend.add("GET", "/api/v1/ping", {"ok": True})

    store.set("auth_token", "first")
    await http.get("/v1/ping")
    store.set("auth_token", "second")
    await http.get("/v1/ping")

    sent = [r.headers["Authorization"] for r in backend.requests]
    assert sent == ["Bearer first", "Bearer second"]


@pytest.mark.asyncio
async def test_non_2xx_raises_with_server_status(http, backend):
    """Test non-2xx rejects with the server status on the error."""
    backend.add("GET", "/api/v1/students/9", {"message": "missing"}, status=404)

    with pytest.raises(HttpStatusError) as excinfo:
        await http.get("/v1/students/9")

    assert excinfo.value.status == 404
    assert excinfo.value.response.status == 404
    assert excinfo.value.response.data == {"message": "missing"}
    assert str(excinfo.value) == "Request failed with status 404"


@pytest.mark.asyncio
async def test_query_params_drop_none_and_encode_values(http, backend):
    """Test None params are dropped and bools/lists are encoded."""
    backend.add("GET", "/api/v1/items", [])

    await http.get("/v1/items", params={"a": None, "remote": True, "ids": [1, 2], "q": "x"})
    params = backend.last("/api/v1/items").url.params

    assert "a" not in params
    assert params["remote"] == "true"
    assert params["ids"] == "1,2"
    assert params["q"] == "x"


@pytest.mark.asyncio
async def test_post_serializes_models(http, backend):
    """Test pydantic bodies are sent as JSON."""
    backend.add("POST", "/api/auth", {"token": "t"})

    await http.post("/auth", LoginCredentials(email="admin@example.com", password="secret1"))
    request = backend.last("/api/auth")

    assert json.loads(request.content) == {"email": "admin@example.com", "password": "secret1"}
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_interceptors_run_in_registration_order(http, backend):
    """Test request and response hooks run sequentially, sync and async."""
    backend.add("GET", "/api/v1/ping", {"n": 1})
    calls = []

    def first(config: RequestConfig) -> RequestConfig:
        calls.append("first")
        config.headers["X-Trace"] = "1"
        return config

    async def second(config: RequestConfig) -> RequestConfig:
        calls.append("second")
        config.headers["X-Trace"] += "2"
        return config

    def on_response(response):
        calls.append("response")
        response.data = {"n": response.data["n"] + 1}
        return response

    http.add_request_interceptor(first).add_request_interceptor(second)
    http.add_response_interceptor(on_response)

    assert await http.get("/v1/ping") == {"n": 2}
    assert calls == ["first", "second", "response"]
    assert backend.last("/api/v1/ping").headers["X-Trace"] == "12"


@pytest.mark.asyncio
async def test_error_interceptors_see_failure(http, backend):
    """Test error hooks receive the error before it is raised."""
    backend.add("GET", "/api/v1/ping", {}, status=500)
    seen = []

    def on_error(error):
        seen.append(error.status)
        return error

    http.add_error_interceptor(on_error)
    with pytest.raises(HttpStatusError):
        await http.get("/v1/ping")
    assert seen == [500]


@pytest.mark.asyncio
async def test_timeout_maps_to_timeout_error(settings):
    """Test transport timeouts surface as HttpTimeoutError."""

    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    client = HttpClient(settings, transport=httpx.MockTransport(handler))
    with pytest.raises(HttpTimeoutError):
        await client.get("/v1/ping", config=RequestConfig(timeout=0.5))


@pytest.mark.asyncio
async def test_connect_error_maps_to_network_error(settings):
    """Test connection failures surface as HttpNetworkError."""

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = HttpClient(settings, transport=httpx.MockTransport(handler))
    with pytest.raises(HttpNetworkError) as excinfo:
        await client.get("/v1/ping")
    assert excinfo.value.response is None


@pytest.mark.asyncio
async def test_invalid_json_raises_parse_error(settings):
    """Test a JSON content type with a broken body is reported."""

    def handler(request):
        return httpx.Response(200, content=b"{nope", headers={"content-type": "application/json"})

    client = HttpClient(settings, transport=httpx.MockTransport(handler))
    with pytest.raises(ResponseParseError):
        await client.get("/v1/ping")


@pytest.mark.asyncio
async def test_text_body_returned_as_text(settings):
    """Test non-JSON responses come back as text."""

    def handler(request):
        return httpx.Response(200, text="pong", headers={"content-type": "text/plain"})

    client = HttpClient(settings, transport=httpx.MockTransport(handler))
    assert await client.get("/v1/ping") == "pong"


def test_build_url_joins_base_and_endpoint(settings):
    """Test endpoint joining tolerates leading slashes."""
    client = HttpClient(settings)
    assert client.build_url("/v1/students") == "http://api.test/api/v1/students"
    assert client.build_url("v1/students") == "http://api.test/api/v1/students"
    assert client.build_url("https://other.test/x") == "https://other.test/x"


@pytest.mark.asyncio
async def test_broken_json_on_error_status_is_a_status_error(settings):
    """Test a 502 with a broken JSON body is reported by its status."""

    def handler(request):
        return httpx.Response(502, content=b"<html>bad gateway", headers={"content-type": "application/json"})

    client = HttpClient(settings, transport=httpx.MockTransport(handler))
    with pytest.raises(HttpStatusError) as excinfo:
        await client.get("/v1/ping")

    assert not isinstance(excinfo.value, ResponseParseError)
    assert excinfo.value.status == 502
    assert excinfo.value.response.data == "<html>bad gateway"
