"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers, token bearer y logging en un solo lugar.
- Facilita testeo: se inyecta un `httpx.MockTransport` en vez de red real.

Contrato de `HttpClient`:
- Cada llamada reconstruye headers y lee el token del proveedor (no se cachea).
- Los interceptores se aplican en orden de registro, uno detrás de otro.
- Sin reintentos ni backoff: cualquier fallo se propaga como
  `HttpRequestError` tras pasar por los interceptores de error.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, TypeVar, Union

import httpx
from pydantic import BaseModel

from core.config import AppSettings
from core.errors import (
    ApiResponse,
    HttpNetworkError,
    HttpRequestError,
    HttpStatusError,
    HttpTimeoutError,
    ResponseParseError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.api_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


@dataclass
class RequestConfig:
    """Configuración de una petición tal como la ven los interceptores."""

    method: str = "GET"
    endpoint: str = ""
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    timeout: float | None = None


RequestInterceptor = Callable[[RequestConfig], Union[RequestConfig, Awaitable[RequestConfig]]]
ResponseInterceptor = Callable[[ApiResponse], Union[ApiResponse, Awaitable[ApiResponse]]]
ErrorInterceptor = Callable[[HttpRequestError], Union[HttpRequestError, Awaitable[HttpRequestError]]]
TokenProvider = Callable[[], Union[str, None]]


async def _resolve(value: T | Awaitable[T]) -> T:
    if inspect.isawaitable(value):
        return await value
    return value  # type: ignore[return-value]


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return ",".join(_query_value(v) for v in value)
    return str(value)


def _encode_body(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_none=True)
    return data


class HttpClient:
    """Cliente REST del backend con interceptores y token bearer."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        base_url: str | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._token_provider = token_provider
        self._transport = transport
        self.base_url = (base_url or self._settings.api_url).rstrip("/")
        self.default_headers: dict[str, str] = {"Content-Type": "application/json"}
        self._request_interceptors: list[RequestInterceptor] = []
        self._response_interceptors: list[ResponseInterceptor] = []
        self._error_interceptors: list[ErrorInterceptor] = []
        logger.debug("HttpClient initialized with base_url=%s", self.base_url)

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> "HttpClient":
        self._request_interceptors.append(interceptor)
        return self

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> "HttpClient":
        self._response_interceptors.append(interceptor)
        return self

    def add_error_interceptor(self, interceptor: ErrorInterceptor) -> "HttpClient":
        self._error_interceptors.append(interceptor)
        return self

    def build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _current_token(self) -> str | None:
        if self._token_provider is None:
            return None
        token = self._token_provider()
        return token or None

    async def request(self, config: RequestConfig) -> ApiResponse:
        """Ejecuta la petición y devuelve la respuesta parseada.

        Lanza `HttpRequestError` (o una subclase) en status no-2xx, timeout,
        fallo de red o JSON inválido.
        """

        headers = {**self.default_headers, **config.headers}
        token = self._current_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.debug("No token available; sending request without Authorization")

        final = replace(config, headers=headers, params=dict(config.params))
        for interceptor in self._request_interceptors:
            final = await _resolve(interceptor(final))

        try:
            response = await self._send(final)
        except HttpRequestError as exc:
            error = exc
            for interceptor in self._error_interceptors:
                result = await _resolve(interceptor(error))
                if isinstance(result, HttpRequestError):
                    error = result
            raise error

        for interceptor in self._response_interceptors:
            response = await _resolve(interceptor(response))
        return response

    async def _send(self, config: RequestConfig) -> ApiResponse:
        url = self.build_url(config.endpoint)
        params = {k: _query_value(v) for k, v in config.params.items() if v is not None}
        timeout = config.timeout or self._settings.api_timeout_seconds
        body = _encode_body(config.body)

        logger.debug(
            "[%s] %s params=%s auth=%s",
            config.method,
            url,
            params,
            "Authorization" in config.headers,
        )

        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                raw = await client.request(
                    config.method,
                    url,
                    params=params or None,
                    headers=config.headers,
                    json=body,
                    timeout=httpx.Timeout(timeout),
                )
        except httpx.TimeoutException as exc:
            logger.error("Request timed out after %.1fs: %s %s", timeout, config.method, url)
            raise HttpTimeoutError(f"Request timed out after {timeout:g}s") from exc
        except httpx.TransportError as exc:
            logger.error("Network error on %s %s: %s", config.method, url, exc)
            raise HttpNetworkError(f"Network error: {exc}") from exc

        logger.debug("Response status: %s", raw.status_code)
        response = self._parse(raw)

        if not response.ok:
            logger.warning(
                "Request failed: %s %s -> %s %s",
                config.method,
                url,
                response.status,
                response.status_text,
            )
            raise HttpStatusError(
                f"Request failed with status {response.status}",
                response=response,
            )
        return response

    @staticmethod
    def _parse(raw: httpx.Response) -> ApiResponse:
        content_type = raw.headers.get("content-type", "")
        base = ApiResponse(
            data=None,
            status=raw.status_code,
            status_text=raw.reason_phrase,
            headers=dict(raw.headers),
        )
        if not raw.content:
            return base
        if "application/json" in content_type:
            try:
                base.data = raw.json()
            except ValueError as exc:
                base.data = raw.text
                if not raw.is_success:
                    # El status manda: `_send` lanza `HttpStatusError`.
                    return base
                raise ResponseParseError("Response body is not valid JSON", response=base) from exc
            return base
        base.data = raw.text
        return base

    async def get(
        self,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        config: RequestConfig | None = None,
    ) -> Any:
        return await self._call("GET", endpoint, None, params, config)

    async def post(
        self,
        endpoint: str,
        data: Any = None,
        *,
        params: dict[str, Any] | None = None,
        config: RequestConfig | None = None,
    ) -> Any:
        return await self._call("POST", endpoint, data, params, config)

    async def put(
        self,
        endpoint: str,
        data: Any = None,
        *,
        params: dict[str, Any] | None = None,
        config: RequestConfig | None = None,
    ) -> Any:
        return await self._call("PUT", endpoint, data, params, config)

    async def patch(
        self,
        endpoint: str,
        data: Any = None,
        *,
        params: dict[str, Any] | None = None,
        config: RequestConfig | None = None,
    ) -> Any:
        return await self._call("PATCH", endpoint, data, params, config)

    async def delete(
        self,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        config: RequestConfig | None = None,
    ) -> Any:
        return await self._call("DELETE", endpoint, None, params, config)

    async def _call(
        self,
        method: str,
        endpoint: str,
        data: Any,
        params: dict[str, Any] | None,
        config: RequestConfig | None,
    ) -> Any:
        base = config or RequestConfig()
        merged_params = {**base.params, **(params or {})}
        request_config = replace(
            base,
            method=method,
            endpoint=endpoint,
            params=merged_params,
            headers=dict(base.headers),
            body=data if data is not None else base.body,
        )
        response = await self.request(request_config)
        return response.data
