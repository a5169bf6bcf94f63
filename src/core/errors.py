"""Errores del dominio.

Por qué una jerarquía propia:
- La CLI captura `WiredPeopleError` en un único punto y muestra un mensaje.
- Los repositorios distinguen fallos HTTP (con respuesta) de fallos de red sin
  depender de excepciones de httpx.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class ApiResponse:
    """Respuesta HTTP ya parseada (cuerpo JSON o texto)."""

    data: Any
    status: int
    status_text: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class WiredPeopleError(Exception):
    """Base de todos los errores de la aplicación."""


class HttpRequestError(WiredPeopleError):
    """Fallo de una llamada HTTP.

    `response` es None cuando no hubo respuesta (red, timeout).
    """

    def __init__(self, message: str, *, response: ApiResponse | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.response = response

    @property
    def status(self) -> int | None:
        return self.response.status if self.response is not None else None


class HttpStatusError(HttpRequestError):
    """El servidor respondió con un status fuera de 2xx."""


class HttpTimeoutError(HttpRequestError):
    """La llamada superó el timeout configurado."""


class HttpNetworkError(HttpRequestError):
    """Fallo de conexión o transporte."""


class ResponseParseError(HttpRequestError):
    """El cuerpo se declaró JSON pero no se pudo parsear."""


class AuthenticationError(WiredPeopleError):
    """Falta el token o el backend no devolvió uno."""
