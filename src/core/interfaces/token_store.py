"""Contrato de almacenamiento de sesión.

Por qué Protocol:
- Es el equivalente a `localStorage`: un mapa clave -> texto persistente.
- El servicio de auth no sabe si detrás hay un JSON en disco o un dict en
  memoria (tests, sesiones efímeras).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenStore(Protocol):
    """Almacén clave/valor de texto plano.

    Reglas de diseño:
    - `get` devuelve None si la clave no existe.
    - `remove` de una clave inexistente no es un error.
    """

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...
