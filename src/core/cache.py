"""Caché en memoria con expiración fija.

Se usa en servicios de catálogo y estadísticas. No hay invalidación más allá
del TTL o de `clear()`.
"""

from __future__ import annotations

import time
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class TimedCache(Generic[T]):
    """Mapa clave -> valor con marca de tiempo."""

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, T]] = {}

    def get(self, key: str) -> T | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self._ttl:
            return None
        return value

    def peek(self, key: str) -> T | None:
        """Devuelve el último valor guardado aunque haya expirado."""

        entry = self._entries.get(key)
        return entry[1] if entry else None

    def set(self, key: str, value: T) -> None:
        self._entries[key] = (self._clock(), value)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
