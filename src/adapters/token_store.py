"""Almacenes de sesión (implementaciones de `TokenStore`).

- `FileTokenStore`: JSON UTF-8 en el directorio de configuración del usuario.
  Se reescribe completo en cada cambio (archivo pequeño, una sola clave
  relevante).
- `MemoryTokenStore`: dict en memoria para tests y sesiones efímeras.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from core.interfaces.token_store import TokenStore

logger = logging.getLogger(__name__)


class MemoryTokenStore(TokenStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileTokenStore(TokenStore):
    """Persistencia en un archivo JSON plano (sin cifrado)."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt session file %s", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
