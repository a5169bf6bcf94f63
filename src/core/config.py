"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP, token store, exportadores) lean config de
  forma consistente.

Compatibilidad:
- Se aceptan también los nombres `NEXT_PUBLIC_*` del panel web (Next.js) para
  poder reutilizar un `.env.local` existente sin renombrar variables.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "wired-people"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "wired-people"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "wired-people"
    return Path.home() / ".config" / "wired-people"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` se ignoran (no borran lo existente).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# Wired People admin user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="WIRED_PEOPLE_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default="http://localhost:5162/api",
        min_length=8,
        validation_alias=AliasChoices("WIRED_PEOPLE_API_URL", "NEXT_PUBLIC_API_URL"),
        description="Base URL del backend REST (incluye el prefijo /api).",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        min_length=8,
        validation_alias=AliasChoices("WIRED_PEOPLE_APP_URL", "NEXT_PUBLIC_APP_URL"),
        description="URL pública del panel (destino de logout).",
    )
    api_timeout_ms: int = Field(
        default=30_000,
        gt=0,
        validation_alias=AliasChoices("WIRED_PEOPLE_API_TIMEOUT_MS", "NEXT_PUBLIC_API_TIMEOUT"),
        description="Timeout por request (milisegundos).",
    )
    temp_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WIRED_PEOPLE_TEMP_TOKEN", "NEXT_PUBLIC_TEMP_TOKEN"),
        description="Token de desarrollo usado cuando no hay sesión guardada.",
    )
    user_agent: str = Field(
        default="wired-people-admin/0.1",
        min_length=1,
        description="User-Agent para peticiones al backend.",
    )

    company_id: str = Field(
        default="7dd16aaa-793d-4017-8513-936df5e3010b",
        min_length=1,
        description="Compañía cuyos procesos se muestran (el backend es multi-empresa).",
    )
    company_name: str = Field(
        default="Wired People Inc.",
        min_length=1,
        description="Nombre mostrado para procesos sin compañía explícita.",
    )

    storage_path: Path | None = Field(
        default=None,
        description="Ruta del JSON donde se guarda la sesión (token/usuario).",
    )
    catalog_cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0,
        description="TTL de la caché en memoria de skills/languages (segundos).",
    )
    default_page_size: int = Field(
        default=12,
        ge=1,
        le=100,
        description="Tamaño de página por defecto en listados.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    @property
    def api_timeout_seconds(self) -> float:
        return self.api_timeout_ms / 1000

    def resolved_storage_path(self) -> Path:
        return self.storage_path or get_user_config_dir() / "storage.json"
