"""Sesión del administrador: login, token bearer y usuario.

Hay un único lugar de verdad para el token: la clave `auth_token` del
`TokenStore`. La cookie del panel web se deriva del token bajo demanda
(`session_cookie`) y no se guarda aparte.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable
from urllib.parse import quote

from pydantic import ValidationError

from adapters.http_client import HttpClient
from core.config import AppSettings
from core.domain.models import AuthResponse, AuthUser, LoginCredentials
from core.errors import AuthenticationError
from core.interfaces.token_store import TokenStore

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
LEGACY_TOKEN_KEY = "token"
USER_KEY = "auth_user"
LOGIN_ENDPOINT = "/auth"
COOKIE_MAX_AGE = 60 * 60 * 24 * 7
TEMP_TOKEN_PLACEHOLDER = "tu-token-jwt-aqui"

TokenListener = Callable[[str | None], None]


@dataclass
class TokenInfo:
    """Payload de un JWT decodificado sin verificar la firma."""

    payload: dict[str, Any] = field(default_factory=dict)
    expires_at: datetime | None = None

    @property
    def expired(self) -> bool:
        return self.expires_at is not None and self.expires_at <= datetime.now(timezone.utc)


def _b64url_decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded)


def decode_token_payload(token: str) -> TokenInfo:
    """Decodifica el payload de un JWT para inspección.

    Solo lectura: no valida firma ni emisor.
    """

    parts = token.split(".")
    if len(parts) != 3:
        raise AuthenticationError("Token is not a JWT (expected three dot-separated parts)")
    try:
        payload = json.loads(_b64url_decode(parts[1]))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise AuthenticationError("Token payload is not valid base64url JSON") from exc
    if not isinstance(payload, dict):
        raise AuthenticationError("Token payload is not a JSON object")

    expires_at = None
    exp = payload.get("exp")
    if isinstance(exp, (int, float)) and not isinstance(exp, bool):
        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
    return TokenInfo(payload=payload, expires_at=expires_at)


def mask_token(token: str | None, *, visible: int = 12) -> str:
    if not token:
        return "-"
    if len(token) <= visible:
        return token[:3] + "..."
    return f"{token[:visible]}...{token[-4:]}"


class AuthService:
    def __init__(self, http: HttpClient, store: TokenStore, settings: AppSettings) -> None:
        self.http = http
        self.store = store
        self.settings = settings
        self._listeners: list[TokenListener] = []
        self._ephemeral_token: str | None = None

    def on_token_changed(self, callback: TokenListener) -> Callable[[], None]:
        """Registra un listener; devuelve una función para darlo de baja."""

        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, token: str | None) -> None:
        for listener in list(self._listeners):
            listener(token)

    async def login(self, credentials: LoginCredentials) -> AuthResponse:
        response = await self.http.post(LOGIN_ENDPOINT, credentials.model_dump())
        body = response if isinstance(response, dict) else {}
        nested = body.get("data") if isinstance(body.get("data"), dict) else {}

        token = body.get("token") or nested.get("token") or body.get("accessToken")
        if not token:
            raise AuthenticationError("No token received from server")

        self.set_token(str(token))

        user: AuthUser | None = None
        raw_user = body.get("user") or nested.get("user")
        if raw_user:
            try:
                user = AuthUser.model_validate(raw_user)
            except ValidationError as exc:
                logger.warning("Ignoring malformed user in login response: %s", exc)
            else:
                self.set_user(user)

        logger.info("Logged in as %s", credentials.email)
        return AuthResponse(token=str(token), user=user)

    def logout(self) -> str:
        """Borra la sesión y devuelve la URL de login del panel."""

        self.remove_token()
        self.remove_user()
        return f"{self.settings.app_url.rstrip('/')}/login"

    def is_authenticated(self) -> bool:
        return bool(self.get_token())

    def get_token(self) -> str | None:
        token = self.store.get(TOKEN_KEY)
        if token:
            return token

        legacy = self.store.get(LEGACY_TOKEN_KEY)
        if legacy:
            logger.debug("Migrating token from legacy key %r", LEGACY_TOKEN_KEY)
            self.store.set(TOKEN_KEY, legacy)
            self.store.remove(LEGACY_TOKEN_KEY)
            return legacy
        return self._ephemeral_token

    def set_token(self, token: str) -> None:
        self.store.set(TOKEN_KEY, token)
        self.store.remove(LEGACY_TOKEN_KEY)
        logger.debug("Token stored (%s)", mask_token(token))
        self._notify(token)

    def remove_token(self) -> None:
        self.store.remove(TOKEN_KEY)
        self.store.remove(LEGACY_TOKEN_KEY)
        self._ephemeral_token = None
        self._notify(None)

    def session_cookie(self) -> str | None:
        """Cabecera `Set-Cookie` equivalente a la que usa el panel web."""

        token = self.get_token()
        if not token:
            return None
        return f"{TOKEN_KEY}={quote(token, safe='')}; Path=/; Max-Age={COOKIE_MAX_AGE}; SameSite=Lax"

    def get_user(self) -> AuthUser | None:
        raw = self.store.get(USER_KEY)
        if not raw:
            return None
        try:
            return AuthUser.model_validate_json(raw)
        except ValidationError:
            logger.warning("Stored user is not valid; ignoring it")
            return None

    def set_user(self, user: AuthUser) -> None:
        self.store.set(USER_KEY, user.model_dump_json())

    def remove_user(self) -> None:
        self.store.remove(USER_KEY)

    def initialize(self) -> str | None:
        """Deja lista la sesión al arrancar.

        Si no hay token guardado y hay un token temporal configurado, se
        usa ese (sin persistirlo: el entorno manda en cada arranque).
        """

        token = self.get_token()
        if token:
            return token

        temp = self.settings.temp_token
        if temp and temp != TEMP_TOKEN_PLACEHOLDER:
            logger.warning("Using temporary development token from configuration")
            self._ephemeral_token = temp
            self._notify(temp)
            return temp

        logger.debug("No stored session and no temporary token configured")
        return None

    async def refresh_token(self) -> str | None:
        # El backend no expone refresh; se mantiene la firma para llamadores.
        return None
