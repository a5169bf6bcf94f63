"""Composición de dependencias para la CLI y los tests.

Un único punto que decide qué store, qué transporte y qué TTL se usan.
El `HttpClient` lee el token a través de `AuthService.get_token` en cada
petición, así un `token set` o un login se reflejan sin reconstruir nada.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from adapters.http_client import HttpClient
from adapters.repositories.metrics import MetricsRepository
from adapters.repositories.process import ProcessRepository
from adapters.repositories.talent import TalentRepository
from adapters.token_store import FileTokenStore
from core.cache import TimedCache
from core.config import AppSettings
from core.interfaces.token_store import TokenStore
from core.services.auth_service import AuthService
from core.services.catalog_service import LanguagesService, SkillsService
from core.services.enrichment import TalentEnricher
from core.services.talent_service import TalentService


@dataclass
class AppContext:
    settings: AppSettings
    store: TokenStore
    http: HttpClient
    auth: AuthService
    talents: TalentService
    processes: ProcessRepository
    metrics: MetricsRepository
    skills: SkillsService
    languages: LanguagesService


def build_context(
    settings: AppSettings | None = None,
    *,
    store: TokenStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    seed: int | None = None,
) -> AppContext:
    settings = settings or AppSettings()
    store = store or FileTokenStore(settings.resolved_storage_path())

    # El proveedor se resuelve en cada llamada; `auth` se asigna justo debajo.
    auth_ref: list[AuthService] = []
    http = HttpClient(settings, token_provider=lambda: auth_ref[0].get_token(), transport=transport)
    auth = AuthService(http, store, settings)
    auth_ref.append(auth)
    auth.initialize()

    ttl = settings.catalog_cache_ttl_seconds
    return AppContext(
        settings=settings,
        store=store,
        http=http,
        auth=auth,
        talents=TalentService(TalentRepository(http), enricher=TalentEnricher(seed)),
        processes=ProcessRepository(http, settings),
        metrics=MetricsRepository(http, settings, token_provider=auth.get_token),
        skills=SkillsService(http, cache=TimedCache(ttl)),
        languages=LanguagesService(http, cache=TimedCache(ttl)),
    )
