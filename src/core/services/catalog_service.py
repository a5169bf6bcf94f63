"""Catálogos de skills e idiomas.

Ambos catálogos cambian poco: se cachean en memoria con TTL y, si el
backend falla, se sirve lo último que se obtuvo (aunque haya expirado) o
una lista estática.
"""

from __future__ import annotations

import logging

from adapters import normalizers
from adapters.http_client import HttpClient
from core.cache import TimedCache
from core.domain.models import CatalogLanguage, CatalogSkill
from core.errors import HttpRequestError

logger = logging.getLogger(__name__)

SKILLS_ENDPOINT = "/v1/skills"
LANGUAGES_ENDPOINT = "/v1/languages"
DEFAULT_TTL_SECONDS = 5 * 60
MIN_QUERY_LENGTH = 2
MAX_POPULAR = 20

POPULAR_SKILL_NAMES: tuple[str, ...] = (
    "JavaScript",
    "TypeScript",
    "React",
    "Node.js",
    "Python",
    "Java",
    "C#",
    ".NET",
    "SQL",
    "MongoDB",
    "AWS",
    "Docker",
    "Git",
    "REST API",
    "GraphQL",
    "HTML",
    "CSS",
    "Angular",
    "Vue.js",
    "PHP",
    "Laravel",
    "Spring Boot",
    "Kubernetes",
)

DEFAULT_LANGUAGES: tuple[CatalogLanguage, ...] = (
    CatalogLanguage(id="1", code="EN", name="English"),
    CatalogLanguage(id="2", code="ES", name="Spanish"),
    CatalogLanguage(id="3", code="FR", name="French"),
    CatalogLanguage(id="4", code="DE", name="German"),
    CatalogLanguage(id="5", code="PT", name="Portuguese"),
    CatalogLanguage(id="6", code="IT", name="Italian"),
    CatalogLanguage(id="7", code="ZH", name="Chinese"),
    CatalogLanguage(id="8", code="JA", name="Japanese"),
)

# Subconjunto que se sirve cuando el backend falla y no hay nada en caché.
OFFLINE_LANGUAGES: tuple[CatalogLanguage, ...] = DEFAULT_LANGUAGES[:5]

_CACHE_KEY = "all"


def fallback_skills() -> list[CatalogSkill]:
    return [CatalogSkill(id=f"popular-{i}", name=name) for i, name in enumerate(POPULAR_SKILL_NAMES, 1)]


class SkillsService:
    def __init__(
        self,
        http: HttpClient,
        *,
        cache: TimedCache[list[CatalogSkill]] | None = None,
    ) -> None:
        self.http = http
        self._cache: TimedCache[list[CatalogSkill]] = cache or TimedCache(DEFAULT_TTL_SECONDS)

    async def get_all_skills(self) -> list[CatalogSkill]:
        cached = self._cache.get(_CACHE_KEY)
        if cached is not None:
            return cached

        try:
            response = await self.http.get(SKILLS_ENDPOINT)
        except HttpRequestError as exc:
            stale = self._cache.peek(_CACHE_KEY)
            logger.error("Error fetching skills: %s", exc.message)
            return stale if stale is not None else fallback_skills()

        skills = [
            normalizers.catalog_skill_from_api(item)
            for item in normalizers.extract_items(response, "items", "data")
            if isinstance(item, dict)
        ]
        if not skills:
            logger.info("Skills catalog is empty; using the built-in list")
            return fallback_skills()

        self._cache.set(_CACHE_KEY, skills)
        return skills

    async def search_skills(self, query: str) -> list[CatalogSkill]:
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            return []
        term = query.strip().lower()
        return [s for s in await self.get_all_skills() if term in s.name.lower()]

    async def get_popular_skills(self) -> list[CatalogSkill]:
        popular = {name.lower() for name in POPULAR_SKILL_NAMES}
        skills = await self.get_all_skills()
        return [s for s in skills if s.name.lower() in popular][:MAX_POPULAR]

    def clear_cache(self) -> None:
        self._cache.clear()


class LanguagesService:
    def __init__(
        self,
        http: HttpClient,
        *,
        cache: TimedCache[list[CatalogLanguage]] | None = None,
    ) -> None:
        self.http = http
        self._cache: TimedCache[list[CatalogLanguage]] = cache or TimedCache(DEFAULT_TTL_SECONDS)

    async def get_all_languages(self) -> list[CatalogLanguage]:
        cached = self._cache.get(_CACHE_KEY)
        if cached is not None:
            return cached

        try:
            response = await self.http.get(LANGUAGES_ENDPOINT)
        except HttpRequestError as exc:
            stale = self._cache.peek(_CACHE_KEY)
            logger.error("Error fetching languages: %s", exc.message)
            return stale if stale is not None else list(OFFLINE_LANGUAGES)

        languages = [
            normalizers.catalog_language_from_api(item)
            for item in normalizers.extract_items(response, "items", "data")
            if isinstance(item, dict)
        ]
        if not languages:
            languages = list(DEFAULT_LANGUAGES)

        self._cache.set(_CACHE_KEY, languages)
        return languages

    def clear_cache(self) -> None:
        self._cache.clear()
