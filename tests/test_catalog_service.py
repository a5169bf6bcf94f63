"""Tests for the skills and languages catalog services."""

import pytest

from core.cache import TimedCache
from core.services.catalog_service import (
    DEFAULT_LANGUAGES,
    OFFLINE_LANGUAGES,
    POPULAR_SKILL_NAMES,
    LanguagesService,
    SkillsService,
)

SKILLS = [
    {"id": 1, "name": "Python", "stackId": 2, "stackName": "Backend"},
    {"skillId": 2, "skillName": "React"},
    {"id": 3, "name": "Cobol"},
]


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def skills_service(http, clock):
    return SkillsService(http, cache=TimedCache(300, clock=clock))


@pytest.fixture
def languages_service(http, clock):
    return LanguagesService(http, cache=TimedCache(300, clock=clock))


@pytest.mark.asyncio
async def test_skills_cached_within_ttl(skills_service, backend, clock):
    """Test the first successful response is cached for the TTL."""
    backend.add("GET", "/api/v1/skills", {"items": SKILLS})

    skills = await skills_service.get_all_skills()
    await skills_service.get_all_skills()
    assert [s.name for s in skills] == ["Python", "React", "Cobol"]
    assert skills[0].stack_name == "Backend"
    assert skills[1].id == "2"
    assert len(backend.requests) == 1

    clock.now = 300
    await skills_service.get_all_skills()
    assert len(backend.requests) == 2


@pytest.mark.asyncio
async def test_skills_fallback_without_cache(skills_service, backend):
    """Test the built-in list is served when the backend fails."""
    backend.add("GET", "/api/v1/skills", {}, status=500)

    skills = await skills_service.get_all_skills()
    assert [s.name for s in skills] == list(POPULAR_SKILL_NAMES)


@pytest.mark.asyncio
async def test_skills_stale_cache_on_failure(skills_service, backend, clock):
    """Test an expired cache is preferred over the static list on failure."""
    backend.add("GET", "/api/v1/skills", SKILLS)
    await skills_service.get_all_skills()

    clock.now = 1000
    backend.add("GET", "/api/v1/skills", {}, status=503)
    skills = await skills_service.get_all_skills()
    assert [s.name for s in skills] == ["Python", "React", "Cobol"]


@pytest.mark.asyncio
async def test_empty_skills_response_not_cached(skills_service, backend):
    """Test an empty catalog falls back and retries next time."""
    backend.add("GET", "/api/v1/skills", {"items": []})

    assert len(await skills_service.get_all_skills()) == len(POPULAR_SKILL_NAMES)
    await skills_service.get_all_skills()
    assert len(backend.requests) == 2


@pytest.mark.asyncio
async def test_search_and_popular(skills_service, backend):
    """Test search needs two characters and popular is capped."""
    backend.add("GET", "/api/v1/skills", SKILLS)

    assert await skills_service.search_skills("p") == []
    assert [s.name for s in await skills_service.search_skills("py")] == ["Python"]
    popular = await skills_service.get_popular_skills()
    assert [s.name for s in popular] == ["Python", "React"]


@pytest.mark.asyncio
async def test_clear_cache_forces_refetch(skills_service, backend):
    """Test clear_cache drops cached skills."""
    backend.add("GET", "/api/v1/skills", SKILLS)
    await skills_service.get_all_skills()
    skills_service.clear_cache()
    await skills_service.get_all_skills()
    assert len(backend.requests) == 2


@pytest.mark.asyncio
async def test_languages_code_derived_from_name(languages_service, backend):
    """Test missing language codes are derived from the name."""
    backend.add("GET", "/api/v1/languages", [{"id": 1, "name": "German"}, {"id": 2, "name": "Klingon"}])

    languages = await languages_service.get_all_languages()
    assert [(lang.code, lang.name) for lang in languages] == [("DE", "German"), ("EN", "Klingon")]


@pytest.mark.asyncio
async def test_languages_defaults_and_offline(languages_service, backend):
    """Test the default list on empty responses and the offline subset on errors."""
    backend.add("GET", "/api/v1/languages", [])
    assert await languages_service.get_all_languages() == list(DEFAULT_LANGUAGES)

    languages_service.clear_cache()
    backend.add("GET", "/api/v1/languages", {}, status=500)
    assert await languages_service.get_all_languages() == list(OFFLINE_LANGUAGES)
