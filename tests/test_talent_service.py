"""Tests for the talent service (validation, enrichment, caching, formatting)."""

import pytest

from adapters.repositories.talent import TalentRepository
from core.cache import TimedCache
from core.domain.models import Talent, TalentFilters
from core.services.enrichment import TalentEnricher
from core.services.talent_service import (
    TalentService,
    default_filters,
    format_talent_display,
    validate_filters,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(http, clock):
    return TalentService(
        TalentRepository(http),
        enricher=TalentEnricher(seed=7),
        cache=TimedCache(300, clock=clock),
    )


def test_validate_filters_clamps_ranges():
    """Test page, page size and scores are clamped."""
    fixed = validate_filters(
        TalentFilters(page=0, page_size=500, min_score=-10, max_score=150, min_experience=-2)
    )
    assert fixed.page == 1
    assert fixed.page_size == 100
    assert fixed.min_score == 0
    assert fixed.max_score == 100
    assert fixed.min_experience == 0

    assert validate_filters(TalentFilters(page_size=0)).page_size == 1
    assert validate_filters(TalentFilters(page=-5)).page == 1


def test_validate_filters_keeps_valid_values():
    """Test in-range values are untouched."""
    filters = TalentFilters(page=3, page_size=20, min_score=40, max_score=80, max_experience=5)
    assert validate_filters(filters) == filters


def test_default_filters():
    """Test the default listing filters."""
    filters = default_filters()
    assert (filters.page, filters.page_size, filters.sort_by, filters.sort_order) == (1, 12, "score", "desc")
    assert filters.status == [1]


def test_format_talent_display_known_and_unknown_status():
    """Test display labels and colors, including the unknown fallback."""
    hired = format_talent_display(
        Talent(id="1", first_name="Ana", last_name="Pérez", title="Data Engineer", status_id=3)
    )
    assert hired.full_name == "Ana Pérez"
    assert hired.initials == "AP"
    assert hired.title == "Data Engineer"
    assert (hired.status_label, hired.status_color) == ("Hired", "info")

    unknown = format_talent_display(Talent(id="2", first_name="Bo", status_id=99))
    assert (unknown.status_label, unknown.status_color) == ("Unknown", "default")
    assert unknown.title == "Professional"


@pytest.mark.asyncio
async def test_get_talents_validates_and_enriches(service, backend):
    """Test filters are clamped before the request and records are enriched."""
    backend.add(
        "GET",
        "/api/v1/students",
        {"items": [{"id": "s1", "firstName": "Ana", "lastName": "Pérez", "email": "ana@example.com"}]},
    )

    page = await service.get_talents(TalentFilters(page=0, page_size=1000))

    params = backend.last("/api/v1/students").url.params
    assert params["PageNumber"] == "1"
    assert params["PageSize"] == "100"
    talent = page.data[0]
    assert talent.email == "ana@example.com"
    assert talent.skills
    assert talent.bio
    assert talent.salary is not None


@pytest.mark.asyncio
async def test_get_talent_by_id_none_on_error(service):
    """Test detail errors become None."""
    assert await service.get_talent_by_id("missing") is None


@pytest.mark.asyncio
async def test_statistics_cached_until_ttl(service, backend, clock):
    """Test statistics are served from cache within the TTL."""
    backend.add("GET", "/api/v1/panel/students/status", [{"Status": "Disponible", "Count": 2}])

    first = await service.get_statistics()
    await service.get_statistics()
    assert first.available == 2
    assert len(backend.requests) == 1

    clock.now = 301
    await service.get_statistics()
    assert len(backend.requests) == 2

    service.clear_cache()
    await service.get_statistics()
    assert len(backend.requests) == 3


@pytest.mark.asyncio
async def test_statistics_failure_is_not_cached(service, backend, clock):
    """Test a failed fetch is retried on the next call within the TTL."""
    backend.add("GET", "/api/v1/panel/students/status", {}, status=500)
    failed = await service.get_statistics()
    assert failed.total == 0

    backend.add("GET", "/api/v1/panel/students/status", [{"Status": "Disponible", "Count": 4}])
    clock.now = 10
    recovered = await service.get_statistics()
    assert (recovered.total, recovered.available) == (4, 4)


@pytest.mark.asyncio
async def test_statistics_failure_serves_stale_value(service, backend, clock):
    """Test an expired value is served while the backend is failing."""
    backend.add("GET", "/api/v1/panel/students/status", [{"Status": "Contratado", "Count": 3}])
    await service.get_statistics()

    backend.add("GET", "/api/v1/panel/students/status", {}, status=503)
    clock.now = 301
    assert (await service.get_statistics()).hired == 3


def test_export_csv_delegates(service):
    """Test CSV export through the service."""
    csv_text = service.export_csv([Talent(id="1", first_name="Ana", email="a@x.io")])
    assert csv_text.splitlines()[0].startswith("ID,First Name,Last Name")
    assert len(csv_text.splitlines()) == 2
