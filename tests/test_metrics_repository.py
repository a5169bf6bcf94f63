"""Tests for the panel metrics repository."""

import threading
from datetime import date

import pytest

from adapters.repositories import metrics as metrics_module
from adapters.repositories.metrics import MetricsRepository, calculate_comparison, simulated_dashboard
from core.errors import AuthenticationError


def _live_backend(backend):
    backend.add(
        "GET",
        "/api/v1/panel/processes/status",
        [
            {"Status": "Abierto", "Count": 4},
            {"Status": "En proceso", "Count": 6},
            {"Status": "Cerrado", "Count": 10},
        ],
    )
    backend.add("GET", "/api/v1/panel/processes/monthly", [{"Month": 1, "Total": 20}, {"Month": 2, "Total": 7}])
    backend.add(
        "GET",
        "/api/v1/panel/students/status",
        [{"Status": "Disponible", "Count": 30}, {"Status": "Contratado", "Count": 10}],
    )
    backend.add(
        "GET",
        "/api/v1/panel/processes/recent",
        [{"Id": "r1", "Position": "QA", "CompanyName": "Acme", "CandidatesCount": 3}],
    )
    backend.add("GET", "/api/v1/panel/companies/most-active", [{"Id": "c1", "Name": "Acme", "ProcessesCount": 9}])


@pytest.fixture
def repo(http, settings):
    return MetricsRepository(http, settings, token_provider=lambda: "abc", today=lambda: date(2024, 6, 15))


def test_calculate_comparison():
    """Test trend and percentage against the previous period."""
    up = calculate_comparison(110, 100)
    assert (up.trend, up.percentage, up.value) == ("up", 10.0, 100)

    down = calculate_comparison(50, 100)
    assert (down.trend, down.percentage) == ("down", 50.0)

    assert calculate_comparison(5, 5).trend == "stable"
    assert calculate_comparison(5, 0).percentage == 0.0


@pytest.mark.asyncio
async def test_live_dashboard(repo, backend):
    """Test the dashboard built from live panel endpoints."""
    _live_backend(backend)

    dashboard = await repo.get_dashboard_metrics()

    assert dashboard.simulated is False
    overview = {m.type: m.value for m in dashboard.overview}
    assert overview == {
        "total_processes": 20,
        "total_candidates": 40,
        "placement_rate": 25.0,
        "active_processes": 10,
    }
    assert [m.id for m in dashboard.processes] == ["p1", "p2", "p3", "p4", "p5"]
    assert [m.id for m in dashboard.talent] == ["t1", "t2", "t3", "t4", "t5"]
    assert dashboard.trends.labels == ["January", "February"]
    assert dashboard.trends.datasets[1].data == [3.0, 1.0]
    assert dashboard.recent_processes[0].position == "QA"
    assert dashboard.most_active_companies[0].processes_count == 9

    monthly = backend.last("/api/v1/panel/processes/monthly").url.params
    assert (monthly["Month"], monthly["Year"]) == ("6", "2024")
    assert backend.last("/api/v1/panel/processes/recent").url.params["PageSize"] == "5"
    assert backend.last("/api/v1/panel/students/status").headers["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
async def test_failed_section_falls_back(repo, backend):
    """Test a failing endpoint only replaces its own section."""
    _live_backend(backend)
    backend.add("GET", "/api/v1/panel/companies/most-active", {}, status=500)

    dashboard = await repo.get_dashboard_metrics()

    assert dashboard.simulated is True
    assert dashboard.overview[0].value == 20
    assert dashboard.most_active_companies == simulated_dashboard().most_active_companies


@pytest.mark.asyncio
async def test_unauthorized_switches_to_simulated_mode(repo, backend):
    """Test a 401 makes the repository stop calling the backend."""
    backend.add("GET", "/api/v1/panel/processes/status", {}, status=401)

    first = await repo.get_dashboard_metrics()
    assert first.simulated is True
    assert repo.use_simulated_data is True

    calls = len(backend.requests)
    await repo.get_dashboard_metrics()
    assert len(backend.requests) == calls


@pytest.mark.asyncio
async def test_no_token_uses_simulated_data(http, settings, backend):
    """Test missing credentials skip the backend."""
    repo = MetricsRepository(http, settings, token_provider=lambda: None)

    dashboard = await repo.get_dashboard_metrics()
    assert dashboard.simulated is True
    assert backend.requests == []

    with pytest.raises(AuthenticationError):
        await repo.export_metrics("csv")


@pytest.mark.asyncio
async def test_export_csv_and_html(repo, backend):
    """Test text exports of the dashboard."""
    _live_backend(backend)

    csv_text = await repo.export_metrics("csv")
    assert csv_text.startswith("Category,Metric,Value,Description")
    html = await repo.export_metrics("html")
    assert "Total Processes" in html

    with pytest.raises(ValueError):
        await repo.export_metrics("xml")


@pytest.mark.asyncio
async def test_pdf_export_renders_off_the_event_loop(repo, backend, monkeypatch):
    """Test the PDF render runs in a worker thread."""
    _live_backend(backend)
    seen = {}

    def fake_render(*, dashboard, company_name):
        seen["thread"] = threading.current_thread()
        seen["company"] = company_name
        return b"%PDF-1.7"

    monkeypatch.setattr(metrics_module, "render_metrics_pdf", fake_render)

    assert await repo.export_metrics("pdf") == b"%PDF-1.7"
    assert seen["thread"] is not threading.main_thread()
    assert seen["company"] == repo.company_name
