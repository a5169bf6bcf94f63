"""Tests for the recruitment process repository."""

import json

import pytest

from adapters.repositories.process import ProcessRepository
from core.domain.process import CreateProcess, ProcessFilters, ProcessSkill, UpdateProcess
from core.domain.status import ProcessPriority, ProcessStatus
from core.errors import WiredPeopleError

COMPANY_ID = "7dd16aaa-793d-4017-8513-936df5e3010b"
OTHER_COMPANY = "00000000-0000-0000-0000-000000000000"


def _process(pid, status_id=1, company=COMPANY_ID, **extra):
    return {"id": pid, "name": f"Role {pid}", "companyId": company, "statusId": status_id, **extra}


@pytest.fixture
def repo(http, settings):
    return ProcessRepository(http, settings)


def test_build_process_query_defaults_and_fields(repo):
    """Test query parameter names and paging defaults."""
    assert repo.build_process_query(None) == {"PageNumber": 1, "PageSize": 12}

    query = repo.build_process_query(
        ProcessFilters(
            search="dev",
            priority=[ProcessPriority.HIGH],
            location="Madrid",
            remote=False,
            min_salary=1000,
            tags=["a", "b"],
            page=2,
            page_size=30,
            sort_by="createdAt",
            sort_order="asc",
        )
    )
    assert query == {
        "Search": "dev",
        "Priority": "3",
        "Location": "Madrid",
        "Remote": False,
        "MinSalary": 1000,
        "Tags": "a,b",
        "PageNumber": 2,
        "PageSize": 30,
        "OrderBy": "createdAt",
        "SortDir": "asc",
    }


@pytest.mark.asyncio
async def test_find_all_keeps_only_own_company(repo, backend):
    """Test processes of other companies are filtered out."""
    backend.add(
        "GET",
        "/api/v1/processes",
        {
            "items": [_process("p1"), _process("p2", company=OTHER_COMPANY), _process("p3", status_id=4)],
            "totalCount": 3,
            "pageNumber": 1,
            "pageSize": 12,
        },
    )

    page = await repo.find_all()
    assert [p.id for p in page.data] == ["p1", "p3"]
    assert page.data[1].status is ProcessStatus.COMPLETED


@pytest.mark.asyncio
async def test_find_all_filters_by_status(repo, backend):
    """Test status filtering is applied to the results."""
    backend.add("GET", "/api/v1/processes", [_process("p1", 1), _process("p2", 3), _process("p3", 5)])

    page = await repo.find_all(ProcessFilters(status=[ProcessStatus.IN_PROGRESS]))
    assert [p.id for p in page.data] == ["p2"]


@pytest.mark.asyncio
async def test_find_all_empty_on_error_or_unexpected_shape(repo, backend):
    """Test errors and odd shapes produce an empty page."""
    backend.add("GET", "/api/v1/processes", {}, status=500)
    assert (await repo.find_all()).data == []

    backend.add("GET", "/api/v1/processes", {"weird": True})
    assert (await repo.find_all()).data == []


@pytest.mark.asyncio
async def test_find_by_id_rejects_foreign_company(repo, backend):
    """Test a process of another company reads as missing."""
    backend.add("GET", "/api/v1/processes/p1", _process("p1"))
    backend.add("GET", "/api/v1/processes/p2", {"data": _process("p2", company=OTHER_COMPANY)})

    assert (await repo.find_by_id("p1")).name == "Role p1"
    assert await repo.find_by_id("p2") is None
    assert await repo.find_by_id("missing") is None


@pytest.mark.asyncio
async def test_create_sends_company_and_status(repo, backend):
    """Test the create payload."""
    backend.add("POST", "/api/v1/processes", {"data": _process("new")})

    created = await repo.create(
        CreateProcess(name="Backend", vacancies=2, required_skills=[ProcessSkill(name="Go", level=3)])
    )
    sent = json.loads(backend.last("/api/v1/processes").content)

    assert created.id == "new"
    assert sent["companyId"] == COMPANY_ID
    assert sent["statusId"] == 1
    assert sent["vacancies"] == 2
    assert sent["skills"] == [{"name": "Go", "level": 3}]


@pytest.mark.asyncio
async def test_update_checks_ownership_and_camelizes(repo, backend):
    """Test updates require ownership and send camelCase fields."""
    backend.add("GET", "/api/v1/processes/p1", _process("p1"))
    backend.add("PATCH", "/api/v1/processes/p1", _process("p1", status_id=4))

    updated = await repo.update("p1", UpdateProcess(status=ProcessStatus.COMPLETED, salary_min=100))
    sent = json.loads(backend.last("/api/v1/processes/p1").content)

    assert updated.status is ProcessStatus.COMPLETED
    assert sent == {"statusId": 4, "salaryMin": 100, "companyId": COMPANY_ID}

    with pytest.raises(WiredPeopleError):
        await repo.update("nope", UpdateProcess(name="x"))


@pytest.mark.asyncio
async def test_delete_returns_bool(repo, backend):
    """Test delete reports success as a boolean."""
    backend.add("GET", "/api/v1/processes/p1", _process("p1"))
    backend.add("DELETE", "/api/v1/processes/p1", {"success": True})

    assert await repo.delete("p1") is True
    assert await repo.delete("missing") is False


@pytest.mark.asyncio
async def test_candidates_assignment(repo, backend):
    """Test adding and removing candidates."""
    backend.add("POST", "/api/v1/processes/p1/students", {"success": True})
    backend.add("DELETE", "/api/v1/processes/p1/students/s1", None)

    assert await repo.add_candidates("p1", ["s1", "s2"]) is True
    assert json.loads(backend.last("/api/v1/processes/p1/students").content) == {"studentIds": ["s1", "s2"]}
    assert await repo.remove_candidate("p1", "s1") is True
    assert await repo.remove_candidate("p1", "s9") is False

    backend.add("POST", "/api/v1/processes/p1/students", {"success": False})
    assert await repo.add_candidates("p1", ["s3"]) is False


@pytest.mark.asyncio
async def test_statistics_and_active(repo, backend):
    """Test counters by status and the active helper."""
    backend.add(
        "GET",
        "/api/v1/processes",
        [_process("a", 1), _process("b", 3), _process("c", 4), _process("d", 5), _process("e", 0)],
    )

    stats = await repo.get_statistics()
    assert (stats.total, stats.active, stats.completed, stats.cancelled) == (5, 2, 1, 1)
    assert [p.id for p in await repo.find_active()] == ["a", "b"]
    assert [p.id for p in await repo.find_by_status(ProcessStatus.DRAFT)] == ["e"]
