"""Tests for the talent repository and student normalization."""

import json

import pytest

from adapters import normalizers
from adapters.repositories.talent import TalentRepository, build_filter_query, statistics_from_api
from core.domain.models import CreateTalent, Skill, TalentFilters, TalentLanguage, UpdateTalent
from core.domain.status import TalentStatus
from core.errors import HttpStatusError

STUDENT = {
    "studentId": 42,
    "firstName": "Ana",
    "lastName": "Pérez",
    "email": "ana@example.com",
    "phoneNumber": "+34 600 000 000",
    "profilePictureUrl": "https://cdn.test/ana.png",
    "siteId": "2",
    "cohortId": "1",
    "stackId": "3",
    "employabilityStatus": 6,
    "score": 130,
    "studentSkills": [{"skillId": 7, "skillName": "Python", "level": 3}],
    "studentLanguages": [{"languageId": 1, "language": "Spanish", "level": "C2"}],
    "createdAt": "2024-03-01T10:00:00Z",
}


@pytest.fixture
def repo(http):
    return TalentRepository(http)


def test_build_filter_query_maps_all_fields():
    """Test filters translate to backend query names."""
    filters = TalentFilters(
        page=2,
        page_size=5,
        sort_by="score",
        sort_order="desc",
        search="ana",
        status=[1, 2],
        skills=[Skill(name="Python", level=3), Skill(name="SQL", level=2)],
        languages=[TalentLanguage(code="EN", level="C1")],
        min_score=10,
        max_score=90,
    )
    assert build_filter_query(filters) == {
        "PageNumber": 2,
        "PageSize": 5,
        "OrderBy": "score",
        "SortDir": "desc",
        "search": "ana",
        "status": "1,2",
        "skills": "Python:3,SQL:2",
        "languages": "EN:C1",
        "minScore": 10,
        "maxScore": 90,
    }


def test_build_filter_query_keeps_raw_skill_string():
    """Test string skills/languages pass through untouched."""
    query = build_filter_query(TalentFilters(skills="React:4", languages="ES:B2"))
    assert query == {"skills": "React:4", "languages": "ES:B2"}


def test_talent_from_api_uses_candidate_keys():
    """Test alternative backend keys are normalized."""
    talent = normalizers.talent_from_api(STUDENT)

    assert talent.id == "42"
    assert talent.phone == "+34 600 000 000"
    assert talent.avatar == "https://cdn.test/ana.png"
    assert talent.full_name == "Ana Pérez"
    assert talent.initials == "AP"
    assert talent.status_id == TalentStatus.HIRED
    assert talent.score == 100
    assert [s.name for s in talent.skills] == ["Python"]
    assert talent.languages[0].code == "ES"
    assert talent.created_at.year == 2024
    assert talent.site and talent.cohort and talent.stack


def test_talent_from_api_splits_single_name():
    """Test a bare `name` is split into first and last name."""
    talent = normalizers.talent_from_api({"id": "1", "name": "Luis Gómez Ruiz", "email": "l@x.io"})
    assert talent.first_name == "Luis"
    assert talent.first_last_name == "Gómez Ruiz"
    assert talent.status_id == TalentStatus.AVAILABLE


@pytest.mark.asyncio
async def test_find_all_parses_items_page(repo, backend):
    """Test the paginated `items` shape becomes a TalentPage."""
    backend.add(
        "GET",
        "/api/v1/students",
        {"items": [STUDENT], "totalCount": 11, "pageNumber": 1, "pageSize": 5},
    )

    page = await repo.find_all(TalentFilters(page=1, page_size=5))

    assert page.total == 11
    assert page.total_pages == 3
    assert page.has_next_page is True
    assert page.has_previous_page is False
    assert page.data[0].email == "ana@example.com"


@pytest.mark.asyncio
async def test_find_all_accepts_bare_list(repo, backend):
    """Test a bare list response is a single page."""
    backend.add("GET", "/api/v1/students", [STUDENT, {**STUDENT, "studentId": 43}])

    page = await repo.find_all()
    assert page.total == 2
    assert page.total_pages == 1


@pytest.mark.asyncio
async def test_find_all_returns_empty_page_on_error(repo, backend):
    """Test list errors are logged and produce an empty page."""
    backend.add("GET", "/api/v1/students", {"message": "unauthorized"}, status=401)

    page = await repo.find_all(TalentFilters(page=3, page_size=7))
    assert page.data == []
    assert page.total == 0
    assert page.page == 3
    assert page.page_size == 7


@pytest.mark.asyncio
async def test_find_by_id_unwraps_data(repo, backend):
    """Test `{data: {...}}` detail responses are unwrapped."""
    backend.add("GET", "/api/v1/students/42", {"data": STUDENT})
    talent = await repo.find_by_id(42)
    assert talent.id == "42"


@pytest.mark.asyncio
async def test_find_by_id_propagates(repo):
    """Test detail errors propagate."""
    with pytest.raises(HttpStatusError):
        await repo.find_by_id("nope")


@pytest.mark.asyncio
async def test_create_and_update_payloads(repo, backend):
    """Test the student DTO sent on create (POST) and update (PATCH)."""
    backend.add("POST", "/api/v1/students", {"data": STUDENT})
    backend.add("PATCH", "/api/v1/students/42", STUDENT)

    await repo.create(CreateTalent(first_name="Ana", last_name="Pérez", email="ana@example.com"))
    sent = json.loads(backend.last("/api/v1/students").content)
    assert sent == {
        "firstName": "Ana",
        "lastName": "Pérez",
        "email": "ana@example.com",
        "stackId": 1,
        "cohortId": 1,
        "employabilityStatus": 1,
    }

    await repo.update(42, UpdateTalent(phone="123", status=TalentStatus.HIRED))
    patched = json.loads(backend.last("/api/v1/students/42").content)
    assert patched["phone"] == "123"
    assert patched["employabilityStatus"] == 3


@pytest.mark.asyncio
async def test_statistics_from_status_list(repo, backend):
    """Test panel status counts become TalentStatistics."""
    backend.add(
        "GET",
        "/api/v1/panel/students/status",
        [
            {"Status": "Disponible", "Count": 4},
            {"Status": "En proceso", "Count": 2},
            {"Status": "Contratado", "Count": 1},
            {"Status": "Inactivo", "Count": 3},
        ],
    )
    stats = await repo.get_statistics()
    assert (stats.total, stats.available, stats.in_process, stats.hired) == (10, 4, 2, 1)


@pytest.mark.asyncio
async def test_statistics_zero_on_error(repo, backend):
    """Test statistics fall back to zeros."""
    backend.add("GET", "/api/v1/panel/students/status", {}, status=500)
    stats = await repo.get_statistics()
    assert stats.total == 0 and stats.hired == 0


def test_statistics_from_dict_shape():
    """Test the dict-with-counters shape."""
    stats = statistics_from_api({"total": 9, "active": 5, "inProgress": 3, "employed": 1})
    assert (stats.total, stats.available, stats.in_process, stats.hired) == (9, 5, 3, 1)


@pytest.mark.asyncio
async def test_available_and_skill_search_queries(repo, backend):
    """Test helper queries send the expected filters."""
    backend.add("GET", "/api/v1/students", {"items": []})

    await repo.get_available_talents(TalentFilters(status=[2, 3]))
    assert backend.last("/api/v1/students").url.params["status"] == "1"

    await repo.search_by_skill("Python", 3)
    params = backend.last("/api/v1/students").url.params
    assert params["skills"] == "Python:3"
    assert params["PageSize"] == "20"


@pytest.mark.asyncio
async def test_find_all_tolerates_null_nested_fields(repo, backend):
    """Test nulls in experience and education do not break the listing."""
    backend.add(
        "GET",
        "/api/v1/students",
        {
            "items": [
                {
                    "id": "1",
                    "firstName": "Ana",
                    "experience": [
                        {"company": None, "position": "Dev", "startDate": "2020-01-01", "technologies": None}
                    ],
                    "education": [{"institution": "UPM", "degree": None, "field": None, "endDate": "2019-06-30"}],
                }
            ],
            "totalCount": 1,
        },
    )

    page = await repo.find_all()

    talent = page.data[0]
    assert talent.experience[0].company == ""
    assert talent.experience[0].position == "Dev"
    assert talent.experience[0].start_date == "2020-01-01"
    assert talent.experience[0].technologies == []
    assert talent.education[0].institution == "UPM"
    assert talent.education[0].degree == ""
    assert talent.education[0].end_date == "2019-06-30"


@pytest.mark.asyncio
async def test_find_all_skips_records_that_fail_validation(repo, backend):
    """Test one malformed record is dropped and the rest are returned."""
    backend.add(
        "GET",
        "/api/v1/students",
        {
            "items": [
                {"id": "bad", "firstName": "Bo", "salary": {"min": "not-a-number"}},
                {"id": "good", "firstName": "Ana"},
            ],
            "totalCount": 2,
        },
    )

    page = await repo.find_all()

    assert [t.id for t in page.data] == ["good"]
    assert page.total == 2
