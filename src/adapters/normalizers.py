"""Normalización de respuestas del backend.

El backend (y sus distintas versiones) no es consistente: el mismo dato
llega con nombres distintos (`phone`/`phoneNumber`, `items`/`data`/
`students`...). Aquí se reduce todo a los modelos del dominio.

Regla general: el primer valor "truthy" de la lista de claves gana,
igual que un encadenado `a or b or c`.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, TypeVar

from pydantic import ValidationError

from core import lookups
from core.domain.metrics import ActiveCompany, MonthlyProcesses, RecentProcess, StatusCount
from core.domain.models import (
    CatalogLanguage,
    CatalogSkill,
    Education,
    Experience,
    SalaryRange,
    Skill,
    Talent,
    TalentLanguage,
    TalentPage,
)
from core.domain.process import Process, ProcessLanguage, ProcessSkill
from core.domain.status import ProcessPriority, ProcessStatus, TalentStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

LANGUAGE_CODES: dict[str, str] = {
    "English": "EN",
    "Spanish": "ES",
    "French": "FR",
    "German": "DE",
    "Portuguese": "PT",
    "Italian": "IT",
    "Chinese": "ZH",
    "Japanese": "JA",
    "Korean": "KO",
    "Russian": "RU",
}


def first(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return default


def _str_or_none(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _score(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return max(0.0, min(100.0, float(value)))


def _datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable timestamp %r", value)
        return None


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def language_code(name: Any) -> str:
    """Código corto a partir del nombre en inglés; `EN` si no se conoce."""

    return LANGUAGE_CODES.get(str(name), "EN") if name else "EN"


def unwrap(response: Any) -> Any:
    """Devuelve `response["data"]` si existe; si no, la respuesta tal cual."""

    if isinstance(response, dict) and response.get("data"):
        return response["data"]
    return response


def extract_items(response: Any, *keys: str) -> list[Any]:
    if isinstance(response, list):
        return response
    if isinstance(response, dict):
        for key in keys:
            value = response.get(key)
            if isinstance(value, list):
                return value
    return []


def skills_from_api(raw: Iterable[Any]) -> list[Skill]:
    skills: list[Skill] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        nested = item.get("skill") if isinstance(item.get("skill"), dict) else {}
        level = _int_or_none(first(item, "level", "skillLevel")) or 1
        skills.append(
            Skill(
                id=_str_or_none(first(item, "id", "skillId")),
                name=str(first(item, "name", "skillName") or nested.get("name") or ""),
                level=max(1, min(5, level)),
                category=_str_or_none(first(item, "category", "type")),
            )
        )
    return skills


def languages_from_api(raw: Iterable[Any]) -> list[TalentLanguage]:
    languages: list[TalentLanguage] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        languages.append(
            TalentLanguage(
                id=_str_or_none(first(item, "id", "languageId")),
                code=str(first(item, "code", "languageCode") or language_code(item.get("language"))),
                name=str(first(item, "name", "languageName", "language", default="")),
                level=str(first(item, "level", "languageLevel", default="B1")),
            )
        )
    return languages


def experience_from_api(raw: Iterable[Any]) -> list[Experience]:
    """Experiencia laboral; los `null` del backend pasan a cadena/lista vacía."""

    experience: list[Experience] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        experience.append(
            Experience(
                id=_str_or_none(first(item, "id", "experienceId")),
                company=str(first(item, "company", "companyName", default="")),
                position=str(first(item, "position", "role", "title", default="")),
                start_date=_str_or_none(first(item, "startDate", "start_date", "from")),
                end_date=_str_or_none(first(item, "endDate", "end_date", "to")),
                description=_str_or_none(item.get("description")),
                technologies=[str(t) for t in _list(first(item, "technologies", "skills")) if t],
            )
        )
    return experience


def education_from_api(raw: Iterable[Any]) -> list[Education]:
    education: list[Education] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        education.append(
            Education(
                id=_str_or_none(first(item, "id", "educationId")),
                institution=str(first(item, "institution", "institutionName", "school", default="")),
                degree=str(first(item, "degree", "title", default="")),
                field=str(first(item, "field", "fieldOfStudy", default="")),
                start_date=_str_or_none(first(item, "startDate", "start_date", "from")),
                end_date=_str_or_none(first(item, "endDate", "end_date", "to")),
                description=_str_or_none(item.get("description")),
            )
        )
    return education


def _salary(student: Mapping[str, Any]) -> SalaryRange | None:
    raw = student.get("salary")
    if isinstance(raw, dict):
        return SalaryRange.model_validate(raw)
    low, high = student.get("salaryMin"), student.get("salaryMax")
    if low is None and high is None:
        return None
    return SalaryRange(min=low, max=high)


def talent_from_api(student: Mapping[str, Any]) -> Talent:
    """Convierte un "student" del backend en `Talent`.

    Sede, cohorte y stack se derivan de la identidad (ver `core.lookups`);
    el backend solo envía ids.
    """

    name_parts = str(student.get("name") or "").split(" ")
    derived_stack = lookups.stack_for(_str_or_none(student.get("stackId")), student)
    raw_status = first(student, "status", "employabilityStatus")

    status_id = _int_or_none(first(student, "statusId", "employabilityId"))
    if status_id is None:
        status_id = int(TalentStatus.from_student_status(raw_status))

    years = first(student, "yearsOfExperience")
    if years is None and not isinstance(student.get("experience"), list):
        years = student.get("experience")

    skills_raw = student.get("skills")
    languages_raw = student.get("languages")

    return Talent(
        id=str(first(student, "id", "studentId", default="")),
        first_name=str(first(student, "firstName") or name_parts[0]),
        second_name=_str_or_none(student.get("secondName")),
        first_last_name=str(
            first(student, "firstLastName", "lastName") or " ".join(name_parts[1:])
        ),
        second_last_name=_str_or_none(student.get("secondLastName")),
        last_name=_str_or_none(first(student, "lastName", "firstLastName")),
        email=str(student.get("email") or ""),
        phone=_str_or_none(first(student, "phone", "phoneNumber")),
        avatar=_str_or_none(first(student, "avatar", "profilePictureUrl", "photo")),
        title=str(first(student, "title", "profile") or derived_stack or "Professional"),
        stack=str(first(student, "stack") or derived_stack or student.get("profile") or ""),
        stack_id=_str_or_none(student.get("stackId")),
        profile=_str_or_none(student.get("profile")),
        description=_str_or_none(first(student, "description", "bio", "about")),
        location=_str_or_none(first(student, "location", "city", "address")),
        site=lookups.site_for(_str_or_none(student.get("siteId")), student),
        site_id=_str_or_none(student.get("siteId")),
        cohort=str(first(student, "cohort") or lookups.cohort_for(_str_or_none(student.get("cohortId")), student)),
        cohort_id=_str_or_none(student.get("cohortId")),
        birth_date=_str_or_none(student.get("birthDate")),
        years_of_experience=max(0, _int_or_none(years) or 0) if years is not None else None,
        hourly_rate=_str_or_none(student.get("hourlyRate")),
        salary=_salary(student),
        availability=_str_or_none(first(student, "availability", "availableDate")),
        status=raw_status,
        status_id=status_id,
        score=_score(first(student, "score", "rating", "averageScore")),
        ranking=_int_or_none(student.get("ranking")),
        match_score=_score(student.get("matchScore")),
        match_count=_int_or_none(student.get("matchCount")),
        skills=(
            skills_from_api(skills_raw)
            if isinstance(skills_raw, list) and skills_raw
            else skills_from_api(_list(student.get("studentSkills")))
        ),
        languages=(
            languages_from_api(languages_raw)
            if isinstance(languages_raw, list) and languages_raw
            else languages_from_api(_list(student.get("studentLanguages")))
        ),
        experience=experience_from_api(_list(student.get("experience"))),
        education=education_from_api(_list(student.get("education"))),
        certifications=[str(c) for c in _list(student.get("certifications"))],
        media=_list(student.get("media")),
        links=_list(student.get("links")),
        portfolio=_str_or_none(first(student, "portfolio", "website")),
        linkedin=_str_or_none(first(student, "linkedin", "linkedIn")),
        github=_str_or_none(first(student, "github", "gitHub")),
        resume=_str_or_none(first(student, "resume", "cv", "cvUrl")),
        created_at=_datetime(first(student, "createdAt", "createdDate")),
        updated_at=_datetime(first(student, "updatedAt", "modifiedDate")),
        last_activity_at=_datetime(student.get("lastActivityAt")),
        active_processes=(
            _int_or_none(student.get("activeProcesses"))
            if student.get("activeProcesses") is not None
            else _int_or_none(student.get("processCount")) or 0
        ),
        completed_processes=_int_or_none(student.get("completedProcesses")),
        tags=[str(t) for t in _list(student.get("tags"))],
        specializations=(
            [str(s) for s in _list(student.get("specializations"))]
            or ([str(student["stack"])] if student.get("stack") else [])
        ),
    )


def _transform_all(records: Iterable[Any], transform: Callable[[dict[str, Any]], T]) -> list[T]:
    items: list[T] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        try:
            items.append(transform(record))
        except ValidationError as exc:
            logger.warning("Skipping malformed record %r: %s", record.get("id"), exc)
    return items


def paginate(
    response: Any,
    transform: Callable[[dict[str, Any]], T],
    *,
    item_keys: tuple[str, ...] = ("data", "items", "students"),
    default_page_size: int = 10,
) -> tuple[list[T], dict[str, Any]]:
    """Extrae registros y metadatos de paginación de cualquier forma conocida.

    Devuelve `(items, meta)` con `meta` = total, page, page_size,
    total_pages, has_next_page, has_previous_page.
    """

    if isinstance(response, list):
        items = _transform_all(response, transform)
        return items, {
            "total": len(response),
            "page": 1,
            "page_size": len(response),
            "total_pages": 1,
            "has_next_page": False,
            "has_previous_page": False,
        }

    body = response if isinstance(response, dict) else {}
    raw_items = extract_items(body, *item_keys)
    items = _transform_all(raw_items, transform)

    page = _int_or_none(first(body, "pageNumber", "page", "currentPage")) or 1
    page_size = _int_or_none(first(body, "pageSize", "itemsPerPage", "perPage")) or default_page_size
    total = _int_or_none(first(body, "totalCount", "total", "totalItems"))
    if total is None:
        total = len(raw_items)
    total_pages = _int_or_none(first(body, "totalPages", "pages"))
    if total_pages is None:
        total_pages = math.ceil(total / page_size) if page_size else 0

    has_next = body.get("hasNextPage")
    has_prev = body.get("hasPreviousPage")
    return items, {
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "has_next_page": bool(has_next) if has_next is not None else page < total_pages,
        "has_previous_page": bool(has_prev) if has_prev is not None else page > 1,
    }


def talent_page_from_api(response: Any) -> TalentPage:
    items, meta = paginate(response, talent_from_api)
    return TalentPage(data=items, **meta)


def process_from_api(data: Mapping[str, Any], *, company_id: str, company_name: str) -> Process:
    skills_raw = first(data, "skills", "processSkills", default=[])
    languages_raw = first(data, "languages", "processLanguages", default=[])
    created = _datetime(first(data, "createdAt", "createdDate"))

    return Process(
        id=str(first(data, "id", "processId", default="")),
        name=str(first(data, "name", "title", default="")),
        description=str(data.get("description") or ""),
        company_id=str(first(data, "companyId", default=company_id)),
        company_name=str(first(data, "companyName", "companyEmail", default=company_name)),
        company_image=_str_or_none(data.get("companyImage")),
        status=ProcessStatus.from_api_id(
            data["statusId"] if data.get("statusId") is not None else data.get("status")
        ),
        status_name=_str_or_none(data.get("statusName")),
        priority=ProcessPriority.parse(data.get("priority")),
        vacancies=max(0, _int_or_none(data.get("vacancies")) or 1),
        students_count=max(0, _int_or_none(data.get("studentsCount")) or 0),
        location=_str_or_none(data.get("location")),
        remote=bool(data.get("remote")),
        required_skills=[
            ProcessSkill(
                id=_str_or_none(first(s, "id", "skillId")),
                name=str(first(s, "name", "skillName", default="")),
                level=_int_or_none(first(s, "level", "skillLevel")) or 1,
                required=bool(s["required"]) if s.get("required") is not None else True,
            )
            for s in _list(skills_raw)
            if isinstance(s, dict)
        ],
        required_languages=[
            ProcessLanguage(
                id=_str_or_none(first(lang, "id", "languageId")),
                code=str(first(lang, "code", "languageCode", default="EN")),
                name=str(first(lang, "name", "languageName", default="")),
                level=str(first(lang, "level", "languageLevel", default="B1")),
                required=bool(lang.get("required") or False),
            )
            for lang in _list(languages_raw)
            if isinstance(lang, dict)
        ],
        min_experience=_int_or_none(data.get("minExperience")),
        max_experience=_int_or_none(data.get("maxExperience")),
        salary_min=data.get("salaryMin"),
        salary_max=data.get("salaryMax"),
        currency=str(data.get("currency") or "USD"),
        deadline=_datetime(data.get("deadline")),
        created_at=created,
        updated_at=_datetime(data.get("updatedAt") or data.get("modifiedDate")) or created,
        created_by_id=_str_or_none(data.get("createdById")),
        created_by_name=str(data.get("createdByName") or "Admin"),
        tags=[str(t) for t in _list(data.get("tags"))],
    )


def catalog_skill_from_api(item: Mapping[str, Any]) -> CatalogSkill:
    return CatalogSkill(
        id=str(first(item, "id", "skillId", default="")),
        name=str(first(item, "name", "skillName", default="")),
        stack_id=item.get("stackId"),
        stack_name=_str_or_none(item.get("stackName")),
    )


def catalog_language_from_api(item: Mapping[str, Any]) -> CatalogLanguage:
    name = str(first(item, "name", "languageName", default=""))
    return CatalogLanguage(
        id=str(first(item, "id", "languageId", default="")),
        code=str(first(item, "code", "languageCode") or language_code(item.get("name"))),
        name=name,
    )


def status_counts(response: Any) -> list[StatusCount]:
    """`[{Status, Count}]` (PascalCase de C#) o `{estado: cantidad}`."""

    if isinstance(response, list):
        return [
            StatusCount(
                status=str(first(item, "Status", "status", "name", default="Unknown")),
                count=_int_or_none(first(item, "Count", "count", "value")) or 0,
            )
            for item in response
            if isinstance(item, dict)
        ]
    if isinstance(response, dict):
        return [
            StatusCount(status=str(status), count=_int_or_none(count) or 0)
            for status, count in response.items()
        ]
    return []


def count_for(counts: Iterable[StatusCount], *names: str) -> int:
    for entry in counts:
        if entry.status in names:
            return entry.count
    return 0


def monthly_from_api(response: Any) -> list[MonthlyProcesses]:
    raw = response if isinstance(response, list) else [response] if isinstance(response, dict) else []
    return [
        MonthlyProcesses(
            month=_int_or_none(first(item, "Month", "month")),
            month_name=_str_or_none(first(item, "MonthName", "monthName")),
            total=_int_or_none(first(item, "Total", "total")) or 0,
            by_status={
                str(k): _int_or_none(v) or 0
                for k, v in (first(item, "ByStatus", "byStatus", default={}) or {}).items()
            },
        )
        for item in raw
        if isinstance(item, dict)
    ]


def recent_process_from_api(item: Mapping[str, Any]) -> RecentProcess:
    return RecentProcess(
        id=str(first(item, "Id", "id", default="")),
        position=_str_or_none(first(item, "Position", "position")),
        company_name=_str_or_none(first(item, "CompanyName", "companyName")),
        candidates_count=_int_or_none(first(item, "CandidatesCount", "candidatesCount")) or 0,
        vacancies=_int_or_none(first(item, "Vacancies", "vacancies")) or 0,
        status=_str_or_none(first(item, "Status", "status")),
        created_at=_str_or_none(first(item, "CreatedAt", "createdAt")),
    )


def active_company_from_api(item: Mapping[str, Any]) -> ActiveCompany:
    return ActiveCompany(
        id=str(first(item, "Id", "id", default="")),
        name=_str_or_none(first(item, "Name", "name")),
        image=_str_or_none(first(item, "Image", "image")),
        sector=_str_or_none(first(item, "Sector", "sector")),
        processes_count=_int_or_none(first(item, "ProcessesCount", "processesCount")) or 0,
        active_processes_count=_int_or_none(
            first(item, "ActiveProcessesCount", "activeProcessesCount")
        )
        or 0,
    )
