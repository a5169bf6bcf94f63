"""Repositorio de talentos sobre los endpoints de "students".

Las lecturas de lista y estadísticas no propagan errores: registran el
fallo y devuelven una página vacía / contadores en cero para que la vista
siga funcionando. Detalle, alta y edición sí propagan.
"""

from __future__ import annotations

import logging
from typing import Any

from adapters import normalizers
from adapters.http_client import HttpClient
from adapters.repositories.base import BaseRepository
from core.domain.models import (
    CreateTalent,
    Talent,
    TalentFilters,
    TalentPage,
    TalentStatistics,
    UpdateTalent,
)
from core.errors import HttpRequestError

logger = logging.getLogger(__name__)

STUDENTS_ENDPOINT = "/v1/students"
STUDENT_STATUS_ENDPOINT = "/v1/panel/students/status"
SKILL_SEARCH_PAGE_SIZE = 20
DEFAULT_PAGE_SIZE = 10


def build_filter_query(filters: TalentFilters) -> dict[str, Any]:
    """Traduce `TalentFilters` a los parámetros que entiende el backend."""

    params: dict[str, Any] = {}

    if filters.page:
        params["PageNumber"] = filters.page
    if filters.page_size:
        params["PageSize"] = filters.page_size
    if filters.sort_by:
        params["OrderBy"] = filters.sort_by
    if filters.sort_order:
        params["SortDir"] = filters.sort_order

    if filters.search:
        params["search"] = filters.search

    if filters.status:
        params["status"] = ",".join(str(int(s)) for s in filters.status)

    if isinstance(filters.skills, str):
        if filters.skills:
            params["skills"] = filters.skills
    elif filters.skills:
        params["skills"] = ",".join(f"{s.name}:{s.level}" for s in filters.skills)

    if isinstance(filters.languages, str):
        if filters.languages:
            params["languages"] = filters.languages
    elif filters.languages:
        params["languages"] = ",".join(f"{lang.code}:{lang.level}" for lang in filters.languages)

    if filters.min_score is not None:
        params["minScore"] = filters.min_score
    if filters.max_score is not None:
        params["maxScore"] = filters.max_score

    return params


def empty_page(filters: TalentFilters | None = None) -> TalentPage:
    return TalentPage(
        data=[],
        total=0,
        page=(filters.page if filters and filters.page else 1),
        page_size=(filters.page_size if filters and filters.page_size else DEFAULT_PAGE_SIZE),
        total_pages=0,
        has_next_page=False,
        has_previous_page=False,
    )


def to_student_payload(data: CreateTalent | UpdateTalent) -> dict[str, Any]:
    """Forma del DTO de "student" que espera el backend."""

    status = getattr(data, "status", None)
    payload = {
        "firstName": data.first_name,
        "lastName": data.last_name,
        "email": data.email,
        "phone": data.phone,
        "stackId": 1,
        "cohortId": 1,
        "employabilityStatus": int(status) if status else 1,
    }
    return {k: v for k, v in payload.items() if v is not None}


def statistics_from_api(response: Any) -> TalentStatistics:
    if isinstance(response, dict) and any(
        key in response for key in ("total", "available", "active", "inProcess", "inProgress", "hired", "employed")
    ):
        pick = normalizers.first
        return TalentStatistics(
            total=int(response.get("total") or 0),
            available=int(pick(response, "available", "active", default=0)),
            in_process=int(pick(response, "inProcess", "inProgress", default=0)),
            hired=int(pick(response, "hired", "employed", default=0)),
        )

    counts = normalizers.status_counts(response)
    return TalentStatistics(
        total=sum(c.count for c in counts),
        available=normalizers.count_for(counts, "Disponible", "Available", "Active"),
        in_process=normalizers.count_for(counts, "En proceso", "In Process", "InProgress"),
        hired=normalizers.count_for(counts, "Contratado", "Hired", "Employed"),
    )


class TalentRepository(BaseRepository):
    def __init__(self, http: HttpClient) -> None:
        super().__init__(http, STUDENTS_ENDPOINT)

    async def find_all(self, filters: TalentFilters | None = None) -> TalentPage:  # type: ignore[override]
        filters = filters or TalentFilters()
        params = build_filter_query(filters)
        logger.debug("Fetching students with params: %s", params)
        try:
            response = await self.http.get(self.endpoint, params=params)
        except HttpRequestError as exc:
            if exc.status == 401:
                logger.warning("Unauthorized fetching students; token might be invalid or missing")
            else:
                logger.error("Error fetching students: %s", exc.message)
            return empty_page(filters)
        return normalizers.talent_page_from_api(response)

    async def find_by_id(self, item_id: str | int) -> Talent:
        response = await self.http.get(self.item_endpoint(item_id))
        return normalizers.talent_from_api(normalizers.unwrap(response))

    async def create(self, data: CreateTalent) -> Talent:  # type: ignore[override]
        response = await self.http.post(self.endpoint, to_student_payload(data))
        return normalizers.talent_from_api(normalizers.unwrap(response))

    async def update(self, item_id: str | int, data: UpdateTalent) -> Talent:  # type: ignore[override]
        response = await self.http.patch(self.item_endpoint(item_id), to_student_payload(data))
        return normalizers.talent_from_api(normalizers.unwrap(response))

    async def fetch_statistics(self) -> TalentStatistics:
        """Como `get_statistics`, pero propaga `HttpRequestError`."""

        return statistics_from_api(await self.http.get(STUDENT_STATUS_ENDPOINT))

    async def get_statistics(self) -> TalentStatistics:
        try:
            return await self.fetch_statistics()
        except HttpRequestError as exc:
            logger.error("Error fetching talent statistics: %s", exc.message)
            return TalentStatistics()

    async def get_available_talents(self, filters: TalentFilters | None = None) -> TalentPage:
        base = filters or TalentFilters()
        return await self.find_all(base.model_copy(update={"status": [1]}))

    async def search_by_skill(self, skill_name: str, level: int | None = None) -> list[Talent]:
        skills = f"{skill_name}:{level}" if level else skill_name
        page = await self.find_all(TalentFilters(skills=skills, page_size=SKILL_SEARCH_PAGE_SIZE))
        return page.data
