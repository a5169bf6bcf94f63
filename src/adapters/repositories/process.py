"""Repositorio de procesos de selección (`/v1/processes`).

El backend es multi-empresa y no filtra bien por compañía en la query,
así que el filtro por `company_id` se aplica sobre la respuesta.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from adapters import normalizers
from adapters.http_client import HttpClient
from adapters.repositories.base import BaseRepository
from core.config import AppSettings
from core.domain.process import (
    CreateProcess,
    Process,
    ProcessFilters,
    ProcessPage,
    ProcessStatistics,
    UpdateProcess,
)
from core.domain.status import ProcessStatus
from core.errors import HttpRequestError, WiredPeopleError

logger = logging.getLogger(__name__)

PROCESSES_ENDPOINT = "/v1/processes"
DEFAULT_PAGE_SIZE = 12
BULK_PAGE_SIZE = 100


class ProcessRepository(BaseRepository):
    def __init__(self, http: HttpClient, settings: AppSettings) -> None:
        super().__init__(http, PROCESSES_ENDPOINT)
        self.company_id = settings.company_id
        self.company_name = settings.company_name

    def build_process_query(self, filters: ProcessFilters | None) -> dict[str, Any]:
        filters = filters or ProcessFilters()
        params: dict[str, Any] = {}

        if filters.search:
            params["Search"] = filters.search
        if filters.priority:
            params["Priority"] = ",".join(str(int(p)) for p in filters.priority)
        if filters.location:
            params["Location"] = filters.location
        if filters.remote is not None:
            params["Remote"] = filters.remote
        if filters.min_salary is not None:
            params["MinSalary"] = filters.min_salary
        if filters.max_salary is not None:
            params["MaxSalary"] = filters.max_salary
        if filters.tags:
            params["Tags"] = ",".join(filters.tags)

        params["PageNumber"] = filters.page or 1
        params["PageSize"] = filters.page_size or DEFAULT_PAGE_SIZE

        if filters.sort_by:
            params["OrderBy"] = filters.sort_by
        if filters.sort_order:
            params["SortDir"] = filters.sort_order
        return params

    def _to_process(self, item: dict[str, Any]) -> Process:
        return normalizers.process_from_api(
            item,
            company_id=self.company_id,
            company_name=self.company_name,
        )

    def _empty_page(self, filters: ProcessFilters | None) -> ProcessPage:
        return ProcessPage(
            page=(filters.page if filters and filters.page else 1),
            page_size=(filters.page_size if filters and filters.page_size else DEFAULT_PAGE_SIZE),
        )

    async def find_all(self, filters: ProcessFilters | None = None) -> ProcessPage:  # type: ignore[override]
        params = self.build_process_query(filters)
        logger.debug("Fetching processes for company %s with params %s", self.company_id, params)
        try:
            response = await self.http.get(self.endpoint, params=params)
        except HttpRequestError as exc:
            logger.error("Error fetching processes: %s", exc.message)
            return self._empty_page(filters)

        raw_items = normalizers.extract_items(response, "items", "data")
        if not isinstance(response, list) and not (
            isinstance(response, dict)
            and any(isinstance(response.get(key), list) for key in ("items", "data"))
        ):
            logger.warning("Unexpected response format from processes API: %r", response)
            return self._empty_page(filters)

        processes = [self._to_process(item) for item in raw_items if isinstance(item, dict)]
        processes = [p for p in processes if p.company_id == self.company_id]
        if filters and filters.status:
            wanted = set(filters.status)
            processes = [p for p in processes if p.status in wanted]

        if isinstance(response, list):
            return ProcessPage(
                data=processes,
                total=len(processes),
                page=1,
                page_size=len(processes),
                total_pages=1,
            )

        total = int(response.get("totalCount") or response.get("total") or len(processes))
        page_size = int(response.get("pageSize") or len(processes))
        total_pages = response.get("totalPages") or math.ceil(
            total / (response.get("pageSize") or DEFAULT_PAGE_SIZE)
        )
        return ProcessPage(
            data=processes,
            total=total,
            page=int(response.get("pageNumber") or response.get("page") or 1),
            page_size=page_size,
            total_pages=int(total_pages),
            has_next_page=bool(response.get("hasNextPage") or False),
            has_previous_page=bool(response.get("hasPreviousPage") or False),
        )

    async def find_by_id(self, item_id: str | int) -> Process | None:
        try:
            response = await self.http.get(self.item_endpoint(item_id))
        except HttpRequestError as exc:
            logger.error("Error fetching process %s: %s", item_id, exc.message)
            return None

        data = normalizers.unwrap(response)
        if not isinstance(data, dict) or data.get("companyId") != self.company_id:
            logger.warning("Process %s does not belong to company %s", item_id, self.company_id)
            return None
        return self._to_process(data)

    async def create(self, data: CreateProcess) -> Process:  # type: ignore[override]
        payload = {
            "companyId": self.company_id,
            "name": data.name,
            "description": data.description,
            "vacancies": data.vacancies or 1,
            "statusId": ProcessStatus.ACTIVE.to_api_id(),
            "skills": [{"name": s.name, "level": s.level or 1} for s in data.required_skills],
            "languages": [
                {"code": lang.code, "name": lang.name, "level": lang.level or "B1"}
                for lang in data.required_languages
            ],
        }
        logger.info("Creating process %r", data.name)
        response = await self.http.post(self.endpoint, payload)
        return self._to_process(normalizers.unwrap(response))

    async def _require_own(self, item_id: str) -> Process:
        existing = await self.find_by_id(item_id)
        if existing is None:
            raise WiredPeopleError(
                f"Process {item_id} not found or does not belong to company {self.company_id}"
            )
        return existing

    async def update(self, item_id: str, data: UpdateProcess) -> Process:  # type: ignore[override]
        await self._require_own(item_id)
        payload = data.model_dump(mode="json", exclude_none=True)
        if data.status is not None:
            payload.pop("status", None)
            payload["statusId"] = data.status.to_api_id()
        payload["companyId"] = self.company_id
        response = await self.http.patch(self.item_endpoint(item_id), _camelize(payload))
        return self._to_process(normalizers.unwrap(response))

    async def delete(self, item_id: str) -> bool:  # type: ignore[override]
        try:
            await self._require_own(item_id)
            await self.http.delete(self.item_endpoint(item_id))
        except WiredPeopleError as exc:
            logger.error("Error deleting process %s: %s", item_id, exc)
            return False
        return True

    async def find_by_status(self, status: ProcessStatus) -> list[Process]:
        page = await self.find_all(ProcessFilters(status=[status], page_size=BULK_PAGE_SIZE))
        return page.data

    async def find_active(self) -> list[Process]:
        page = await self.find_all(
            ProcessFilters(
                status=[ProcessStatus.ACTIVE, ProcessStatus.IN_PROGRESS],
                page_size=BULK_PAGE_SIZE,
            )
        )
        return page.data

    async def add_candidates(self, process_id: str, candidate_ids: list[str]) -> bool:
        try:
            response = await self.http.post(
                f"{self.item_endpoint(process_id)}/students",
                {"studentIds": candidate_ids},
            )
        except HttpRequestError as exc:
            logger.error("Error adding candidates to process %s: %s", process_id, exc.message)
            return False
        if isinstance(response, dict) and response.get("success") is not None:
            return bool(response["success"])
        return True

    async def remove_candidate(self, process_id: str, candidate_id: str) -> bool:
        try:
            await self.http.delete(f"{self.item_endpoint(process_id)}/students/{candidate_id}")
        except HttpRequestError as exc:
            logger.error(
                "Error removing candidate %s from process %s: %s",
                candidate_id,
                process_id,
                exc.message,
            )
            return False
        return True

    async def get_statistics(self) -> ProcessStatistics:
        page = await self.find_all(ProcessFilters(page_size=BULK_PAGE_SIZE))
        stats = ProcessStatistics(total=page.total)
        for process in page.data:
            if process.status.is_active:
                stats.active += 1
            elif process.status is ProcessStatus.COMPLETED:
                stats.completed += 1
            elif process.status is ProcessStatus.CANCELLED:
                stats.cancelled += 1
        return stats


def _camelize(payload: dict[str, Any]) -> dict[str, Any]:
    def convert(key: str) -> str:
        head, *rest = key.split("_")
        return head + "".join(part.title() for part in rest)

    return {convert(k): v for k, v in payload.items()}
