"""Servicio de talentos: validación, enriquecimiento y formato.

Por qué un servicio encima del repositorio:
- El repositorio solo habla con el backend; aquí vive la lógica de
  presentación (filtros saneados, datos demo, etiquetas de estado).
- La CLI y los exportadores consumen siempre `Talent` ya enriquecidos.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from adapters import csv_exporter, json_exporter
from adapters.repositories.talent import TalentRepository
from core.cache import TimedCache
from core.domain.models import (
    CreateTalent,
    Talent,
    TalentFilters,
    TalentPage,
    TalentStatistics,
    UpdateTalent,
)
from core.errors import HttpRequestError
from core.services.enrichment import TalentEnricher

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
STATISTICS_TTL_SECONDS = 5 * 60
_STATISTICS_KEY = "statistics"


@dataclass(frozen=True)
class TalentDisplay:
    full_name: str
    initials: str
    title: str
    status_label: str
    status_color: str


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def default_filters() -> TalentFilters:
    return TalentFilters(
        page=1,
        page_size=DEFAULT_PAGE_SIZE,
        sort_by="score",
        sort_order="desc",
        status=[1],
    )


def validate_filters(filters: TalentFilters) -> TalentFilters:
    """Ajusta rangos fuera de límite en lugar de rechazarlos."""

    update: dict[str, object] = {}
    if filters.page is not None and filters.page < 1:
        update["page"] = 1
    if filters.page_size is not None:
        update["page_size"] = int(_clamp(filters.page_size, 1, MAX_PAGE_SIZE))
    if filters.min_score is not None:
        update["min_score"] = _clamp(filters.min_score, 0, 100)
    if filters.max_score is not None:
        update["max_score"] = _clamp(filters.max_score, 0, 100)
    if filters.min_experience is not None:
        update["min_experience"] = max(0, filters.min_experience)
    if filters.max_experience is not None:
        update["max_experience"] = max(0, filters.max_experience)
    return filters.model_copy(update=update)


def format_talent_display(talent: Talent) -> TalentDisplay:
    status = talent.talent_status
    return TalentDisplay(
        full_name=talent.full_name,
        initials=talent.initials,
        title=talent.title or "Professional",
        status_label=status.label() if status is not None else "Unknown",
        status_color=status.color() if status is not None else "default",
    )


class TalentService:
    def __init__(
        self,
        repository: TalentRepository,
        *,
        enricher: TalentEnricher | None = None,
        cache: TimedCache[TalentStatistics] | None = None,
    ) -> None:
        self.repository = repository
        self.enricher = enricher or TalentEnricher()
        self._cache: TimedCache[TalentStatistics] = cache or TimedCache(STATISTICS_TTL_SECONDS)

    def _enrich_page(self, page: TalentPage, filters: TalentFilters) -> TalentPage:
        page_number = filters.page or page.page or 1
        page_size = filters.page_size or page.page_size or DEFAULT_PAGE_SIZE
        offset = (page_number - 1) * page_size
        return page.model_copy(update={"data": self.enricher.enhance_many(page.data, offset=offset)})

    async def get_talents(self, filters: TalentFilters | None = None) -> TalentPage:
        validated = validate_filters(filters or default_filters())
        page = await self.repository.find_all(validated)
        logger.debug("Fetched %d talents (total=%d)", len(page.data), page.total)
        return self._enrich_page(page, validated)

    async def get_talent_by_id(self, talent_id: str) -> Talent | None:
        try:
            talent = await self.repository.find_by_id(talent_id)
        except HttpRequestError as exc:
            logger.error("Error fetching talent %s: %s", talent_id, exc.message)
            return None
        except ValidationError as exc:
            logger.warning("Malformed talent %s: %s", talent_id, exc)
            return None
        return self.enricher.enhance(talent)

    async def get_available_talents(self, filters: TalentFilters | None = None) -> TalentPage:
        validated = validate_filters(filters or default_filters())
        page = await self.repository.get_available_talents(validated)
        return self._enrich_page(page, validated)

    async def search_by_skill(self, skill_name: str, level: int | None = None) -> list[Talent]:
        talents = await self.repository.search_by_skill(skill_name, level)
        return self.enricher.enhance_many(talents)

    async def create_talent(self, data: CreateTalent) -> Talent:
        talent = await self.repository.create(data)
        self.clear_cache()
        return talent

    async def update_talent(self, talent_id: str, data: UpdateTalent) -> Talent:
        talent = await self.repository.update(talent_id, data)
        self.clear_cache()
        return talent

    async def delete_talent(self, talent_id: str) -> None:
        await self.repository.delete(talent_id)
        self.clear_cache()

    async def get_statistics(self) -> TalentStatistics:
        cached = self._cache.get(_STATISTICS_KEY)
        if cached is not None:
            return cached
        try:
            stats = await self.repository.fetch_statistics()
        except HttpRequestError as exc:
            # Solo se cachea una respuesta correcta.
            logger.error("Error fetching talent statistics: %s", exc.message)
            stale = self._cache.peek(_STATISTICS_KEY)
            return stale if stale is not None else TalentStatistics()
        self._cache.set(_STATISTICS_KEY, stats)
        return stats

    def clear_cache(self) -> None:
        self._cache.clear()

    @staticmethod
    def export_csv(talents: list[Talent]) -> str:
        return csv_exporter.talents_to_csv(talents)

    @staticmethod
    def export_json(page: TalentPage, output_path: Path) -> Path:
        return json_exporter.export_talents_json(page=page, output_path=output_path)
