"""CRUD genérico sobre un endpoint REST."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel

from adapters.http_client import HttpClient
from core.errors import HttpRequestError

logger = logging.getLogger(__name__)

MAX_LIMIT = 100


@dataclass
class QueryParams:
    page: int | None = None
    limit: int | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None
    search: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)


class BaseRepository:
    """Operaciones CRUD; devuelven el cuerpo parseado sin transformar.

    Las subclases sobrescriben lo que necesite normalización.
    """

    def __init__(self, http: HttpClient, endpoint: str) -> None:
        self.http = http
        self.endpoint = endpoint

    def item_endpoint(self, item_id: str | int) -> str:
        return f"{self.endpoint}/{item_id}"

    @staticmethod
    def _to_payload(data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data.model_dump(mode="json", by_alias=True, exclude_none=True)
        return data

    def build_query_params(self, params: QueryParams | None) -> dict[str, Any]:
        if params is None:
            return {}

        query: dict[str, Any] = {}
        if params.page is not None:
            query["page"] = max(1, params.page)
        if params.limit is not None:
            query["limit"] = max(1, min(MAX_LIMIT, params.limit))
        if params.sort_by:
            query["sortBy"] = params.sort_by
        if params.sort_order:
            query["sortOrder"] = params.sort_order
        if params.search:
            query["search"] = params.search

        for key, value in params.filters.items():
            if value is None or value == "":
                continue
            query[key] = value
        return query

    async def find_all(self, params: QueryParams | None = None) -> Any:
        return await self.http.get(self.endpoint, params=self.build_query_params(params))

    async def find_by_id(self, item_id: str | int) -> Any:
        return await self.http.get(self.item_endpoint(item_id))

    async def create(self, data: Any) -> Any:
        return await self.http.post(self.endpoint, self._to_payload(data))

    async def update(self, item_id: str | int, data: Any) -> Any:
        return await self.http.put(self.item_endpoint(item_id), self._to_payload(data))

    async def patch(self, item_id: str | int, data: Any) -> Any:
        return await self.http.patch(self.item_endpoint(item_id), self._to_payload(data))

    async def delete(self, item_id: str | int) -> Any:
        return await self.http.delete(self.item_endpoint(item_id))

    async def exists(self, item_id: str | int) -> bool:
        try:
            await BaseRepository.find_by_id(self, item_id)
        except HttpRequestError as exc:
            logger.debug("%s/%s not reachable: %s", self.endpoint, item_id, exc.message)
            return False
        return True
