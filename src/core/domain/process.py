"""Modelos de procesos de selección.

Un proceso une una compañía con candidatos (talentos). El backend es
multi-empresa; el repositorio filtra por la compañía configurada.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from core.domain.status import ProcessPriority, ProcessStatus


class ProcessSkill(BaseModel):
    id: str | None = None
    name: str
    level: int = 1
    required: bool = True


class ProcessLanguage(BaseModel):
    id: str | None = None
    code: str = "EN"
    name: str = ""
    level: str = "B1"
    required: bool = False


class Process(BaseModel):
    id: str
    name: str = ""
    description: str = ""
    company_id: str
    company_name: str | None = None
    company_image: str | None = None
    status: ProcessStatus = ProcessStatus.ACTIVE
    status_name: str | None = None
    priority: ProcessPriority = ProcessPriority.MEDIUM
    vacancies: int = Field(default=1, ge=0)
    students_count: int = Field(default=0, ge=0)
    location: str | None = None
    remote: bool = False
    required_skills: list[ProcessSkill] = Field(default_factory=list)
    required_languages: list[ProcessLanguage] = Field(default_factory=list)
    min_experience: int | None = None
    max_experience: int | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    currency: str = "USD"
    deadline: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by_id: str | None = None
    created_by_name: str = "Admin"
    tags: list[str] = Field(default_factory=list)


class ProcessFilters(BaseModel):
    search: str | None = None
    status: list[ProcessStatus] = Field(default_factory=list)
    priority: list[ProcessPriority] = Field(default_factory=list)
    location: str | None = None
    remote: bool | None = None
    min_salary: float | None = None
    max_salary: float | None = None
    tags: list[str] = Field(default_factory=list)
    page: int | None = None
    page_size: int | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None


class ProcessPage(BaseModel):
    data: list[Process] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 12
    total_pages: int = 0
    has_next_page: bool = False
    has_previous_page: bool = False


class CreateProcess(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    vacancies: int = Field(default=1, ge=1)
    required_skills: list[ProcessSkill] = Field(default_factory=list)
    required_languages: list[ProcessLanguage] = Field(default_factory=list)


class UpdateProcess(BaseModel):
    name: str | None = None
    description: str | None = None
    vacancies: int | None = Field(default=None, ge=1)
    status: ProcessStatus | None = None
    priority: ProcessPriority | None = None
    location: str | None = None
    remote: bool | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    deadline: datetime | None = None
    tags: list[str] | None = None


class ProcessStatistics(BaseModel):
    total: int = 0
    active: int = 0
    completed: int = 0
    cancelled: int = 0
