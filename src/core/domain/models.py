"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El backend devuelve formas heterogéneas; los normalizadores de `adapters`
  las reducen a estos modelos y el resto de la app solo ve una forma.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field

from core.domain.status import SkillLevel, TalentStatus


class Skill(BaseModel):
    id: str | None = None
    name: str = Field(..., description="Nombre de la habilidad.")
    level: int = Field(
        default=SkillLevel.BEGINNER,
        ge=1,
        le=5,
        description="Nivel 1..4 (el enriquecimiento demo puede llegar a 5).",
    )
    category: str | None = None


class TalentLanguage(BaseModel):
    id: str | None = None
    code: str = Field(default="EN", description="Código ISO corto en mayúsculas.")
    name: str = ""
    level: str = Field(default="B1", description="CEFR (A1..C2), NATIVE o etiqueta libre.")


class Experience(BaseModel):
    id: str | None = None
    company: str = ""
    position: str = ""
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    technologies: list[str] = Field(default_factory=list)


class Education(BaseModel):
    id: str | None = None
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None


class SalaryRange(BaseModel):
    min: float | None = None
    max: float | None = None
    currency: str = "USD"


class Talent(BaseModel):
    """Un profesional expuesto por el backend (entidad "student").

    Admite el formato de nombre antiguo (`last_name`) y el nuevo
    (`first_last_name`/`second_last_name`).
    """

    id: str = Field(..., description="Identificador del backend.")

    first_name: str = ""
    second_name: str | None = None
    first_last_name: str | None = None
    second_last_name: str | None = None
    last_name: str | None = Field(default=None, description="Campo legado.")

    email: str = ""
    phone: str | None = None
    avatar: str | None = None

    title: str | None = Field(default=None, description="p.ej. 'Senior Full Stack Developer'.")
    stack: str | None = None
    stack_id: str | None = None
    profile: str | None = None
    description: str | None = None
    bio: str | None = None

    location: str | None = None
    site: str | None = None
    site_id: str | None = None
    cohort: str | None = None
    cohort_id: str | None = None
    birth_date: str | None = None

    years_of_experience: int | None = Field(default=None, ge=0)
    hourly_rate: str | None = None
    salary: SalaryRange | None = None
    availability: str | None = None

    status: int | str | None = Field(
        default=None,
        description="Estado tal cual llega del backend (id o texto).",
    )
    status_id: int | None = None
    score: float | None = Field(default=None, ge=0, le=100)
    ranking: int | None = None
    match_score: float | None = None
    match_count: int | None = None

    skills: list[Skill] = Field(default_factory=list)
    languages: list[TalentLanguage] = Field(default_factory=list)
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    media: list[Any] = Field(default_factory=list)
    links: list[Any] = Field(default_factory=list)

    portfolio: str | None = None
    linkedin: str | None = None
    github: str | None = None
    resume: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_activity_at: datetime | None = None

    active_processes: int = 0
    completed_processes: int | None = None

    tags: list[str] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)

    @property
    def surname(self) -> str:
        return self.first_last_name or self.last_name or ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.surname) if part).strip()

    @property
    def initials(self) -> str:
        letters = [part[0] for part in (self.first_name, self.surname) if part]
        return "".join(letters).upper()

    @property
    def talent_status(self) -> TalentStatus | None:
        """Panel status derived from `status_id`; None when it is unknown."""

        try:
            return TalentStatus(self.status_id)
        except ValueError:
            return None


class TalentFilters(BaseModel):
    """Filtros, orden y paginación de la lista de talentos.

    No valida rangos: `TalentService.validate_filters` los ajusta (clamp) en
    vez de rechazar la entrada.
    """

    search: str | None = None
    status: list[int] = Field(default_factory=list)
    skills: str | list[Skill] | None = None
    languages: str | list[TalentLanguage] | None = None
    min_score: float | None = None
    max_score: float | None = None
    min_experience: int | None = None
    max_experience: int | None = None
    location: str | None = None
    tags: list[str] = Field(default_factory=list)

    page: int | None = None
    page_size: int | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None


class TalentPage(BaseModel):
    data: list[Talent] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10
    total_pages: int = 0
    has_next_page: bool = False
    has_previous_page: bool = False


class TalentStatistics(BaseModel):
    total: int = 0
    available: int = 0
    in_process: int = 0
    hired: int = 0


class CreateTalent(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str | None = None
    title: str | None = None
    description: str | None = None
    location: str | None = None
    years_of_experience: int | None = Field(default=None, ge=0)
    skills: list[Skill] = Field(default_factory=list)
    languages: list[TalentLanguage] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)


class UpdateTalent(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    title: str | None = None
    description: str | None = None
    location: str | None = None
    years_of_experience: int | None = Field(default=None, ge=0)
    status: TalentStatus | None = None
    score: float | None = Field(default=None, ge=0, le=100)


class CatalogSkill(BaseModel):
    id: str
    name: str
    stack_id: int | str | None = None
    stack_name: str | None = None


class CatalogLanguage(BaseModel):
    id: str
    code: str
    name: str


class LoginCredentials(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class AuthUser(BaseModel):
    id: str
    email: str
    name: str | None = None
    role: str | None = None


class AuthResponse(BaseModel):
    token: str = Field(..., min_length=1)
    user: AuthUser | None = None
