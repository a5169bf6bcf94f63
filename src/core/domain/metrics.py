"""Modelos del panel de métricas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class MetricComparison(BaseModel):
    value: float = Field(..., description="Valor del periodo anterior.")
    percentage: float = Field(..., ge=0, description="Variación absoluta en %.")
    trend: Literal["up", "down", "stable"]


class MetricData(BaseModel):
    id: str
    type: str
    value: float
    label: str
    description: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime | None = None
    comparison: MetricComparison | None = None


class StatusCount(BaseModel):
    status: str
    count: int = 0


class MonthlyProcesses(BaseModel):
    month: int | None = None
    month_name: str | None = None
    total: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)


class RecentProcess(BaseModel):
    id: str
    position: str | None = None
    company_name: str | None = None
    candidates_count: int = 0
    vacancies: int = 0
    status: str | None = None
    created_at: str | None = None


class ActiveCompany(BaseModel):
    id: str
    name: str | None = None
    image: str | None = None
    sector: str | None = None
    processes_count: int = 0
    active_processes_count: int = 0


class ChartDataset(BaseModel):
    label: str
    data: list[float] = Field(default_factory=list)
    border_color: str
    background_color: str


class ChartData(BaseModel):
    labels: list[str] = Field(default_factory=list)
    datasets: list[ChartDataset] = Field(default_factory=list)


class DashboardMetrics(BaseModel):
    """Resumen del panel.

    `simulated` indica que al menos una sección viene de datos de respaldo
    porque el backend no respondió (o respondió 401).
    """

    overview: list[MetricData] = Field(default_factory=list)
    processes: list[MetricData] = Field(default_factory=list)
    talent: list[MetricData] = Field(default_factory=list)
    performance: list[MetricData] = Field(default_factory=list)
    trends: ChartData = Field(default_factory=ChartData)
    recent_processes: list[RecentProcess] = Field(default_factory=list)
    most_active_companies: list[ActiveCompany] = Field(default_factory=list)
    simulated: bool = False
    generated_at: datetime = Field(default_factory=datetime.now)
