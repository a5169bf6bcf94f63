"""Repositorio del panel de métricas (`/v1/panel/*`).

Cada endpoint se consulta por separado y, si falla, esa sección usa los
datos de `adapters.simulated_metrics`. Un 401 en cualquiera de ellos
activa el modo simulado para todo el panel (y para llamadas siguientes
de esta instancia): sin credenciales válidas no tiene sentido seguir
golpeando el backend.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Any, Awaitable, Callable, Literal, Sequence, TypeVar

from adapters import normalizers, simulated_metrics
from adapters.csv_exporter import metrics_to_csv
from adapters.http_client import HttpClient, TokenProvider
from adapters.report_exporter import render_metrics_html, render_metrics_pdf
from core.config import AppSettings
from core.domain.metrics import (
    ActiveCompany,
    ChartData,
    ChartDataset,
    DashboardMetrics,
    MetricComparison,
    MetricData,
    MonthlyProcesses,
    RecentProcess,
    StatusCount,
)
from core.errors import AuthenticationError, HttpRequestError

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROCESS_STATUS_ENDPOINT = "/v1/panel/processes/status"
MONTHLY_PROCESSES_ENDPOINT = "/v1/panel/processes/monthly"
STUDENT_STATUS_ENDPOINT = "/v1/panel/students/status"
RECENT_PROCESSES_ENDPOINT = "/v1/panel/processes/recent"
ACTIVE_COMPANIES_ENDPOINT = "/v1/panel/companies/most-active"
PANEL_PAGE_SIZE = 5
PLACEMENT_RATIO = 0.15

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

ExportFormat = Literal["csv", "html", "pdf"]


class _Unauthorized(Exception):
    pass


def calculate_comparison(current: float, previous: float) -> MetricComparison:
    difference = current - previous
    percentage = (difference / previous) * 100 if previous != 0 else 0.0
    if difference > 0:
        trend = "up"
    elif difference < 0:
        trend = "down"
    else:
        trend = "stable"
    return MetricComparison(value=previous, percentage=abs(percentage), trend=trend)


def _status_metrics(prefix: str, rows: Sequence[tuple[str, str, int]]) -> list[MetricData]:
    return [
        MetricData(id=f"{prefix}{i}", type=kind, value=value, label=label)
        for i, (kind, label, value) in enumerate(rows, start=1)
    ]


def build_dashboard(
    *,
    process_status: Sequence[StatusCount],
    monthly: Sequence[MonthlyProcesses],
    student_status: Sequence[StatusCount],
    recent: Sequence[RecentProcess],
    companies: Sequence[ActiveCompany],
    previous: dict[str, float],
    simulated: bool,
) -> DashboardMetrics:
    """Arma el panel a partir de los datos crudos (reales o simulados)."""

    count = normalizers.count_for
    total_processes = sum(s.count for s in process_status)
    open_processes = count(process_status, "Abierto")
    waiting = count(process_status, "En espera")
    running = count(process_status, "En proceso")
    closed = count(process_status, "Cerrado")
    suspended = count(process_status, "Suspendido")

    total_students = sum(s.count for s in student_status)
    available = count(student_status, "Disponible")
    in_process = count(student_status, "En proceso")
    placed = count(student_status, "Contratado")
    inactive = count(student_status, "Inactivo")
    unavailable = count(student_status, "No disponible")

    placement_rate = (placed / total_students) * 100 if total_students > 0 else 0.0
    active = open_processes + running
    now = datetime.now()

    overview_rows = (
        ("1", "total_processes", total_processes, "Total Processes", "All recruitment processes"),
        ("2", "total_candidates", total_students, "Total Candidates", "Candidates in database"),
        ("3", "placement_rate", placement_rate, "Placement Rate", "Successful placements"),
        ("4", "active_processes", active, "Active Processes", "Currently running"),
    )
    overview = [
        MetricData(
            id=metric_id,
            type=kind,
            value=value,
            label=label,
            description=description,
            timestamp=now,
            comparison=calculate_comparison(value, previous[kind]),
        )
        for metric_id, kind, value, label, description in overview_rows
    ]

    labels = [
        m.month_name
        or (MONTH_NAMES[m.month - 1] if m.month and 1 <= m.month <= 12 else f"Month {m.month}")
        for m in monthly
    ]
    totals = [float(m.total) for m in monthly]

    return DashboardMetrics(
        overview=overview,
        processes=_status_metrics(
            "p",
            (
                ("waiting", "En espera", waiting),
                ("in_progress", "En proceso", running),
                ("suspended", "Suspendido", suspended),
                ("active", "Abierto", open_processes),
                ("completed", "Cerrado", closed),
            ),
        ),
        talent=_status_metrics(
            "t",
            (
                ("available", "Disponible", available),
                ("in_process", "En proceso", in_process),
                ("inactive", "Inactivo", inactive),
                ("placed", "Contratado", placed),
                ("unavailable", "No disponible", unavailable),
            ),
        ),
        performance=[
            MetricData(id="pf1", type="efficiency", value=87.5, label="Process Efficiency"),
            MetricData(id="pf2", type="satisfaction", value=4.6, label="Client Satisfaction"),
            MetricData(id="pf3", type="time_to_hire", value=21, label="Avg. Time to Hire (days)"),
            MetricData(id="pf4", type="conversion_rate", value=placement_rate, label="Conversion Rate"),
        ],
        trends=ChartData(
            labels=labels,
            datasets=[
                ChartDataset(
                    label="Processes",
                    data=totals,
                    border_color="#0b5d5b",
                    background_color="rgba(11, 93, 91, 0.1)",
                ),
                ChartDataset(
                    label="Placements",
                    data=[float(int(v * PLACEMENT_RATIO)) for v in totals],
                    border_color="#fc7e00",
                    background_color="rgba(252, 126, 0, 0.1)",
                ),
            ],
        ),
        recent_processes=list(recent),
        most_active_companies=list(companies),
        simulated=simulated,
    )


def simulated_dashboard() -> DashboardMetrics:
    return build_dashboard(
        process_status=simulated_metrics.PROCESS_STATUS,
        monthly=simulated_metrics.MONTHLY,
        student_status=simulated_metrics.STUDENT_STATUS,
        recent=simulated_metrics.RECENT_PROCESSES,
        companies=simulated_metrics.MOST_ACTIVE_COMPANIES,
        previous=simulated_metrics.PREVIOUS_SIMULATED,
        simulated=True,
    )


class MetricsRepository:
    def __init__(
        self,
        http: HttpClient,
        settings: AppSettings,
        *,
        token_provider: TokenProvider | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.http = http
        self.company_name = settings.company_name
        self._token_provider = token_provider
        self._today = today
        self.use_simulated_data = False

    async def _section(
        self,
        name: str,
        fetch: Callable[[], Awaitable[Any]],
        parse: Callable[[Any], T],
        fallback: T,
        *,
        required: bool = False,
    ) -> tuple[T, bool]:
        """Devuelve `(datos, simulado)` para una sección del panel."""

        try:
            parsed = parse(await fetch())
        except HttpRequestError as exc:
            if exc.status == 401:
                raise _Unauthorized from exc
            logger.warning("Error fetching %s, using simulated data: %s", name, exc.message)
            return fallback, True
        if required and not parsed:
            logger.warning("No %s data received, using simulated data", name)
            return fallback, True
        return parsed, False

    async def get_dashboard_metrics(self) -> DashboardMetrics:
        if self.use_simulated_data:
            logger.info("Using simulated metrics (previous 401)")
            return simulated_dashboard()

        if self._token_provider is not None and not self._token_provider():
            logger.warning("No token available; metrics use simulated data")
            return simulated_dashboard()

        today = self._today()
        try:
            process_status, sim1 = await self._section(
                "process status",
                lambda: self.http.get(PROCESS_STATUS_ENDPOINT),
                normalizers.status_counts,
                list(simulated_metrics.PROCESS_STATUS),
                required=True,
            )
            monthly, sim2 = await self._section(
                "monthly processes",
                lambda: self.http.get(
                    MONTHLY_PROCESSES_ENDPOINT,
                    params={"Month": today.month, "Year": today.year},
                ),
                normalizers.monthly_from_api,
                list(simulated_metrics.MONTHLY),
            )
            student_status, sim3 = await self._section(
                "student status",
                lambda: self.http.get(STUDENT_STATUS_ENDPOINT),
                normalizers.status_counts,
                list(simulated_metrics.STUDENT_STATUS),
                required=True,
            )
            recent, sim4 = await self._section(
                "recent processes",
                lambda: self.http.get(RECENT_PROCESSES_ENDPOINT, params={"PageSize": PANEL_PAGE_SIZE}),
                lambda r: [
                    normalizers.recent_process_from_api(i)
                    for i in normalizers.extract_items(r)
                    if isinstance(i, dict)
                ],
                list(simulated_metrics.RECENT_PROCESSES),
            )
            companies, sim5 = await self._section(
                "most active companies",
                lambda: self.http.get(ACTIVE_COMPANIES_ENDPOINT, params={"PageSize": PANEL_PAGE_SIZE}),
                lambda r: [
                    normalizers.active_company_from_api(i)
                    for i in normalizers.extract_items(r)
                    if isinstance(i, dict)
                ],
                list(simulated_metrics.MOST_ACTIVE_COMPANIES),
            )
        except _Unauthorized:
            logger.warning("Authentication failed; switching metrics to simulated mode")
            self.use_simulated_data = True
            return simulated_dashboard()

        return build_dashboard(
            process_status=process_status,
            monthly=monthly,
            student_status=student_status,
            recent=recent,
            companies=companies,
            previous=simulated_metrics.PREVIOUS_LIVE,
            simulated=any((sim1, sim2, sim3, sim4, sim5)),
        )

    async def export_metrics(self, fmt: ExportFormat) -> str | bytes:
        """`csv` y `html` devuelven texto; `pdf` devuelve bytes."""

        if self._token_provider is not None and not self._token_provider():
            raise AuthenticationError("Authentication token is required to export metrics")

        dashboard = await self.get_dashboard_metrics()
        if fmt == "csv":
            return metrics_to_csv(dashboard)
        if fmt == "html":
            return render_metrics_html(dashboard=dashboard, company_name=self.company_name)
        if fmt == "pdf":
            # WeasyPrint es síncrono y lento: fuera del event loop.
            return await asyncio.to_thread(
                render_metrics_pdf, dashboard=dashboard, company_name=self.company_name
            )
        raise ValueError(f"Unsupported export format: {fmt}")
