"""Exportación del reporte de métricas.

Por qué está en adapters:
- PDF/HTML son detalles de infraestructura (WeasyPrint/Jinja2).
- El Core solo conoce el agregado `DashboardMetrics`.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.metrics import DashboardMetrics

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _metric_value(value: float | int | None) -> str:
    if value is None:
        return "-"
    number = float(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.1f}"


def _get_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["metric_value"] = _metric_value
    return env


def render_metrics_html(*, dashboard: DashboardMetrics, company_name: str) -> str:
    """Renderiza un HTML autocontenido con el panel completo."""

    template = _get_env().get_template("metrics_report.html")
    return template.render(
        dashboard=dashboard,
        company_name=company_name,
        generated_at=dashboard.generated_at.astimezone().strftime("%Y-%m-%d %H:%M"),
    )


def render_metrics_pdf(*, dashboard: DashboardMetrics, company_name: str) -> bytes:
    """Renderiza el mismo HTML a PDF.

    WeasyPrint se importa aquí: necesita librerías nativas (Pango) y el
    resto de la CLI debe funcionar aunque falten. Si faltan, WeasyPrint
    lanza OSError y el llamador decide el fallback a HTML.
    """

    from weasyprint import HTML  # noqa: PLC0415

    html = render_metrics_html(dashboard=dashboard, company_name=company_name)
    return HTML(string=html, base_url=str(_TEMPLATES_DIR)).write_pdf()


def export_metrics_html(*, dashboard: DashboardMetrics, company_name: str, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        render_metrics_html(dashboard=dashboard, company_name=company_name),
        encoding="utf-8",
    )
    return output_path


def export_metrics_pdf(*, dashboard: DashboardMetrics, company_name: str, output_path: Path) -> Path:
    """Exporta el panel como PDF.

    Diseño:
    - Sincrónico: WeasyPrint es CPU/IO local.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(render_metrics_pdf(dashboard=dashboard, company_name=company_name))
    return output_path


def default_report_name(suffix: str, *, now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y-%m-%d")
    return f"metrics-report-{stamp}.{suffix}"
