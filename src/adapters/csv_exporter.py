"""Exportación CSV de talentos y del panel de métricas.

Se usa el módulo `csv` de la stdlib: el entrecomillado (comas, comillas,
saltos de línea) sigue RFC 4180 sin reglas propias.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Iterable, Sequence

from core.domain.metrics import DashboardMetrics
from core.domain.models import Talent

TALENT_HEADERS: tuple[str, ...] = (
    "ID",
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Title",
    "Location",
    "Years of Experience",
    "Status",
    "Score",
    "Skills",
    "Languages",
    "Created At",
)

METRICS_HEADERS: tuple[str, ...] = ("Category", "Metric", "Value", "Description")


def _write_rows(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])
    return buffer.getvalue()


def _status_label(talent: Talent) -> str:
    status = talent.talent_status
    return status.label() if status is not None else "Unknown"


def talent_row(talent: Talent) -> list[Any]:
    return [
        talent.id,
        talent.first_name,
        talent.surname,
        talent.email,
        talent.phone,
        talent.title,
        talent.location,
        talent.years_of_experience,
        _status_label(talent),
        talent.score,
        "; ".join(skill.name for skill in talent.skills),
        "; ".join(f"{lang.name} ({lang.level})" for lang in talent.languages),
        talent.created_at.isoformat() if talent.created_at else "",
    ]


def talents_to_csv(talents: Iterable[Talent]) -> str:
    """Cabecera + una línea por talento."""

    return _write_rows(TALENT_HEADERS, (talent_row(t) for t in talents))


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def metrics_to_csv(dashboard: DashboardMetrics) -> str:
    sections = (
        ("Overview", dashboard.overview),
        ("Processes", dashboard.processes),
        ("Talent", dashboard.talent),
    )
    rows = (
        [category, metric.label, _format_value(metric.value), metric.description or ""]
        for category, metrics in sections
        for metric in metrics
    )
    return _write_rows(METRICS_HEADERS, rows)


def write_csv(content: str, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8", newline="")
    return output_path
