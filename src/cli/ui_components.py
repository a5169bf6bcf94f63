"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.metrics import DashboardMetrics, MetricData
from core.domain.models import CatalogLanguage, CatalogSkill, Talent
from core.domain.process import Process
from core.lookups import calculate_age
from core.services.talent_service import format_talent_display

console = Console()
err_console = Console(stderr=True)

# Colores semánticos del panel web -> estilos Rich.
STATUS_STYLES = {
    "success": "green",
    "warning": "yellow",
    "info": "cyan",
    "muted": "dim",
    "destructive": "red",
    "default": "white",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> subcomandos).
    - Solo se muestra cuando no se pide ningún subcomando.
    """

    title = Text("Wired People", style="bold cyan")
    subtitle = Text("Talento • Procesos • Métricas", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _score(value: float | None) -> str:
    return "-" if value is None else f"{value:.0f}"


def build_talents_table(talents: Iterable[Talent]) -> Table:
    table = Table(title="Professionals")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="bold white")
    table.add_column("Title / Stack", style="white")
    table.add_column("Location", style="cyan")
    table.add_column("Status")
    table.add_column("Score", justify="right", style="magenta")
    table.add_column("Skills", style="dim")

    for talent in talents:
        display = format_talent_display(talent)
        status = Text(display.status_label, style=STATUS_STYLES.get(display.status_color, "white"))
        skills = ", ".join(s.name for s in talent.skills[:4])
        if len(talent.skills) > 4:
            skills += f" +{len(talent.skills) - 4}"
        table.add_row(
            talent.id,
            display.full_name or "-",
            talent.title or talent.stack or "-",
            talent.location or "-",
            status,
            _score(talent.score),
            skills,
        )
    return table


def build_talent_panel(talent: Talent) -> Panel:
    display = format_talent_display(talent)
    body = Text()
    body.append(f"{display.title}\n", style="bold")
    body.append(display.status_label + "\n\n", style=STATUS_STYLES.get(display.status_color, "white"))

    rows = (
        ("Email", talent.email),
        ("Phone", talent.phone),
        ("Age", str(calculate_age(talent.birth_date)) if talent.birth_date else None),
        ("Location", talent.location),
        ("Site", talent.site),
        ("Cohort", talent.cohort),
        ("Stack", talent.stack),
        ("Experience", f"{talent.years_of_experience} years" if talent.years_of_experience is not None else None),
        ("Score", _score(talent.score)),
        ("Availability", talent.availability),
        ("Rate", talent.hourly_rate),
        ("LinkedIn", talent.linkedin),
        ("GitHub", talent.github),
        ("Portfolio", talent.portfolio),
    )
    for label, value in rows:
        if value:
            body.append(f"{label}: ", style="dim")
            body.append(f"{value}\n")

    if talent.skills:
        body.append("\nSkills: ", style="bold")
        body.append(", ".join(f"{s.name} ({s.level})" for s in talent.skills) + "\n")
    if talent.languages:
        body.append("Languages: ", style="bold")
        body.append(", ".join(f"{lang.name} ({lang.level})" for lang in talent.languages) + "\n")
    if talent.certifications:
        body.append("Certifications: ", style="bold")
        body.append("; ".join(talent.certifications) + "\n")
    if talent.bio:
        body.append(f"\n{talent.bio}", style="italic")

    title = f"{display.full_name} [dim]({display.initials})[/dim]"
    return Panel(body, title=title, border_style="cyan")


def build_processes_table(processes: Iterable[Process]) -> Table:
    table = Table(title="Recruitment Processes")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="bold white")
    table.add_column("Company", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Priority", style="yellow")
    table.add_column("Vacancies", justify="right")
    table.add_column("Candidates", justify="right")

    for process in processes:
        table.add_row(
            process.id,
            process.name or "-",
            process.company_name or "-",
            process.status_name or process.status.label(),
            process.priority.label(),
            str(process.vacancies),
            str(process.students_count),
        )
    return table


def build_process_panel(process: Process) -> Panel:
    body = Text()
    body.append(f"{process.company_name or process.company_id}\n", style="bold")
    body.append(f"{process.status_name or process.status.label()} · {process.priority.label()}\n\n")
    if process.description:
        body.append(process.description.strip() + "\n\n")
    body.append("Vacancies: ", style="dim")
    body.append(f"{process.vacancies}\n")
    body.append("Candidates: ", style="dim")
    body.append(f"{process.students_count}\n")
    if process.location:
        body.append("Location: ", style="dim")
        body.append(f"{process.location}{' (remote)' if process.remote else ''}\n")
    if process.required_skills:
        body.append("\nSkills: ", style="bold")
        body.append(", ".join(s.name for s in process.required_skills) + "\n")
    if process.required_languages:
        body.append("Languages: ", style="bold")
        body.append(", ".join(f"{lang.name} ({lang.level})" for lang in process.required_languages) + "\n")
    return Panel(body, title=process.name or process.id, border_style="green")


def build_counts_table(title: str, rows: Sequence[tuple[str, int | float]]) -> Table:
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="bold white")
    for label, value in rows:
        table.add_row(label, str(value))
    return table


def build_skills_table(skills: Iterable[CatalogSkill]) -> Table:
    table = Table(title="Skills")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold white")
    table.add_column("Stack", style="cyan")
    for skill in skills:
        table.add_row(skill.id, skill.name, skill.stack_name or "-")
    return table


def build_languages_table(languages: Iterable[CatalogLanguage]) -> Table:
    table = Table(title="Languages")
    table.add_column("ID", style="dim")
    table.add_column("Code", style="cyan")
    table.add_column("Name", style="bold white")
    for language in languages:
        table.add_row(language.id, language.code, language.name)
    return table


def _metric_value(metric: MetricData) -> str:
    if metric.type in ("placement_rate", "conversion_rate"):
        return f"{metric.value:.1f}%"
    value = float(metric.value)
    return f"{int(value):,}" if value.is_integer() else f"{value:,.1f}"


def _trend(metric: MetricData) -> Text:
    if metric.comparison is None:
        return Text("")
    arrow = {"up": "▲", "down": "▼"}.get(metric.comparison.trend, "•")
    style = {"up": "green", "down": "red"}.get(metric.comparison.trend, "dim")
    return Text(f"{arrow} {metric.comparison.percentage:.1f}%", style=style)


def build_dashboard_table(dashboard: DashboardMetrics) -> Table:
    table = Table(title="Dashboard")
    table.add_column("Section", style="dim")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="bold white")
    table.add_column("Trend")

    sections = (
        ("Overview", dashboard.overview),
        ("Processes", dashboard.processes),
        ("Talent", dashboard.talent),
        ("Performance", dashboard.performance),
    )
    for name, metrics in sections:
        for metric in metrics:
            table.add_row(name, metric.label, _metric_value(metric), _trend(metric))
    return table
