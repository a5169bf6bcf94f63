"""Comandos `talents`: listado, detalle, estadísticas y búsqueda por skill."""

from __future__ import annotations

from datetime import date
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from adapters.csv_exporter import write_csv
from cli.common import fail, get_context, run_async
from cli.ui_components import (
    build_counts_table,
    build_talent_panel,
    build_talents_table,
    console,
)
from core.services.enrichment import TalentEnricher
from core.services.talent_service import default_filters

app = typer.Typer(no_args_is_help=True, help="Browse and export talent (backend students).")


class TalentExport(str, Enum):
    csv = "csv"
    json = "json"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


@app.command("list")
def list_talents(
    ctx: typer.Context,
    page: int = typer.Option(1, "--page", "-p", help="Page number (1-based)."),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", help="Results per page (1-100)."),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Free-text search."),
    status: Optional[List[int]] = typer.Option(
        None,
        "--status",
        help="Status id filter (repeatable). 1 Available, 2 In Process, 3 Hired, 4 Not Available, 5 Rejected.",
    ),
    min_score: Optional[float] = typer.Option(None, "--min-score"),
    max_score: Optional[float] = typer.Option(None, "--max-score"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="Backend field to order by."),
    sort_order: Optional[SortOrder] = typer.Option(None, "--sort-order"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible demo enrichment."),
    export: Optional[TalentExport] = typer.Option(None, "--export", "-e", help="Export format."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export destination file."),
) -> None:
    """List professionals with filters and pagination."""

    app_ctx = get_context(ctx)
    service = app_ctx.talents
    if seed is not None:
        service.enricher = TalentEnricher(seed)

    update: dict[str, object] = {
        "page": page,
        "page_size": page_size or app_ctx.settings.default_page_size,
        "search": search,
        "min_score": min_score,
        "max_score": max_score,
    }
    if status:
        update["status"] = list(status)
    if sort_by:
        update["sort_by"] = sort_by
    if sort_order:
        update["sort_order"] = sort_order.value
    filters = default_filters().model_copy(update=update)

    result = run_async(service.get_talents(filters))

    console.print(f"[bold]{result.total} professionals found[/bold]")
    if result.data:
        console.print(build_talents_table(result.data))
        console.print(
            f"[dim]Page {result.page} of {max(result.total_pages, 1)} · {len(result.data)} shown[/dim]"
        )

    if export is TalentExport.csv:
        content = service.export_csv(result.data)
        if output is None:
            output = Path(f"talents-{date.today().isoformat()}.csv")
        write_csv(content, output)
        console.print(f"[green]CSV exported:[/green] {output}")
    elif export is TalentExport.json:
        path = service.export_json(result, output or Path(f"talents-{date.today().isoformat()}.json"))
        console.print(f"[green]JSON exported:[/green] {path}")


@app.command("show")
def show_talent(ctx: typer.Context, talent_id: str = typer.Argument(..., help="Talent id.")) -> None:
    """Show a single professional."""

    talent = run_async(get_context(ctx).talents.get_talent_by_id(talent_id))
    if talent is None:
        fail(f"Talent {talent_id} not found")
        return
    console.print(build_talent_panel(talent))


@app.command("stats")
def talent_stats(ctx: typer.Context) -> None:
    """Counts by status."""

    stats = run_async(get_context(ctx).talents.get_statistics())
    console.print(
        build_counts_table(
            "Talent statistics",
            [
                ("Total", stats.total),
                ("Available", stats.available),
                ("In process", stats.in_process),
                ("Hired", stats.hired),
            ],
        )
    )


@app.command("skill")
def search_by_skill(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name."),
    level: Optional[int] = typer.Option(None, "--level", "-l", min=1, max=4, help="Minimum level 1-4."),
) -> None:
    """Professionals that have a given skill."""

    talents = run_async(get_context(ctx).talents.search_by_skill(name, level))
    console.print(f"[bold]{len(talents)} professionals found[/bold]")
    if talents:
        console.print(build_talents_table(talents))
