"""Comandos `processes`: procesos de selección de la compañía configurada."""

from __future__ import annotations

from typing import List, Optional

import typer

from cli.common import fail, get_context, run_async
from cli.ui_components import build_counts_table, build_process_panel, build_processes_table, console
from core.domain.process import ProcessFilters
from core.domain.status import ProcessStatus

app = typer.Typer(no_args_is_help=True, help="Recruitment processes of the configured company.")


def _parse_status(values: List[str] | None) -> list[ProcessStatus]:
    parsed: list[ProcessStatus] = []
    for value in values or []:
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            parsed.append(ProcessStatus[key])
        except KeyError as exc:
            names = ", ".join(s.name.lower() for s in ProcessStatus)
            raise typer.BadParameter(f"Unknown status {value!r}. Use one of: {names}") from exc
    return parsed


@app.command("list")
def list_processes(
    ctx: typer.Context,
    page: int = typer.Option(1, "--page", "-p"),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n"),
    search: Optional[str] = typer.Option(None, "--search", "-s"),
    status: Optional[List[str]] = typer.Option(
        None,
        "--status",
        help="Status filter (repeatable): draft, active, in_progress, completed, cancelled, on_hold.",
    ),
    location: Optional[str] = typer.Option(None, "--location"),
    remote: Optional[bool] = typer.Option(None, "--remote/--on-site"),
) -> None:
    """List processes."""

    app_ctx = get_context(ctx)
    filters = ProcessFilters(
        page=page,
        page_size=page_size or app_ctx.settings.default_page_size,
        search=search,
        status=_parse_status(status),
        location=location,
        remote=remote,
    )
    result = run_async(app_ctx.processes.find_all(filters))
    console.print(f"[bold]{len(result.data)} processes found[/bold]")
    if result.data:
        console.print(build_processes_table(result.data))


@app.command("show")
def show_process(ctx: typer.Context, process_id: str = typer.Argument(...)) -> None:
    """Show one process."""

    process = run_async(get_context(ctx).processes.find_by_id(process_id))
    if process is None:
        fail(f"Process {process_id} not found")
        return
    console.print(build_process_panel(process))


@app.command("stats")
def process_stats(ctx: typer.Context) -> None:
    stats = run_async(get_context(ctx).processes.get_statistics())
    console.print(
        build_counts_table(
            "Process statistics",
            [
                ("Total", stats.total),
                ("Active", stats.active),
                ("Completed", stats.completed),
                ("Cancelled", stats.cancelled),
            ],
        )
    )


@app.command("assign")
def assign_candidates(
    ctx: typer.Context,
    process_id: str = typer.Argument(...),
    talent_ids: List[str] = typer.Argument(..., help="One or more talent ids."),
) -> None:
    """Add candidates to a process."""

    ok = run_async(get_context(ctx).processes.add_candidates(process_id, list(talent_ids)))
    if not ok:
        fail(f"Could not assign candidates to process {process_id}")
    console.print(f"[green]Assigned {len(talent_ids)} candidate(s) to {process_id}[/green]")


@app.command("unassign")
def unassign_candidate(
    ctx: typer.Context,
    process_id: str = typer.Argument(...),
    talent_id: str = typer.Argument(...),
) -> None:
    """Remove a candidate from a process."""

    ok = run_async(get_context(ctx).processes.remove_candidate(process_id, talent_id))
    if not ok:
        fail(f"Could not remove {talent_id} from process {process_id}")
    console.print(f"[green]Removed {talent_id} from {process_id}[/green]")
