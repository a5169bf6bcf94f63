"""Comandos `metrics`: panel y exportación del reporte."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from adapters.csv_exporter import write_csv
from adapters.report_exporter import default_report_name
from cli.common import get_context, run_async
from cli.ui_components import build_dashboard_table, console, err_console

app = typer.Typer(no_args_is_help=True, help="Panel metrics and reports.")


class MetricsExport(str, Enum):
    csv = "csv"
    html = "html"
    pdf = "pdf"


def _write(content: str | bytes, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    elif path.suffix == ".csv":
        write_csv(content, path)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@app.command("dashboard")
def dashboard(
    ctx: typer.Context,
    export: Optional[MetricsExport] = typer.Option(None, "--export", "-e", help="Report format."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Report destination file."),
) -> None:
    """Show the dashboard; optionally export it."""

    repository = get_context(ctx).metrics

    if export is None:
        data = run_async(repository.get_dashboard_metrics())
        if data.simulated:
            console.print("[yellow]Showing simulated data (backend unavailable or unauthorized).[/yellow]")
        console.print(build_dashboard_table(data))
        return

    fmt = export.value
    path = output or Path(default_report_name(fmt))
    try:
        content = run_async(repository.export_metrics(fmt))
    except OSError as exc:
        if fmt != "pdf":
            raise
        # WeasyPrint sin librerías nativas: se entrega el HTML equivalente.
        err_console.print(f"[yellow]PDF export failed ({exc}); falling back to HTML.[/yellow]")
        content = run_async(repository.export_metrics("html"))
        path = path.with_suffix(".html")

    _write(content, path)
    console.print(f"[green]Report exported:[/green] {path}")
