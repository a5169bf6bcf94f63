"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.repositories.metrics import simulated_dashboard
from adapters.report_exporter import render_metrics_pdf
from cli.common import get_context
from cli.ui_components import console
from core.config import AppSettings, write_user_env_vars
from core.errors import AuthenticationError
from core.services.auth_service import decode_token_payload, mask_token

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")


async def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__
    # Cualquier respuesta HTTP (incluso 404/401) prueba que el backend contesta.
    return True, f"HTTP {response.status_code}"


def _check_pdf(company_name: str) -> tuple[bool, str]:
    """Render the simulated dashboard to detect WeasyPrint issues."""

    try:
        pdf = render_metrics_pdf(dashboard=simulated_dashboard(), company_name=company_name)
    except (ImportError, OSError) as exc:
        return False, str(exc)
    return True, f"OK ({len(pdf):,} bytes)"


def _check_token(token: str | None) -> tuple[str, str]:
    if not token:
        return "MISSING", "Run `wired-people login` or `wired-people token set`"
    try:
        info = decode_token_payload(token)
    except AuthenticationError as exc:
        return "WARN", f"{mask_token(token)} ({exc})"
    if info.expired:
        return "EXPIRED", f"{mask_token(token)} expired {info.expires_at:%Y-%m-%d %H:%M}"
    return "OK", mask_token(token)


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    app_ctx = get_context(ctx)
    settings = app_ctx.settings

    table = Table(title="Wired People Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API URL", "OK", settings.api_url)
    table.add_row("App URL", "OK", settings.app_url)
    table.add_row("Timeout", "OK", f"{settings.api_timeout_ms} ms")
    table.add_row("Session file", "OK", str(settings.resolved_storage_path()))

    # Token
    token_status, token_detail = _check_token(app_ctx.auth.get_token())
    table.add_row("Token", token_status, token_detail)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings, settings.api_url))
    table.add_row("Backend connectivity", "OK" if ok_http else "FAIL", detail_http)

    # PDF
    ok_pdf, detail_pdf = _check_pdf(settings.company_name)
    table.add_row("WeasyPrint PDF", "OK" if ok_pdf else "FAIL", detail_pdf)

    console.print(table)

    if not ok_pdf:
        console.print(
            "\n[yellow]Note:[/yellow] When PDF export fails, `metrics dashboard --export pdf` "
            "automatically falls back to HTML."
        )


@app.command(name="set-api")
def set_api(
    url: str = typer.Argument(..., help="Backend base URL, including the /api prefix."),
    app_url: str = typer.Option(None, "--app-url", help="Public URL of the web panel."),
) -> None:
    """Store the backend URL in the user config .env."""

    url = url.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise typer.BadParameter("URL must start with http:// or https://")

    env_path = write_user_env_vars(
        {
            "WIRED_PEOPLE_API_URL": url,
            "WIRED_PEOPLE_APP_URL": app_url.strip().rstrip("/") if app_url else None,
        }
    )

    console.print(f"[green]Saved API config to:[/green] {env_path}")
