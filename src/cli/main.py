"""CLI principal (Typer).

Por qué Typer + Rich:
- Subcomandos tipados con ayuda generada a partir de las firmas.
- Tablas y paneles legibles en terminal sin escribir formato a mano.

El callback raíz configura logging y construye el `AppContext` una sola vez;
los subcomandos lo leen de `ctx.obj`.
"""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.logging import RichHandler

from cli import auth, catalog, doctor, metrics, processes, talents
from cli.ui_components import console, err_console, print_banner
from core.config import AppSettings
from core.services.context import build_context

app = typer.Typer(
    name="wired-people",
    help="Wired People recruiting admin: talent, processes and metrics.",
    invoke_without_command=True,
    no_args_is_help=False,
)

app.command("login")(auth.login)
app.command("logout")(auth.logout)
app.command("whoami")(auth.whoami)
app.add_typer(auth.token_app, name="token")
app.add_typer(talents.app, name="talents")
app.add_typer(processes.app, name="processes")
app.add_typer(catalog.app, name="catalog")
app.add_typer(metrics.app, name="metrics")
app.add_typer(doctor.app, name="doctor")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # httpx registra cada request a INFO; el cliente ya lo hace a DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    if ctx.obj is None:
        try:
            settings = AppSettings()
        except ValidationError as exc:
            err_console.print(f"[red]Invalid configuration:[/red] {exc}")
            raise typer.Exit(code=1) from exc
        configure_logging("DEBUG" if verbose else settings.log_level)
        ctx.obj = build_context(settings)
    elif verbose:
        configure_logging("DEBUG")

    if ctx.invoked_subcommand is None:
        print_banner(console)
        console.print(ctx.get_help())


def run() -> None:
    app()
