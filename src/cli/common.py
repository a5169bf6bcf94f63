"""Utilidades compartidas por los subcomandos.

- `get_context`: el `AppContext` vive en `ctx.obj` (lo crea el callback raíz,
  o lo inyectan los tests vía `CliRunner.invoke(..., obj=...)`).
- `run_async`: un `asyncio.run` por comando; traduce `WiredPeopleError` a un
  mensaje en rojo y código de salida 1.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

import typer

from cli.ui_components import err_console
from core.errors import HttpRequestError, WiredPeopleError
from core.services.context import AppContext

T = TypeVar("T")


def get_context(ctx: typer.Context) -> AppContext:
    obj = ctx.find_root().obj
    if not isinstance(obj, AppContext):
        raise RuntimeError("CLI context was not initialized")
    return obj


def print_error(exc: WiredPeopleError) -> None:
    err_console.print(f"[red]Error:[/red] {exc}")
    if isinstance(exc, HttpRequestError) and exc.status == 401:
        err_console.print(
            "[yellow]Hint:[/yellow] the token is missing or expired. "
            "Run `wired-people token set <TOKEN>` or `wired-people login <EMAIL>`."
        )


def run_async(awaitable: Awaitable[T]) -> T:
    async def _runner() -> T:
        return await awaitable

    try:
        return asyncio.run(_runner())
    except WiredPeopleError as exc:
        print_error(exc)
        raise typer.Exit(code=1) from exc


def fail(message: str) -> None:
    err_console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)
