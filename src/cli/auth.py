"""Sesión: `login`, `logout`, `whoami` y el grupo `token`.

El grupo `token` cubre lo que hacía la página de depuración del panel:
ver, fijar, borrar y decodificar el JWT guardado.
"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError
from rich.table import Table

from cli.common import fail, get_context, run_async
from cli.ui_components import console
from core.domain.models import LoginCredentials
from core.errors import AuthenticationError
from core.services.auth_service import decode_token_payload, mask_token

token_app = typer.Typer(no_args_is_help=True, help="Inspect and manage the stored bearer token.")


def login(
    ctx: typer.Context,
    email: str = typer.Argument(..., help="Admin e-mail."),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
) -> None:
    """Log in and store the returned token."""

    try:
        credentials = LoginCredentials(email=email, password=password)
    except ValidationError as exc:
        fail(f"Invalid credentials: {exc.errors()[0]['msg']}")
        return

    response = run_async(get_context(ctx).auth.login(credentials))
    who = response.user.name or response.user.email if response.user else email
    console.print(f"[green]Logged in as {who}[/green] (token {mask_token(response.token)})")


def logout(ctx: typer.Context) -> None:
    """Remove the stored session."""

    login_url = get_context(ctx).auth.logout()
    console.print(f"[green]Logged out.[/green] Sign in again at {login_url}")


def whoami(ctx: typer.Context) -> None:
    """Show the current session."""

    auth = get_context(ctx).auth
    user = auth.get_user()
    token = auth.get_token()

    table = Table(title="Session", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Authenticated", "yes" if token else "no")
    table.add_row("Token", mask_token(token))
    if user is not None:
        table.add_row("User", user.name or "-")
        table.add_row("E-mail", user.email)
        table.add_row("Role", user.role or "-")
    console.print(table)


@token_app.command("show")
def show_token(
    ctx: typer.Context,
    full: bool = typer.Option(False, "--full", help="Print the whole token."),
) -> None:
    auth = get_context(ctx).auth
    token = auth.get_token()
    if not token:
        console.print("[yellow]No token stored.[/yellow]")
        return
    console.print(token if full else mask_token(token))
    cookie = auth.session_cookie()
    if full and cookie:
        console.print(f"[dim]Set-Cookie: {cookie}[/dim]")


@token_app.command("set")
def set_token(ctx: typer.Context, token: str = typer.Argument(..., help="JWT issued by the backend.")) -> None:
    token = token.strip()
    if not token:
        fail("Token must not be empty")
        return
    get_context(ctx).auth.set_token(token)
    console.print(f"[green]Token saved[/green] ({mask_token(token)})")


@token_app.command("clear")
def clear_token(ctx: typer.Context) -> None:
    get_context(ctx).auth.remove_token()
    console.print("[green]Token removed.[/green]")


@token_app.command("decode")
def decode_token(
    ctx: typer.Context,
    token: Optional[str] = typer.Argument(None, help="Token to decode; defaults to the stored one."),
) -> None:
    """Decode the JWT payload (no signature check)."""

    value = token or get_context(ctx).auth.get_token()
    if not value:
        fail("No token to decode")
        return
    try:
        info = decode_token_payload(value)
    except AuthenticationError as exc:
        fail(str(exc))
        return

    table = Table(title="Token payload")
    table.add_column("Claim", style="cyan")
    table.add_column("Value", style="white")
    for key, claim in sorted(info.payload.items()):
        table.add_row(key, str(claim))
    console.print(table)

    if info.expires_at is None:
        console.print("[dim]No expiry claim.[/dim]")
    elif info.expired:
        console.print(f"[red]Expired at {info.expires_at.isoformat()}[/red]")
    else:
        console.print(f"[green]Valid until {info.expires_at.isoformat()}[/green]")
