"""Comandos `catalog`: skills e idiomas del backend."""

from __future__ import annotations

from typing import Optional

import typer

from cli.common import get_context, run_async
from cli.ui_components import build_languages_table, build_skills_table, console

app = typer.Typer(no_args_is_help=True, help="Skills and languages catalogs.")


@app.command("skills")
def list_skills(
    ctx: typer.Context,
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Substring (2+ characters)."),
    popular: bool = typer.Option(False, "--popular", help="Only the most requested skills."),
) -> None:
    service = get_context(ctx).skills
    if search is not None:
        skills = run_async(service.search_skills(search))
    elif popular:
        skills = run_async(service.get_popular_skills())
    else:
        skills = run_async(service.get_all_skills())

    console.print(f"[bold]{len(skills)} skills[/bold]")
    if skills:
        console.print(build_skills_table(skills))


@app.command("languages")
def list_languages(ctx: typer.Context) -> None:
    languages = run_async(get_context(ctx).languages.get_all_languages())
    console.print(build_languages_table(languages))
