# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from timecard.terminal.common import exit_on_error, open_cache
from timecard.terminal.custom_typer import AliasedTyperGroup
from timecard.view.reference import cache_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display what is cached locally."""
    with exit_on_error():
        cache = open_cache()
        cache_report(str(cache.path), cache.cache)


@app.command("clear")
def clear(
    prefs: Annotated[
        bool,
        typer.Option("--prefs", help="Only forget the username and time code"),
    ] = False,
) -> None:
    """Forget cached projects, tasks and user preferences."""
    console = Console()
    with exit_on_error():
        cache = open_cache()
        if prefs:
            cache.put_and_flush("user_prefs", None)
            console.print("[green]User preferences cleared.[/green]")
            return
        cache.clear()
        console.print(f"[green]Cache cleared ({cache.path}).[/green]")
