# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from timecard.model.cache import CacheData
from timecard.model.celoxis import CeloxisProject, CeloxisTask
from timecard.view.header import header


def projects_report(
    projects: list[CeloxisProject], console: Optional[Console] = None
) -> None:
    header("projects", f"{len(projects)} projects")
    console = console if console is not None else Console()

    table = Table(box=box.SIMPLE)
    table.add_column("id", style="cyan")
    table.add_column("name")
    table.add_column("state")
    table.add_column("description", overflow="ellipsis")
    for project in sorted(projects, key=lambda p: p["name"].lower()):
        table.add_row(
            project["id"],
            project["name"],
            project.get("state") or "",
            project.get("description") or "",
        )
    console.print(table)


def tasks_report(
    project_id: str, tasks: list[CeloxisTask], console: Optional[Console] = None
) -> None:
    header("tasks", f"project {project_id}")
    console = console if console is not None else Console()

    table = Table(box=box.SIMPLE)
    table.add_column("id", style="cyan")
    table.add_column("name")
    for task in sorted(tasks, key=lambda t: t["name"].lower()):
        table.add_row(task["id"], task["name"])
    console.print(table)


def cache_report(
    cache_path: str, cache: CacheData, console: Optional[Console] = None
) -> None:
    console = console if console is not None else Console()

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("path", cache_path)
    table.add_row("last_updated", cache["last_updated"] or "never")
    table.add_row("projects", str(len(cache["projects"])))
    table.add_row(
        "tasks",
        f"{sum(len(tasks) for tasks in cache['tasks'].values())} "
        f"in {len(cache['tasks'])} projects",
    )
    user_prefs = cache["user_prefs"]
    table.add_row("username", user_prefs["username"] if user_prefs else "not set")
    table.add_row("time_code", user_prefs["time_code"] if user_prefs else "not set")
    console.print(table)
