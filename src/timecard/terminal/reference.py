# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from timecard.terminal.common import exit_on_error, open_client
from timecard.terminal.prompt import RichPrompter
from timecard.view.reference import projects_report, tasks_report


def projects(
    refresh: Annotated[
        bool, typer.Option("--refresh", "-r", help="Fetch projects from Celoxis")
    ] = False,
) -> None:
    """
    list active Celoxis projects
    """
    console = Console()
    with exit_on_error():
        client = open_client(RichPrompter(console))
        projects_report(client.list_projects(force_refresh=refresh), console)


def tasks(
    project_id: str,
    refresh: Annotated[
        bool, typer.Option("--refresh", "-r", help="Fetch tasks from Celoxis")
    ] = False,
) -> None:
    """
    list the tasks of a Celoxis project
    """
    console = Console()
    with exit_on_error():
        client = open_client(RichPrompter(console))
        tasks_report(
            project_id, client.list_tasks(project_id, force_refresh=refresh), console
        )
