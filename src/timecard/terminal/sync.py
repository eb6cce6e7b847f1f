# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from timecard import configuration
from timecard.configuration import SourceType
from timecard.repository.configuration import CONFIGURATION_REPO
from timecard.service.assignment import AssignmentWorkflow
from timecard.service.intervals import collect_groups
from timecard.service.submission import assignments_to_records, submit_assignments
from timecard.terminal.common import (
    exit_on_error,
    get_timezone,
    open_cache,
    open_client,
    open_ledger,
    resolve_date_range,
)
from timecard.terminal.parse import parse_date
from timecard.terminal.prompt import RichPrompter
from timecard.time import date_to_str
from timecard.view.assignments import assignments_report, records_report
from timecard.view.groups import groups_report

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, monday, or day offset like -1"


def __date_range_label(start: pendulum.Date, end: pendulum.Date) -> str:
    if start == end:
        return date_to_str(start)
    return f"{date_to_str(start)} to {date_to_str(end)}"


def sync(
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--from", "-f", parser=parse_date, help=DATE_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option("--to", "-t", parser=parse_date, help=DATE_HELP),
    ] = None,
    source: Annotated[
        Optional[str],
        typer.Option(
            "--source",
            "-s",
            help="export: run timew export, data: read the monthly data files",
        ),
    ] = None,
    refresh_projects: Annotated[
        bool,
        typer.Option("--refresh-projects", "-r", help="Fetch projects from Celoxis"),
    ] = False,
    include_submitted: Annotated[
        bool,
        typer.Option(
            "--include-submitted",
            help="Offer groups whose intervals were all submitted before",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show the time entries without submitting"),
    ] = False,
) -> None:
    """
    group tracked intervals, assign them to Celoxis tasks and submit them
    """
    console = Console()
    prompter = RichPrompter(console)

    with exit_on_error():
        config = CONFIGURATION_REPO.get_config()
        source_type = __resolve_source(source, config["source"])
        start, end = resolve_date_range(prompter, start, end)

        ledger = open_ledger()
        grouped_entries = collect_groups(
            source_type,
            start,
            end,
            ledger,
            timewarrior_path=configuration.get_timewarrior_path(config),
            timezone=get_timezone(),
            include_submitted=include_submitted,
        )
        if len(grouped_entries) == 0:
            console.print("No unsubmitted time entries found.")
            return
        groups_report(grouped_entries, __date_range_label(start, end), console)

        cache = open_cache()
        client = open_client(prompter, cache)
        user_prefs = client.ensure_preferences(prompter, config["default_time_code"])

        workflow = AssignmentWorkflow(
            client,
            prompter,
            user_prefs,
            grouped_entries,
            refresh_projects=refresh_projects,
        )
        assignments = workflow.run()
        if len(assignments) == 0:
            console.print("No assignments made.")
            return

        assignments_report(assignments, console)
        records = assignments_to_records(assignments)
        records_report(records, console)

        if dry_run:
            console.print("[yellow]Dry run, nothing submitted.[/yellow]")
            return
        if not prompter.ask_confirm("Submit all assignments to Celoxis?", default=True):
            console.print("Submission cancelled.")
            return

        submitted = submit_assignments(client, assignments, ledger)
        console.print(f"[green]Submitted {len(submitted)} time entries.[/green]")


def groups(
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--from", "-f", parser=parse_date, help=DATE_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option("--to", "-t", parser=parse_date, help=DATE_HELP),
    ] = None,
    source: Annotated[
        Optional[str],
        typer.Option(
            "--source",
            "-s",
            help="export: run timew export, data: read the monthly data files",
        ),
    ] = None,
) -> None:
    """
    show tracked intervals grouped by tag set and day
    """
    console = Console()
    prompter = RichPrompter(console)

    with exit_on_error():
        config = CONFIGURATION_REPO.get_config()
        source_type = __resolve_source(source, config["source"])
        start, end = resolve_date_range(prompter, start, end)

        grouped_entries = collect_groups(
            source_type,
            start,
            end,
            open_ledger(),
            timewarrior_path=configuration.get_timewarrior_path(config),
            timezone=get_timezone(),
            include_submitted=True,
        )
        groups_report(grouped_entries, __date_range_label(start, end), console)


def __resolve_source(source: Optional[str], default: SourceType) -> SourceType:
    if source is None:
        return default
    if source == "export" or source == "data":
        return source
    raise typer.BadParameter("source must be 'export' or 'data'")
