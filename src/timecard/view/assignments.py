# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from timecard.model.celoxis import CeloxisTimeEntry
from timecard.model.task_assignment import TaskAssignment
from timecard.service.grouping import describe_tags
from timecard.time import date_to_str, minutes_to_hours
from timecard.view.header import header


def assignments_report(
    assignments: list[TaskAssignment], console: Optional[Console] = None
) -> None:
    header("assignments", f"{len(assignments)} ready to submit")
    console = console if console is not None else Console()

    table = Table(box=box.SIMPLE)
    table.add_column("project")
    table.add_column("task")
    table.add_column("by date")
    table.add_column("summary")
    table.add_column("groups")

    for assignment in assignments:
        by_date = "\n".join(
            f"{date_to_str(date)}  {minutes_to_hours(minutes):.2f}h"
            for date, minutes in assignment["durations"].items()
        )
        table.add_row(
            f"{assignment['project']['name']} ({assignment['project']['id']})",
            f"{assignment['task']['name']} ({assignment['task']['id']})",
            by_date,
            assignment["summary"],
            "\n".join(describe_tags(group["tags"]) for group in assignment["groups"]),
        )
    console.print(table)


def records_report(
    records: list[CeloxisTimeEntry], console: Optional[Console] = None
) -> None:
    console = console if console is not None else Console()

    table = Table(box=box.SIMPLE, title="time entries", title_justify="left")
    table.add_column("date")
    table.add_column("hours", justify="right")
    table.add_column("task")
    table.add_column("time code")
    table.add_column("user")
    table.add_column("comments")

    total_hours = 0.0
    for record in records:
        total_hours += record["hours"]
        table.add_row(
            record["date"],
            f"{record['hours']:.2f}",
            record["task"],
            record["timeCode"],
            record["user"],
            record["comments"],
        )
    table.add_section()
    table.add_row("[bold]total[/bold]", f"{total_hours:.2f}", "", "", "", "")
    console.print(table)
