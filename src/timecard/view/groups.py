# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from timecard.model.grouped_entry import GroupedEntry
from timecard.service.grouping import describe_tags, flatten_entries, total_minutes
from timecard.time import date_to_display_str, minutes_to_display_str
from timecard.view.header import header


def groups_report(
    grouped_entries: list[GroupedEntry],
    sub_header: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    header("groups", sub_header)
    console = console if console is not None else Console()

    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("description")
    table.add_column("tags")
    table.add_column("entries", justify="right")
    table.add_column("by date")
    table.add_column("total", justify="right")
    table.add_column("submitted", justify="center")

    grand_total = 0
    for index, group in enumerate(grouped_entries, start=1):
        group_total = total_minutes(group)
        grand_total += group_total
        by_date = "\n".join(
            f"{date_to_display_str(date)}  {minutes_to_display_str(minutes)}"
            for date, minutes in group["durations"].items()
        )
        has_open = any(e["end"] is None for e in flatten_entries(group))
        table.add_row(
            str(index),
            describe_tags(group["tags"]),
            ", ".join(group["tags"]),
            str(len(flatten_entries(group))),
            by_date,
            minutes_to_display_str(group_total) + (" *" if has_open else ""),
            "X" if group["all_submitted"] else "",
        )

    table.add_section()
    table.add_row(
        "",
        "[bold]total[/bold]",
        "",
        "",
        "",
        minutes_to_display_str(grand_total),
        "",
    )
    console.print(table)
