# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

import pendulum

from timecard.model.grouped_entry import GroupedEntry, TagKey
from timecard.model.time_entry import TimeEntry
from timecard.time import datetime_to_local_date, minutes_between, now_utc

UNTAGGED_KEY: TagKey = ()


def tag_key(tags: Iterable[str]) -> TagKey:
    return tuple(sorted(tags))


def entry_minutes(time_entry: TimeEntry, now: pendulum.DateTime) -> int:
    end = time_entry["end"] if time_entry["end"] is not None else now
    return minutes_between(time_entry["start"], end)


def group_entries(
    time_entries: Iterable[TimeEntry],
    now: Optional[pendulum.DateTime] = None,
    timezone: str = "local",
) -> list[GroupedEntry]:
    """
    Partition time entries by sorted tag set, then by local start date.

    Each (tag set, date) cell sums the whole minutes of its entries. Open
    entries are timed against `now`, so regrouping later yields larger
    durations for them. The result is ordered by tag key and every input
    entry lands in exactly one cell.

    Args:
        time_entries: Entries to group
        now: The instant open entries are timed against (defaults to now)
        timezone: Timezone used to derive calendar dates

    Returns:
        One GroupedEntry per distinct sorted tag set, with ids 1..n
    """
    if now is None:
        now = now_utc()

    cells: dict[TagKey, dict[pendulum.Date, list[TimeEntry]]] = {}
    for time_entry in time_entries:
        date = datetime_to_local_date(time_entry["start"], timezone)
        cells.setdefault(tag_key(time_entry["tags"]), {}).setdefault(
            date, []
        ).append(time_entry)

    grouped_entries: list[GroupedEntry] = []
    for group_id, key in enumerate(sorted(cells), start=1):
        date_entries = {
            date: sorted(entries, key=lambda e: (e["start"], e["id"]))
            for date, entries in sorted(cells[key].items())
        }
        durations = {
            date: sum(entry_minutes(e, now) for e in entries)
            for date, entries in date_entries.items()
        }
        grouped_entries.append(
            {
                "id": group_id,
                "tags": key,
                "durations": durations,
                "entries": date_entries,
                "all_submitted": all(
                    e["submitted"] for entries in date_entries.values() for e in entries
                ),
            }
        )

    assert_unique_tag_keys(grouped_entries)
    return grouped_entries


def assert_unique_tag_keys(grouped_entries: list[GroupedEntry]) -> None:
    keys = [group["tags"] for group in grouped_entries]
    if len(keys) != len(set(keys)):
        raise ValueError("grouped entries share a tag key")


def total_minutes(grouped_entry: GroupedEntry) -> int:
    return sum(grouped_entry["durations"].values())


def merge_durations(
    grouped_entries: Iterable[GroupedEntry],
) -> dict[pendulum.Date, int]:
    """Sum per-date minutes across groups, adding on date collisions."""
    merged: dict[pendulum.Date, int] = {}
    for grouped_entry in grouped_entries:
        for date, minutes in grouped_entry["durations"].items():
            merged[date] = merged.get(date, 0) + minutes
    return dict(sorted(merged.items()))


def flatten_entries(grouped_entry: GroupedEntry) -> list[TimeEntry]:
    return [e for entries in grouped_entry["entries"].values() for e in entries]


def describe_tags(tags: TagKey) -> str:
    """
    Summarize a tag set for display, preferring description: and project:
    tags when present.
    """
    description: Optional[str] = None
    project: Optional[str] = None
    for tag in tags:
        if tag.startswith("description:"):
            description = tag.removeprefix("description:").strip()
        elif tag.startswith("project:"):
            project = tag.removeprefix("project:").strip()

    if description is not None and project is not None:
        return f"{description} (Project: {project})"
    if description is not None:
        return description
    if project is not None:
        return f"Project: {project}"
    if tags == UNTAGGED_KEY:
        return "(untagged)"
    return ", ".join(tags)
