# SPDX-License-Identifier: MIT

import hashlib
import logging
from typing import Iterable

from timecard.client.celoxis import CeloxisClient
from timecard.model.cache import UserPrefs
from timecard.model.celoxis import CeloxisProject, CeloxisTask, CeloxisTimeEntry
from timecard.model.grouped_entry import GroupedEntry
from timecard.model.task_assignment import TaskAssignment
from timecard.model.time_entry import TimeEntry
from timecard.repository.ledger import LedgerRepository
from timecard.service.grouping import merge_durations, tag_key
from timecard.time import date_to_str, datetime_to_iso_str, minutes_to_hours

logger = logging.getLogger(__name__)

PENDING_STATE = 0


def entry_fingerprint(time_entry: TimeEntry) -> str:
    """A stable identity for an interval across runs; export ids are not."""
    end = time_entry["end"]
    raw = "|".join(
        [
            datetime_to_iso_str(time_entry["start"]),
            datetime_to_iso_str(end) if end is not None else "",
            "\x1f".join(tag_key(time_entry["tags"])),
        ]
    )
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def mark_submitted(
    time_entries: Iterable[TimeEntry], ledger: LedgerRepository
) -> list[TimeEntry]:
    """Copies of the entries with submitted set from the ledger."""
    marked: list[TimeEntry] = []
    for time_entry in time_entries:
        copy: TimeEntry = {**time_entry}  # type: ignore[typeddict-item]
        copy["submitted"] = ledger.is_submitted(entry_fingerprint(time_entry))
        marked.append(copy)
    return marked


def build_assignment(
    groups: list[GroupedEntry],
    project: CeloxisProject,
    task: CeloxisTask,
    summary: str,
    user_prefs: UserPrefs,
) -> TaskAssignment:
    return {
        "groups": list(groups),
        "durations": merge_durations(groups),
        "project": project,
        "task": task,
        "summary": summary,
        "time_code": user_prefs["time_code"],
        "user": user_prefs["username"],
    }


def assignment_to_records(assignment: TaskAssignment) -> list[CeloxisTimeEntry]:
    """One Celoxis time entry per date, hours rounded to two decimals."""
    return [
        {
            "date": date_to_str(date),
            "hours": minutes_to_hours(minutes),
            "timeCode": assignment["time_code"],
            "user": assignment["user"],
            "task": assignment["task"]["id"],
            "state": PENDING_STATE,
            "comments": assignment["summary"],
        }
        for date, minutes in sorted(assignment["durations"].items())
    ]


def assignments_to_records(
    assignments: Iterable[TaskAssignment],
) -> list[CeloxisTimeEntry]:
    records: list[CeloxisTimeEntry] = []
    for assignment in assignments:
        records.extend(assignment_to_records(assignment))
    return records


def submit_assignments(
    client: CeloxisClient,
    assignments: list[TaskAssignment],
    ledger: LedgerRepository,
) -> list[CeloxisTimeEntry]:
    """
    Submit every assignment as a single batch and record the consumed
    closed intervals in the ledger.

    Errors from the client propagate; nothing is recorded in that case.
    """
    records = assignments_to_records(assignments)
    if len(records) == 0:
        return records

    client.submit(records)

    ledger_records: list[tuple[str, str, str]] = []
    for assignment in assignments:
        for group in assignment["groups"]:
            for date, time_entries in group["entries"].items():
                for time_entry in time_entries:
                    if time_entry["end"] is None:
                        logger.debug("not recording open interval %s", time_entry["id"])
                        continue
                    ledger_records.append(
                        (
                            entry_fingerprint(time_entry),
                            assignment["task"]["id"],
                            date_to_str(date),
                        )
                    )
    ledger.record_submitted(ledger_records)
    return records
