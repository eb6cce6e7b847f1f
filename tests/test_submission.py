# SPDX-License-Identifier: MIT

import json

import pytest

from conftest import FakeResponse, FakeSession, make_entry, utc
from timecard.client.celoxis import CeloxisClient
from timecard.errors import RemoteError
from timecard.repository.cache import CacheRepository
from timecard.repository.ledger import LedgerRepository
from timecard.service.grouping import group_entries
from timecard.service.submission import (
    assignment_to_records,
    build_assignment,
    entry_fingerprint,
    mark_submitted,
    submit_assignments,
)

NOW = utc(2024, 1, 5, 12)
PROJECT = {"id": "P1", "name": "Alpha"}
TASK = {"id": "T1", "name": "Build"}
PREFS = {"username": "alice", "time_code": "engineering_labor"}


def _entries() -> list:
    return [
        make_entry("1", utc(2024, 1, 2, 9), utc(2024, 1, 2, 10), ["build"]),
        make_entry("2", utc(2024, 1, 2, 13), utc(2024, 1, 2, 13, 30), ["build"]),
        make_entry("3", utc(2024, 1, 3, 9), utc(2024, 1, 3, 9, 45), ["build"]),
    ]


def _assignment(entries: list | None = None) -> dict:
    groups = group_entries(entries or _entries(), now=NOW, timezone="UTC")
    return build_assignment(groups, PROJECT, TASK, "Implemented parser", PREFS)  # type: ignore[arg-type]


def test_assignment_becomes_one_record_per_date() -> None:
    records = assignment_to_records(_assignment())  # type: ignore[arg-type]

    assert records == [
        {
            "date": "2024-01-02",
            "hours": 1.5,
            "timeCode": "engineering_labor",
            "user": "alice",
            "task": "T1",
            "state": 0,
            "comments": "Implemented parser",
        },
        {
            "date": "2024-01-03",
            "hours": 0.75,
            "timeCode": "engineering_labor",
            "user": "alice",
            "task": "T1",
            "state": 0,
            "comments": "Implemented parser",
        },
    ]


def test_hours_are_rounded_to_two_decimals() -> None:
    entries = [make_entry("1", utc(2024, 1, 2, 9), utc(2024, 1, 2, 9, 10), ["x"])]

    records = assignment_to_records(_assignment(entries))  # type: ignore[arg-type]

    assert records[0]["hours"] == 0.17


def test_assignment_merges_groups_by_date() -> None:
    entries = _entries() + [
        make_entry("4", utc(2024, 1, 2, 15), utc(2024, 1, 2, 15, 15), ["review"])
    ]

    assignment = _assignment(entries)

    assert len(assignment["groups"]) == 2
    assert [r["hours"] for r in assignment_to_records(assignment)] == [1.75, 0.75]  # type: ignore[arg-type]


def test_fingerprint_ignores_ids_and_tag_order() -> None:
    first = make_entry("export-0", utc(2024, 1, 2, 9), utc(2024, 1, 2, 10), ["a", "b"])
    second = make_entry("2024-01:3", utc(2024, 1, 2, 9), utc(2024, 1, 2, 10), ["b", "a"])
    moved = make_entry("export-0", utc(2024, 1, 2, 9), utc(2024, 1, 2, 11), ["a", "b"])

    assert entry_fingerprint(first) == entry_fingerprint(second)
    assert entry_fingerprint(first) != entry_fingerprint(moved)


def test_submission_records_closed_intervals(
    cache: CacheRepository, session: FakeSession, ledger: LedgerRepository
) -> None:
    session.queue("POST", "timeEntries", FakeResponse(body={"data": []}))
    client = CeloxisClient(cache, "key", session=session)  # type: ignore[arg-type]
    entries = _entries() + [make_entry("open", utc(2024, 1, 3, 14), None, ["build"])]
    assignment = _assignment(entries)

    records = submit_assignments(client, [assignment], ledger)  # type: ignore[list-item]

    assert len(records) == 2
    assert json.loads(session.calls[0][2]["data"]) == records
    assert len(ledger.ledger["records"]) == 3
    assert {r["date"] for r in ledger.ledger["records"]} == {"2024-01-02", "2024-01-03"}
    assert all(r["task"] == "T1" for r in ledger.ledger["records"])

    reloaded = LedgerRepository(ledger.path)
    marked = mark_submitted(entries, reloaded)
    assert [e["submitted"] for e in marked] == [True, True, True, False]
    assert [e["submitted"] for e in entries] == [False, False, False, False]


def test_failed_submission_records_nothing(
    cache: CacheRepository, session: FakeSession, ledger: LedgerRepository
) -> None:
    session.queue("POST", "timeEntries", FakeResponse(status_code=500, body="boom"))
    client = CeloxisClient(cache, "key", session=session)  # type: ignore[arg-type]

    with pytest.raises(RemoteError):
        submit_assignments(client, [_assignment()], ledger)  # type: ignore[list-item]

    assert not ledger.path.exists()
    assert ledger.ledger["records"] == []


def test_nothing_to_submit_makes_no_call(
    cache: CacheRepository, session: FakeSession, ledger: LedgerRepository
) -> None:
    client = CeloxisClient(cache, "key", session=session)  # type: ignore[arg-type]

    assert submit_assignments(client, [], ledger) == []
    assert session.calls == []
