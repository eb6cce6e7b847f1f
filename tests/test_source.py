# SPDX-License-Identifier: MIT

import json
import subprocess
from pathlib import Path

import pendulum
import pytest

from conftest import utc
from timecard.errors import ExportError
from timecard.timewarrior import source
from timecard.timewarrior.source import (
    build_export_command,
    is_data_file_in_range,
    parse_export,
    read_data_files,
    read_export,
    read_time_entries,
)

JAN_2 = pendulum.date(2024, 1, 2)
JAN_3 = pendulum.date(2024, 1, 3)


@pytest.mark.parametrize(
    "name, start, end, expected",
    [
        ("2024-01.data", JAN_2, JAN_3, True),
        ("2023-12.data", JAN_2, JAN_3, False),
        ("2024-02.data", JAN_2, JAN_3, False),
        ("2023-12.data", pendulum.date(2023, 12, 31), JAN_2, True),
        ("2024-13.data", JAN_2, JAN_3, False),
        ("undo.data", JAN_2, JAN_3, False),
        ("2024-01.data.bak", JAN_2, JAN_3, False),
    ],
)
def test_data_file_range(
    name: str, start: pendulum.Date, end: pendulum.Date, expected: bool
) -> None:
    assert is_data_file_in_range(name, start, end) is expected


def test_data_files_are_filtered_by_local_start_date(tmp_path: Path) -> None:
    data_path = tmp_path / "data"
    data_path.mkdir()
    (data_path / "2024-01.data").write_text(
        "\n".join(
            [
                "inc 20240101T230000Z - 20240101T233000Z # early",
                'inc 20240102T090000Z - 20240102T100000Z # "project:X"',
                "this line is garbage",
                "",
                "inc 20240103T090000Z - # open",
                "inc 20240104T090000Z - 20240104T100000Z # late",
            ]
        )
    )
    (data_path / "2023-12.data").write_text(
        "inc 20231231T090000Z - 20231231T100000Z # old\n"
    )
    (data_path / "tags.data").write_text("{}")

    entries = read_data_files(tmp_path, JAN_2, JAN_3, timezone="UTC")

    assert [entry["id"] for entry in entries] == ["2024-01:2", "2024-01:5"]
    assert entries[0]["tags"] == ["project:X"]
    assert entries[1]["end"] is None


def test_data_files_without_data_subdirectory(tmp_path: Path) -> None:
    (tmp_path / "2024-01.data").write_text(
        "inc 20240102T090000Z - 20240102T100000Z # flat\n"
    )

    entries = read_time_entries("data", JAN_2, JAN_2, timewarrior_path=tmp_path, timezone="UTC")

    assert len(entries) == 1
    assert entries[0]["start"] == utc(2024, 1, 2, 9)


def test_export_command_covers_whole_end_day() -> None:
    assert build_export_command(JAN_2, JAN_3) == [
        "timew",
        "export",
        "from",
        "2024-01-02",
        "to",
        "2024-01-03T23:59:59",
    ]


def test_parse_export_skips_bad_records() -> None:
    output = json.dumps(
        [
            {"id": 1, "start": "20240102T090000Z", "end": "20240102T100000Z", "tags": ["a"]},
            {"id": 2, "end": "20240102T100000Z"},
            {"id": 3, "start": "20240102T110000Z"},
        ]
    )

    entries = parse_export(output)

    assert [entry["id"] for entry in entries] == ["export-0", "export-2"]


@pytest.mark.parametrize("output", ["not json", '{"start": "20240102T090000Z"}'])
def test_parse_export_rejects_non_arrays(output: str) -> None:
    with pytest.raises(ExportError):
        parse_export(output)


def test_export_requires_timew(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(source.shutil, "which", lambda name: None)

    with pytest.raises(ExportError):
        read_export(JAN_2, JAN_3)


def test_export_runs_timew(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_run(command, **kwargs):
        calls.append(command)
        return subprocess.CompletedProcess(
            command, 0, stdout='[{"start": "20240102T090000Z", "tags": []}]', stderr=""
        )

    monkeypatch.setattr(source.shutil, "which", lambda name: "/usr/bin/timew")
    monkeypatch.setattr(source.subprocess, "run", fake_run)

    entries = read_export(JAN_2, JAN_3)

    assert calls == [build_export_command(JAN_2, JAN_3)]
    assert len(entries) == 1
    assert entries[0]["end"] is None


def test_failed_export_is_an_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(source.shutil, "which", lambda name: "/usr/bin/timew")
    monkeypatch.setattr(
        source.subprocess,
        "run",
        lambda command, **kwargs: subprocess.CompletedProcess(
            command, 1, stdout="", stderr="database locked"
        ),
    )

    with pytest.raises(ExportError, match="database locked"):
        read_export(JAN_2, JAN_3)


def test_missing_timewarrior_directory_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ExportError, match="could not list"):
        read_data_files(tmp_path / "nope", JAN_2, JAN_3, timezone="UTC")


def test_undecodable_line_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "2024-01.data").write_bytes(
        b"inc 20240102T090000Z - 20240102T100000Z # \xff\xfe\n"
        b"inc 20240102T110000Z - 20240102T113000Z # caf\xc3\xa9\n"
    )

    entries = read_data_files(tmp_path, JAN_2, JAN_3, timezone="UTC")

    assert [entry["id"] for entry in entries] == ["2024-01:2"]
    assert entries[0]["tags"] == ["café"]
