# SPDX-License-Identifier: MIT

import json
import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import Optional

import pendulum

from timecard.configuration import SourceType
from timecard.errors import ExportError, IntervalParseError
from timecard.model.time_entry import TimeEntry
from timecard.time import date_to_str, datetime_to_local_date
from timecard.timewarrior.parse import parse_interval_line, parse_interval_object

logger = logging.getLogger(__name__)

DATA_FILE_PATTERN = re.compile(r"^(\d{4})-(\d{2})\.data$")


def read_time_entries(
    source: SourceType,
    start: pendulum.Date,
    end: pendulum.Date,
    timewarrior_path: Optional[Path] = None,
    timezone: str = "local",
) -> list[TimeEntry]:
    if source == "export":
        return read_export(start, end)
    if timewarrior_path is None:
        raise ExportError("reading data files requires a Timewarrior directory")
    return read_data_files(timewarrior_path, start, end, timezone=timezone)


def build_export_command(start: pendulum.Date, end: pendulum.Date) -> list[str]:
    return [
        "timew",
        "export",
        "from",
        date_to_str(start),
        "to",
        f"{date_to_str(end)}T23:59:59",
    ]


def read_export(start: pendulum.Date, end: pendulum.Date) -> list[TimeEntry]:
    """
    Run `timew export` for the date range and parse its JSON output.

    Records that cannot be parsed are logged and skipped.

    Raises:
        ExportError: If timew is missing, fails, or prints something other
            than a JSON array
    """
    if shutil.which("timew") is None:
        raise ExportError("Timewarrior (timew) is not available on the system")

    command = build_export_command(start, end)
    logger.info("fetching time entries from %s to %s", command[3], command[5])
    result = subprocess.run(command, text=True, capture_output=True)
    if result.returncode != 0:
        raise ExportError(f"Timewarrior export failed: {result.stderr.strip()}")

    return parse_export(result.stdout)


def parse_export(output: str) -> list[TimeEntry]:
    try:
        raw_entries = json.loads(output)
    except json.JSONDecodeError as e:
        raise ExportError(f"Timewarrior export is not valid JSON: {e}") from e
    if not isinstance(raw_entries, list):
        raise ExportError("Timewarrior export is not a JSON array")

    time_entries: list[TimeEntry] = []
    for index, raw_entry in enumerate(raw_entries):
        try:
            time_entries.append(parse_interval_object(raw_entry, f"export-{index}"))
        except IntervalParseError as e:
            logger.warning("skipping export record %d: %s", index, e)
    return time_entries


def is_data_file_in_range(
    file_name: str, start: pendulum.Date, end: pendulum.Date
) -> bool:
    """Whether a YYYY-MM.data file covers any day of the inclusive range."""
    match = DATA_FILE_PATTERN.match(file_name)
    if match is None:
        return False

    year = int(match.group(1))
    month = int(match.group(2))
    if not 1 <= month <= 12:
        return False

    first_day = pendulum.date(year, month, 1)
    next_month = first_day.add(months=1)
    return not (next_month <= start or first_day > end)


def find_data_files(
    timewarrior_path: Path, start: pendulum.Date, end: pendulum.Date
) -> list[Path]:
    data_path = timewarrior_path / "data"
    if not data_path.is_dir():
        data_path = timewarrior_path
    try:
        return sorted(
            file_path
            for file_path in data_path.iterdir()
            if file_path.is_file()
            and is_data_file_in_range(file_path.name, start, end)
        )
    except OSError as e:
        raise ExportError(
            f"could not list Timewarrior data in {data_path}: {e}"
        ) from e


def read_data_files(
    timewarrior_path: Path,
    start: pendulum.Date,
    end: pendulum.Date,
    timezone: str = "local",
) -> list[TimeEntry]:
    """
    Parse the monthly data files overlapping the range and keep the
    intervals whose local start date falls inside it.

    Lines that are not valid UTF-8 or not valid intervals are logged and
    skipped.

    Raises:
        ExportError: If the data directory or a data file cannot be read
    """
    time_entries: list[TimeEntry] = []
    for file_path in find_data_files(timewarrior_path, start, end):
        logger.debug("reading %s", file_path)
        try:
            raw_lines = file_path.read_bytes().splitlines()
        except OSError as e:
            raise ExportError(f"could not read {file_path}: {e}") from e

        for line_number, raw_line in enumerate(raw_lines, start=1):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.warning(
                    "skipping %s line %d: %s", file_path.name, line_number, e
                )
                continue
            if not line.strip():
                continue
            try:
                time_entry = parse_interval_line(
                    line, f"{file_path.stem}:{line_number}"
                )
            except IntervalParseError as e:
                logger.warning(
                    "skipping %s line %d: %s", file_path.name, line_number, e
                )
                continue

            start_date = datetime_to_local_date(time_entry["start"], timezone)
            if start <= start_date <= end:
                time_entries.append(time_entry)
    return time_entries
