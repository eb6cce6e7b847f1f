# SPDX-License-Identifier: MIT

from typing import Any, Optional

import pendulum

from timecard.errors import IntervalParseError
from timecard.model.time_entry import TimeEntry
from timecard.template.time_entry import get_time_entry_template
from timecard.time import datetime_from_timewarrior_str


def parse_interval_line(line: str, entry_id: str) -> TimeEntry:
    """
    Parse one line of a Timewarrior data file.

    The line format is:

        inc <start> [- [<end>]] [# <tags> [# <annotation>]]

    where tags are space separated and may be double quoted. An empty or
    missing end denotes an open interval.

    Raises:
        IntervalParseError: If the line is not a valid interval
    """
    line = line.strip()
    if not line:
        raise IntervalParseError("empty line")
    if not line.startswith("inc "):
        raise IntervalParseError(f"line does not start with 'inc': {line!r}")

    interval, tag_section = __split_unquoted(line[len("inc ") :], "#")
    timestamps = interval.split()
    if len(timestamps) == 0:
        raise IntervalParseError(f"missing start timestamp: {line!r}")
    if len(timestamps) > 1 and timestamps[1] != "-":
        raise IntervalParseError(f"invalid interval format: {line!r}")
    if len(timestamps) > 3:
        raise IntervalParseError(f"invalid interval format: {line!r}")

    start = __parse_timestamp(timestamps[0])
    end = __parse_timestamp(timestamps[2]) if len(timestamps) == 3 else None

    tags: list[str] = []
    annotation: Optional[str] = None
    if tag_section is not None:
        tag_text, annotation_text = __split_unquoted(tag_section, "#")
        tags = __tokenize(tag_text)
        if annotation_text is not None:
            annotation = " ".join(__tokenize(annotation_text)) or None

    time_entry = get_time_entry_template(entry_id, start)
    time_entry["end"] = end
    time_entry["tags"] = tags
    time_entry["annotation"] = annotation
    return time_entry


def parse_interval_object(raw: Any, entry_id: str) -> TimeEntry:
    """
    Parse one element of the `timew export` JSON array.

    Raises:
        IntervalParseError: If the object is missing a start or has
            values of the wrong type
    """
    if not isinstance(raw, dict):
        raise IntervalParseError(f"interval is not an object: {raw!r}")

    raw_start = raw.get("start")
    if not isinstance(raw_start, str):
        raise IntervalParseError(f"missing start time: {raw!r}")
    start = __parse_timestamp(raw_start)

    end: Optional[pendulum.DateTime] = None
    raw_end = raw.get("end")
    if raw_end is not None:
        if not isinstance(raw_end, str):
            raise IntervalParseError(f"end time is not a string: {raw!r}")
        end = __parse_timestamp(raw_end)

    raw_tags = raw.get("tags") or []
    if not isinstance(raw_tags, list):
        raise IntervalParseError(f"tags is not an array: {raw!r}")

    raw_annotation = raw.get("annotation")

    time_entry = get_time_entry_template(entry_id, start)
    time_entry["end"] = end
    time_entry["tags"] = [tag for tag in raw_tags if isinstance(tag, str)]
    time_entry["annotation"] = (
        raw_annotation if isinstance(raw_annotation, str) else None
    )
    return time_entry


def __parse_timestamp(value: str) -> pendulum.DateTime:
    try:
        return datetime_from_timewarrior_str(value)
    except ValueError as e:
        raise IntervalParseError(f"invalid timestamp {value!r}: {e}") from e


def __split_unquoted(text: str, separator: str) -> tuple[str, Optional[str]]:
    """Split on the first separator that is not inside double quotes."""
    in_quotes = False
    for index, character in enumerate(text):
        if character == '"':
            in_quotes = not in_quotes
        elif character == separator and not in_quotes:
            return text[:index], text[index + 1 :]
    return text, None


def __tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    current = ""
    in_quotes = False

    for character in text.strip():
        if character == '"':
            in_quotes = not in_quotes
            if not in_quotes and current:
                tokens.append(current)
                current = ""
        elif character == " " and not in_quotes:
            if current:
                tokens.append(current)
                current = ""
        else:
            current += character

    if current:
        tokens.append(current)
    return tokens
