# SPDX-License-Identifier: MIT

import datetime
import re
from typing import Optional, cast

import pendulum

COMPACT_UTC_FORMAT = "%Y%m%dT%H%M%SZ"
_COMPACT_UTC_PATTERN = re.compile(r"^\d{8}T\d{6}Z$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_timewarrior_str(value: str) -> pendulum.DateTime:
    """
    Parse a Timewarrior timestamp into a UTC pendulum.DateTime.

    Accepts the compact form used in data files and exports
    (20240102T090000Z) and RFC 3339 strings.

    Raises:
        ValueError: If the value is in neither form
    """
    value = value.strip()
    if _COMPACT_UTC_PATTERN.match(value):
        python_value = datetime.datetime.strptime(value, COMPACT_UTC_FORMAT)
        return pendulum.instance(python_value, tz="UTC")

    parsed = pendulum.parse(value)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"not a timestamp: {value!r}")
    return parsed.in_tz("UTC")


def datetime_to_local_date(
    datetime: pendulum.DateTime, timezone: str = "local"
) -> pendulum.Date:
    return datetime.in_tz(timezone).date()


def date_to_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def date_from_str(date_str: str) -> pendulum.Date:
    parsed = pendulum.parse(date_str, exact=True)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if not isinstance(parsed, pendulum.Date):
        raise ValueError(f"not a date: {date_str!r}")
    return parsed


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_str(date_str)


def minutes_between(start: pendulum.DateTime, end: pendulum.DateTime) -> int:
    """Whole minutes from start to end, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def minutes_to_hours(minutes: int) -> float:
    return round(minutes / 60, 2)


def minutes_to_display_str(minutes: int) -> str:
    sign = "-" if minutes < 0 else ""
    hours, remainder = divmod(abs(minutes), 60)
    return f"{sign}{hours}:{remainder:02d}"
