# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from timecard.time import date_from_str


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    """
    Parse a calendar date given on the command line or at a prompt.

    valid inputs: YYYY-MM-DD, today (t), yesterday (y), or a day offset
    like -1 or 3
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return pendulum.today("local").add(days=int(date)).date()

    if date == "today" or date == "t":
        return pendulum.today("local").date()
    if date == "yesterday" or date == "y":
        return pendulum.yesterday("local").date()
    if date == "monday" or date == "m":
        return pendulum.today("local").start_of("week").date()
    raise typer.BadParameter("Incorrect date format")


def parse_index_list(index_param: str, maximum: int) -> list[int]:
    """
    Parse a single index, comma-separated list of indexes, or ranges of
    indexes as shown to the user (1-based).

    Args:
        index_param: A single index (e.g., "1"), comma-separated list
                     (e.g., "1,2,3"), range (e.g., "1-5"), mixed
                     (e.g., "1,3-5,8"), or "all"
        maximum: The highest valid index

    Returns:
        Zero-based positions, sorted and deduplicated. An empty string
        yields an empty list.

    Raises:
        typer.BadParameter: If any index is not a valid integer, out of
            range, or a range is malformed
    """
    if index_param.strip().lower() in ("a", "all"):
        return list(range(maximum))

    index_strings = [s.strip() for s in index_param.split(",")]

    indexes: list[int] = []
    for index_str in index_strings:
        if not index_str:
            continue

        if "-" in index_str:
            range_parts = index_str.split("-")
            if len(range_parts) != 2:
                raise typer.BadParameter(
                    f"Invalid range format: '{index_str}' (expected format: 'start-end')"
                )
            try:
                start = int(range_parts[0].strip())
                end = int(range_parts[1].strip())
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid range: '{index_str}' contains non-integer values"
                )
            if start > end:
                raise typer.BadParameter(
                    f"Invalid range: '{index_str}' (start must be <= end)"
                )
            indexes.extend(range(start, end + 1))
        else:
            try:
                indexes.append(int(index_str))
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid number: '{index_str}' is not a valid integer"
                )

    for index in indexes:
        if index < 1 or index > maximum:
            raise typer.BadParameter(f"{index} is not between 1 and {maximum}")

    return [index - 1 for index in sorted(set(indexes))]
