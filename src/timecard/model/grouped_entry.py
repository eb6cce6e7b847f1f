# SPDX-License-Identifier: MIT

from typing import TypeAlias, TypedDict

import pendulum

from timecard.model.time_entry import TimeEntry

TagKey: TypeAlias = tuple[str, ...]


class GroupedEntry(TypedDict):
    id: int
    tags: TagKey
    durations: dict[pendulum.Date, int]
    entries: dict[pendulum.Date, list[TimeEntry]]
    all_submitted: bool
