# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from timecard.model.celoxis import CeloxisProject, CeloxisTask
from timecard.model.grouped_entry import GroupedEntry


class TaskAssignment(TypedDict):
    groups: list[GroupedEntry]
    durations: dict[pendulum.Date, int]
    project: CeloxisProject
    task: CeloxisTask
    summary: str
    time_code: str
    user: str
