# SPDX-License-Identifier: MIT

import pendulum

from timecard.model.time_entry import TimeEntry


def get_time_entry_template(entry_id: str, start: pendulum.DateTime) -> TimeEntry:
    return {
        "id": entry_id,
        "start": start,
        "end": None,
        "tags": [],
        "annotation": None,
        "submitted": False,
        "celoxis_id": None,
    }
