# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class TimeEntry(TypedDict):
    id: str
    start: pendulum.DateTime
    end: Optional[pendulum.DateTime]
    tags: list[str]
    annotation: Optional[str]
    submitted: bool
    celoxis_id: Optional[str]
