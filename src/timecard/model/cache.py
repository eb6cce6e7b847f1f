# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from timecard.model.celoxis import CeloxisProject, CeloxisTask


class UserPrefs(TypedDict):
    username: str
    time_code: str


class CacheData(TypedDict):
    projects: dict[str, CeloxisProject]
    tasks: dict[str, list[CeloxisTask]]
    last_updated: Optional[str]
    user_prefs: Optional[UserPrefs]
