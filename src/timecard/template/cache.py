# SPDX-License-Identifier: MIT

from timecard.model.cache import CacheData


def get_cache_template() -> CacheData:
    return {
        "projects": {},
        "tasks": {},
        "last_updated": None,
        "user_prefs": None,
    }
