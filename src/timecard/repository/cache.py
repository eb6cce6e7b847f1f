# SPDX-License-Identifier: MIT

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Literal, Optional

from timecard import time
from timecard.errors import CacheError
from timecard.model.cache import CacheData
from timecard.template.cache import get_cache_template

logger = logging.getLogger(__name__)

CacheKey = Literal["projects", "tasks", "last_updated", "user_prefs"]

SECTION_TYPES: dict[str, type] = {
    "projects": dict,
    "tasks": dict,
    "last_updated": str,
    "user_prefs": dict,
}


class CacheRepository:
    """
    Reference data fetched from Celoxis, mirrored in memory and written back
    to a JSON file after every change.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._cache: Optional[CacheData] = None

    @property
    def cache(self) -> CacheData:
        if self._cache is None:
            self.load()
        if self._cache is None:
            raise ValueError()
        return self._cache

    def load(self) -> None:
        if not self.path.is_file():
            logger.debug("no cache at %s, starting empty", self.path)
            self._cache = get_cache_template()
            return

        try:
            raw_cache = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CacheError(f"could not read cache {self.path}: {e}") from e
        if not isinstance(raw_cache, dict):
            raise CacheError(f"cache {self.path} is not a JSON object")

        cache = get_cache_template()
        for key in cache:
            if key in raw_cache and raw_cache[key] is not None:
                if not isinstance(raw_cache[key], SECTION_TYPES[key]):
                    raise CacheError(
                        f"cache {self.path} has an invalid {key} section"
                    )
                cache[key] = raw_cache[key]  # type: ignore[literal-required]
        self._cache = cache

    def __save_data(self, cache: CacheData) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(cache, indent=2), encoding="utf-8")
        except OSError as e:
            raise CacheError(f"could not write cache {self.path}: {e}") from e
        logger.debug("wrote cache %s", self.path)

    def get(self, key: CacheKey) -> Any:
        return deepcopy(self.cache[key])

    def put_and_flush(
        self, key: CacheKey, value: Any, mark_fetched: bool = False
    ) -> None:
        """
        Replace one top-level cache value and rewrite the whole file.

        Args:
            key: Cache section to replace
            value: New value for the section
            mark_fetched: Also stamp last_updated with the current time
        """
        self.cache[key] = deepcopy(value)  # type: ignore[literal-required]
        if mark_fetched:
            self.cache["last_updated"] = time.datetime_to_iso_str(time.now_utc())
        self.__save_data(self.cache)

    def clear(self) -> None:
        self._cache = get_cache_template()
        self.__save_data(self._cache)
