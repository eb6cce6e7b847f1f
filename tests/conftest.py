# SPDX-License-Identifier: MIT

import json
from pathlib import Path
from typing import Any, Optional

import pendulum
import pytest

from timecard.model.time_entry import TimeEntry
from timecard.repository.cache import CacheRepository
from timecard.repository.ledger import LedgerRepository
from timecard.template.time_entry import get_time_entry_template


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self._body = body

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    @property
    def text(self) -> str:
        if isinstance(self._body, str):
            return self._body
        return json.dumps(self._body)

    @property
    def content(self) -> bytes:
        if self._body is None:
            return b""
        return self.text.encode("utf-8")

    def json(self) -> Any:
        if isinstance(self._body, str):
            return json.loads(self._body)
        if self._body is None:
            raise ValueError("no body")
        return self._body


class FakeSession:
    """Stands in for requests.Session, replaying queued responses."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.responses: dict[tuple[str, str], list[FakeResponse]] = {}

    def queue(self, method: str, resource: str, response: FakeResponse) -> None:
        self.responses.setdefault((method, resource), []).append(response)

    def __respond(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        resource = url.rsplit("/", 1)[-1]
        queued = self.responses.get((method, resource))
        if not queued:
            raise AssertionError(f"unexpected {method} {url}")
        return queued.pop(0)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.__respond("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.__respond("POST", url, **kwargs)

    def count(self, method: str, resource: str) -> int:
        return sum(
            1
            for call_method, url, _ in self.calls
            if call_method == method and url.endswith(f"/{resource}")
        )


class ScriptedPrompter:
    """Answers prompts from per-method queues and records everything asked."""

    def __init__(
        self,
        texts: Optional[list[Optional[str]]] = None,
        choices: Optional[list[Optional[int]]] = None,
        multi_choices: Optional[list[Optional[list[int]]]] = None,
        confirms: Optional[list[bool]] = None,
        date_ranges: Optional[list[tuple[pendulum.Date, pendulum.Date]]] = None,
    ) -> None:
        self.texts = list(texts or [])
        self.choices = list(choices or [])
        self.multi_choices = list(multi_choices or [])
        self.confirms = list(confirms or [])
        self.date_ranges = list(date_ranges or [])
        self.asked: list[tuple[str, str]] = []
        self.shown: list[str] = []
        self.options: list[list[str]] = []

    def show(self, message: str) -> None:
        self.shown.append(message)

    def ask_text(
        self, message: str, default: Optional[str] = None, secret: bool = False
    ) -> Optional[str]:
        self.asked.append(("text", message))
        answer = self.texts.pop(0)
        if answer == "" and default is not None:
            return default
        return answer

    def ask_choice(self, message: str, options: list[str]) -> Optional[int]:
        self.asked.append(("choice", message))
        self.options.append(options)
        return self.choices.pop(0)

    def ask_multi_choice(
        self, message: str, options: list[str]
    ) -> Optional[list[int]]:
        self.asked.append(("multi_choice", message))
        self.options.append(options)
        return self.multi_choices.pop(0)

    def ask_confirm(self, message: str, default: bool) -> bool:
        self.asked.append(("confirm", message))
        return self.confirms.pop(0)

    def ask_date_range(
        self, message: str
    ) -> Optional[tuple[pendulum.Date, pendulum.Date]]:
        self.asked.append(("date_range", message))
        return self.date_ranges.pop(0)


def make_entry(
    entry_id: str,
    start: pendulum.DateTime,
    end: Optional[pendulum.DateTime],
    tags: list[str],
    submitted: bool = False,
) -> TimeEntry:
    time_entry = get_time_entry_template(entry_id, start)
    time_entry["end"] = end
    time_entry["tags"] = tags
    time_entry["submitted"] = submitted
    return time_entry


def utc(*args: int) -> pendulum.DateTime:
    return pendulum.datetime(*args, tz="UTC")


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "timewarrior" / "celoxis_cache.json"


@pytest.fixture
def cache(cache_path: Path) -> CacheRepository:
    repository = CacheRepository(cache_path)
    repository.load()
    return repository


@pytest.fixture
def ledger(tmp_path: Path) -> LedgerRepository:
    return LedgerRepository(tmp_path / "timewarrior" / "celoxis_ledger.json")


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


PROJECTS_BODY = {
    "data": [
        {"id": "P2", "name": "beta", "description": None, "state": "Active"},
        {"id": "P1", "name": "Alpha", "description": "first", "state": "Active"},
    ],
    "total_records": 2,
}

TASKS_BODY = {
    "data": [
        {"id": "T2", "name": "testing"},
        {"id": "T1", "name": "Build"},
    ],
    "total_records": 2,
}
