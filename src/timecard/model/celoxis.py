# SPDX-License-Identifier: MIT

from typing import Any, NotRequired, Optional, TypedDict


class CeloxisProject(TypedDict):
    id: str
    name: str
    description: NotRequired[Optional[str]]
    state: NotRequired[Optional[str]]


class CeloxisTask(TypedDict):
    id: str
    name: str


class CeloxisResponse(TypedDict):
    data: list[dict[str, Any]]
    total_records: NotRequired[Optional[int]]


class CeloxisTimeEntry(TypedDict):
    date: str
    hours: float
    timeCode: str
    user: str
    task: str
    state: int
    comments: str
