# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# reports print the timecard header unless --no-header was given
_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(show: bool) -> None:
    _show_header.set(show)


def get_show_header() -> bool:
    return _show_header.get()
