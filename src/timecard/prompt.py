# SPDX-License-Identifier: MIT

from typing import Optional, Protocol

import pendulum


class Prompter(Protocol):
    """
    Interactive capabilities used by the assignment workflow.

    Every method blocks until the user answers. Implementations re-prompt
    for empty text and for an end date before the start date; an empty
    multi selection is returned as [] and left to the caller. A cancelled
    prompt (q at the terminal) returns None; confirmations cannot be
    cancelled.
    """

    def ask_text(
        self, message: str, default: Optional[str] = None, secret: bool = False
    ) -> Optional[str]: ...

    def ask_choice(self, message: str, options: list[str]) -> Optional[int]: ...

    def ask_multi_choice(
        self, message: str, options: list[str]
    ) -> Optional[list[int]]: ...

    def ask_confirm(self, message: str, default: bool) -> bool: ...

    def ask_date_range(
        self, message: str
    ) -> Optional[tuple[pendulum.Date, pendulum.Date]]: ...

    def show(self, message: str) -> None: ...
