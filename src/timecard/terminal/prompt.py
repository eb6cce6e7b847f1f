# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
import typer
from rich import box
from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table

from timecard.terminal.parse import parse_date, parse_index_list

CANCEL_INPUTS = ("q", "quit")


class RichPrompter:
    """
    Prompts on the terminal with rich.

    Menus are printed as numbered tables; entering q cancels a menu.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console if console is not None else Console()

    def show(self, message: str) -> None:
        self.console.print(message)

    def ask_text(
        self, message: str, default: Optional[str] = None, secret: bool = False
    ) -> Optional[str]:
        message = f"{message} (q to cancel)"
        while True:
            if default is not None:
                answer = Prompt.ask(
                    message, default=default, password=secret, console=self.console
                )
            else:
                answer = Prompt.ask(message, password=secret, console=self.console)
            answer = answer.strip()
            if answer.lower() in CANCEL_INPUTS:
                return None
            if answer:
                return answer
            self.console.print("[red]A value is required[/red]")

    def ask_choice(self, message: str, options: list[str]) -> Optional[int]:
        if len(options) == 0:
            self.console.print("[yellow]Nothing to choose from[/yellow]")
            return None

        self.__print_options(message, options)
        while True:
            answer = Prompt.ask(
                "Number (q to skip)", console=self.console, show_default=False
            ).strip()
            if answer.lower() in CANCEL_INPUTS or answer == "":
                return None
            try:
                selection = parse_index_list(answer, len(options))
            except typer.BadParameter as e:
                self.console.print(f"[red]{e.message}[/red]")
                continue
            if len(selection) != 1:
                self.console.print("[red]Select exactly one entry[/red]")
                continue
            return selection[0]

    def ask_multi_choice(
        self, message: str, options: list[str]
    ) -> Optional[list[int]]:
        self.__print_options(message, options)
        while True:
            answer = Prompt.ask(
                "Numbers, ranges or all (q to stop)",
                console=self.console,
                default="",
                show_default=False,
            ).strip()
            if answer.lower() in CANCEL_INPUTS:
                return None
            try:
                return parse_index_list(answer, len(options))
            except typer.BadParameter as e:
                self.console.print(f"[red]{e.message}[/red]")

    def ask_confirm(self, message: str, default: bool) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def ask_date_range(
        self, message: str
    ) -> Optional[tuple[pendulum.Date, pendulum.Date]]:
        self.console.print(message)
        start = self.__ask_date("Start date", "today")
        while True:
            end = self.__ask_date("End date", start.format("YYYY-MM-DD"))
            if end >= start:
                return start, end
            self.console.print(
                f"[red]End date must not be before {start.format('YYYY-MM-DD')}[/red]"
            )

    def __ask_date(self, message: str, default: str) -> pendulum.Date:
        while True:
            answer = Prompt.ask(message, default=default, console=self.console)
            try:
                date = parse_date(answer)
            except typer.BadParameter as e:
                self.console.print(f"[red]{e.message}[/red]")
                continue
            if date is not None:
                return date

    def __print_options(self, message: str, options: list[str]) -> None:
        table = Table(title=message, box=box.SIMPLE, title_justify="left")
        table.add_column("#", justify="right", style="cyan")
        table.add_column("option")
        for index, option in enumerate(options, start=1):
            table.add_row(str(index), option)
        self.console.print(table)
