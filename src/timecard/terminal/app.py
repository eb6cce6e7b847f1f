# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from timecard import __version__
from timecard.log import configure_logging
from timecard.repository.configuration import CONFIGURATION_REPO
from timecard.terminal import cache, configuration
from timecard.terminal.custom_typer import OrderedAliasedTyperGroup
from timecard.terminal.reference import projects, tasks
from timecard.terminal.sync import groups, sync
from timecard.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="timecard - Reconcile Timewarrior intervals with Celoxis",
    no_args_is_help=True,
)
app.add_typer(cache.app, name="cache, ca", help="inspect or reset the local cache")
app.add_typer(configuration.app, name="config, c", help="view or change settings")
app.command(name="sync, s")(sync)
app.command(name="groups, g")(groups)
app.command(name="projects, p")(projects)
app.command(name="tasks, t")(tasks)


@app.command(name="version, ve")
def version() -> None:
    """
    print the installed version
    """
    typer.echo(__version__)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    timecard - Reconcile Timewarrior intervals with Celoxis

    Global options that apply to all commands.
    """
    configure_logging("DEBUG" if verbose else CONFIGURATION_REPO.config["log_level"])
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
