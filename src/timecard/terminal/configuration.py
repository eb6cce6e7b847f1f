# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from timecard import configuration
from timecard.repository.configuration import CONFIGURATION_REPO
from timecard.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def __config_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_file", str(configuration.APP_CONFIG_PATH))
    table.add_row("base_url", config["base_url"])
    table.add_row("project_filter", config["project_filter"])
    table.add_row("default_time_code", config["default_time_code"])
    table.add_row("source", config["source"])
    table.add_row(
        "timewarrior_path", config["timewarrior_path"] or "auto-detect"
    )
    table.add_row(
        "cache_path",
        config["cache_path"] or f"<timewarrior_path>/{configuration.CACHE_FILE_NAME}",
    )
    table.add_row(
        "credential_path",
        config["credential_path"] or str(configuration.DEFAULT_CREDENTIAL_PATH),
    )
    table.add_row("timezone", config["timezone"] or "local")
    table.add_row("log_level", config["log_level"])
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    Console().print(__config_table())


@app.command("set, s")
def set(
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", help="Celoxis API base URL"),
    ] = None,
    project_filter: Annotated[
        Optional[str],
        typer.Option("--project-filter", help="Filter used when listing projects"),
    ] = None,
    default_time_code: Annotated[
        Optional[str],
        typer.Option(
            "--default-time-code",
            help="Time code suggested when user preferences are first set",
        ),
    ] = None,
    source: Annotated[
        Optional[str],
        typer.Option("--source", help="Interval source: export or data"),
    ] = None,
    timewarrior_path: Annotated[
        Optional[str],
        typer.Option("--timewarrior-path", help="Timewarrior data directory"),
    ] = None,
    remove_timewarrior_path: Annotated[
        bool,
        typer.Option(
            "--remove-timewarrior-path", help="Auto-detect the Timewarrior directory"
        ),
    ] = False,
    cache_path: Annotated[
        Optional[str],
        typer.Option("--cache-path", help="Location of the reference data cache"),
    ] = None,
    remove_cache_path: Annotated[
        bool,
        typer.Option(
            "--remove-cache-path",
            help="Keep the cache beside the Timewarrior data",
        ),
    ] = False,
    credential_path: Annotated[
        Optional[str],
        typer.Option("--credential-path", help="File holding the Celoxis API key"),
    ] = None,
    remove_credential_path: Annotated[
        bool,
        typer.Option(
            "--remove-credential-path", help="Use the default API key location"
        ),
    ] = False,
    timezone: Annotated[
        Optional[str],
        typer.Option("--timezone", help="Timezone used to assign intervals to days"),
    ] = None,
    remove_timezone: Annotated[
        bool,
        typer.Option("--remove-timezone", help="Use the local timezone"),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if source is not None and source not in ("export", "data"):
        raise typer.BadParameter("source must be 'export' or 'data'")
    if log_level is not None and log_level.upper() not in (
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
    ):
        raise typer.BadParameter("log level must be DEBUG, INFO, WARNING or ERROR")

    CONFIGURATION_REPO.update_config(
        base_url=base_url,
        project_filter=project_filter,
        default_time_code=default_time_code,
        source=source,  # type: ignore[arg-type]
        timewarrior_path=timewarrior_path,
        remove_timewarrior_path=remove_timewarrior_path,
        cache_path=cache_path,
        remove_cache_path=remove_cache_path,
        credential_path=credential_path,
        remove_credential_path=remove_credential_path,
        timezone=timezone,
        remove_timezone=remove_timezone,
        log_level=log_level,
    )

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(__config_table("Updated Configuration"))
