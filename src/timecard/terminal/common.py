# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import pendulum
import requests
import typer
from rich.console import Console

from timecard import configuration
from timecard.client.celoxis import CeloxisClient, ensure_api_key
from timecard.errors import TimecardError
from timecard.prompt import Prompter
from timecard.repository.cache import CacheRepository
from timecard.repository.configuration import CONFIGURATION_REPO
from timecard.repository.credential import CredentialRepository
from timecard.repository.ledger import LedgerRepository
from timecard.time import date_to_str

logger = logging.getLogger(__name__)

error_console = Console(stderr=True)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn expected failures into a printed message and exit status 1."""
    try:
        yield
    except TimecardError as e:
        logger.debug("command failed", exc_info=True)
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    except requests.RequestException as e:
        logger.debug("request failed", exc_info=True)
        error_console.print(f"[red]Request to Celoxis failed:[/red] {e}")
        raise typer.Exit(code=1)


def get_timezone() -> str:
    return CONFIGURATION_REPO.config["timezone"] or "local"


def open_cache() -> CacheRepository:
    cache = CacheRepository(configuration.get_cache_path(CONFIGURATION_REPO.config))
    cache.load()
    return cache


def open_ledger() -> LedgerRepository:
    return LedgerRepository(configuration.get_ledger_path(CONFIGURATION_REPO.config))


def open_client(
    prompter: Prompter, cache: Optional[CacheRepository] = None
) -> CeloxisClient:
    config = CONFIGURATION_REPO.config
    credentials = CredentialRepository(configuration.get_credential_path(config))
    api_key = ensure_api_key(credentials, prompter)
    return CeloxisClient(
        cache if cache is not None else open_cache(),
        api_key,
        base_url=config["base_url"],
        project_filter=config["project_filter"],
    )


def resolve_date_range(
    prompter: Prompter,
    start: Optional[pendulum.Date],
    end: Optional[pendulum.Date],
) -> tuple[pendulum.Date, pendulum.Date]:
    """
    Use the dates given as options, asking for the range when the start is
    missing. A missing end defaults to the start date.
    """
    if start is None:
        date_range = prompter.ask_date_range("Select the date range to reconcile")
        if date_range is None:
            raise typer.Exit(code=0)
        return date_range

    if end is None:
        end = start
    if end < start:
        raise typer.BadParameter(
            f"end date {date_to_str(end)} is before start date {date_to_str(start)}"
        )
    return start, end
