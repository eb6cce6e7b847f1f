# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Optional

import pendulum

from timecard.configuration import SourceType
from timecard.model.grouped_entry import GroupedEntry
from timecard.repository.ledger import LedgerRepository
from timecard.service.grouping import group_entries
from timecard.service.submission import mark_submitted
from timecard.timewarrior.source import read_time_entries

logger = logging.getLogger(__name__)


def collect_groups(
    source: SourceType,
    start: pendulum.Date,
    end: pendulum.Date,
    ledger: LedgerRepository,
    timewarrior_path: Optional[Path] = None,
    timezone: str = "local",
    include_submitted: bool = False,
) -> list[GroupedEntry]:
    """
    Read intervals for the date range and group them by tag set.

    Intervals submitted on an earlier run are dropped before grouping
    unless include_submitted is set, so a group only carries pending time.
    """
    time_entries = read_time_entries(
        source, start, end, timewarrior_path=timewarrior_path, timezone=timezone
    )
    logger.info("found %d time entries", len(time_entries))

    marked_entries = mark_submitted(time_entries, ledger)
    if not include_submitted:
        pending = [entry for entry in marked_entries if not entry["submitted"]]
        skipped = len(marked_entries) - len(pending)
        if skipped > 0:
            logger.info("leaving out %d already submitted time entries", skipped)
        marked_entries = pending

    return group_entries(marked_entries, timezone=timezone)
