# SPDX-License-Identifier: MIT

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from timecard import time
from timecard.errors import CacheError
from timecard.model.ledger import Ledger, LedgerRecord
from timecard.template.ledger import get_ledger_template

logger = logging.getLogger(__name__)


class LedgerRepository:
    """Fingerprints of intervals that have already been submitted."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._ledger: Optional[Ledger] = None
        self._fingerprints: Optional[set[str]] = None

    @property
    def ledger(self) -> Ledger:
        if self._ledger is None:
            self.__load_data()
        if self._ledger is None:
            raise ValueError()
        return self._ledger

    @property
    def fingerprints(self) -> set[str]:
        if self._fingerprints is None:
            self._fingerprints = {
                record["fingerprint"] for record in self.ledger["records"]
            }
        return self._fingerprints

    def __load_data(self) -> None:
        if not self.path.is_file():
            self._ledger = get_ledger_template()
            return
        try:
            raw_ledger = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CacheError(f"could not read ledger {self.path}: {e}") from e
        if not isinstance(raw_ledger, dict) or not isinstance(
            raw_ledger.get("records"), list
        ):
            raise CacheError(f"ledger {self.path} is malformed")

        ledger = get_ledger_template()
        ledger["records"] = raw_ledger["records"]
        ledger["last_submitted"] = raw_ledger.get("last_submitted")
        self._ledger = ledger

    def __save_data(self, ledger: Ledger) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(ledger, indent=2), encoding="utf-8")
        except OSError as e:
            raise CacheError(f"could not write ledger {self.path}: {e}") from e

    def is_submitted(self, fingerprint: str) -> bool:
        return fingerprint in self.fingerprints

    def record_submitted(self, records: Iterable[tuple[str, str, str]]) -> int:
        """
        Append (fingerprint, task id, date) records and write the ledger.

        Returns:
            The number of fingerprints that were not already recorded
        """
        submitted_at = time.datetime_to_iso_str(time.now_utc())
        added = 0
        for fingerprint, task_id, date in records:
            if fingerprint in self.fingerprints:
                continue
            record: LedgerRecord = {
                "fingerprint": fingerprint,
                "task": task_id,
                "date": date,
                "submitted_at": submitted_at,
            }
            self.ledger["records"].append(record)
            self.fingerprints.add(fingerprint)
            added += 1

        self.ledger["last_submitted"] = submitted_at
        self.__save_data(self.ledger)
        logger.info("recorded %d submitted intervals in %s", added, self.path)
        return added
