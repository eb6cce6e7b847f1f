# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class LedgerRecord(TypedDict):
    fingerprint: str
    task: str
    date: str
    submitted_at: str


class Ledger(TypedDict):
    version: int
    records: list[LedgerRecord]
    last_submitted: Optional[str]
