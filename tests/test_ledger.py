# SPDX-License-Identifier: MIT

import json
from pathlib import Path

import pytest

from timecard.errors import CacheError
from timecard.repository.ledger import LedgerRepository


def test_empty_ledger_when_file_missing(ledger: LedgerRepository) -> None:
    assert ledger.ledger["records"] == []
    assert ledger.ledger["version"] == 1
    assert not ledger.is_submitted("abc")


def test_record_submitted_skips_duplicates(ledger: LedgerRepository) -> None:
    added = ledger.record_submitted(
        [("abc", "T1", "2024-01-02"), ("def", "T1", "2024-01-03"), ("abc", "T1", "2024-01-02")]
    )
    again = ledger.record_submitted([("abc", "T2", "2024-01-02")])

    assert added == 2
    assert again == 0
    assert ledger.is_submitted("abc")
    assert ledger.is_submitted("def")

    on_disk = json.loads(ledger.path.read_text())
    assert [r["fingerprint"] for r in on_disk["records"]] == ["abc", "def"]
    assert on_disk["last_submitted"] is not None


def test_ledger_survives_reload(ledger: LedgerRepository) -> None:
    ledger.record_submitted([("abc", "T1", "2024-01-02")])

    reloaded = LedgerRepository(ledger.path)

    assert reloaded.is_submitted("abc")
    assert reloaded.ledger["records"][0]["task"] == "T1"


def test_malformed_ledger_is_an_error(tmp_path: Path) -> None:
    path = tmp_path / "celoxis_ledger.json"
    path.write_text(json.dumps({"records": "nope"}))

    with pytest.raises(CacheError):
        LedgerRepository(path).is_submitted("abc")
