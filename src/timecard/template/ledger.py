# SPDX-License-Identifier: MIT

from timecard.model.ledger import Ledger


def get_ledger_template() -> Ledger:
    return {
        "version": 1,
        "records": [],
        "last_submitted": None,
    }
