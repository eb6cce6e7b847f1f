# SPDX-License-Identifier: MIT

import atexit

from timecard.repository.configuration import CONFIGURATION_REPO


def flush() -> None:
    # The reference data cache and the ledger write through on every change;
    # only configuration edits are deferred until exit.
    CONFIGURATION_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
