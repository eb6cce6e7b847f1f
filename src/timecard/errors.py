# SPDX-License-Identifier: MIT

from typing import Any, Optional


class TimecardError(Exception):
    """Base class for errors that end a command with a message."""


class IntervalParseError(TimecardError):
    """A single Timewarrior record could not be parsed."""


class ExportError(TimecardError):
    """Timewarrior could not be queried for intervals."""


class CacheError(TimecardError):
    """The local cache could not be read or written."""


class CredentialError(TimecardError):
    """The API key file could not be read or written."""


class RemoteError(TimecardError):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        message = super().__str__()
        if self.status_code is not None:
            message = f"{message} (HTTP {self.status_code})"
        if self.payload is not None:
            message = f"{message}: {self.payload}"
        return message
