# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

from timecard.errors import CredentialError


class CredentialRepository:
    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def read_token(self) -> Optional[str]:
        if not self.exists():
            return None
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise CredentialError(f"could not read API key {self.path}: {e}") from e
        return token or None

    def write_token(self, token: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(token.strip(), encoding="utf-8")
            self.path.chmod(0o600)
        except OSError as e:
            raise CredentialError(f"could not write API key {self.path}: {e}") from e
