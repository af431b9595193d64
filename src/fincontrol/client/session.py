"""Local persistence of the bearer token between CLI invocations."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class TokenStore:
    """Keeps the token in ``<client_dir>/token`` until logout."""

    FILENAME = "token"

    def __init__(self, client_dir: Path) -> None:
        self.path = Path(client_dir) / self.FILENAME

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        self.path.chmod(0o600)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        token = self.path.read_text(encoding="utf-8").strip()
        return token or None

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
