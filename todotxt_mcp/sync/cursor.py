"""Persisted last-successful-sync timestamps, one per remote source."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from todotxt_mcp.exceptions import SyncError

logger = logging.getLogger(__name__)

CURSOR_FILE = "sync_cursors.json"


class CursorStore:
    """
    JSON file mapping source name to an RFC 3339 timestamp.

    A missing file or a missing source is the zero cursor (``None``): the
    first sync for that source.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @classmethod
    def in_directory(cls, directory: str | Path) -> CursorStore:
        return cls(Path(directory) / CURSOR_FILE)

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as e:
            raise SyncError(f"failed to read sync cursors from {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise SyncError(f"failed to read sync cursors from {self.path}: expected a JSON object")
        return data

    def read(self, source: str) -> datetime | None:
        value = self._read_all().get(source)
        if not value:
            return None
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise SyncError(f"invalid sync cursor for '{source}': {value!r}") from e

    def write(self, source: str, when: datetime) -> None:
        data = self._read_all()
        data[source] = when.isoformat()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        logger.debug("Advanced sync cursor for '%s' to %s", source, data[source])
