"""Two-file todo.txt store: active tasks in todo.txt, completed ones in done.txt."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from todotxt_mcp.models.task import TaskRecord
from todotxt_mcp.utils.parsers import parse_records, serialize_records

logger = logging.getLogger(__name__)

ACTIVE_FILE = "todo.txt"
COMPLETED_FILE = "done.txt"
BACKUP_SUFFIX = ".bak"


def backup_path(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def load_record_file(path: str | Path) -> list[TaskRecord]:
    """
    Read one todo.txt-style file.

    Args:
        path: File to read

    Returns:
        One record per non-blank line; an empty list if the file does not exist
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No file at %s, treating as empty", path)
        return []
    return parse_records(text.splitlines())


def write_record_file(path: str | Path, records: Iterable[TaskRecord]) -> None:
    """
    Write records to a todo.txt-style file, one per line.

    An existing file is first renamed to ``<name>.bak``. If the new file cannot
    be created the backup is moved back before the error propagates.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    backup = backup_path(path)

    if path.exists():
        path.replace(backup)

    lines = [f"{line}\n" for line in serialize_records(records)]
    try:
        with path.open("w", encoding="utf-8") as fh:
            fh.writelines(lines)
    except OSError:
        if backup.exists() and not path.exists():
            backup.replace(path)
        raise

    logger.debug("Wrote %d record(s) to %s", len(lines), path)


class RecordStore:
    """
    The persisted task list of one data directory.

    Concurrency:
    - not safe for two writers; callers serialize access per directory
    - the .bak files are crash-recovery artifacts, not locks
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    @property
    def active_path(self) -> Path:
        return self.directory / ACTIVE_FILE

    @property
    def completed_path(self) -> Path:
        return self.directory / COMPLETED_FILE

    def load(self) -> list[TaskRecord]:
        """Active records first, then completed ones."""
        return load_record_file(self.active_path) + load_record_file(self.completed_path)

    def save(self, records: Iterable[TaskRecord]) -> None:
        active: list[TaskRecord] = []
        completed: list[TaskRecord] = []
        for record in records:
            (completed if record.done else active).append(record)

        write_record_file(self.active_path, active)
        write_record_file(self.completed_path, completed)
        logger.info(
            "Saved %d active and %d completed task(s) in %s",
            len(active),
            len(completed),
            self.directory,
        )

    def append(self, records: Iterable[TaskRecord]) -> list[TaskRecord]:
        """Add records to the end of the store and return the full list."""
        merged = self.load()
        merged.extend(records)
        self.save(merged)
        return merged
