"""Reminders: todos parked in reminders.txt until their ``remind:`` date.

Processing moves every due reminder into the store as a fresh todo (creation
date set, ``remind`` label dropped) and rewrites reminders.txt without it.

The store is written before reminders.txt. If the second write fails, the next
run promotes the same reminders again; there is no dedup marker for promoted
reminders.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from todotxt_mcp.models.task import LABEL_REMIND, TaskRecord
from todotxt_mcp.store import RecordStore, load_record_file, write_record_file

logger = logging.getLogger(__name__)

REMINDERS_FILE = "reminders.txt"


def reminders_path(directory: str | Path) -> Path:
    return Path(directory) / REMINDERS_FILE


def load_reminders(path: str | Path) -> list[TaskRecord]:
    return load_record_file(path)


def write_reminders(path: str | Path, reminders: Iterable[TaskRecord]) -> None:
    write_record_file(path, reminders)


def due_reminders(pending: Iterable[TaskRecord], day: date) -> list[TaskRecord]:
    """
    Pick the reminders due on or before ``day``.

    ISO dates sort lexicographically, so the label is compared as a string.
    Records without a ``remind`` label are never due.
    """
    cutoff = day.isoformat()
    return [r for r in pending if (remind := r.label(LABEL_REMIND)) is not None and remind <= cutoff]


def promote(reminder: TaskRecord, day: date) -> TaskRecord:
    record = reminder.copy_record()
    record.labels.pop(LABEL_REMIND, None)
    record.creation_date = day
    return record


def remaining_reminders(pending: Iterable[TaskRecord], due: Iterable[TaskRecord]) -> list[TaskRecord]:
    due_ids = {id(r) for r in due}
    return [r for r in pending if id(r) not in due_ids]


def sort_reminders(reminders: list[TaskRecord]) -> None:
    """Sort in place by remind date, undated ones first."""
    reminders.sort(key=lambda r: r.label(LABEL_REMIND) or "")


def add_reminder(directory: str | Path, reminder: TaskRecord) -> list[TaskRecord]:
    """
    Append a reminder to reminders.txt.

    Raises:
        ValueError: if the record has no ``remind`` label
    """
    remind = reminder.label(LABEL_REMIND)
    if not remind:
        raise ValueError("a reminder needs a remind:YYYY-MM-DD label")
    date.fromisoformat(remind)

    path = reminders_path(directory)
    reminders = load_reminders(path)
    reminders.append(reminder)
    write_reminders(path, reminders)
    return reminders


def process_reminders(directory: str | Path, day: date) -> list[TaskRecord]:
    """
    Move reminders due by ``day`` into the store.

    Args:
        directory: Data directory holding reminders.txt, todo.txt and done.txt
        day: Processing date; also the creation date of promoted todos

    Returns:
        The promoted records (empty when nothing was due; nothing is written then)
    """
    path = reminders_path(directory)
    pending = load_reminders(path)
    due = due_reminders(pending, day)
    if not due:
        logger.debug("No reminders due by %s", day)
        return []

    promoted = [promote(r, day) for r in due]

    store = RecordStore(directory)
    store.append(promoted)
    write_reminders(path, remaining_reminders(pending, due))

    logger.info("Promoted %d reminder(s) due by %s", len(promoted), day)
    return promoted
