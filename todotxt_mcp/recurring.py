"""Recurring tasks: cron-like templates in recur.txt that turn into dated todos.

Template lines look like::

    @daily Water plants +home
    @weekly (A) Review weekly goals +personal
    0 9 * * 1 Team standup @office +work

Every generated todo carries ``recur:<date>``. Together with the description
that label is the dedup key, so running the scheduler twice on the same day
adds nothing the second time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from pathlib import Path

from croniter import croniter

from todotxt_mcp.exceptions import ScheduleError
from todotxt_mcp.models.task import LABEL_RECUR, TaskRecord
from todotxt_mcp.store import RecordStore, backup_path
from todotxt_mcp.utils.parsers import parse_record, serialize_record

logger = logging.getLogger(__name__)

RECUR_FILE = "recur.txt"

SCHEDULE_ALIASES = {
    "@daily": "0 0 * * *",
    "@weekly": "0 0 * * 1",  # Monday
    "@monthly": "0 0 1 * *",
}

CRON_FIELDS = 5


def parse_schedule(schedule: str) -> str:
    """
    Turn a schedule into a 5-field cron expression.

    Args:
        schedule: "@daily", "@weekly", "@monthly" or five cron fields

    Returns:
        The cron expression

    Raises:
        ScheduleError: for any other @ alias or an invalid cron expression
    """
    if schedule in SCHEDULE_ALIASES:
        return SCHEDULE_ALIASES[schedule]
    if schedule.startswith("@"):
        supported = ", ".join(SCHEDULE_ALIASES)
        raise ScheduleError(f"unsupported schedule format '{schedule}' (supported: {supported})")
    if len(schedule.split()) != CRON_FIELDS or not croniter.is_valid(schedule):
        raise ScheduleError(f"invalid schedule '{schedule}'")
    return schedule


@dataclass(frozen=True)
class RecurringTemplate:
    """A schedule plus the task it stamps out."""

    schedule: str
    expression: str
    record: TaskRecord

    @classmethod
    def create(cls, schedule: str, record: TaskRecord) -> RecurringTemplate:
        return cls(schedule=schedule, expression=parse_schedule(schedule), record=record)

    def __str__(self) -> str:
        return f"{self.schedule} {serialize_record(self.record)}"


def parse_template(line: str) -> RecurringTemplate | None:
    """
    Parse one recur.txt line.

    Returns:
        The template, or None for blank and ``#`` comment lines

    Raises:
        ScheduleError: if the line is malformed or its schedule is not supported
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    if line.startswith("@"):
        schedule, _, task_text = line.partition(" ")
        if not task_text.strip():
            raise ScheduleError(
                f"invalid simple schedule format: '{line}' (expected format: @daily Task description)"
            )
    else:
        fields = line.split()
        if len(fields) <= CRON_FIELDS:
            raise ScheduleError(
                f"invalid cron format: '{line}' "
                "(expected format: minute hour day month weekday Task description)"
            )
        schedule = " ".join(fields[:CRON_FIELDS])
        task_text = " ".join(fields[CRON_FIELDS:])

    return RecurringTemplate.create(schedule, parse_record(task_text))


def load_templates(path: str | Path) -> list[RecurringTemplate]:
    """
    Load every template from a recur.txt file.

    A missing file means no templates. The first bad line stops the load so a
    typo never silently drops a recurring task.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []

    templates: list[RecurringTemplate] = []
    for line_num, line in enumerate(text.splitlines(), start=1):
        try:
            template = parse_template(line)
        except ScheduleError as e:
            raise ScheduleError(f"error parsing line {line_num}: {e}") from e
        if template is not None:
            templates.append(template)
    return templates


def write_templates(path: str | Path, templates: Iterable[RecurringTemplate]) -> None:
    """Write templates to recur.txt, keeping the previous file as recur.txt.bak."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
        path.replace(backup_path(path))
    with path.open("w", encoding="utf-8") as fh:
        fh.writelines(f"{t}\n" for t in templates)


def add_template(directory: str | Path, template: RecurringTemplate) -> list[RecurringTemplate]:
    path = Path(directory) / RECUR_FILE
    templates = load_templates(path)
    templates.append(template)
    write_templates(path, templates)
    return templates


def should_generate(template: RecurringTemplate, day: date) -> bool:
    """
    True when the template fires on ``day``.

    The first trigger after midnight of the previous day has to land on
    ``day`` itself.
    """
    start_of_day = datetime.combine(day, time.min)
    fire_at = croniter(template.expression, start_of_day - timedelta(days=1)).get_next(datetime)
    return fire_at.date() == day


def generate(template: RecurringTemplate, day: date) -> TaskRecord:
    record = template.record.copy_record()
    record.done = False
    record.completion_date = None
    record.creation_date = None
    record.labels[LABEL_RECUR] = day.isoformat()
    return record


def _dedup_key(record: TaskRecord) -> tuple[str, str] | None:
    recur = record.label(LABEL_RECUR)
    if recur is None:
        return None
    return record.description, recur


def run(
    templates: Iterable[RecurringTemplate],
    day: date,
    existing: Iterable[TaskRecord],
) -> list[TaskRecord]:
    """
    Evaluate every template for ``day``.

    Args:
        templates: Loaded templates
        day: Day to generate for
        existing: Records already in the store

    Returns:
        Only the new records; ``existing`` is never modified
    """
    seen = {key for r in existing if (key := _dedup_key(r)) is not None}
    additions: list[TaskRecord] = []

    for template in templates:
        if not should_generate(template, day):
            continue
        key = (template.record.description, day.isoformat())
        if key in seen:
            logger.debug("Skipping '%s': already generated for %s", key[0], key[1])
            continue
        seen.add(key)
        additions.append(generate(template, day))

    return additions


def process_recurring(directory: str | Path, day: date) -> list[TaskRecord]:
    """
    Add today's recurring todos to the store in ``directory``.

    Returns:
        The records that were added (empty if nothing was due or all existed)
    """
    directory = Path(directory)
    templates = load_templates(directory / RECUR_FILE)
    store = RecordStore(directory)
    existing = store.load()

    additions = run(templates, day, existing)
    if additions:
        store.save(existing + additions)
    logger.info("Recurring tasks for %s: %d new of %d template(s)", day, len(additions), len(templates))
    return additions
