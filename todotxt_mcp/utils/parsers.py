"""Parser helpers for todo.txt lines.

A task line has the shape::

    [x] [completion date] [(priority)] [creation date] description [+project]* [@context]* [key:value]*

Parsing never fails: anything that does not match a known field stays in the
description.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date

from todotxt_mcp.models.task import LABEL_ISSUE, LABEL_PR, LABEL_REPO, LABEL_URL, TaskRecord

DONE_MARKER = "x "

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_PRIORITY_RE = re.compile(r"\((\w)\)", re.ASCII)
# Tokens only start at the beginning of the text or after whitespace; the
# leading whitespace is removed together with the token.
_PROJECT_RE = re.compile(r"(?:^|\s)\+(\w+)")
_CONTEXT_RE = re.compile(r"(?:^|\s)@(\w+)")
_LABEL_RE = re.compile(r"(?:^|\s)(\w+):(\S+)")

# Sort rank for well-known labels; issue and pr never appear together.
_LABEL_RANK = {LABEL_REPO: 1, LABEL_ISSUE: 2, LABEL_PR: 2, LABEL_URL: 3}


def _take_date(text: str, window: int) -> tuple[date | None, str]:
    """Consume a valid YYYY-MM-DD found within the first ``window`` characters."""
    match = _DATE_RE.search(text[:window])
    if not match:
        return None, text
    try:
        parsed = date.fromisoformat(match.group(0))
    except ValueError:
        return None, text
    return parsed, (text[: match.start()] + text[match.end() :]).lstrip()


def _take_all(pattern: re.Pattern[str], text: str) -> tuple[list[re.Match[str]], str]:
    matches = list(pattern.finditer(text))
    return matches, pattern.sub("", text)


def parse_record(line: str) -> TaskRecord:
    """
    Parse one todo.txt line into a TaskRecord.

    Args:
        line: Raw line, with or without a trailing newline

    Returns:
        TaskRecord; unparseable fragments end up in the description
    """
    text = line.rstrip("\r\n")
    record = TaskRecord()

    if text.startswith(DONE_MARKER):
        record.done = True
        text = text[len(DONE_MARKER) :].lstrip()
        record.completion_date, text = _take_date(text, 10)

    if match := _PRIORITY_RE.search(text[:3]):
        record.priority = match.group(1)
        text = (text[: match.start()] + text[match.end() :]).lstrip()

    record.creation_date, text = _take_date(text, 11)

    projects, text = _take_all(_PROJECT_RE, text)
    record.projects = [m.group(1) for m in projects]

    contexts, text = _take_all(_CONTEXT_RE, text)
    record.contexts = [m.group(1) for m in contexts]

    labels, text = _take_all(_LABEL_RE, text)
    for m in labels:
        record.labels[m.group(1)] = m.group(2)

    record.description = text.strip()
    return record


def sort_label_keys(keys: Iterable[str]) -> list[str]:
    """Order label keys: repo, issue/pr, url, then everything else alphabetically."""
    return sorted(keys, key=lambda k: (_LABEL_RANK.get(k, len(_LABEL_RANK) + 1), k))


def serialize_record(record: TaskRecord) -> str:
    """
    Render a TaskRecord as a single todo.txt line (no trailing newline).

    Args:
        record: Record to render

    Returns:
        The line; parse_record() on it gives back an equal record
    """
    parts: list[str] = []
    if record.done:
        parts.append("x")
    if record.completion_date:
        parts.append(record.completion_date.isoformat())
    if record.priority:
        parts.append(f"({record.priority})")
    if record.creation_date:
        parts.append(record.creation_date.isoformat())
    if record.description:
        parts.append(record.description)
    parts.extend(f"+{p}" for p in record.projects)
    parts.extend(f"@{c}" for c in record.contexts)
    parts.extend(f"{k}:{record.labels[k]}" for k in sort_label_keys(record.labels))
    return " ".join(parts)


def parse_records(lines: Iterable[str]) -> list[TaskRecord]:
    """Parse every non-blank line."""
    return [parse_record(line) for line in lines if line.strip()]


def serialize_records(records: Iterable[TaskRecord]) -> list[str]:
    return [serialize_record(r) for r in records]
