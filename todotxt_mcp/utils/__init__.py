"""Utility functions for todotxt MCP."""

from todotxt_mcp.utils.formatters import (
    _format_reminders,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)
from todotxt_mcp.utils.parsers import (
    parse_record,
    parse_records,
    serialize_record,
    serialize_records,
    sort_label_keys,
)

__all__ = [
    "parse_record",
    "parse_records",
    "serialize_record",
    "serialize_records",
    "sort_label_keys",
    "_format_reminders",
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
]
