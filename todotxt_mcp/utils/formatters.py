"""Formatting utilities for task output."""

from todotxt_mcp.models.task import LABEL_REMIND, TaskRecord
from todotxt_mcp.utils.parsers import serialize_record, sort_label_keys


def _format_task_concise(number: int, task: TaskRecord) -> str:
    """
    Format a single task in concise format for token efficiency.

    Output: "#5: (A) Call Mom +Family @phone due:2025-02-20"
    """
    return f"#{number}: {serialize_record(task)}"


def _format_tasks_concise(numbered: list[tuple[int, TaskRecord]], title: str | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | +work
    #1: Task one +work
    #4: Task two +work
    """
    if not numbered:
        return "0 tasks"

    header = f"{len(numbered)} task(s)"
    if title:
        header = f"{len(numbered)} task(s) | {title}"

    lines = [header]
    lines.extend(_format_task_concise(number, task) for number, task in numbered)
    return "\n".join(lines)


def _format_task_markdown(number: int, task: TaskRecord) -> str:
    """Format a single task as markdown."""
    lines = []

    icon = "[x]" if task.done else "[ ]"
    desc = task.description or "No description"
    lines.append(f"### {icon} #{number} {desc}")

    details = []
    if task.priority:
        details.append(f"**Priority**: {task.priority}")
    if task.creation_date:
        details.append(f"**Created**: {task.creation_date.isoformat()}")
    if task.completion_date:
        details.append(f"**Completed**: {task.completion_date.isoformat()}")
    if task.projects:
        details.append(f"**Projects**: {', '.join(task.projects)}")
    if task.contexts:
        details.append(f"**Contexts**: {', '.join(task.contexts)}")

    if details:
        lines.append(" | ".join(details))

    if task.labels:
        lines.append("**Labels:**")
        for key in sort_label_keys(task.labels):
            lines.append(f"  - {key}: {task.labels[key]}")

    return "\n".join(lines)


def _format_tasks_markdown(numbered: list[tuple[int, TaskRecord]], title: str = "Tasks") -> str:
    """Format a list of tasks as markdown."""
    if not numbered:
        return f"# {title}\n\nNo tasks found."

    lines = [f"# {title}", f"*{len(numbered)} task(s)*", ""]

    for number, task in numbered:
        lines.append(_format_task_markdown(number, task))
        lines.append("")

    return "\n".join(lines)


def _format_reminders(reminders: list[TaskRecord]) -> str:
    """
    Format pending reminders, one per line.

    Output:
    Pending reminder tasks (2):
      2025-07-01: Call bank remind:2025-07-01
      2025-09-01: Renew passport remind:2025-09-01
    """
    if not reminders:
        return "No pending reminder tasks"

    lines = [f"Pending reminder tasks ({len(reminders)}):"]
    lines.extend(f"  {r.label(LABEL_REMIND)}: {serialize_record(r)}" for r in reminders)
    return "\n".join(lines)
