"""Core MCP tool definitions for the todo.txt list."""

import json
from datetime import date

from mcp.types import ToolAnnotations

from todotxt_mcp.config import get_data_dir
from todotxt_mcp.enums import RecordState, ResponseFormat
from todotxt_mcp.exceptions import TodoError
from todotxt_mcp.models.inputs import (
    AddRecurringInput,
    AddReminderInput,
    AddTaskInput,
    CompleteTaskInput,
    ListRemindersInput,
    ListTasksInput,
)
from todotxt_mcp.models.task import LABEL_REMIND, TaskRecord
from todotxt_mcp.recurring import RecurringTemplate, add_template
from todotxt_mcp.reminders import add_reminder, load_reminders, reminders_path, sort_reminders
from todotxt_mcp.server import mcp
from todotxt_mcp.store import RecordStore
from todotxt_mcp.utils.formatters import _format_reminders, _format_tasks_concise, _format_tasks_markdown
from todotxt_mcp.utils.parsers import parse_record, serialize_record


def _matches(task: TaskRecord, params: ListTasksInput) -> bool:
    if params.state == RecordState.ACTIVE and task.done:
        return False
    if params.state == RecordState.COMPLETED and not task.done:
        return False
    if params.project and params.project not in task.projects:
        return False
    if params.context and params.context not in task.contexts:
        return False
    if params.search and params.search.casefold() not in task.description.casefold():
        return False
    return True


@mcp.tool(
    name="todo_list",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def todo_list(params: ListTasksInput) -> str:
    """
    List tasks from todo.txt and done.txt.

    Task numbers in the output are stable until the list is rewritten and are
    what todo_complete expects.

    Args:
        params: ListTasksInput containing state, project/context/search filters, limit and response_format

    Returns:
        Formatted list of tasks (markdown, concise or JSON based on response_format)

    Examples:
        - Active tasks: params with state="active"
        - Work tasks: params with project="work"
        - Phone calls: params with context="phone"
        - Finished tasks: params with state="completed"
    """
    try:
        records = RecordStore(get_data_dir()).load()
    except OSError as e:
        return f"Error: list tasks: {e}"

    numbered = [(n, t) for n, t in enumerate(records, start=1) if _matches(t, params)]
    total_count = len(numbered)

    if params.limit and len(numbered) > params.limit:
        numbered = numbered[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "total": total_count,
                "count": len(numbered),
                "tasks": [{"number": n, **t.model_dump(mode="json")} for n, t in numbered],
            },
            indent=2,
        )

    filters = []
    if params.project:
        filters.append(f"+{params.project}")
    if params.context:
        filters.append(f"@{params.context}")
    if params.search:
        filters.append(f"'{params.search}'")

    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(numbered, " ".join(filters) or None)

    title = "Tasks"
    if filters:
        title = f"Tasks matching {' '.join(filters)}"
    if params.state != RecordState.ACTIVE:
        title += f" ({params.state.value})"
    return _format_tasks_markdown(numbered, title)


@mcp.tool(
    name="todo_add",
    annotations=ToolAnnotations(
        title="Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def todo_add(params: AddTaskInput) -> str:
    """
    Add a task to todo.txt.

    USE THIS WHEN:
    - Adding a task that is active right away

    DO NOT USE WHEN:
    - The task should only show up later → use todo_remind instead
    - The task repeats on a schedule → use todo_recur_add instead

    Args:
        params: AddTaskInput containing the todo.txt line

    Returns:
        Confirmation message with the stored line

    Examples:
        - Simple task: params with line="Buy groceries"
        - Full syntax: params with line="(A) Call Mom +Family @phone due:2025-02-20"
    """
    record = parse_record(params.line)
    if params.set_creation_date and record.creation_date is None:
        record.creation_date = date.today()
        # A lone date after "x " reads back as the completion date.
        if record.done and record.completion_date is None:
            record.completion_date = record.creation_date

    try:
        RecordStore(get_data_dir()).append([record])
    except OSError as e:
        return f"Error: add task: {e}"

    return f"Task created successfully.\n{serialize_record(record)}"


@mcp.tool(
    name="todo_complete",
    annotations=ToolAnnotations(
        title="Complete Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def todo_complete(params: CompleteTaskInput) -> str:
    """
    Mark a task as done and move it to done.txt.

    A completed GitHub issue is closed remotely on the next todo_sync.

    Args:
        params: CompleteTaskInput containing the task number from todo_list

    Returns:
        Confirmation message

    Examples:
        - Complete task #5: params with task_number=5
    """
    store = RecordStore(get_data_dir())
    try:
        records = store.load()
    except OSError as e:
        return f"Error: complete task: {e}"

    if params.task_number > len(records):
        return f"Error: complete task: no task #{params.task_number} ({len(records)} task(s) in list)"

    task = records[params.task_number - 1]
    if task.done:
        return f"Task #{params.task_number} is already complete.\n{serialize_record(task)}"

    task.done = True
    task.completion_date = date.today()
    try:
        store.save(records)
    except OSError as e:
        return f"Error: complete task: {e}"
    return f"Task #{params.task_number} marked as complete.\n{serialize_record(task)}"


@mcp.tool(
    name="todo_remind",
    annotations=ToolAnnotations(
        title="Add Reminder",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def todo_remind(params: AddReminderInput) -> str:
    """
    Park a task in reminders.txt until a date.

    The task moves to todo.txt when todo_remind_run runs on or after that date.

    Args:
        params: AddReminderInput containing the todo.txt line and the date

    Returns:
        Confirmation message

    Examples:
        - params with line="Renew passport +admin", remind_on="2025-09-01"
        - params with line="Renew passport remind:2025-09-01"
    """
    record = parse_record(params.line)
    if params.remind_on:
        record.labels[LABEL_REMIND] = params.remind_on.isoformat()

    try:
        add_reminder(get_data_dir(), record)
    except (ValueError, OSError) as e:
        return f"Error: add reminder: {e}"
    return f"Reminder set for {record.labels[LABEL_REMIND]}.\n{serialize_record(record)}"


@mcp.tool(
    name="todo_remind_list",
    annotations=ToolAnnotations(
        title="List Reminders",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def todo_remind_list(params: ListRemindersInput) -> str:
    """
    List reminders still waiting in reminders.txt, earliest date first.

    Args:
        params: ListRemindersInput containing response_format

    Returns:
        One "<date>: <line>" entry per reminder, or JSON based on response_format
    """
    try:
        reminders = load_reminders(reminders_path(get_data_dir()))
    except OSError as e:
        return f"Error: list reminders: {e}"

    sort_reminders(reminders)

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "count": len(reminders),
                "reminders": [
                    {"remind_on": r.label(LABEL_REMIND), "line": serialize_record(r)} for r in reminders
                ],
            },
            indent=2,
        )
    return _format_reminders(reminders)


@mcp.tool(
    name="todo_recur_add",
    annotations=ToolAnnotations(
        title="Add Recurring Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def todo_recur_add(params: AddRecurringInput) -> str:
    """
    Add a recurring task template to recur.txt.

    Args:
        params: AddRecurringInput containing the schedule and the todo.txt line

    Returns:
        Confirmation message with the stored template line

    Examples:
        - Every day: params with schedule="@daily", line="Water plants +home"
        - Mondays 9:00: params with schedule="0 9 * * 1", line="Team standup @office +work"
    """
    try:
        template = RecurringTemplate.create(params.schedule, parse_record(params.line))
        add_template(get_data_dir(), template)
    except (TodoError, OSError) as e:
        return f"Error: add recurring task: {e}"
    return f"Recurring task added.\n{template}"
