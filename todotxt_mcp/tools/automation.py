"""MCP tools that run the generators and the GitHub sync."""

from datetime import date

from mcp.types import ToolAnnotations

from todotxt_mcp.config import get_data_dir, load_config
from todotxt_mcp.exceptions import TodoError
from todotxt_mcp.models.inputs import RunRecurringInput, RunRemindersInput, SyncInput
from todotxt_mcp.recurring import process_recurring
from todotxt_mcp.reminders import process_reminders
from todotxt_mcp.server import mcp
from todotxt_mcp.sync.github import GitHubGateway
from todotxt_mcp.sync.reconciler import sync_all
from todotxt_mcp.utils.parsers import serialize_record


@mcp.tool(
    name="todo_recur_run",
    annotations=ToolAnnotations(
        title="Generate Recurring Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def todo_recur_run(params: RunRecurringInput) -> str:
    """
    Generate the tasks recur.txt schedules for a day.

    Safe to run repeatedly: a task already generated for the day is skipped.

    Args:
        params: RunRecurringInput with an optional day (default today)

    Returns:
        The generated task lines, or a note that nothing was due
    """
    day = params.day or date.today()
    try:
        added = process_recurring(get_data_dir(), day)
    except (TodoError, OSError) as e:
        return f"Error: generate recurring tasks: {e}"

    if not added:
        return f"No recurring tasks to add for {day.isoformat()}."
    lines = [f"Added {len(added)} recurring task(s) for {day.isoformat()}:"]
    lines.extend(f"- {serialize_record(r)}" for r in added)
    return "\n".join(lines)


@mcp.tool(
    name="todo_remind_run",
    annotations=ToolAnnotations(
        title="Promote Due Reminders",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def todo_remind_run(params: RunRemindersInput) -> str:
    """
    Move reminders due on or before a day from reminders.txt into todo.txt.

    Args:
        params: RunRemindersInput with an optional day (default today)

    Returns:
        The promoted task lines, or a note that nothing was due
    """
    day = params.day or date.today()
    try:
        promoted = process_reminders(get_data_dir(), day)
    except (TodoError, OSError) as e:
        return f"Error: process reminders: {e}"

    if not promoted:
        return f"No reminders due by {day.isoformat()}."
    lines = [f"Promoted {len(promoted)} reminder(s):"]
    lines.extend(f"- {serialize_record(r)}" for r in promoted)
    return "\n".join(lines)


@mcp.tool(
    name="todo_sync",
    annotations=ToolAnnotations(
        title="Sync GitHub",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    ),
)
async def todo_sync(params: SyncInput) -> str:
    """
    Sync tasks with the GitHub projects configured in config.toml.

    Pulls assigned issues, authored pull requests and review requests into
    todo.txt and closes issues that were completed locally.

    Args:
        params: SyncInput with an optional project name (default: all projects)

    Returns:
        A per-project summary
    """
    directory = get_data_dir()
    try:
        config = load_config(directory)
        if not config.all_sources():
            return "No GitHub projects configured in config.toml."
        names = [params.project] if params.project else None
        results = sync_all(directory, config, GitHubGateway.for_source, names)
    except (TodoError, OSError) as e:
        return f"Error: sync: {e}"

    lines = []
    for result in results:
        mode = "remote changes accepted" if result.remote_authoritative else "local changes kept"
        lines.append(
            f"{result.source}: {len(result.created)} new, {len(result.updated)} updated, "
            f"{len(result.pushed)} closed on GitHub ({mode})"
        )
    return "\n".join(lines)
