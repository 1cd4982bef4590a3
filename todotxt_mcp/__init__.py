"""
MCP Server for todo.txt.

This server manages a personal todo.txt task list: listing, adding and
completing tasks, recurring task templates, dated reminders, and two-way
sync with GitHub issues and pull requests.
"""

# Re-export enums
from todotxt_mcp.enums import FactKind, RecordState, RemoteState, ResponseFormat

# Re-export errors
from todotxt_mcp.exceptions import ConfigurationError, ScheduleError, SyncError, TodoError

# Re-export models
from todotxt_mcp.models import (
    AddRecurringInput,
    AddReminderInput,
    AddTaskInput,
    AppConfig,
    CompleteTaskInput,
    IssueRef,
    ListRemindersInput,
    ListTasksInput,
    PullRequestRef,
    RemoteFact,
    RunRecurringInput,
    RunRemindersInput,
    SourceConfig,
    SyncInput,
    TaskRecord,
    Untracked,
    tracker_ref,
)

# Re-export core engines
from todotxt_mcp.recurring import RecurringTemplate, process_recurring
from todotxt_mcp.reminders import process_reminders

# Re-export MCP server instance
from todotxt_mcp.server import mcp
from todotxt_mcp.store import RecordStore
from todotxt_mcp.sync import CursorStore, GitHubGateway, SyncResult, sync_all, sync_source

# Re-export tools
from todotxt_mcp.tools import (
    todo_add,
    todo_complete,
    todo_list,
    todo_recur_add,
    todo_recur_run,
    todo_remind,
    todo_remind_list,
    todo_remind_run,
    todo_sync,
)

# Re-export utilities
from todotxt_mcp.utils import parse_record, serialize_record

__all__ = [
    # Enums
    "ResponseFormat",
    "RecordState",
    "RemoteState",
    "FactKind",
    # Errors
    "TodoError",
    "ConfigurationError",
    "ScheduleError",
    "SyncError",
    # Models
    "TaskRecord",
    "RemoteFact",
    "IssueRef",
    "PullRequestRef",
    "Untracked",
    "tracker_ref",
    "AppConfig",
    "SourceConfig",
    # Tool input models
    "ListTasksInput",
    "AddTaskInput",
    "CompleteTaskInput",
    "AddReminderInput",
    "ListRemindersInput",
    "AddRecurringInput",
    "RunRecurringInput",
    "RunRemindersInput",
    "SyncInput",
    # Codec and store
    "parse_record",
    "serialize_record",
    "RecordStore",
    # Generators
    "RecurringTemplate",
    "process_recurring",
    "process_reminders",
    # Sync
    "CursorStore",
    "GitHubGateway",
    "SyncResult",
    "sync_source",
    "sync_all",
    # Tools
    "todo_list",
    "todo_add",
    "todo_complete",
    "todo_remind",
    "todo_remind_list",
    "todo_recur_add",
    "todo_recur_run",
    "todo_remind_run",
    "todo_sync",
    # MCP server instance
    "mcp",
]
