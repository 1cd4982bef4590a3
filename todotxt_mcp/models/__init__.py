"""Pydantic models for todotxt MCP."""

from todotxt_mcp.models.config import AppConfig, GitHubConfig, SourceConfig
from todotxt_mcp.models.inputs import (
    AddRecurringInput,
    AddReminderInput,
    AddTaskInput,
    CompleteTaskInput,
    ListRemindersInput,
    ListTasksInput,
    RunRecurringInput,
    RunRemindersInput,
    SyncInput,
)
from todotxt_mcp.models.remote import (
    IssueRef,
    PullRequestRef,
    RemoteFact,
    TrackerRef,
    Untracked,
    tracker_ref,
)
from todotxt_mcp.models.task import TaskRecord

__all__ = [
    # Task model
    "TaskRecord",
    # Remote models
    "RemoteFact",
    "IssueRef",
    "PullRequestRef",
    "Untracked",
    "TrackerRef",
    "tracker_ref",
    # Config models
    "AppConfig",
    "GitHubConfig",
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
]
