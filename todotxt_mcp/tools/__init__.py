"""MCP tool definitions for todotxt MCP."""

# Import all tools to register them with the MCP server
from todotxt_mcp.tools.automation import todo_recur_run, todo_remind_run, todo_sync
from todotxt_mcp.tools.core import (
    todo_add,
    todo_complete,
    todo_list,
    todo_recur_add,
    todo_remind,
    todo_remind_list,
)

__all__ = [
    # Task list tools
    "todo_list",
    "todo_add",
    "todo_complete",
    "todo_remind",
    "todo_remind_list",
    "todo_recur_add",
    # Automation tools
    "todo_recur_run",
    "todo_remind_run",
    "todo_sync",
]
