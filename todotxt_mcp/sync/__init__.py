"""Synchronization between the local todo list and GitHub."""

from todotxt_mcp.sync.cursor import CursorStore
from todotxt_mcp.sync.gateway import RemoteGateway
from todotxt_mcp.sync.github import GitHubGateway
from todotxt_mcp.sync.reconciler import (
    MergeOutcome,
    SyncResult,
    merge_facts,
    push_completed,
    sync_all,
    sync_source,
)

__all__ = [
    "CursorStore",
    "RemoteGateway",
    "GitHubGateway",
    "MergeOutcome",
    "SyncResult",
    "merge_facts",
    "push_completed",
    "sync_all",
    "sync_source",
]
