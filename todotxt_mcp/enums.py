"""Enums for todotxt MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per task
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class RecordState(str, Enum):
    """Task state filter options."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ALL = "all"


class RemoteState(str, Enum):
    """State of an issue or pull request on the remote tracker."""

    OPEN = "open"
    CLOSED = "closed"


class FactKind(str, Enum):
    """Where a remote fact came from."""

    ISSUE = "issue"
    PULL_REQUEST = "pr"
    REVIEW_REQUEST = "review-request"
