"""Exception hierarchy for todotxt MCP."""


class TodoError(Exception):
    """Base class for all todotxt MCP errors."""


class ConfigurationError(TodoError):
    """Raised when configuration, credentials or a source name are invalid."""


class ScheduleError(ConfigurationError):
    """Raised for an unsupported schedule alias or a malformed template line."""


class SyncError(TodoError):
    """Raised when a sync cycle cannot complete (fetch or cursor failure)."""
