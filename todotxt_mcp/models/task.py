"""Core task record model for todotxt MCP."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, model_validator

# Label keys the rest of the package reads or writes.
LABEL_REPO = "repo"
LABEL_ISSUE = "issue"
LABEL_PR = "pr"
LABEL_URL = "url"
LABEL_REMIND = "remind"
LABEL_RECUR = "recur"
LABEL_SYNCED = "synced"
LABEL_PHASE = "phase"


class TaskRecord(BaseModel):
    """Model representing one todo.txt line with all its attributes.

    Labels are an open ``key:value`` mapping. Well-known keys (``repo``,
    ``issue``, ``pr``, ``url``, ``remind``, ``recur``, ``synced``, ``phase``)
    are validated where they are read, not here.
    """

    done: bool = False
    completion_date: date | None = None
    creation_date: date | None = None
    priority: str | None = None
    description: str = ""
    projects: list[str] = Field(default_factory=list)
    contexts: list[str] = Field(default_factory=list)
    labels: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_completion_date(self) -> TaskRecord:
        if self.completion_date is not None and not self.done:
            raise ValueError("completion_date is only allowed on a done task")
        return self

    def label(self, key: str) -> str | None:
        return self.labels.get(key)

    def has_label(self, key: str) -> bool:
        return key in self.labels

    def copy_record(self) -> TaskRecord:
        """Return a deep copy that shares no lists or dicts with this record."""
        return self.model_copy(deep=True)
