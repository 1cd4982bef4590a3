"""Input models for todotxt MCP tools."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todotxt_mcp.enums import RecordState, ResponseFormat

# ============================================================================
# Task List Input Models
# ============================================================================


class ListTasksInput(BaseModel):
    """Input model for listing tasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    state: RecordState = Field(
        default=RecordState.ACTIVE,
        description="Which tasks to list: active (todo.txt), completed (done.txt) or all",
    )
    project: str | None = Field(default=None, description="Only tasks with this +project (without '+')")
    context: str | None = Field(default=None, description="Only tasks with this @context (without '@')")
    search: str | None = Field(default=None, description="Case-insensitive text the description must contain")
    limit: int | None = Field(default=50, description="Maximum number of tasks to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class AddTaskInput(BaseModel):
    """Input model for adding a new task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    line: str = Field(
        ...,
        description="Task in todo.txt syntax, e.g. '(A) Call Mom +Family @phone due:2025-02-20'",
        min_length=1,
        max_length=1000,
    )
    set_creation_date: bool = Field(default=True, description="Stamp today's date as creation date if absent")

    @field_validator("line")
    @classmethod
    def validate_line(cls, v: str) -> str:
        if "\n" in v:
            raise ValueError("A task must be a single line")
        return v


class CompleteTaskInput(BaseModel):
    """Input model for completing a task."""

    task_number: int = Field(..., description="Task number as shown by todo_list", ge=1)


class AddReminderInput(BaseModel):
    """Input model for parking a task until a date."""

    model_config = ConfigDict(str_strip_whitespace=True)

    line: str = Field(..., description="Task in todo.txt syntax", min_length=1, max_length=1000)
    remind_on: date | None = Field(
        default=None,
        description="Date the task becomes active (YYYY-MM-DD); optional if the line has remind:YYYY-MM-DD",
    )


class ListRemindersInput(BaseModel):
    """Input model for listing pending reminders."""

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class AddRecurringInput(BaseModel):
    """Input model for adding a recurring task template."""

    model_config = ConfigDict(str_strip_whitespace=True)

    schedule: str = Field(
        ...,
        description="@daily, @weekly (Monday), @monthly (1st) or five cron fields like '0 9 * * 1'",
        min_length=1,
    )
    line: str = Field(..., description="Task in todo.txt syntax", min_length=1, max_length=1000)


# ============================================================================
# Automation Input Models
# ============================================================================


class RunRecurringInput(BaseModel):
    """Input model for generating recurring tasks."""

    day: date | None = Field(default=None, description="Day to generate tasks for (YYYY-MM-DD); default today")


class RunRemindersInput(BaseModel):
    """Input model for promoting due reminders."""

    day: date | None = Field(default=None, description="Promote reminders due on or before this day; default today")


class SyncInput(BaseModel):
    """Input model for GitHub sync."""

    model_config = ConfigDict(str_strip_whitespace=True)

    project: str | None = Field(
        default=None,
        description="Name of a [[github.projects]] entry in config.toml; all projects if omitted",
    )
