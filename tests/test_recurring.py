"""Tests for recurring task templates."""

from datetime import date

import pytest

from todotxt_mcp import RecordStore, ScheduleError, TaskRecord
from todotxt_mcp.recurring import (
    RECUR_FILE,
    RecurringTemplate,
    add_template,
    generate,
    load_templates,
    parse_schedule,
    parse_template,
    process_recurring,
    run,
    should_generate,
)
from todotxt_mcp.utils.parsers import parse_record

MONDAY = date(2025, 6, 16)
TUESDAY = date(2025, 6, 17)


# ============================================================================
# Schedules and Templates
# ============================================================================


class TestParseSchedule:
    """Tests for parse_schedule."""

    @pytest.mark.parametrize(
        ("schedule", "expected"),
        [
            ("@daily", "0 0 * * *"),
            ("@weekly", "0 0 * * 1"),
            ("@monthly", "0 0 1 * *"),
            ("0 9 * * 1", "0 9 * * 1"),
        ],
    )
    def test_supported_schedules(self, schedule, expected):
        assert parse_schedule(schedule) == expected

    def test_unsupported_alias(self):
        """Test that only three @ aliases exist."""
        with pytest.raises(ScheduleError, match="unsupported schedule format '@yearly'"):
            parse_schedule("@yearly")

    def test_invalid_cron_expression(self):
        """Test that a malformed cron expression is rejected."""
        with pytest.raises(ScheduleError, match="invalid schedule"):
            parse_schedule("99 9 * * 1")

    def test_wrong_field_count(self):
        """Test that six-field expressions are rejected."""
        with pytest.raises(ScheduleError):
            parse_schedule("0 0 9 * * 1")


class TestParseTemplate:
    """Tests for parse_template."""

    def test_alias_template(self):
        """Test an @ schedule followed by a task line."""
        template = parse_template("@weekly (A) Review weekly goals +personal")
        assert template.schedule == "@weekly"
        assert template.expression == "0 0 * * 1"
        assert template.record.priority == "A"
        assert template.record.description == "Review weekly goals"
        assert template.record.projects == ["personal"]

    def test_cron_template(self):
        """Test five cron fields followed by a task line."""
        template = parse_template("0 9 * * 1 Team standup @office +work")
        assert template.schedule == "0 9 * * 1"
        assert template.record.description == "Team standup"
        assert template.record.contexts == ["office"]

    def test_comments_and_blank_lines(self):
        assert parse_template("") is None
        assert parse_template("   ") is None
        assert parse_template("# weekly chores") is None

    def test_alias_without_space(self):
        """Test that '@daily:' is not accepted as an alias."""
        with pytest.raises(ScheduleError):
            parse_template("@daily: Water plants")

    def test_alias_without_task(self):
        """Test an @ schedule with no task text."""
        with pytest.raises(ScheduleError, match="invalid simple schedule format"):
            parse_template("@daily")

    def test_cron_without_task(self):
        """Test that five fields alone are not a template."""
        with pytest.raises(ScheduleError, match="invalid cron format"):
            parse_template("0 9 * * 1")

    def test_too_few_cron_fields(self):
        with pytest.raises(ScheduleError):
            parse_template("0 9 * Task")

    def test_template_str_round_trip(self):
        """Test that a template renders back to its recur.txt line."""
        line = "@daily Water plants +home"
        assert str(parse_template(line)) == line


class TestLoadTemplates:
    """Tests for reading and writing recur.txt."""

    def test_missing_file(self, tmp_path):
        assert load_templates(tmp_path / RECUR_FILE) == []

    def test_load_file(self, tmp_path):
        path = tmp_path / RECUR_FILE
        path.write_text(
            "# chores\n@daily Water plants +home\n\n0 9 * * 1 Team standup @office +work\n",
            encoding="utf-8",
        )
        templates = load_templates(path)
        assert [t.record.description for t in templates] == ["Water plants", "Team standup"]

    def test_error_names_line_number(self, tmp_path):
        """Test that a bad line is reported with its 1-based line number."""
        path = tmp_path / RECUR_FILE
        path.write_text("@daily Water plants\n@hourly Stretch\n", encoding="utf-8")
        with pytest.raises(ScheduleError, match="error parsing line 2"):
            load_templates(path)

    def test_add_template(self, tmp_path):
        add_template(tmp_path, RecurringTemplate.create("@daily", parse_record("Water plants +home")))
        add_template(tmp_path, RecurringTemplate.create("@monthly", parse_record("Pay rent")))
        text = (tmp_path / RECUR_FILE).read_text(encoding="utf-8")
        assert text == "@daily Water plants +home\n@monthly Pay rent\n"

    def test_add_template_invalid_schedule(self, tmp_path):
        with pytest.raises(ScheduleError):
            RecurringTemplate.create("@hourly", parse_record("Stretch"))


# ============================================================================
# Generation
# ============================================================================


class TestShouldGenerate:
    """Tests for should_generate."""

    def test_weekly_fires_on_monday(self):
        template = parse_template("@weekly Review weekly goals")
        assert should_generate(template, MONDAY) is True
        assert should_generate(template, TUESDAY) is False

    def test_daily_fires_every_day(self):
        template = parse_template("@daily Water plants")
        assert should_generate(template, MONDAY) is True
        assert should_generate(template, TUESDAY) is True

    def test_monthly_fires_on_first(self):
        template = parse_template("@monthly Pay rent")
        assert should_generate(template, date(2025, 7, 1)) is True
        assert should_generate(template, date(2025, 7, 2)) is False

    def test_cron_with_hour(self):
        """Test that a trigger later in the day still counts for that day."""
        template = parse_template("0 9 * * 1 Team standup")
        assert should_generate(template, MONDAY) is True
        assert should_generate(template, TUESDAY) is False


class TestRun:
    """Tests for generate and run."""

    def test_generate_resets_state(self):
        """Test that a generated todo is active, undated and carries recur:<day>."""
        template = RecurringTemplate.create(
            "@daily",
            parse_record("x 2025-01-02 (B) 2025-01-01 Water plants +home"),
        )
        record = generate(template, MONDAY)
        assert record.done is False
        assert record.completion_date is None
        assert record.creation_date is None
        assert record.priority == "B"
        assert record.labels == {"recur": "2025-06-16"}
        assert template.record.labels == {}

    def test_weekly_on_monday(self):
        """Test the weekly template scenario on a Monday and a Tuesday."""
        templates = [parse_template("@weekly (A) Review weekly goals +personal")]
        added = run(templates, MONDAY, [])
        assert len(added) == 1
        assert added[0].description == "Review weekly goals"
        assert added[0].label("recur") == "2025-06-16"
        assert run(templates, TUESDAY, []) == []

    def test_existing_record_not_duplicated(self):
        """Test that a todo already generated for the day is skipped."""
        templates = [parse_template("@daily Water plants")]
        existing = [TaskRecord(description="Water plants", labels={"recur": "2025-06-16"})]
        assert run(templates, MONDAY, existing) == []

    def test_completed_record_still_counts(self):
        """Test that finishing today's todo does not bring it back."""
        templates = [parse_template("@daily Water plants")]
        existing = [TaskRecord(done=True, description="Water plants", labels={"recur": "2025-06-16"})]
        assert run(templates, MONDAY, existing) == []

    def test_previous_day_does_not_count(self):
        templates = [parse_template("@daily Water plants")]
        existing = [TaskRecord(description="Water plants", labels={"recur": "2025-06-15"})]
        assert len(run(templates, MONDAY, existing)) == 1

    def test_duplicate_templates_in_one_run(self):
        """Test that two identical templates yield one todo."""
        templates = [parse_template("@daily Water plants"), parse_template("0 9 * * * Water plants")]
        assert len(run(templates, MONDAY, [])) == 1


class TestProcessRecurring:
    """Tests for process_recurring."""

    def test_generates_and_saves(self, tmp_path):
        (tmp_path / RECUR_FILE).write_text("@weekly Review weekly goals +personal\n", encoding="utf-8")
        (tmp_path / "todo.txt").write_text("Existing task\n", encoding="utf-8")

        added = process_recurring(tmp_path, MONDAY)

        assert len(added) == 1
        lines = (tmp_path / "todo.txt").read_text(encoding="utf-8").splitlines()
        assert lines == ["Existing task", "Review weekly goals +personal recur:2025-06-16"]

    def test_idempotent(self, tmp_path):
        """Test that a second run on the same day adds nothing."""
        (tmp_path / RECUR_FILE).write_text("@daily Water plants\n", encoding="utf-8")
        assert len(process_recurring(tmp_path, MONDAY)) == 1
        assert process_recurring(tmp_path, MONDAY) == []
        assert len(RecordStore(tmp_path).load()) == 1

    def test_nothing_due_writes_nothing(self, tmp_path):
        (tmp_path / RECUR_FILE).write_text("@weekly Review weekly goals\n", encoding="utf-8")
        assert process_recurring(tmp_path, TUESDAY) == []
        assert not (tmp_path / "todo.txt").exists()

    def test_no_recur_file(self, tmp_path):
        assert process_recurring(tmp_path, MONDAY) == []
