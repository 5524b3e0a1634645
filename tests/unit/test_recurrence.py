"""Unit tests for recurrence parsing and the recurrence resolver."""

from datetime import date, datetime, timedelta

import pytest

from src.core.recurrence_parser import next_occurrence, parse_recurrence, recurrence_to_human
from src.domain.task import Recurrence
from src.services.recurrence_resolver import is_due_for_reset, resolve_recurrences


DAY_N = date(2026, 3, 10)
NOW = datetime(2026, 3, 11, 8, 0)


@pytest.mark.unit
class TestParseRecurrence:
    """Tests for parse_recurrence function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Daily", Recurrence.DAILY),
            ("every week", Recurrence.WEEKLY),
            ("  MONTHLY ", Recurrence.MONTHLY),
            ("", Recurrence.NONE),
            (None, Recurrence.NONE),
            ("none", Recurrence.NONE),
        ],
    )
    def test_valid_inputs(self, text, expected):
        """Enum values, aliases and blanks are accepted."""
        assert parse_recurrence(text) == expected

    def test_invalid_input_raises(self):
        """Unsupported patterns raise ValueError naming the input."""
        with pytest.raises(ValueError, match="Invalid recurrence format: every 3 days"):
            parse_recurrence("every 3 days")

    def test_recurrence_to_human(self):
        """Recurrences render as short phrases."""
        assert recurrence_to_human(Recurrence.NONE) == "one-time"
        assert recurrence_to_human(Recurrence.WEEKLY) == "repeats every week"


@pytest.mark.unit
class TestNextOccurrence:
    """Tests for next_occurrence function."""

    def test_daily_weekly(self):
        """Daily adds one day, weekly seven."""
        assert next_occurrence(recurrence=Recurrence.DAILY, from_date=DAY_N) == date(2026, 3, 11)
        assert next_occurrence(recurrence=Recurrence.WEEKLY, from_date=DAY_N) == date(2026, 3, 17)

    def test_monthly_adds_calendar_month(self):
        """Monthly keeps the day of month."""
        assert next_occurrence(recurrence=Recurrence.MONTHLY, from_date=DAY_N) == date(2026, 4, 10)

    def test_monthly_clamps_short_months(self):
        """Jan 31 + 1 month lands on the last day of February."""
        assert next_occurrence(recurrence=Recurrence.MONTHLY, from_date=date(2026, 1, 31)) == date(2026, 2, 28)

    def test_none_has_no_next_occurrence(self):
        """One-off tasks never recur."""
        assert next_occurrence(recurrence=Recurrence.NONE, from_date=DAY_N) is None


@pytest.mark.unit
class TestResolveRecurrences:
    """Tests for resolve_recurrences function."""

    def test_daily_task_resets_next_day(self, make_task):
        """A daily task completed on day N reopens on day N+1 with dueDate N+1."""
        task = make_task(
            recurrence=Recurrence.DAILY, completed=True, last_completed_date=DAY_N, due_date=DAY_N
        )
        day_after = DAY_N + timedelta(days=1)

        tasks, reset_ids = resolve_recurrences(tasks=[task], today=day_after, now=NOW)

        reset = tasks[0]
        assert reset_ids == [task.id]
        assert reset.completed is False
        assert reset.last_completed_date is None
        assert reset.due_date == day_after
        assert reset.created_at == int(NOW.timestamp() * 1000)
        assert reset.id == task.id

    def test_daily_task_not_reset_same_day(self, make_task):
        """The cycle hasn't elapsed on the completion day."""
        task = make_task(recurrence=Recurrence.DAILY, completed=True, last_completed_date=DAY_N)

        tasks, reset_ids = resolve_recurrences(tasks=[task], today=DAY_N, now=NOW)

        assert reset_ids == []
        assert tasks == [task]

    def test_weekly_task_waits_seven_days(self, make_task):
        """Weekly tasks reset on day N+7, keeping their due date."""
        due = DAY_N + timedelta(days=2)
        task = make_task(
            recurrence=Recurrence.WEEKLY, completed=True, last_completed_date=DAY_N, due_date=due
        )

        _, early = resolve_recurrences(tasks=[task], today=DAY_N + timedelta(days=6), now=NOW)
        tasks, on_time = resolve_recurrences(tasks=[task], today=DAY_N + timedelta(days=7), now=NOW)

        assert early == []
        assert on_time == [task.id]
        assert tasks[0].due_date == due

    def test_monthly_task_resets_after_calendar_month(self, make_task):
        """Monthly tasks reset once a calendar month has passed."""
        task = make_task(recurrence=Recurrence.MONTHLY, completed=True, last_completed_date=DAY_N)

        _, early = resolve_recurrences(tasks=[task], today=date(2026, 4, 9), now=NOW)
        _, due = resolve_recurrences(tasks=[task], today=date(2026, 4, 10), now=NOW)

        assert early == []
        assert due == [task.id]

    def test_skips_incomplete_and_one_off_tasks(self, make_task):
        """Only completed recurring tasks are candidates."""
        incomplete = make_task(recurrence=Recurrence.DAILY)
        one_off = make_task(completed=True, last_completed_date=DAY_N)

        tasks, reset_ids = resolve_recurrences(tasks=[incomplete, one_off], today=DAY_N + timedelta(days=30), now=NOW)

        assert reset_ids == []
        assert tasks == [incomplete, one_off]

    def test_idempotent(self, make_task):
        """A second pass over already-reset tasks changes nothing."""
        tasks = [
            make_task(recurrence=Recurrence.DAILY, completed=True, last_completed_date=DAY_N),
            make_task(recurrence=Recurrence.WEEKLY, completed=True, last_completed_date=DAY_N),
            make_task(),
        ]
        today = DAY_N + timedelta(days=1)

        once, _ = resolve_recurrences(tasks=tasks, today=today, now=NOW)
        twice, second_ids = resolve_recurrences(tasks=once, today=today, now=NOW)

        assert twice == once
        assert second_ids == []

    def test_completed_without_date_is_skipped(self, make_task):
        """A corrupt record with no completion date is left as is."""
        task = make_task(recurrence=Recurrence.DAILY, completed=True, last_completed_date=None)

        assert is_due_for_reset(task, today=DAY_N + timedelta(days=5)) is False
