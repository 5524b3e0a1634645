"""Unit tests for progression_engine module."""

from datetime import date, datetime, timedelta

import pytest

from src.core.errors import InsufficientXPError
from src.domain.reward import Reward
from src.domain.task import Priority
from src.services import progression_engine


TODAY = date(2026, 3, 10)
NOW = datetime(2026, 3, 10, 9, 30)


@pytest.mark.unit
class TestCompletionAward:
    """Tests for completion_award function."""

    def test_high_priority_due_in_future_awards_60(self, make_task):
        """High priority plus on-time bonus on top of the base award."""
        task = make_task(priority=Priority.HIGH, due_date=TODAY + timedelta(days=1))

        award = progression_engine.completion_award(task, today=TODAY, now=NOW)

        assert award.amount == 60
        assert award.high_priority_bonus is True
        assert award.on_time_bonus is True

    def test_low_priority_without_due_date_awards_30(self, make_task):
        """A task with no due date counts as on time."""
        task = make_task(priority=Priority.LOW)

        award = progression_engine.completion_award(task, today=TODAY, now=NOW)

        assert award.amount == 30
        assert award.high_priority_bonus is False

    def test_due_today_is_on_time(self, make_task):
        """Completing on the due date still earns the on-time bonus."""
        task = make_task(priority=Priority.MEDIUM, due_date=TODAY)

        award = progression_engine.completion_award(task, today=TODAY, now=NOW)

        assert award.amount == 30

    def test_overdue_task_gets_base_only(self, make_task):
        """Late completion earns only the base award."""
        task = make_task(priority=Priority.MEDIUM, due_date=TODAY - timedelta(days=1))

        award = progression_engine.completion_award(task, today=TODAY, now=NOW)

        assert award.amount == 20
        assert award.on_time_bonus is False

    def test_overdue_high_priority_awards_50(self, make_task):
        """Bonuses apply independently."""
        task = make_task(priority=Priority.HIGH, due_date=TODAY - timedelta(days=3))

        award = progression_engine.completion_award(task, today=TODAY, now=NOW)

        assert award.amount == 50

    def test_history_entry_describes_task_and_bonuses(self, make_task):
        """The entry names the task and the bonuses that applied."""
        task = make_task(text="Write report", priority=Priority.HIGH)

        award = progression_engine.completion_award(task, today=TODAY, now=NOW)

        entry = award.history_entry
        assert entry.change == 60
        assert "Write report" in entry.description
        assert "high priority" in entry.description
        assert "on time" in entry.description
        assert entry.timestamp == int(NOW.timestamp() * 1000)


@pytest.mark.unit
class TestApplyAward:
    """Tests for apply_award function."""

    def test_prepends_entry_and_adds_xp(self, make_task):
        """History stays newest-first and the input list is untouched."""
        first = progression_engine.completion_award(make_task(), today=TODAY, now=NOW)
        second = progression_engine.completion_award(make_task(), today=TODAY, now=NOW)

        xp, history = progression_engine.apply_award(xp=0, history=[], award=first)
        xp, new_history = progression_engine.apply_award(xp=xp, history=history, award=second)

        assert xp == 60
        assert [item.id for item in new_history] == [second.history_entry.id, first.history_entry.id]
        assert len(history) == 1


@pytest.mark.unit
class TestRedeem:
    """Tests for redeem function."""

    def test_redeem_deducts_cost(self):
        """Successful redemption subtracts the cost and logs a negative entry."""
        reward = Reward(id="coffee", name="Coffee Voucher", emoji="☕", cost=50)

        xp, history, entry = progression_engine.redeem(xp=60, history=[], reward=reward, now=NOW)

        assert xp == 10
        assert entry.change == -50
        assert entry.description == "Redeemed: Coffee Voucher"
        assert history == [entry]

    def test_redeem_exact_balance(self):
        """Spending the whole balance leaves zero XP."""
        reward = Reward(id="r", name="Snack", cost=30)

        xp, _, _ = progression_engine.redeem(xp=30, history=[], reward=reward, now=NOW)

        assert xp == 0

    def test_redeem_insufficient_xp_raises(self):
        """A reward costing more than the balance is rejected."""
        reward = Reward(id="movie", name="Movie Ticket", cost=500)
        history = []

        with pytest.raises(InsufficientXPError, match="Movie Ticket") as exc_info:
            progression_engine.redeem(xp=10, history=history, reward=reward, now=NOW)

        assert exc_info.value.cost == 500
        assert exc_info.value.available == 10
        assert history == []


@pytest.mark.unit
class TestLevels:
    """Tests for level math."""

    @pytest.mark.parametrize(
        ("xp", "level"),
        [(0, 1), (99, 1), (100, 2), (250, 3), (1000, 11)],
    )
    def test_level_for(self, xp, level):
        """Level increases every 100 XP."""
        assert progression_engine.level_for(xp) == level

    def test_level_progress(self):
        """Progress reports XP inside the level and XP still needed."""
        progress = progression_engine.level_progress(260)

        assert progress.level == 3
        assert progress.xp_into_level == 60
        assert progress.xp_to_next_level == 40

    def test_streak_award_uses_streak_bonus(self):
        """A new best streak is worth the fixed streak bonus."""
        award = progression_engine.streak_award(streak=4, now=NOW)

        assert award.amount == 5
        assert "4 days" in award.history_entry.description
