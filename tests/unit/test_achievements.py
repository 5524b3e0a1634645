"""Unit tests for the achievement catalog and evaluator."""

import pytest

from src.domain.achievement import AchievementKind, AchievementState
from src.domain.progress import UserStats
from src.services.achievement_catalog import (
    ACHIEVEMENTS,
    default_achievements,
    is_earned,
    merge_states,
    to_states,
)
from src.services.achievement_evaluator import evaluate_achievements


def _by_id(achievements):
    return {a.id: a for a in achievements}


@pytest.mark.unit
class TestCatalog:
    """Tests for the static catalog."""

    def test_ids_are_unique(self):
        """Catalog ids identify persisted unlock states."""
        ids = [a.id for a in ACHIEVEMENTS]
        assert len(ids) == len(set(ids))

    def test_defaults_are_locked(self):
        """New accounts start with everything locked."""
        assert not any(a.unlocked for a in default_achievements())

    def test_is_earned_reads_matching_statistic(self):
        """Each kind compares its own statistic against the threshold."""
        catalog = _by_id(ACHIEVEMENTS)
        stats = UserStats(total_tasks_completed=10, current_streak=2, highest_streak=30)

        assert is_earned(catalog["tasks_10"], stats) is True
        assert is_earned(catalog["tasks_50"], stats) is False
        assert is_earned(catalog["streak_3"], stats) is False
        assert is_earned(catalog["streak_30"], stats) is True
        assert catalog["streak_30"].kind == AchievementKind.HIGHEST_STREAK

    def test_merge_states_restores_unlocks(self):
        """Persisted flags are attached to catalog entries; unknown ids are ignored."""
        merged = _by_id(
            merge_states(
                [
                    AchievementState(id="first_task", unlocked=True),
                    AchievementState(id="tasks_10", unlocked=False),
                    AchievementState(id="retired_badge", unlocked=True),
                ]
            )
        )

        assert merged["first_task"].unlocked is True
        assert merged["tasks_10"].unlocked is False
        assert "retired_badge" not in merged
        assert len(merged) == len(ACHIEVEMENTS)

    def test_to_states_round_trips_flags(self):
        """Only id and unlocked are kept for storage."""
        states = to_states(merge_states([AchievementState(id="streak_3", unlocked=True)]))

        assert AchievementState(id="streak_3", unlocked=True) in states
        assert set(states[0].model_dump()) == {"id", "unlocked"}


@pytest.mark.unit
class TestEvaluateAchievements:
    """Tests for evaluate_achievements function."""

    def test_unlocks_several_in_one_pass(self):
        """All satisfied rules unlock together."""
        stats = UserStats(total_tasks_completed=12, current_streak=3, highest_streak=3)

        achievements, unlocked = evaluate_achievements(achievements=default_achievements(), stats=stats)

        assert {a.id for a in unlocked} == {"first_task", "tasks_10", "streak_3"}
        assert _by_id(achievements)["tasks_10"].unlocked is True
        assert _by_id(achievements)["tasks_50"].unlocked is False

    def test_already_unlocked_is_not_reported_again(self):
        """Notifications are one-time."""
        stats = UserStats(total_tasks_completed=1)
        achievements, first = evaluate_achievements(achievements=default_achievements(), stats=stats)

        _, second = evaluate_achievements(achievements=achievements, stats=stats)

        assert [a.id for a in first] == ["first_task"]
        assert second == []

    def test_unlocks_never_revert(self):
        """A streak dropping back to zero keeps streak badges unlocked."""
        achievements, _ = evaluate_achievements(
            achievements=default_achievements(), stats=UserStats(current_streak=7, highest_streak=7)
        )

        after, unlocked = evaluate_achievements(achievements=achievements, stats=UserStats(highest_streak=7))

        assert _by_id(after)["streak_7"].unlocked is True
        assert _by_id(after)["streak_3"].unlocked is True
        assert unlocked == []
