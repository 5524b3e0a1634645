"""Built-in achievements and their unlock rules."""

from src.domain.achievement import Achievement, AchievementKind, AchievementState
from src.domain.progress import UserStats


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first_task",
        name="First Steps",
        description="Complete your first task",
        icon="👣",
        kind=AchievementKind.TASKS_COMPLETED,
        threshold=1,
    ),
    Achievement(
        id="tasks_10",
        name="Getting Things Done",
        description="Complete 10 tasks",
        icon="✅",
        kind=AchievementKind.TASKS_COMPLETED,
        threshold=10,
    ),
    Achievement(
        id="tasks_50",
        name="Productivity Pro",
        description="Complete 50 tasks",
        icon="🚀",
        kind=AchievementKind.TASKS_COMPLETED,
        threshold=50,
    ),
    Achievement(
        id="tasks_100",
        name="Centurion",
        description="Complete 100 tasks",
        icon="💯",
        kind=AchievementKind.TASKS_COMPLETED,
        threshold=100,
    ),
    Achievement(
        id="streak_3",
        name="On a Roll",
        description="Keep a 3-day streak",
        icon="🔥",
        kind=AchievementKind.CURRENT_STREAK,
        threshold=3,
    ),
    Achievement(
        id="streak_7",
        name="Week Warrior",
        description="Keep a 7-day streak",
        icon="🏆",
        kind=AchievementKind.CURRENT_STREAK,
        threshold=7,
    ),
    Achievement(
        id="streak_30",
        name="Monthly Master",
        description="Reach a best streak of 30 days",
        icon="⭐",
        kind=AchievementKind.HIGHEST_STREAK,
        threshold=30,
    ),
)


def stat_value(kind: AchievementKind, stats: UserStats) -> int:
    """Read the statistic an achievement kind is measured against."""
    if kind == AchievementKind.TASKS_COMPLETED:
        return stats.total_tasks_completed
    if kind == AchievementKind.CURRENT_STREAK:
        return stats.current_streak
    return stats.highest_streak


def is_earned(achievement: Achievement, stats: UserStats) -> bool:
    """Evaluate an achievement's rule against the statistics."""
    return stat_value(achievement.kind, stats) >= achievement.threshold


def default_achievements() -> list[Achievement]:
    """Fresh, all-locked copy of the catalog for a new account."""
    return list(ACHIEVEMENTS)


def merge_states(states: list[AchievementState]) -> list[Achievement]:
    """Attach persisted unlock flags to the catalog.

    Unknown ids are dropped; catalog entries with no stored state stay locked.
    """
    unlocked_ids = {state.id for state in states if state.unlocked}
    return [
        achievement.model_copy(update={"unlocked": True}) if achievement.id in unlocked_ids else achievement
        for achievement in ACHIEVEMENTS
    ]


def to_states(achievements: list[Achievement]) -> list[AchievementState]:
    """Strip achievements down to the persisted ``{id, unlocked}`` pairs."""
    return [AchievementState(id=a.id, unlocked=a.unlocked) for a in achievements]
