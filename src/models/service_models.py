"""Pydantic models for service layer return types.

These models give the UI collaborator typed results alongside the updated
session snapshot.
"""

from pydantic import BaseModel

from src.domain.achievement import Achievement
from src.domain.progress import UserStats, XPHistoryItem
from src.domain.task import Task


class XPAward(BaseModel):
    """XP granted for one event and the history entry recording it."""

    amount: int
    history_entry: XPHistoryItem
    high_priority_bonus: bool = False
    on_time_bonus: bool = False


class ToggleResult(BaseModel):
    """Outcome of toggling a task's completion."""

    updated_task: Task
    xp_awarded: int
    history_entry: XPHistoryItem | None = None


class RedemptionResult(BaseModel):
    """Outcome of a successful reward redemption."""

    success: bool = True
    new_xp: int
    history_entry: XPHistoryItem
    link: str | None = None


class StreakOutcome(BaseModel):
    """What the daily streak evaluation did."""

    evaluated: bool
    user_stats: UserStats
    bonus: XPAward | None = None


class ReconciliationResult(BaseModel):
    """Combined outcome of the streak, recurrence and achievement passes."""

    updated_stats: UserStats
    updated_tasks: list[Task]
    reset_task_ids: list[str]
    newly_unlocked_achievements: list[Achievement]
    streak_evaluated: bool
    streak_bonus_xp: int = 0


class LevelProgress(BaseModel):
    """Where an XP total sits on the level ladder."""

    level: int
    xp_into_level: int
    xp_to_next_level: int
