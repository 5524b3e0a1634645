"""Domain models and DTOs."""

from src.domain.achievement import Achievement, AchievementKind, AchievementState
from src.domain.progress import UserStats, XPHistoryItem
from src.domain.reward import Reward, RewardDraft
from src.domain.session import SessionState, Theme
from src.domain.task import Category, Priority, Recurrence, Subtask, Task, TaskDraft, TaskUpdate


__all__ = [
    "Achievement",
    "AchievementKind",
    "AchievementState",
    "Category",
    "Priority",
    "Recurrence",
    "Reward",
    "RewardDraft",
    "SessionState",
    "Subtask",
    "Task",
    "TaskDraft",
    "TaskUpdate",
    "Theme",
    "UserStats",
    "XPHistoryItem",
]
