"""Achievement domain models.

An achievement's unlock rule is data, not code: a kind plus a threshold.
Only ``{id, unlocked}`` is persisted; definitions come from the catalog.
"""

from enum import StrEnum

from pydantic import Field

from src.domain.base import RecordModel


class AchievementKind(StrEnum):
    """Statistic an achievement's threshold is compared against."""

    TASKS_COMPLETED = "tasks_completed"
    CURRENT_STREAK = "current_streak"
    HIGHEST_STREAK = "highest_streak"


class Achievement(RecordModel):
    """Catalog entry together with the account's unlock state."""

    id: str = Field(..., description="Stable achievement ID")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="How to earn it")
    icon: str = Field(..., description="Emoji badge")
    kind: AchievementKind = Field(..., description="Statistic the rule reads")
    threshold: int = Field(..., gt=0, description="Minimum value that unlocks it")
    unlocked: bool = Field(default=False, description="One-way unlock flag")


class AchievementState(RecordModel):
    """Persisted unlock flag for one achievement."""

    id: str
    unlocked: bool = False
