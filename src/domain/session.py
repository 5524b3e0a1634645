"""Per-account session snapshot."""

from enum import StrEnum

from pydantic import Field

from src.domain.achievement import Achievement
from src.domain.base import RecordModel
from src.domain.progress import UserStats, XPHistoryItem
from src.domain.reward import Reward
from src.domain.task import Task


class Theme(StrEnum):
    """Colour scheme chosen by the user."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class SessionState(RecordModel):
    """Everything the core knows about one account.

    Operations take a snapshot and return a new one; the UI layer is the only
    place that keeps the current snapshot around.
    """

    account_id: str = Field(..., description="Account whose records these are")
    username: str = Field(default="User-XXXX", description="Display name")
    theme: Theme = Field(default=Theme.SYSTEM, description="Selected theme")
    tasks: list[Task] = Field(default_factory=list)
    xp: int = Field(default=0, description="Spendable XP")
    xp_history: list[XPHistoryItem] = Field(default_factory=list, description="Newest first")
    user_rewards: list[Reward] = Field(default_factory=list, description="Custom rewards")
    achievements: list[Achievement] = Field(default_factory=list)
    user_stats: UserStats = Field(default_factory=UserStats)

    def find_task(self, task_id: str) -> Task | None:
        """Return the task with ``task_id`` or None."""
        return next((task for task in self.tasks if task.id == task_id), None)
