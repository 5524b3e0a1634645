"""XP history and streak statistics models."""

from datetime import date

from pydantic import Field, field_validator

from src.domain.base import RecordModel


class XPHistoryItem(RecordModel):
    """One signed XP change. History entries are never edited once written."""

    id: str = Field(..., description="Unique history entry ID")
    change: int = Field(..., description="Signed XP delta")
    description: str = Field(..., description="What earned or spent the XP")
    timestamp: int = Field(..., description="When the change happened, epoch milliseconds")


class UserStats(RecordModel):
    """Cumulative statistics that drive streaks and achievements."""

    total_tasks_completed: int = Field(default=0, ge=0, description="Completions ever recorded")
    current_streak: int = Field(default=0, ge=0, description="Consecutive days with a completion")
    highest_streak: int = Field(default=0, ge=0, description="Best streak reached")
    last_streak_check_date: date | None = Field(
        default=None,
        description="Day of the last streak evaluation; None means never evaluated",
    )

    @field_validator("last_streak_check_date", mode="before")
    @classmethod
    def empty_means_never_checked(cls, v: object) -> object:
        """Stored empty strings mark a streak that was never evaluated."""
        if v == "":
            return None
        return v
