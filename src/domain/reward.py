"""Reward domain models."""

from pydantic import Field

from src.domain.base import RecordModel


class Reward(RecordModel):
    """Something the user can buy with XP."""

    id: str = Field(..., description="Unique reward ID")
    name: str = Field(..., description="Display name")
    emoji: str = Field(default="🎁", description="Icon shown next to the name")
    cost: int = Field(..., gt=0, description="Price in XP")
    link: str | None = Field(default=None, description="URL opened after redemption")
    custom: bool = Field(default=False, description="True for user-created rewards")


class RewardDraft(RecordModel):
    """User input for a custom reward. Validated by the reward catalog."""

    name: str
    cost: int
    emoji: str = "🎁"
    link: str | None = None
