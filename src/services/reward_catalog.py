"""Built-in rewards and validation of user-created ones."""

import uuid

from src.core.errors import RewardNotFoundError, RewardValidationError
from src.domain.reward import Reward, RewardDraft


BUILT_IN_REWARDS: tuple[Reward, ...] = (
    Reward(id="movie", name="Movie Ticket", emoji="🎬", cost=500),
    Reward(id="giftcard", name="Online Store Gift Card ($10)", emoji="🎁", cost=1000),
    Reward(id="coffee", name="Coffee Voucher", emoji="☕", cost=200),
    Reward(id="bookstore", name="Bookstore Voucher ($5)", emoji="📚", cost=300),
    Reward(id="gaming", name="Gaming Credit ($20)", emoji="🎮", cost=1200),
)


def all_rewards(user_rewards: list[Reward]) -> list[Reward]:
    """Built-in catalog followed by the user's custom rewards."""
    return [*BUILT_IN_REWARDS, *user_rewards]


def find_reward(reward_id: str, user_rewards: list[Reward]) -> Reward:
    """Look a reward up in the catalog and the user's custom rewards.

    Raises:
        RewardNotFoundError: If no reward has ``reward_id``
    """
    for reward in all_rewards(user_rewards):
        if reward.id == reward_id:
            return reward
    raise RewardNotFoundError(f"Reward not found: {reward_id}")


def build_custom_reward(draft: RewardDraft) -> Reward:
    """Validate a draft and turn it into a custom reward.

    Raises:
        RewardValidationError: If the name is blank or the cost is not positive
    """
    name = draft.name.strip()
    if not name:
        raise RewardValidationError("Reward name cannot be empty")
    if draft.cost <= 0:
        raise RewardValidationError(f"Reward cost must be positive, got {draft.cost}")

    return Reward(
        id=f"custom-{uuid.uuid4().hex}",
        name=name,
        emoji=draft.emoji or "🎁",
        cost=draft.cost,
        link=draft.link or None,
        custom=True,
    )
