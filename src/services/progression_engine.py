"""XP awards, reward redemption and level math.

All functions are pure: they take the current values and return new ones,
leaving history lists untouched.
"""

import logging
import uuid
from datetime import date, datetime

from src.core.clock import to_timestamp
from src.core.config import constants
from src.core.errors import InsufficientXPError
from src.domain.progress import XPHistoryItem
from src.domain.reward import Reward
from src.domain.task import Priority, Task
from src.models.service_models import LevelProgress, XPAward


logger = logging.getLogger(__name__)


def new_history_entry(*, change: int, description: str, now: datetime) -> XPHistoryItem:
    """Build a history entry stamped with ``now``."""
    return XPHistoryItem(
        id=uuid.uuid4().hex,
        change=change,
        description=description,
        timestamp=to_timestamp(now),
    )


def is_on_time(task: Task, *, today: date) -> bool:
    """A task with no due date always counts as on time."""
    return task.due_date is None or task.due_date >= today


def completion_award(task: Task, *, today: date, now: datetime) -> XPAward:
    """Compute the XP for completing ``task`` today.

    Base award plus independent bonuses for High priority and for finishing
    on or before the due date.
    """
    amount = constants.BASE_TASK_XP
    bonuses = []

    high_priority = task.priority == Priority.HIGH
    if high_priority:
        amount += constants.HIGH_PRIORITY_BONUS_XP
        bonuses.append("high priority")

    on_time = is_on_time(task, today=today)
    if on_time:
        amount += constants.ON_TIME_BONUS_XP
        bonuses.append("on time")

    description = f'Completed task: "{task.text}"'
    if bonuses:
        description += f" ({', '.join(bonuses)} bonus)"

    return XPAward(
        amount=amount,
        history_entry=new_history_entry(change=amount, description=description, now=now),
        high_priority_bonus=high_priority,
        on_time_bonus=on_time,
    )


def streak_award(*, streak: int, now: datetime) -> XPAward:
    """XP granted when a streak reaches a new personal best."""
    return XPAward(
        amount=constants.STREAK_BONUS_XP,
        history_entry=new_history_entry(
            change=constants.STREAK_BONUS_XP,
            description=f"New best streak: {streak} day{'s' if streak != 1 else ''}!",
            now=now,
        ),
    )


def apply_award(
    *, xp: int, history: list[XPHistoryItem], award: XPAward
) -> tuple[int, list[XPHistoryItem]]:
    """Add an award to the running total and prepend its entry to history."""
    return xp + award.amount, [award.history_entry, *history]


def redeem(
    *, xp: int, history: list[XPHistoryItem], reward: Reward, now: datetime
) -> tuple[int, list[XPHistoryItem], XPHistoryItem]:
    """Spend XP on a reward.

    Returns:
        Tuple of (new_xp, new_history, history_entry)

    Raises:
        InsufficientXPError: If the reward costs more than ``xp``
    """
    if reward.cost > xp:
        raise InsufficientXPError(reward_name=reward.name, cost=reward.cost, available=xp)

    entry = new_history_entry(change=-reward.cost, description=f"Redeemed: {reward.name}", now=now)
    logger.info("Redeemed reward %s for %d XP", reward.id, reward.cost)
    return xp - reward.cost, [entry, *history], entry


def level_for(xp: int) -> int:
    """Level reached with ``xp`` points (level 1 starts at 0 XP)."""
    return xp // constants.XP_PER_LEVEL + 1


def level_progress(xp: int) -> LevelProgress:
    """Level, XP earned inside the level, and XP still needed for the next."""
    into_level = xp % constants.XP_PER_LEVEL
    return LevelProgress(
        level=level_for(xp),
        xp_into_level=into_level,
        xp_to_next_level=constants.XP_PER_LEVEL - into_level,
    )
