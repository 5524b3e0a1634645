"""Unlock achievements whose rules are satisfied by the current statistics."""

import logging

from src.domain.achievement import Achievement
from src.domain.progress import UserStats
from src.services.achievement_catalog import is_earned


logger = logging.getLogger(__name__)


def evaluate_achievements(
    *, achievements: list[Achievement], stats: UserStats
) -> tuple[list[Achievement], list[Achievement]]:
    """Check every locked achievement against ``stats``.

    Unlocked achievements are never re-evaluated, so they cannot relock.

    Returns:
        Tuple of (all_achievements, newly_unlocked)
    """
    evaluated = []
    newly_unlocked = []
    for achievement in achievements:
        if achievement.unlocked or not is_earned(achievement, stats):
            evaluated.append(achievement)
            continue

        unlocked = achievement.model_copy(update={"unlocked": True})
        newly_unlocked.append(unlocked)
        evaluated.append(unlocked)
        logger.info("Achievement unlocked: %s", unlocked.name, extra={"achievement_id": unlocked.id})
    return evaluated, newly_unlocked
