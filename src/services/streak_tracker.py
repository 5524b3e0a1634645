"""Daily streak evaluation.

The evaluation is keyed by ``last_streak_check_date`` so it runs at most once
per calendar day, however often the reconciliation pass is invoked.
"""

import logging
from datetime import date, datetime

from src.core.clock import yesterday
from src.domain.progress import UserStats
from src.domain.task import Task
from src.models.service_models import StreakOutcome
from src.services import progression_engine


logger = logging.getLogger(__name__)


def _completed_on(tasks: list[Task], day: date) -> bool:
    return any(task.completed and task.last_completed_date == day for task in tasks)


def evaluate_streak(*, stats: UserStats, tasks: list[Task], today: date, now: datetime) -> StreakOutcome:
    """Advance, reset or initialise the completion streak for ``today``.

    Rules:
    - Already checked today: nothing changes.
    - Completed something today: the streak continues when something was also
      completed yesterday (or this is the very first check), otherwise it
      restarts at 1. A new best streak earns the streak bonus.
    - Nothing completed today: a streak survives only if the previous check
      was yesterday; older checks reset it to 0.
    """
    last_check = stats.last_streak_check_date
    if last_check == today:
        return StreakOutcome(evaluated=False, user_stats=stats)

    day_before = yesterday(today)
    first_check = last_check is None
    current = stats.current_streak
    highest = stats.highest_streak
    bonus = None

    if _completed_on(tasks, today):
        if first_check or _completed_on(tasks, day_before):
            current += 1
            if current > highest:
                highest = current
                bonus = progression_engine.streak_award(streak=current, now=now)
                logger.info("New best streak: %d days", current)
        else:
            current = 1
            highest = max(highest, current)
            logger.info("Streak restarted after a missed day")
    elif not first_check and last_check != day_before and current > 0:
        logger.info("Streak of %d days broken, last check was %s", current, last_check)
        current = 0

    updated = stats.model_copy(
        update={
            "current_streak": current,
            "highest_streak": highest,
            "last_streak_check_date": today,
        }
    )
    return StreakOutcome(evaluated=True, user_stats=updated, bonus=bonus)
