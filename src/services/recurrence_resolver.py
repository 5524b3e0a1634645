"""Return completed recurring tasks to TODO once their period has elapsed."""

import logging
from datetime import date, datetime

from src.core.clock import to_timestamp
from src.core.recurrence_parser import next_occurrence
from src.domain.task import Recurrence, Task


logger = logging.getLogger(__name__)


def is_due_for_reset(task: Task, *, today: date) -> bool:
    """True when a completed recurring task's next occurrence is today or earlier."""
    if not task.completed or task.recurrence == Recurrence.NONE:
        return False
    if task.last_completed_date is None:
        # Completed recurring tasks always carry a completion date; skip corrupt records.
        logger.warning("Recurring task %s is completed without a completion date", task.id)
        return False

    next_due = next_occurrence(recurrence=task.recurrence, from_date=task.last_completed_date)
    return next_due is not None and next_due <= today


def reset_task(task: Task, *, today: date, now: datetime) -> Task:
    """Reopen a recurring task for its next cycle."""
    update: dict = {
        "completed": False,
        "last_completed_date": None,
        "created_at": to_timestamp(now),
    }
    if task.recurrence == Recurrence.DAILY:
        update["due_date"] = today
    return task.model_copy(update=update)


def resolve_recurrences(*, tasks: list[Task], today: date, now: datetime) -> tuple[list[Task], list[str]]:
    """Reset every recurring task whose cycle has elapsed.

    Running this twice is the same as running it once: reset tasks are no
    longer completed and are skipped.

    Returns:
        Tuple of (tasks, ids_of_reset_tasks)
    """
    resolved = []
    reset_ids = []
    for task in tasks:
        if is_due_for_reset(task, today=today):
            resolved.append(reset_task(task, today=today, now=now))
            reset_ids.append(task.id)
        else:
            resolved.append(task)

    if reset_ids:
        logger.info("Reset %d recurring task(s)", len(reset_ids), extra={"task_ids": reset_ids})
    return resolved, reset_ids
