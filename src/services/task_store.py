"""Task collection mutations.

Every function takes the current task list and returns a new one; XP and
statistics are handled by the session service.
"""

import logging
import uuid
from datetime import date, datetime
from functools import cmp_to_key

from src.core.clock import to_timestamp
from src.core.errors import TaskNotFoundError, TaskValidationError
from src.domain.task import Priority, Subtask, Task, TaskDraft, TaskUpdate


logger = logging.getLogger(__name__)

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def _new_id() -> str:
    return uuid.uuid4().hex


def _index_of(tasks: list[Task], task_id: str) -> int:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    raise TaskNotFoundError(f"Task not found: {task_id}")


def _replace(tasks: list[Task], index: int, task: Task) -> list[Task]:
    return [*tasks[:index], task, *tasks[index + 1 :]]


def add_task(tasks: list[Task], draft: TaskDraft, *, now: datetime) -> tuple[list[Task], Task]:
    """Append a new incomplete task built from ``draft``.

    Raises:
        TaskValidationError: If the draft text is empty or whitespace
    """
    if not draft.text.strip():
        raise TaskValidationError("Task text cannot be empty")

    task = Task(
        id=_new_id(),
        text=draft.text,
        description=draft.description or None,
        due_date=draft.due_date,
        priority=draft.priority,
        category=draft.category,
        recurrence=draft.recurrence,
        completed=False,
        created_at=to_timestamp(now),
    )
    logger.info("Added task %s", task.id, extra={"priority": task.priority, "recurrence": task.recurrence})
    return [*tasks, task], task


def edit_task(tasks: list[Task], task_id: str, fields: TaskUpdate) -> tuple[list[Task], Task]:
    """Merge ``fields`` into a task, keeping its id and creation time.

    Fields explicitly set to None clear the value (e.g. removing a due date).

    Raises:
        TaskNotFoundError: If no task has ``task_id``
        TaskValidationError: If the new text is empty
    """
    index = _index_of(tasks, task_id)
    changes = fields.model_dump(exclude_unset=True)

    if "text" in changes and not (changes["text"] or "").strip():
        raise TaskValidationError("Task text cannot be empty")
    for required in ("text", "priority", "category", "recurrence"):
        if changes.get(required, ...) is None:
            changes.pop(required)

    updated = tasks[index].model_copy(update=changes)
    logger.info("Edited task %s", task_id, extra={"fields": sorted(changes)})
    return _replace(tasks, index, updated), updated


def delete_task(tasks: list[Task], task_id: str) -> list[Task]:
    """Remove a task. Earned XP is not affected.

    Raises:
        TaskNotFoundError: If no task has ``task_id``
    """
    index = _index_of(tasks, task_id)
    logger.info("Deleted task %s", task_id)
    return [*tasks[:index], *tasks[index + 1 :]]


def toggle_completion(tasks: list[Task], task_id: str, *, today: date) -> tuple[list[Task], Task, bool]:
    """Flip a task's completed flag.

    Completing stamps ``last_completed_date`` with today; reopening clears it.

    Returns:
        Tuple of (tasks, updated_task, became_completed)

    Raises:
        TaskNotFoundError: If no task has ``task_id``
    """
    index = _index_of(tasks, task_id)
    task = tasks[index]
    completing = not task.completed

    updated = task.model_copy(
        update={
            "completed": completing,
            "last_completed_date": today if completing else None,
        }
    )
    return _replace(tasks, index, updated), updated, completing


def add_subtask(tasks: list[Task], task_id: str, text: str) -> tuple[list[Task], Task]:
    """Append a checklist item to a task.

    Raises:
        TaskNotFoundError: If no task has ``task_id``
        TaskValidationError: If ``text`` is blank
    """
    if not text.strip():
        raise TaskValidationError("Subtask text cannot be empty")

    index = _index_of(tasks, task_id)
    task = tasks[index]
    updated = task.model_copy(update={"subtasks": [*task.subtasks, Subtask(id=_new_id(), text=text.strip())]})
    return _replace(tasks, index, updated), updated


def toggle_subtask(tasks: list[Task], task_id: str, subtask_id: str) -> tuple[list[Task], Task]:
    """Check or uncheck one checklist item. Subtasks never award XP."""
    index = _index_of(tasks, task_id)
    task = tasks[index]
    if not any(sub.id == subtask_id for sub in task.subtasks):
        raise TaskNotFoundError(f"Subtask not found: {subtask_id}")

    subtasks = [
        sub.model_copy(update={"completed": not sub.completed}) if sub.id == subtask_id else sub
        for sub in task.subtasks
    ]
    updated = task.model_copy(update={"subtasks": subtasks})
    return _replace(tasks, index, updated), updated


def delete_subtask(tasks: list[Task], task_id: str, subtask_id: str) -> tuple[list[Task], Task]:
    """Remove a checklist item; unknown subtask ids are ignored."""
    index = _index_of(tasks, task_id)
    task = tasks[index]
    updated = task.model_copy(update={"subtasks": [sub for sub in task.subtasks if sub.id != subtask_id]})
    return _replace(tasks, index, updated), updated


def _display_order(a: Task, b: Task) -> int:
    if a.completed != b.completed:
        return 1 if a.completed else -1
    if a.priority != b.priority:
        return _PRIORITY_ORDER[a.priority] - _PRIORITY_ORDER[b.priority]
    # Due dates only decide between two dated tasks
    if a.due_date and b.due_date and a.due_date != b.due_date:
        return -1 if a.due_date < b.due_date else 1
    return a.created_at - b.created_at


def sort_for_display(tasks: list[Task]) -> list[Task]:
    """Order tasks for the task list.

    Incomplete before completed, then High -> Medium -> Low, then the earlier
    due date when both tasks have one, then oldest first.
    """
    return sorted(tasks, key=cmp_to_key(_display_order))
