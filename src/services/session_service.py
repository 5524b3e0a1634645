"""User-facing operations over an account's session snapshot.

Each operation takes a ``SessionState`` and returns the updated snapshot
(plus a typed result where the UI needs one). Nothing here reacts to state
changes on its own: after any mutating call the caller runs
``run_daily_reconciliation``.
"""

import logging

from src.core import clock
from src.core.config import settings
from src.core.errors import RewardNotFoundError, ThemeValidationError, UsernameValidationError
from src.core.logging import log_with_account_context, span
from src.domain.progress import UserStats
from src.domain.reward import Reward, RewardDraft
from src.domain.session import SessionState, Theme
from src.domain.task import Task, TaskDraft, TaskUpdate
from src.models.service_models import LevelProgress, ReconciliationResult, RedemptionResult, ToggleResult
from src.services import (
    achievement_evaluator,
    progression_engine,
    recurrence_resolver,
    reward_catalog,
    streak_tracker,
    task_store,
)
from src.services.achievement_catalog import default_achievements


logger = logging.getLogger(__name__)


def new_session(*, account_id: str, username: str | None = None, theme: Theme | None = None) -> SessionState:
    """Empty session for an account that has never stored anything."""
    return SessionState(
        account_id=account_id,
        username=username or settings.default_username,
        theme=theme or Theme(settings.default_theme),
        achievements=default_achievements(),
        user_stats=UserStats(),
    )


def add_task(session: SessionState, draft: TaskDraft) -> tuple[SessionState, Task]:
    """Create a task from user input.

    Raises:
        TaskValidationError: If the draft text is blank (session unchanged)
    """
    with span("session_service.add_task"):
        tasks, task = task_store.add_task(session.tasks, draft, now=clock.now())
        return session.model_copy(update={"tasks": tasks}), task


def edit_task(session: SessionState, task_id: str, fields: TaskUpdate) -> tuple[SessionState, Task]:
    """Edit a task's fields. XP and statistics are not affected."""
    with span("session_service.edit_task"):
        tasks, task = task_store.edit_task(session.tasks, task_id, fields)
        return session.model_copy(update={"tasks": tasks}), task


def delete_task(session: SessionState, task_id: str) -> SessionState:
    """Delete a task. XP already earned from it is kept."""
    with span("session_service.delete_task"):
        tasks = task_store.delete_task(session.tasks, task_id)
        return session.model_copy(update={"tasks": tasks})


def toggle_task_completion(session: SessionState, task_id: str) -> tuple[SessionState, ToggleResult]:
    """Complete or reopen a task.

    Completing awards XP and counts towards ``total_tasks_completed``.
    Reopening a task keeps the XP it earned and its history entry.

    Raises:
        TaskNotFoundError: If no task has ``task_id``
    """
    with span("session_service.toggle_task_completion"):
        today = clock.today()
        now = clock.now()
        tasks, task, completed = task_store.toggle_completion(session.tasks, task_id, today=today)

        if not completed:
            log_with_account_context(logger, "info", "Task reopened", account_id=session.account_id, task_id=task_id)
            return session.model_copy(update={"tasks": tasks}), ToggleResult(updated_task=task, xp_awarded=0)

        award = progression_engine.completion_award(task, today=today, now=now)
        xp, history = progression_engine.apply_award(xp=session.xp, history=session.xp_history, award=award)
        stats = session.user_stats.model_copy(
            update={"total_tasks_completed": session.user_stats.total_tasks_completed + 1}
        )

        log_with_account_context(
            logger,
            "info",
            "Task completed",
            account_id=session.account_id,
            task_id=task_id,
            xp_awarded=award.amount,
        )
        updated = session.model_copy(update={"tasks": tasks, "xp": xp, "xp_history": history, "user_stats": stats})
        return updated, ToggleResult(updated_task=task, xp_awarded=award.amount, history_entry=award.history_entry)


def add_subtask(session: SessionState, task_id: str, text: str) -> tuple[SessionState, Task]:
    """Add a checklist item to a task."""
    tasks, task = task_store.add_subtask(session.tasks, task_id, text)
    return session.model_copy(update={"tasks": tasks}), task


def toggle_subtask(session: SessionState, task_id: str, subtask_id: str) -> tuple[SessionState, Task]:
    """Check or uncheck a checklist item."""
    tasks, task = task_store.toggle_subtask(session.tasks, task_id, subtask_id)
    return session.model_copy(update={"tasks": tasks}), task


def delete_subtask(session: SessionState, task_id: str, subtask_id: str) -> tuple[SessionState, Task]:
    """Remove a checklist item."""
    tasks, task = task_store.delete_subtask(session.tasks, task_id, subtask_id)
    return session.model_copy(update={"tasks": tasks}), task


def sorted_tasks(session: SessionState) -> list[Task]:
    """Tasks in display order."""
    return task_store.sort_for_display(session.tasks)


def available_rewards(session: SessionState) -> list[Reward]:
    """Built-in rewards followed by the account's custom rewards."""
    return reward_catalog.all_rewards(session.user_rewards)


def redeem_reward(session: SessionState, reward_id: str) -> tuple[SessionState, RedemptionResult]:
    """Spend XP on a reward.

    When the reward carries a link, the result exposes it so the UI can open it.

    Raises:
        RewardNotFoundError: If the reward doesn't exist
        InsufficientXPError: If the reward costs more than the account's XP
    """
    with span("session_service.redeem_reward"):
        reward = reward_catalog.find_reward(reward_id, session.user_rewards)
        xp, history, entry = progression_engine.redeem(
            xp=session.xp, history=session.xp_history, reward=reward, now=clock.now()
        )
        log_with_account_context(
            logger, "info", "Reward redeemed", account_id=session.account_id, reward_id=reward_id, cost=reward.cost
        )
        updated = session.model_copy(update={"xp": xp, "xp_history": history})
        return updated, RedemptionResult(new_xp=xp, history_entry=entry, link=reward.link)


def add_custom_reward(session: SessionState, draft: RewardDraft) -> tuple[SessionState, Reward]:
    """Create a user-owned reward.

    Raises:
        RewardValidationError: If the name is blank or the cost isn't positive
    """
    with span("session_service.add_custom_reward"):
        reward = reward_catalog.build_custom_reward(draft)
        logger.info("Added custom reward %s", reward.id)
        return session.model_copy(update={"user_rewards": [*session.user_rewards, reward]}), reward


def delete_custom_reward(session: SessionState, reward_id: str) -> SessionState:
    """Delete a custom reward. Built-in rewards can't be deleted.

    Raises:
        RewardNotFoundError: If the account has no custom reward with ``reward_id``
    """
    with span("session_service.delete_custom_reward"):
        remaining = [reward for reward in session.user_rewards if reward.id != reward_id]
        if len(remaining) == len(session.user_rewards):
            raise RewardNotFoundError(f"Custom reward not found: {reward_id}")
        logger.info("Deleted custom reward %s", reward_id)
        return session.model_copy(update={"user_rewards": remaining})


def clear_xp_history(session: SessionState) -> SessionState:
    """Drop the whole XP history. The XP total is unchanged."""
    logger.info("Cleared %d XP history entries", len(session.xp_history))
    return session.model_copy(update={"xp_history": []})


def set_username(session: SessionState, username: str) -> SessionState:
    """Rename the account's display name.

    Raises:
        UsernameValidationError: If ``username`` is blank
    """
    name = username.strip()
    if not name:
        raise UsernameValidationError("Username cannot be empty")
    return session.model_copy(update={"username": name})


def set_theme(session: SessionState, theme: Theme | str) -> SessionState:
    """Select a colour theme.

    Raises:
        ThemeValidationError: If ``theme`` isn't one of light, dark or system
    """
    try:
        selected = Theme(theme)
    except ValueError as e:
        raise ThemeValidationError(f"Unknown theme: {theme}") from e
    return session.model_copy(update={"theme": selected})


def level_progress(session: SessionState) -> LevelProgress:
    """Level and progress towards the next one."""
    return progression_engine.level_progress(session.xp)


def run_daily_reconciliation(session: SessionState) -> tuple[SessionState, ReconciliationResult]:
    """Run the streak, recurrence and achievement passes in that order.

    Streaks are evaluated before recurring tasks reset so yesterday's
    completions still count. Safe to call after every mutation: the streak
    check runs once per day, resets skip reopened tasks, and unlocked
    achievements stay unlocked.
    """
    with span("session_service.run_daily_reconciliation"):
        today = clock.today()
        now = clock.now()

        streak = streak_tracker.evaluate_streak(stats=session.user_stats, tasks=session.tasks, today=today, now=now)
        xp, history = session.xp, session.xp_history
        if streak.bonus is not None:
            xp, history = progression_engine.apply_award(xp=xp, history=history, award=streak.bonus)

        tasks, reset_ids = recurrence_resolver.resolve_recurrences(tasks=session.tasks, today=today, now=now)
        achievements, unlocked = achievement_evaluator.evaluate_achievements(
            achievements=session.achievements, stats=streak.user_stats
        )

        if streak.evaluated or reset_ids or unlocked:
            log_with_account_context(
                logger,
                "info",
                "Daily reconciliation applied",
                account_id=session.account_id,
                current_streak=streak.user_stats.current_streak,
                reset_tasks=len(reset_ids),
                unlocked=[a.id for a in unlocked],
            )

        updated = session.model_copy(
            update={
                "tasks": tasks,
                "xp": xp,
                "xp_history": history,
                "user_stats": streak.user_stats,
                "achievements": achievements,
            }
        )
        result = ReconciliationResult(
            updated_stats=streak.user_stats,
            updated_tasks=tasks,
            reset_task_ids=reset_ids,
            newly_unlocked_achievements=unlocked,
            streak_evaluated=streak.evaluated,
            streak_bonus_xp=streak.bonus.amount if streak.bonus else 0,
        )
        return updated, result
