from src.services import (
    achievement_catalog,
    achievement_evaluator,
    persistence_service,
    progression_engine,
    recurrence_resolver,
    reward_catalog,
    session_service,
    streak_tracker,
    task_store,
)


__all__ = [
    "achievement_catalog",
    "achievement_evaluator",
    "persistence_service",
    "progression_engine",
    "recurrence_resolver",
    "reward_catalog",
    "session_service",
    "streak_tracker",
    "task_store",
]
