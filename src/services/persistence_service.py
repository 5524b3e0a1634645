"""Load and save account sessions in a key-value store.

Each session field lives under its own ``{account_id}:{field}`` key as JSON.
Reads never fail the session: a missing or malformed field falls back to its
default and the problem is logged.
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from src.core.config import constants
from src.core.kv_store import KeyValueStore
from src.core.logging import span
from src.domain.achievement import AchievementState
from src.domain.progress import UserStats, XPHistoryItem
from src.domain.reward import Reward
from src.domain.session import SessionState, Theme
from src.domain.task import Task
from src.services.achievement_catalog import merge_states, to_states
from src.services.session_service import new_session


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Persisted field names, matching the stored layout
TASKS = "tasks"
XP = "xp"
XP_HISTORY = "xpHistory"
USER_REWARDS = "userRewards"
ACHIEVEMENTS = "achievements"
USER_STATS = "userStats"
THEME = "theme"
USERNAME = "username"

FIELDS = (TASKS, XP, XP_HISTORY, USER_REWARDS, ACHIEVEMENTS, USER_STATS, THEME, USERNAME)

_MISSING = object()


def storage_key(account_id: str, field: str) -> str:
    """Key under which one field of an account is stored."""
    return f"{account_id}{constants.STORAGE_KEY_SEPARATOR}{field}"


async def _read_json(store: KeyValueStore, account_id: str, field: str) -> Any:
    raw = await store.get(storage_key(account_id, field))
    if raw is None:
        return _MISSING
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Malformed JSON for %s, using default", field, extra={"account_id": account_id, "error": str(e)})
        return _MISSING


def _parse_list(data: Any, model: type[ModelT], *, field: str, account_id: str) -> list[ModelT] | None:
    """Validate a stored list item by item, dropping the items that don't parse."""
    if data is _MISSING:
        return None
    if not isinstance(data, list):
        logger.warning("Expected a list for %s, using default", field, extra={"account_id": account_id})
        return None

    items = []
    for raw_item in data:
        try:
            items.append(model.model_validate(raw_item))
        except ValidationError as e:
            logger.warning(
                "Dropping malformed %s entry", field, extra={"account_id": account_id, "error": str(e)}
            )
    return items


def _parse_value(data: Any, adapter: TypeAdapter, *, field: str, account_id: str) -> Any:
    if data is _MISSING:
        return None
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        logger.warning("Malformed %s, using default", field, extra={"account_id": account_id, "error": str(e)})
        return None


async def load_session(store: KeyValueStore, account_id: str) -> SessionState:
    """Read every field for ``account_id``, defaulting the ones that are missing or invalid."""
    with span("persistence_service.load_session"):
        session = new_session(account_id=account_id)
        updates: dict[str, Any] = {}

        tasks = _parse_list(await _read_json(store, account_id, TASKS), Task, field=TASKS, account_id=account_id)
        if tasks is not None:
            updates["tasks"] = tasks

        xp = _parse_value(await _read_json(store, account_id, XP), TypeAdapter(int), field=XP, account_id=account_id)
        if xp is not None:
            updates["xp"] = xp

        history = _parse_list(
            await _read_json(store, account_id, XP_HISTORY), XPHistoryItem, field=XP_HISTORY, account_id=account_id
        )
        if history is not None:
            updates["xp_history"] = history

        rewards = _parse_list(
            await _read_json(store, account_id, USER_REWARDS), Reward, field=USER_REWARDS, account_id=account_id
        )
        if rewards is not None:
            updates["user_rewards"] = [reward.model_copy(update={"custom": True}) for reward in rewards]

        states = _parse_list(
            await _read_json(store, account_id, ACHIEVEMENTS),
            AchievementState,
            field=ACHIEVEMENTS,
            account_id=account_id,
        )
        if states is not None:
            updates["achievements"] = merge_states(states)

        stats = _parse_value(
            await _read_json(store, account_id, USER_STATS),
            TypeAdapter(UserStats),
            field=USER_STATS,
            account_id=account_id,
        )
        if stats is not None:
            updates["user_stats"] = stats

        theme = _parse_value(
            await _read_json(store, account_id, THEME), TypeAdapter(Theme), field=THEME, account_id=account_id
        )
        if theme is not None:
            updates["theme"] = theme

        username = _parse_value(
            await _read_json(store, account_id, USERNAME), TypeAdapter(str), field=USERNAME, account_id=account_id
        )
        if username and username.strip():
            updates["username"] = username

        logger.info("Loaded session", extra={"account_id": account_id, "fields": sorted(updates)})
        return session.model_copy(update=updates)


def _serialise(session: SessionState) -> dict[str, Any]:
    return {
        TASKS: [task.to_storage() for task in session.tasks],
        XP: session.xp,
        XP_HISTORY: [item.to_storage() for item in session.xp_history],
        USER_REWARDS: [reward.to_storage() for reward in session.user_rewards],
        ACHIEVEMENTS: [state.to_storage() for state in to_states(session.achievements)],
        USER_STATS: session.user_stats.to_storage(),
        THEME: session.theme.value,
        USERNAME: session.username,
    }


async def save_session(store: KeyValueStore, session: SessionState) -> None:
    """Write every field of ``session``.

    Raises:
        StorageError: If the backend fails to write
    """
    with span("persistence_service.save_session"):
        for field, value in _serialise(session).items():
            await store.set(storage_key(session.account_id, field), json.dumps(value, ensure_ascii=False))
        logger.info("Saved session", extra={"account_id": session.account_id})


async def clear_account(store: KeyValueStore, account_id: str) -> None:
    """Remove every stored field for ``account_id``."""
    with span("persistence_service.clear_account"):
        await store.delete(*(storage_key(account_id, field) for field in FIELDS))
        logger.info("Cleared account data", extra={"account_id": account_id})
