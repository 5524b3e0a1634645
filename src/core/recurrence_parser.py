"""Recurrence parsing and next-occurrence utilities for recurring tasks."""

import re
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from src.domain.task import Recurrence


_ALIASES: dict[str, Recurrence] = {
    "": Recurrence.NONE,
    "none": Recurrence.NONE,
    "never": Recurrence.NONE,
    "once": Recurrence.NONE,
    "daily": Recurrence.DAILY,
    "day": Recurrence.DAILY,
    "weekly": Recurrence.WEEKLY,
    "week": Recurrence.WEEKLY,
    "monthly": Recurrence.MONTHLY,
    "month": Recurrence.MONTHLY,
}


def parse_recurrence(recurrence: str | None) -> Recurrence:
    """Parse user text into a Recurrence.

    Supports:
    - Enum values in any case ("Daily", "weekly")
    - "every day" / "every week" / "every month"
    - Empty input or "none" for one-off tasks

    Raises:
        ValueError: If recurrence format is invalid
    """
    text = (recurrence or "").strip().lower()

    match = re.match(r"^every\s+(day|week|month)$", text)
    if match:
        text = match.group(1)

    if text in _ALIASES:
        return _ALIASES[text]

    msg = f"Invalid recurrence format: {recurrence}. Use 'none', 'daily', 'weekly' or 'monthly'"
    raise ValueError(msg)


def recurrence_to_human(recurrence: Recurrence) -> str:
    """Describe a recurrence for display (e.g., "repeats every week")."""
    if recurrence == Recurrence.NONE:
        return "one-time"
    return {
        Recurrence.DAILY: "repeats every day",
        Recurrence.WEEKLY: "repeats every week",
        Recurrence.MONTHLY: "repeats every month",
    }[recurrence]


def next_occurrence(*, recurrence: Recurrence, from_date: date) -> date | None:
    """Return the day a task completed on ``from_date`` becomes due again.

    Monthly recurrence clamps to the last day of shorter months
    (Jan 31 -> Feb 28). Returns None for one-off tasks.
    """
    if recurrence == Recurrence.DAILY:
        return from_date + timedelta(days=1)
    if recurrence == Recurrence.WEEKLY:
        return from_date + timedelta(days=7)
    if recurrence == Recurrence.MONTHLY:
        return from_date + relativedelta(months=1)
    return None
