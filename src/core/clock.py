"""Current date and timestamp helpers.

Engines take ``today``/``now`` as arguments; only the session service reads
the clock, so tests patch these two functions to pin a day.
"""

from datetime import date, datetime, timedelta


def now() -> datetime:
    """Return the current local time."""
    return datetime.now()


def today() -> date:
    """Return the current local calendar date."""
    return now().date()


def yesterday(of: date) -> date:
    """Return the calendar day before ``of``."""
    return of - timedelta(days=1)


def to_timestamp(moment: datetime) -> int:
    """Convert a datetime to epoch milliseconds, the unit stored on records."""
    return int(moment.timestamp() * 1000)
