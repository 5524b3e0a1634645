"""Pytest configuration and fixtures for unit tests."""

from datetime import date, datetime

import pytest

from src.core.kv_store import InMemoryStore
from src.domain.task import Category, Priority, Recurrence, Task
from src.services import session_service
from tests.unit.mocks import FrozenClock


# Tuesday, a day well clear of month boundaries
FROZEN_MOMENT = datetime(2026, 3, 10, 9, 30)


@pytest.fixture
def frozen_clock(monkeypatch):
    """Pins src.core.clock to FROZEN_MOMENT; tests may advance it."""
    fake = FrozenClock(FROZEN_MOMENT)
    monkeypatch.setattr("src.core.clock.now", fake.now)
    return fake


@pytest.fixture
def today(frozen_clock) -> date:
    """The pinned calendar day."""
    return frozen_clock.today


@pytest.fixture
def in_memory_store():
    """Provides a fresh InMemoryStore for each test."""
    return InMemoryStore()


@pytest.fixture
def session(frozen_clock):
    """Empty session for a test account."""
    return session_service.new_session(account_id="player@example.com")


@pytest.fixture
def make_task():
    """Factory for task records with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> Task:
        counter["n"] += 1
        data = {
            "id": f"task-{counter['n']}",
            "text": f"Task {counter['n']}",
            "priority": Priority.LOW,
            "category": Category.OTHER,
            "recurrence": Recurrence.NONE,
            "created_at": 1_700_000_000_000 + counter["n"],
        }
        data.update(overrides)
        return Task(**data)

    return _make
