from datetime import datetime, timedelta, timezone

import pytest

from schemas.snapshot import InteractionSnapshot
from session.manager import SessionManager
from storage.memory_store import InMemoryDurableStore


class FakeClock:
    """Deterministic clock; each call returns the current fake time."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 27, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def snapshot():
    return InteractionSnapshot()


@pytest.fixture
def store():
    return InMemoryDurableStore()


@pytest.fixture
def manager(store, clock):
    manager = SessionManager(store=store, clock=clock)
    manager.init()
    yield manager
    manager.teardown()
