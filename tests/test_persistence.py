"""
Persistence Strategy Tests

Verifies:
- Immediate mode writes on every change
- Debounced mode coalesces changes and never loses the final state
- flush()/close() leave nothing pending
"""

import threading

from session import codec
from session.manager import SessionManager
from session.persistence import DebouncedPersistence, ImmediatePersistence


class CountingWriter:
    def __init__(self):
        self.calls = 0
        self.written = threading.Event()

    def __call__(self):
        self.calls += 1
        self.written.set()


def test_immediate_writes_every_notify():
    writer = CountingWriter()
    strategy = ImmediatePersistence(writer)

    strategy.notify()
    strategy.notify()
    strategy.flush()

    assert writer.calls == 2


def test_debounced_coalesces_until_flush():
    writer = CountingWriter()
    strategy = DebouncedPersistence(writer, window_seconds=60)

    for _ in range(5):
        strategy.notify()

    assert writer.calls == 0
    assert strategy.pending is True

    strategy.flush()

    assert writer.calls == 1
    assert strategy.pending is False


def test_debounced_flush_without_changes_is_noop():
    writer = CountingWriter()
    strategy = DebouncedPersistence(writer, window_seconds=60)

    strategy.flush()

    assert writer.calls == 0


def test_debounced_window_elapses():
    writer = CountingWriter()
    strategy = DebouncedPersistence(writer, window_seconds=0.01)

    strategy.notify()
    strategy.notify()

    assert writer.written.wait(timeout=5)
    assert writer.calls == 1
    assert strategy.pending is False


def test_close_flushes_pending_change():
    writer = CountingWriter()
    strategy = DebouncedPersistence(writer, window_seconds=60)

    strategy.notify()
    strategy.close()

    assert writer.calls == 1


def test_debounced_manager_persists_final_state(store, clock):
    manager = SessionManager(
        store=store,
        clock=clock,
        persistence=lambda write: DebouncedPersistence(write, window_seconds=60),
    )
    manager.init()
    for i in range(10):
        manager.record_search(f"query-{i}")

    assert store.write_count == 0

    manager.flush()

    assert store.write_count == 1
    persisted = codec.hydrate(store.get(SessionManager.DEFAULT_KEY))
    assert persisted == manager.get_snapshot()

    manager.teardown()
    persisted = codec.hydrate(store.get(SessionManager.DEFAULT_KEY))
    assert persisted == manager.get_snapshot()
