"""
In-memory Durable Store

Process-local storage. Data does not survive a restart; used for tests
and for deployments that opt out of persistence.
"""

from threading import Lock
from typing import Dict, Optional

from storage.store import DurableStore


class InMemoryDurableStore(DurableStore):
    """Dict-backed durable store. Thread-safe."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = Lock()
        self.write_count = 0

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self.write_count += 1
