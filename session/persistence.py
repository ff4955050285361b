"""
Persistence Strategies

Decide WHEN the current snapshot is written; the manager decides WHAT.

DESIGN RULES:
- The write callback always serializes the latest full snapshot
- Batching may delay a write, never change its final content
- flush() leaves nothing pending
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional


logger = logging.getLogger(__name__)

WriteCallback = Callable[[], None]


class PersistenceStrategy(ABC):
    """
    Abstract base for write scheduling.

    Implementations:
    - ImmediatePersistence (one write per mutation)
    - DebouncedPersistence (one write per time window)
    """

    def __init__(self, write: WriteCallback):
        """
        Args:
            write: Callback persisting the current snapshot. Must not raise.
        """
        self._write = write

    @abstractmethod
    def notify(self) -> None:
        """Signal that the snapshot changed."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Write any pending change now."""
        pass

    def close(self) -> None:
        """Flush and release resources."""
        self.flush()


class ImmediatePersistence(PersistenceStrategy):
    """Writes synchronously after every mutation."""

    def notify(self) -> None:
        self._write()

    def flush(self) -> None:
        # Nothing is ever pending
        return None


class DebouncedPersistence(PersistenceStrategy):
    """
    Coalesces mutations into one write per window.

    The window opens on the first change after a write; changes made
    while it is open ride along with that write.
    """

    DEFAULT_WINDOW_SECONDS = 0.5

    def __init__(self, write: WriteCallback, window_seconds: float = DEFAULT_WINDOW_SECONDS):
        super().__init__(write)
        self._window_seconds = max(0.0, window_seconds)
        self._timer: Optional[threading.Timer] = None
        self._dirty = False
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        """True when a change has not been written yet."""
        with self._lock:
            return self._dirty

    def notify(self) -> None:
        with self._lock:
            self._dirty = True
            if self._timer is not None:
                return
            self._timer = threading.Timer(self._window_seconds, self._on_timer)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            dirty = self._dirty
            self._dirty = False
        if dirty:
            self._write()

    def _on_timer(self) -> None:
        with self._lock:
            self._timer = None
            dirty = self._dirty
            self._dirty = False
        if dirty:
            logger.debug("Debounce window elapsed, writing snapshot")
            self._write()
