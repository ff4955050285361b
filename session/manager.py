"""
Session Lifecycle Manager

Owns the current interaction snapshot for one runtime instance.

FLOW:
init() → load durable record → merge over defaults → READY
tracking call → recorder → new snapshot → persistence strategy
query → computed fresh from the current snapshot

GUARANTEES:
- Exactly one owner of the snapshot; consumers only ever get values
- Tracking calls apply in invocation order
- No exception crosses the public API; storage failures degrade to
  defaults (on load) or are dropped (on write)
"""

import logging
import time
from datetime import datetime
from enum import Enum
from threading import RLock
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from observability.stats import EngineStats
from personalization import insights, layout, ranker, recommender
from schemas.capability import Capability, HealthFocus
from schemas.insight import ActivityItem, CapabilityCard, Insight
from schemas.layout import DashboardLayout
from schemas.recommendation import Recommendation
from schemas.snapshot import InteractionSnapshot, utc_now
from session.codec import CorruptRecordError, hydrate, serialize
from session.persistence import ImmediatePersistence, PersistenceStrategy, WriteCallback
from storage.store import DurableStore
from tracking import recorder


logger = logging.getLogger(__name__)

PersistenceFactory = Callable[[WriteCallback], PersistenceStrategy]


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    HYDRATING = "hydrating"
    READY = "ready"
    CLOSED = "closed"


class SessionManager:
    """
    Entry point for consumers of the personalization engine.

    Create one per runtime instance, call init() (or use it as a context
    manager) and inject it wherever tracking or personalized views are
    needed.
    """

    DEFAULT_KEY = "medisync_interactions"

    def __init__(
        self,
        store: DurableStore,
        key: str = DEFAULT_KEY,
        persistence: Optional[PersistenceFactory] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the manager with injected dependencies.

        Args:
            store: Durable store holding the serialized snapshot
            key: The single storage slot this engine owns
            persistence: Builds the write scheduler from a write callback.
                Defaults to ImmediatePersistence.
            clock: Source of event timestamps
        """
        self._store = store
        self._key = key
        self._clock = clock
        self._lock = RLock()
        self._state = SessionState.UNINITIALIZED
        self._snapshot = InteractionSnapshot()
        self._started_at: Optional[float] = None
        self._stats = EngineStats()
        self._persistence = (persistence or ImmediatePersistence)(self._write_now)

    # ============================================================
    # LIFECYCLE
    # ============================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def stats(self) -> EngineStats:
        return self._stats

    def init(self) -> InteractionSnapshot:
        """
        Hydrate from the durable store and start the session.

        Runs once; later calls return the current snapshot. A missing,
        unreadable or corrupt record yields the default snapshot.
        """
        with self._lock:
            if self._state != SessionState.UNINITIALIZED:
                return self._snapshot

            self._state = SessionState.HYDRATING
            loaded = self._load()
            self._snapshot = recorder.start_session(loaded, now=self._clock())
            self._started_at = time.monotonic()
            self._state = SessionState.READY
            logger.info(
                f"Session {self._snapshot.session_count} ready "
                f"(key={self._key}, fallbacks={self._stats.hydration_fallbacks})"
            )

        self._persistence.notify()
        return self._snapshot

    def teardown(self) -> None:
        """Record time spent, write everything pending and close."""
        with self._lock:
            if self._state == SessionState.CLOSED:
                return
            if self._state == SessionState.READY and self._started_at is not None:
                elapsed = time.monotonic() - self._started_at
                self._snapshot = recorder.end_session(self._snapshot, elapsed)
                self._persistence.notify()
            self._state = SessionState.CLOSED

        self._persistence.close()
        logger.info(f"Session closed: {self._stats.to_dict()}")

    def flush(self) -> None:
        """Write any pending snapshot change now."""
        self._persistence.flush()

    def __enter__(self) -> "SessionManager":
        self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    # ============================================================
    # TRACKING
    # ============================================================

    def record_feature_usage(
        self,
        capability: Union[Capability, str],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> InteractionSnapshot:
        return self._apply(recorder.record_feature_usage, capability, metadata, now=self._clock())

    def record_search(
        self,
        query: str,
        search_type: str = "general",
        result_count: Any = 0,
    ) -> InteractionSnapshot:
        return self._apply(recorder.record_search, query, search_type, result_count, now=self._clock())

    def record_condition_viewed(self, name: str, action: str = "view") -> InteractionSnapshot:
        return self._apply(recorder.record_condition_viewed, name, action, now=self._clock())

    def record_symptoms(self, symptoms: Union[str, Iterable[str]]) -> InteractionSnapshot:
        return self._apply(recorder.record_symptoms, symptoms, now=self._clock())

    def set_health_focus(self, focus: Union[HealthFocus, str]) -> InteractionSnapshot:
        return self._apply(recorder.set_health_focus, focus)

    def add_favorite(self, item: str, item_type: str) -> InteractionSnapshot:
        return self._apply(recorder.add_favorite, item, item_type, now=self._clock())

    def clear_recent_searches(self) -> InteractionSnapshot:
        return self._apply(recorder.clear_recent_searches)

    def complete_onboarding(self) -> InteractionSnapshot:
        """Called by the onboarding flow; the engine never calls it itself."""
        return self._apply(recorder.complete_onboarding)

    # ============================================================
    # QUERIES
    # ============================================================

    def get_snapshot(self) -> InteractionSnapshot:
        """The current snapshot. Immutable; re-read after tracking calls."""
        self._ensure_initialized()
        return self._snapshot

    def rank(self) -> List[str]:
        """Preferred capabilities; the built-in default until any usage exists."""
        return ranker.derive_preferred(self.get_snapshot().feature_usage_counts)

    def recommend(self) -> List[Recommendation]:
        return recommender.recommend(self.get_snapshot())

    def plan_layout(self) -> DashboardLayout:
        return layout.plan_layout(self.get_snapshot())

    def health_insights(self) -> List[Insight]:
        return insights.health_insights(self.get_snapshot())

    def recent_activity(self, limit: int = 4) -> List[ActivityItem]:
        return insights.recent_activity(self.get_snapshot(), limit=limit)

    def unexplored_capabilities(self, limit: int = 3) -> List[CapabilityCard]:
        return insights.unexplored_capabilities(self.get_snapshot(), limit=limit)

    def top_actions(self, limit: int = 4) -> List[CapabilityCard]:
        return insights.top_actions(self.get_snapshot(), limit=limit)

    # ============================================================
    # INTERNALS
    # ============================================================

    def _ensure_initialized(self) -> None:
        if self._state == SessionState.UNINITIALIZED:
            self.init()

    def _apply(self, transition: Callable[..., InteractionSnapshot], *args, **kwargs) -> InteractionSnapshot:
        """Run a recorder transition against the current snapshot."""
        self._ensure_initialized()

        with self._lock:
            if self._state == SessionState.CLOSED:
                logger.warning(f"Ignoring {transition.__name__} on a closed session")
                return self._snapshot

            previous = self._snapshot
            try:
                self._snapshot = transition(previous, *args, **kwargs)
            except Exception as e:
                logger.error(f"{transition.__name__} failed, snapshot unchanged: {e}")
                return previous
            changed = self._snapshot is not previous
            current = self._snapshot

        if changed:
            self._persistence.notify()
        return current

    def _load(self) -> InteractionSnapshot:
        """Read and hydrate the durable record, falling back to defaults."""
        self._stats.hydrations += 1
        try:
            raw = self._store.get(self._key)
        except Exception as e:
            logger.warning(f"Durable store read failed, using defaults: {e}")
            self._stats.hydration_fallbacks += 1
            return InteractionSnapshot()

        if raw is None:
            logger.debug(f"No interaction record under {self._key}, using defaults")
            return InteractionSnapshot()

        try:
            return hydrate(raw)
        except CorruptRecordError as e:
            logger.warning(f"Corrupt interaction record, using defaults: {e}")
            self._stats.hydration_fallbacks += 1
            return InteractionSnapshot()

    def _write_now(self) -> None:
        """
        Persist the whole current snapshot.

        Never throws - failures are logged and dropped; the in-memory
        snapshot stays authoritative.
        """
        with self._lock:
            try:
                self._store.set(self._key, serialize(self._snapshot))
                self._stats.writes += 1
            except Exception as e:
                self._stats.write_failures += 1
                logger.warning(f"Failed to persist interaction snapshot: {e}")
