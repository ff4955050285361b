"""
Event Recorder

Pure state transitions: (snapshot, event) -> new snapshot.

DESIGN RULES:
- Never mutate the input snapshot
- Never raise; odd inputs degrade to safe defaults
- Every collection is re-capped on write
- preferred_features is re-derived whenever usage counters change
"""

import logging
from collections.abc import Sized
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic_core import to_jsonable_python

from personalization.ranker import derive_preferred
from schemas.capability import Capability, HealthFocus, normalize_capability, parse_health_focus
from schemas.snapshot import (
    MAX_DISCOVERY_LOG,
    MAX_FAVORITES,
    MAX_RECENT_CONDITIONS,
    MAX_RECENT_SEARCHES,
    MAX_RECENT_SYMPTOMS,
    ConditionView,
    FavoriteItem,
    FeatureDiscovery,
    InteractionSnapshot,
    SearchEntry,
    SymptomEntry,
    utc_now,
)


logger = logging.getLogger(__name__)


# ============================================================
# FEATURE USAGE
# ============================================================

def record_feature_usage(
    snapshot: InteractionSnapshot,
    capability: Union[Capability, str],
    metadata: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> InteractionSnapshot:
    """
    Count one use of a capability.

    The discovery log keeps a single entry per capability, moved to the
    front on re-use. Unknown capability ids leave the snapshot unchanged.
    """
    capability_id = normalize_capability(capability)
    if capability_id is None:
        logger.debug(f"Ignoring usage of unknown capability: {capability!r}")
        return snapshot

    entry = FeatureDiscovery(
        capability=capability_id,
        timestamp=now or utc_now(),
        metadata=_metadata(metadata),
    )
    discovery = [entry] + [
        d for d in _as_list(snapshot.feature_discovery_log) if d.capability != capability_id
    ]

    counts = _increment(snapshot.feature_usage_counts, capability_id)
    return snapshot.model_copy(update={
        "feature_usage_counts": counts,
        "feature_discovery_log": discovery[:MAX_DISCOVERY_LOG],
        "preferred_features": derive_preferred(counts),
    })


# ============================================================
# SEARCHES
# ============================================================

def record_search(
    snapshot: InteractionSnapshot,
    query: str,
    search_type: str = "general",
    result_count: Union[int, Sized, None] = 0,
    now: Optional[datetime] = None,
) -> InteractionSnapshot:
    """
    Record a search and count it as disease search usage.

    Re-searching a query moves it to the front. result_count may be a
    number or the result collection itself.
    """
    query = _clean(query)
    if not query:
        logger.debug("Ignoring empty search query")
        return snapshot

    entry = SearchEntry(
        query=query,
        search_type=_clean(search_type) or "general",
        timestamp=now or utc_now(),
        result_count=_result_count(result_count),
    )
    searches = [entry] + [s for s in _as_list(snapshot.recent_searches) if s.query != query]

    counts = _increment(snapshot.feature_usage_counts, Capability.DISEASE_SEARCH.value)
    return snapshot.model_copy(update={
        "recent_searches": searches[:MAX_RECENT_SEARCHES],
        "feature_usage_counts": counts,
        "preferred_features": derive_preferred(counts),
    })


def clear_recent_searches(snapshot: InteractionSnapshot) -> InteractionSnapshot:
    """Forget search history. Usage counters are kept."""
    return snapshot.model_copy(update={"recent_searches": []})


# ============================================================
# CONDITIONS & SYMPTOMS
# ============================================================

def record_condition_viewed(
    snapshot: InteractionSnapshot,
    name: str,
    action: str = "view",
    now: Optional[datetime] = None,
) -> InteractionSnapshot:
    """Record a condition interaction, one entry per condition name."""
    name = _clean(name)
    if not name:
        logger.debug("Ignoring condition view without a name")
        return snapshot

    entry = ConditionView(name=name, action=_clean(action) or "view", timestamp=now or utc_now())
    viewed = [entry] + [c for c in _as_list(snapshot.recent_conditions_viewed) if c.name != name]
    return snapshot.model_copy(update={"recent_conditions_viewed": viewed[:MAX_RECENT_CONDITIONS]})


def record_symptoms(
    snapshot: InteractionSnapshot,
    symptoms: Union[str, Iterable[str]],
    now: Optional[datetime] = None,
) -> InteractionSnapshot:
    """
    Record reported symptoms.

    Accepts one name or a list. The batch keeps its order and goes ahead
    of older history. Repeats are kept so frequency can be measured.
    """
    if isinstance(symptoms, str):
        names = [symptoms]
    elif isinstance(symptoms, Iterable):
        names = list(symptoms)
    else:
        names = []

    timestamp = now or utc_now()
    batch = [SymptomEntry(name=name, timestamp=timestamp) for name in map(_clean, names) if name]
    if not batch:
        return snapshot

    history = batch + _as_list(snapshot.recent_symptoms)
    return snapshot.model_copy(update={"recent_symptoms": history[:MAX_RECENT_SYMPTOMS]})


# ============================================================
# PREFERENCES
# ============================================================

def set_health_focus(
    snapshot: InteractionSnapshot,
    focus: Union[HealthFocus, str],
) -> InteractionSnapshot:
    """Change the health focus. Unknown values are ignored."""
    parsed = parse_health_focus(focus)
    if parsed is None:
        logger.debug(f"Ignoring invalid health focus: {focus!r}")
        return snapshot
    return snapshot.model_copy(update={"health_focus": parsed})


def add_favorite(
    snapshot: InteractionSnapshot,
    item: str,
    item_type: str,
    now: Optional[datetime] = None,
) -> InteractionSnapshot:
    """Bookmark an item; the same (item, type) pair is kept once."""
    item = _clean(item)
    if not item:
        logger.debug("Ignoring favorite without an item")
        return snapshot
    item_type = _clean(item_type) or "general"

    entry = FavoriteItem(item=item, item_type=item_type, timestamp=now or utc_now())
    favorites = [entry] + [
        f for f in _as_list(snapshot.favorite_items)
        if not (f.item == item and f.item_type == item_type)
    ]
    return snapshot.model_copy(update={"favorite_items": favorites[:MAX_FAVORITES]})


def complete_onboarding(snapshot: InteractionSnapshot) -> InteractionSnapshot:
    """Mark onboarding as done. Called by the onboarding flow only."""
    if snapshot.onboarding_complete:
        return snapshot
    return snapshot.model_copy(update={"onboarding_complete": True})


# ============================================================
# SESSION ANALYTICS
# ============================================================

def start_session(snapshot: InteractionSnapshot, now: Optional[datetime] = None) -> InteractionSnapshot:
    """Count a new session and stamp the visit."""
    return snapshot.model_copy(update={
        "session_count": snapshot.session_count + 1,
        "last_visit": now or utc_now(),
    })


def end_session(snapshot: InteractionSnapshot, elapsed_seconds: float) -> InteractionSnapshot:
    """Add the session duration to the time spent."""
    if elapsed_seconds <= 0:
        return snapshot
    return snapshot.model_copy(update={
        "total_time_spent": snapshot.total_time_spent + elapsed_seconds,
    })


# ============================================================
# HELPERS
# ============================================================

def _increment(counts: Dict[str, int], capability: str) -> Dict[str, int]:
    updated = dict(counts) if isinstance(counts, dict) else {}
    current = updated.get(capability, 0)
    if isinstance(current, bool) or not isinstance(current, int) or current < 0:
        current = 0
    updated[capability] = current + 1
    return updated


def _metadata(value: Any) -> Dict[str, Any]:
    """JSON-native copy of usage metadata; unknown objects become strings."""
    if not isinstance(value, dict):
        return {}
    try:
        return to_jsonable_python(value, fallback=str)
    except (TypeError, ValueError) as e:
        # e.g. circular references
        logger.debug(f"Dropping unserializable usage metadata: {e}")
        return {}


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _clean(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _result_count(value: Union[int, Sized, None]) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, Sized) and not isinstance(value, str):
        return len(value)
    return 0
