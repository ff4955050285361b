"""
Snapshot Codec

Serializes snapshots for the durable store and rebuilds them on load.

DESIGN RULES:
- Always the whole snapshot, never a diff
- Hydration merges field by field over defaults; one bad field never
  discards the rest of the record
- Derived fields (preferred_features) are recomputed, not trusted
"""

import json
import logging
from typing import Any, Callable, Dict, Hashable, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from personalization.ranker import derive_preferred
from schemas.capability import CANONICAL_CAPABILITIES, normalize_capability, parse_health_focus
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
    UtcDatetime,
    default_usage_counts,
)


logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=BaseModel)

_timestamp_adapter = TypeAdapter(UtcDatetime)


class CorruptRecordError(ValueError):
    """The durable record is not a JSON object."""


# ============================================================
# SERIALIZE
# ============================================================

def serialize(snapshot: InteractionSnapshot) -> str:
    """Encode a snapshot as camelCase JSON with ISO-8601 timestamps."""
    return snapshot.model_dump_json(by_alias=True)


# ============================================================
# HYDRATE
# ============================================================

def hydrate(raw: str) -> InteractionSnapshot:
    """
    Rebuild a snapshot from its serialized form.

    Args:
        raw: Text previously produced by serialize(), or by the legacy client

    Returns:
        A snapshot with every unusable field replaced by its default

    Raises:
        CorruptRecordError: raw is not valid JSON, nests too deeply to decode,
            or is not a JSON object
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise CorruptRecordError(f"Unparseable interaction record: {e}") from e

    if not isinstance(payload, dict):
        raise CorruptRecordError(
            f"Interaction record must be an object, got {type(payload).__name__}"
        )

    return merge_with_defaults(upgrade_legacy(payload))


def merge_with_defaults(payload: Dict[str, Any]) -> InteractionSnapshot:
    """
    Overlay a decoded record on a default snapshot.

    Missing or malformed fields keep their default value. Collections are
    de-duplicated and re-capped, counters clamped to non-negative.
    """
    defaults = InteractionSnapshot()
    counts = _usage_counts(payload.get("featureUsageCounts"))

    focus = parse_health_focus(payload.get("healthFocus"))
    onboarding = payload.get("onboardingComplete")
    session_count = payload.get("sessionCount")
    time_spent = payload.get("totalTimeSpent")

    return InteractionSnapshot(
        feature_usage_counts=counts,
        recent_searches=_entries(
            payload.get("recentSearches"), SearchEntry, MAX_RECENT_SEARCHES,
            key=lambda e: e.query,
        ),
        recent_conditions_viewed=_entries(
            payload.get("recentConditionsViewed"), ConditionView, MAX_RECENT_CONDITIONS,
            key=lambda e: e.name,
        ),
        recent_symptoms=_entries(
            payload.get("recentSymptoms"), SymptomEntry, MAX_RECENT_SYMPTOMS,
        ),
        feature_discovery_log=[
            e for e in _entries(
                payload.get("featureDiscoveryLog"), FeatureDiscovery, MAX_DISCOVERY_LOG,
                key=lambda e: e.capability,
            )
            if normalize_capability(e.capability) is not None
        ],
        preferred_features=derive_preferred(counts),
        favorite_items=_entries(
            payload.get("favoriteItems"), FavoriteItem, MAX_FAVORITES,
            key=lambda e: (e.item, e.item_type),
        ),
        health_focus=focus if focus is not None else defaults.health_focus,
        onboarding_complete=onboarding if isinstance(onboarding, bool) else defaults.onboarding_complete,
        last_visit=_timestamp(payload.get("lastVisit")) or defaults.last_visit,
        session_count=session_count if _is_count(session_count) else defaults.session_count,
        total_time_spent=(
            float(time_spent)
            if _is_number(time_spent) and time_spent >= 0
            else defaults.total_time_spent
        ),
    )


# ============================================================
# LEGACY RECORDS
# ============================================================

def upgrade_legacy(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate records written by the legacy web client.

    That client kept counters at the top level, used different names for
    some collections and stored the discovery log and favorites oldest
    first. Current-format records pass through untouched.
    """
    if "featureUsageCounts" in payload:
        return payload

    upgraded = dict(payload)
    upgraded["featureUsageCounts"] = {
        capability: payload[capability]
        for capability in CANONICAL_CAPABILITIES
        if capability in payload
    }

    if "recentConditionsViewed" not in payload and "recentDiseases" in payload:
        upgraded["recentConditionsViewed"] = payload["recentDiseases"]

    if "favoriteItems" not in payload and isinstance(payload.get("favoriteFeatures"), list):
        upgraded["favoriteItems"] = list(reversed(payload["favoriteFeatures"]))

    if "featureDiscoveryLog" not in payload and isinstance(payload.get("featureDiscovery"), list):
        upgraded["featureDiscoveryLog"] = [
            {**entry, "capability": entry.get("feature")} if isinstance(entry, dict) else entry
            for entry in reversed(payload["featureDiscovery"])
        ]

    logger.info("Upgraded legacy interaction record")
    return upgraded


# ============================================================
# HELPERS
# ============================================================

def _usage_counts(raw: Any) -> Dict[str, int]:
    counts = default_usage_counts()
    if not isinstance(raw, dict):
        return counts
    for capability in CANONICAL_CAPABILITIES:
        value = raw.get(capability)
        if _is_number(value) and float(value).is_integer():
            counts[capability] = max(int(value), 0)
    return counts


def _entries(
    raw: Any,
    model: Type[EntryT],
    limit: int,
    key: Optional[Callable[[EntryT], Hashable]] = None,
) -> List[EntryT]:
    if not isinstance(raw, list):
        return []

    entries: List[EntryT] = []
    seen = set()
    for item in raw:
        try:
            entry = model.model_validate(item)
        except ValidationError:
            logger.debug(f"Dropping malformed {model.__name__} entry")
            continue
        if key is not None:
            # Newest first, so the first occurrence is the one to keep
            entry_key = key(entry)
            if entry_key in seen:
                continue
            seen.add(entry_key)
        entries.append(entry)
        if len(entries) >= limit:
            break
    return entries


def _timestamp(raw: Any):
    if raw is None:
        return None
    try:
        return _timestamp_adapter.validate_python(raw)
    except ValidationError:
        return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
