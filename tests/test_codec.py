"""
Snapshot Codec Tests

Verifies:
- serialize/hydrate round trip (timestamps compare as instants)
- Per-field fallback for partially shaped records
- Corrupt payload detection
- Upgrade of records written by the legacy web client
"""

import json
from datetime import datetime, timezone

import pytest

from schemas.capability import DEFAULT_PREFERRED, HealthFocus
from schemas.snapshot import MAX_RECENT_SEARCHES, InteractionSnapshot
from session.codec import CorruptRecordError, hydrate, merge_with_defaults, serialize
from tracking import recorder


def build_populated(clock) -> InteractionSnapshot:
    snapshot = InteractionSnapshot()
    snapshot = recorder.start_session(snapshot, now=clock())
    snapshot = recorder.record_search(snapshot, "fever", "quick", 5, now=clock.advance())
    snapshot = recorder.record_feature_usage(snapshot, "healthRecords", {"source": "direct"}, now=clock.advance())
    snapshot = recorder.record_condition_viewed(snapshot, "Diabetes", "bookmark", now=clock.advance())
    snapshot = recorder.record_symptoms(snapshot, ["cough", "cough"], now=clock.advance())
    snapshot = recorder.add_favorite(snapshot, "Asthma", "disease", now=clock.advance())
    snapshot = recorder.set_health_focus(snapshot, "chronic")
    snapshot = recorder.complete_onboarding(snapshot)
    return recorder.end_session(snapshot, 42.25)


# --- Round trip ---

def test_round_trip_default_snapshot():
    snapshot = InteractionSnapshot()
    assert hydrate(serialize(snapshot)) == snapshot


def test_round_trip_populated_snapshot(clock):
    snapshot = build_populated(clock)
    restored = hydrate(serialize(snapshot))

    assert restored == snapshot
    assert restored.recent_searches[0].timestamp == snapshot.recent_searches[0].timestamp
    assert restored.recent_searches[0].timestamp.tzinfo is not None


def test_round_trip_non_utc_timestamps_compare_as_instants(snapshot):
    from datetime import timedelta

    tokyo = timezone(timedelta(hours=9))
    local = datetime(2026, 1, 27, 18, 0, tzinfo=tokyo)
    snapshot = recorder.record_condition_viewed(snapshot, "Gout", now=local)

    restored = hydrate(serialize(snapshot))
    assert restored.recent_conditions_viewed[0].timestamp == local


def test_serialized_form_is_camel_case_with_iso_timestamps(clock):
    payload = json.loads(serialize(build_populated(clock)))

    assert "featureUsageCounts" in payload
    assert "recentConditionsViewed" in payload
    assert payload["recentSearches"][0]["type"] == "quick"
    assert payload["recentSearches"][0]["resultCount"] == 5
    assert payload["favoriteItems"][0]["type"] == "disease"
    assert payload["healthFocus"] == "chronic"
    # ISO-8601, parses back to the same instant
    parsed = datetime.fromisoformat(payload["recentSearches"][0]["timestamp"].replace("Z", "+00:00"))
    assert parsed == datetime(2026, 1, 27, 9, 0, 1, tzinfo=timezone.utc)


# --- Corrupt records ---

@pytest.mark.parametrize("raw", ["not json", "{", "[1, 2, 3]", "42", "null", '"text"'])
def test_corrupt_records_raise(raw):
    with pytest.raises(CorruptRecordError):
        hydrate(raw)


def test_deeply_nested_record_is_corrupt():
    with pytest.raises(CorruptRecordError):
        hydrate("[" * 200000)


# --- Partial records ---

def test_empty_object_yields_defaults():
    snapshot = hydrate("{}")
    assert snapshot.preferred_features == DEFAULT_PREFERRED
    assert snapshot.recent_searches == []
    assert snapshot.health_focus == HealthFocus.GENERAL


def test_partial_record_defaults_per_field():
    snapshot = merge_with_defaults({
        "featureUsageCounts": {"consultations": 3, "healthNews": -2, "unknown": 5, "prescriptions": "9"},
        "recentSearches": "oops",
        "recentConditionsViewed": [{"name": "Asthma", "action": "view", "timestamp": "2026-01-27T09:00:00Z"}],
        "healthFocus": "holistic",
        "onboardingComplete": "yes",
        "sessionCount": -1,
        "totalTimeSpent": "a while",
        "lastVisit": "yesterday",
    })

    assert snapshot.usage("consultations") == 3
    assert snapshot.usage("healthNews") == 0
    assert snapshot.usage("prescriptions") == 0
    assert "unknown" not in snapshot.feature_usage_counts
    assert snapshot.recent_searches == []
    assert snapshot.recent_conditions_viewed[0].name == "Asthma"
    assert snapshot.health_focus == HealthFocus.GENERAL
    assert snapshot.onboarding_complete is False
    assert snapshot.session_count == 0
    assert snapshot.total_time_spent == 0.0
    assert snapshot.last_visit.tzinfo is not None


def test_persisted_preferences_are_recomputed():
    snapshot = merge_with_defaults({
        "featureUsageCounts": {"healthNews": 4},
        "preferredFeatures": ["prescriptions", "communityForum"],
    })
    assert snapshot.preferred_features[0] == "healthNews"
    assert "communityForum" not in snapshot.preferred_features


def test_malformed_entries_are_dropped_and_caps_reapplied():
    searches = [{"query": f"q{i}", "type": "general", "timestamp": "2026-01-27T09:00:00Z"} for i in range(30)]
    searches.insert(1, {"nope": True})
    searches.insert(2, "just a string")
    searches.insert(3, {"query": "q0", "type": "duplicate"})

    snapshot = merge_with_defaults({"recentSearches": searches})

    queries = [s.query for s in snapshot.recent_searches]
    assert len(queries) == MAX_RECENT_SEARCHES
    assert queries[:2] == ["q0", "q1"]
    assert snapshot.recent_searches[0].search_type == "general"


def test_discovery_entries_for_unknown_capabilities_are_dropped():
    snapshot = merge_with_defaults({
        "featureDiscoveryLog": [
            {"capability": "teleportation", "timestamp": "2026-01-27T09:00:00Z"},
            {"capability": "healthNews", "timestamp": "2026-01-27T09:00:00Z"},
        ],
    })
    assert [d.capability for d in snapshot.feature_discovery_log] == ["healthNews"]


# --- Legacy records ---

def test_legacy_client_record_is_upgraded():
    legacy = {
        "diseaseSearch": 4,
        "consultations": 1,
        "healthNews": 2,
        "recentSearches": [
            {"query": "fever", "type": "quick", "timestamp": "2025-06-01T10:00:00.000Z", "resultCount": 3},
        ],
        "recentDiseases": [
            {"name": "Malaria", "action": "view", "timestamp": "2025-06-01T10:05:00.000Z"},
        ],
        "recentSymptoms": [{"name": "chills", "timestamp": "2025-06-01T10:06:00.000Z"}],
        "favoriteFeatures": [
            {"item": "Dengue", "type": "disease", "timestamp": "2025-05-01T10:00:00.000Z"},
            {"item": "Malaria", "type": "disease", "timestamp": "2025-06-01T10:00:00.000Z"},
        ],
        "featureDiscovery": [
            {"feature": "healthNews", "timestamp": "2025-05-01T10:00:00.000Z", "metadata": {}},
            {"feature": "consultations", "timestamp": "2025-06-01T10:00:00.000Z", "metadata": {"source": "direct"}},
        ],
        "preferredFeatures": ["healthRecords"],
        "healthFocus": "acute",
        "engagementLevel": "moderate",
        "lastVisit": "2025-06-01T10:10:00.000Z",
        "sessionCount": 0,
        "onboardingComplete": True,
    }

    snapshot = hydrate(json.dumps(legacy))

    assert snapshot.usage("diseaseSearch") == 4
    assert snapshot.usage("healthNews") == 2
    assert snapshot.preferred_features[:3] == ["diseaseSearch", "healthNews", "consultations"]
    assert snapshot.recent_searches[0].result_count == 3
    assert snapshot.recent_conditions_viewed[0].name == "Malaria"
    assert [f.item for f in snapshot.favorite_items] == ["Malaria", "Dengue"]
    assert [d.capability for d in snapshot.feature_discovery_log] == ["consultations", "healthNews"]
    assert snapshot.feature_discovery_log[0].metadata == {"source": "direct"}
    assert snapshot.health_focus == HealthFocus.ACUTE
    assert snapshot.onboarding_complete is True
    assert snapshot.last_visit == datetime(2025, 6, 1, 10, 10, tzinfo=timezone.utc)
