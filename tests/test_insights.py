"""
Dashboard Insights Tests
"""

from personalization.insights import (
    health_insights,
    recent_activity,
    top_actions,
    unexplored_capabilities,
)
from schemas.insight import ActivityType, InsightType
from tracking import recorder


def test_no_insights_without_history(snapshot):
    assert health_insights(snapshot) == []


def test_most_frequent_symptom_and_last_condition(snapshot):
    snapshot = recorder.record_symptoms(snapshot, ["cough", "fever"])
    snapshot = recorder.record_symptoms(snapshot, "cough")
    snapshot = recorder.record_condition_viewed(snapshot, "Asthma")
    snapshot = recorder.record_condition_viewed(snapshot, "Bronchitis")

    insights = health_insights(snapshot)

    assert [i.type for i in insights] == [InsightType.SYMPTOM, InsightType.CONDITION]
    assert insights[0].description == 'You\'ve searched for "cough" 2 times'
    assert insights[1].description == "Last viewed: Bronchitis"


def test_symptom_tie_prefers_most_recent_mention(snapshot):
    snapshot = recorder.record_symptoms(snapshot, "headache")
    snapshot = recorder.record_symptoms(snapshot, "nausea")

    assert '"nausea"' in health_insights(snapshot)[0].description


def test_recent_activity_merges_sources_newest_first(snapshot, clock):
    snapshot = recorder.record_search(snapshot, "fever", now=clock())
    snapshot = recorder.record_condition_viewed(snapshot, "Influenza", now=clock.advance(10))
    snapshot = recorder.record_feature_usage(snapshot, "hospitalLocator", now=clock.advance(10))
    snapshot = recorder.record_search(snapshot, "cough", now=clock.advance(10))
    snapshot = recorder.record_search(snapshot, "rash", now=clock.advance(10))

    activity = recent_activity(snapshot)

    assert len(activity) == 4
    assert [a.title for a in activity] == [
        'Searched for "rash"',
        'Searched for "cough"',
        "Used Find Hospitals",
        "Viewed Influenza",
    ]
    assert activity[0].type == ActivityType.SEARCH
    # "fever" is the third search, beyond the per-source allowance
    assert all("fever" not in a.title for a in recent_activity(snapshot, limit=10))


def test_unexplored_capabilities_skip_used_ones(snapshot):
    initial = [card.capability for card in unexplored_capabilities(snapshot)]
    assert initial == ["diseaseSearch", "consultations", "healthRecords"]

    snapshot = recorder.record_search(snapshot, "fever")
    snapshot = recorder.record_feature_usage(snapshot, "healthRecords")

    remaining = [card.capability for card in unexplored_capabilities(snapshot)]
    assert remaining == ["consultations", "riskAssessment", "hospitalLocator"]


def test_top_actions_by_usage_with_catalog_tie_break(snapshot):
    snapshot = recorder.record_feature_usage(snapshot, "equipmentReadings")
    snapshot = recorder.record_feature_usage(snapshot, "equipmentReadings")
    snapshot = recorder.record_feature_usage(snapshot, "riskAssessment")

    actions = top_actions(snapshot)

    assert [a.capability for a in actions] == [
        "equipmentReadings",
        "riskAssessment",
        "diseaseSearch",
        "consultations",
    ]
    assert actions[0].usage == 2
    assert actions[0].route == "/equipment"
