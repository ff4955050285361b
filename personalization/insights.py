"""
Dashboard Insights

Read-only views over a snapshot used by the dashboard widgets:
symptom and condition insights, the recent activity feed, feature
discovery and usage-ordered shortcuts.

DESIGN RULES:
- Pure functions of the snapshot and the capability catalog
- Sorting is stable so equal keys keep source order
"""

from collections import Counter
from typing import List

from personalization.catalog import CAPABILITY_INFO, DISCOVERABLE, QUICK_ACTIONS
from schemas.insight import ActivityItem, ActivityType, CapabilityCard, Insight, InsightType
from schemas.snapshot import InteractionSnapshot


ACTIVITY_PER_SOURCE = 2


def health_insights(snapshot: InteractionSnapshot) -> List[Insight]:
    """
    Summarize recent health research.

    The most mentioned symptom wins; on a tie, the one mentioned most
    recently comes first.
    """
    insights: List[Insight] = []

    if snapshot.recent_symptoms:
        counts = Counter(symptom.name for symptom in snapshot.recent_symptoms)
        name, times = counts.most_common(1)[0]
        insights.append(Insight(
            type=InsightType.SYMPTOM,
            title="Most Searched Symptom",
            description=f'You\'ve searched for "{name}" {times} times',
        ))

    if snapshot.recent_conditions_viewed:
        insights.append(Insight(
            type=InsightType.CONDITION,
            title="Recent Health Research",
            description=f"Last viewed: {snapshot.recent_conditions_viewed[0].name}",
        ))

    return insights


def recent_activity(snapshot: InteractionSnapshot, limit: int = 4) -> List[ActivityItem]:
    """
    Merge the latest searches, condition views and feature uses.

    Takes up to two of each, newest first overall.
    """
    activities: List[ActivityItem] = []

    for search in snapshot.recent_searches[:ACTIVITY_PER_SOURCE]:
        activities.append(ActivityItem(
            type=ActivityType.SEARCH,
            title=f'Searched for "{search.query}"',
            timestamp=search.timestamp,
        ))

    for condition in snapshot.recent_conditions_viewed[:ACTIVITY_PER_SOURCE]:
        activities.append(ActivityItem(
            type=ActivityType.CONDITION,
            title=f"Viewed {condition.name}",
            timestamp=condition.timestamp,
        ))

    for discovery in snapshot.feature_discovery_log[:ACTIVITY_PER_SOURCE]:
        info = CAPABILITY_INFO.get(discovery.capability)
        activities.append(ActivityItem(
            type=ActivityType.FEATURE,
            title=f"Used {info.title if info else discovery.capability}",
            timestamp=discovery.timestamp,
        ))

    activities.sort(key=lambda activity: activity.timestamp, reverse=True)
    return activities[:limit]


def unexplored_capabilities(snapshot: InteractionSnapshot, limit: int = 3) -> List[CapabilityCard]:
    """Discoverable capabilities the user has never used, in catalog order."""
    unused = [c for c in DISCOVERABLE if snapshot.usage(c) == 0]
    return [_card(snapshot, capability) for capability in unused[:limit]]


def top_actions(snapshot: InteractionSnapshot, limit: int = 4) -> List[CapabilityCard]:
    """Quick-action shortcuts, most used first."""
    cards = [_card(snapshot, capability) for capability in QUICK_ACTIONS]
    cards.sort(key=lambda card: card.usage, reverse=True)
    return cards[:limit]


def _card(snapshot: InteractionSnapshot, capability: str) -> CapabilityCard:
    info = CAPABILITY_INFO[capability]
    return CapabilityCard(
        capability=capability,
        title=info.title,
        description=info.description,
        route=info.route,
        usage=snapshot.usage(capability),
    )
