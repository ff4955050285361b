"""
Recommendation Generator

Turns the latest snapshot into at most three suggestions.

DESIGN RULES:
- Pure function of the snapshot plus a static rule table
- Rules run in declared order, each contributes at most one entry
- Never padded; fewer firing rules means fewer recommendations
"""

from typing import Callable, List, Optional

from schemas.capability import Capability
from schemas.recommendation import Priority, Recommendation, RecommendationType
from schemas.snapshot import InteractionSnapshot


MAX_RECOMMENDATIONS = 3

Rule = Callable[[InteractionSnapshot], Optional[Recommendation]]


def continue_search_rule(snapshot: InteractionSnapshot) -> Optional[Recommendation]:
    if not snapshot.recent_searches:
        return None
    last_search = snapshot.recent_searches[0]
    return Recommendation(
        type=RecommendationType.CONTINUE_SEARCH,
        title="Continue Your Research",
        description=f'Explore more about "{last_search.query}"',
        priority=Priority.HIGH,
    )


def related_info_rule(snapshot: InteractionSnapshot) -> Optional[Recommendation]:
    if not snapshot.recent_conditions_viewed:
        return None
    last_condition = snapshot.recent_conditions_viewed[0]
    return Recommendation(
        type=RecommendationType.RELATED_INFO,
        title="Related Information",
        description=f"Learn about conditions similar to {last_condition.name}",
        priority=Priority.MEDIUM,
    )


def consultation_rule(snapshot: InteractionSnapshot) -> Optional[Recommendation]:
    searches = snapshot.usage(Capability.DISEASE_SEARCH.value)
    if searches <= snapshot.usage(Capability.CONSULTATIONS.value):
        return None
    if searches <= snapshot.usage(Capability.RISK_ASSESSMENT.value):
        return None
    return Recommendation(
        type=RecommendationType.FEATURE_SUGGESTION,
        title="Book a Consultation",
        description="Discuss your health concerns with a professional",
        priority=Priority.MEDIUM,
    )


DEFAULT_RULES: List[Rule] = [
    continue_search_rule,
    related_info_rule,
    consultation_rule,
]


def recommend(
    snapshot: InteractionSnapshot,
    rules: Optional[List[Rule]] = None,
) -> List[Recommendation]:
    """
    Evaluate the rule table against a snapshot.

    Args:
        snapshot: Current interaction snapshot
        rules: Rule table override, DEFAULT_RULES when omitted

    Returns:
        Up to MAX_RECOMMENDATIONS recommendations in rule order
    """
    recommendations: List[Recommendation] = []
    for rule in rules if rules is not None else DEFAULT_RULES:
        recommendation = rule(snapshot)
        if recommendation is not None:
            recommendations.append(recommendation)
    return recommendations[:MAX_RECOMMENDATIONS]
