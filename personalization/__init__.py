# Personalization Package
from personalization.ranker import rank, derive_preferred
from personalization.recommender import recommend
from personalization.layout import plan_layout
from personalization.insights import health_insights, recent_activity, unexplored_capabilities, top_actions

__all__ = [
    "rank",
    "derive_preferred",
    "recommend",
    "plan_layout",
    "health_insights",
    "recent_activity",
    "unexplored_capabilities",
    "top_actions",
]
