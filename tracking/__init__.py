# Tracking Package
from tracking.recorder import (
    record_feature_usage,
    record_search,
    record_condition_viewed,
    record_symptoms,
    set_health_focus,
    add_favorite,
    clear_recent_searches,
    complete_onboarding,
)

__all__ = [
    "record_feature_usage",
    "record_search",
    "record_condition_viewed",
    "record_symptoms",
    "set_health_focus",
    "add_favorite",
    "clear_recent_searches",
    "complete_onboarding",
]
