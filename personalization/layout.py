"""
Layout Planner

Splits ranked preferences into dashboard placement groups.
"""

from schemas.layout import DashboardLayout
from schemas.snapshot import InteractionSnapshot


PRIMARY_SLOTS = 3


def plan_layout(snapshot: InteractionSnapshot) -> DashboardLayout:
    """
    Build the dashboard layout from an already ranked snapshot.

    The first PRIMARY_SLOTS preferred capabilities are primary, the rest
    secondary.
    """
    preferred = list(snapshot.preferred_features)
    return DashboardLayout(
        primary_widgets=preferred[:PRIMARY_SLOTS],
        secondary_widgets=preferred[PRIMARY_SLOTS:],
        show_onboarding=not snapshot.onboarding_complete,
        show_quick_search=len(snapshot.recent_searches) > 0,
        focus_theme=snapshot.health_focus,
    )
