from typing import List
from pydantic import BaseModel, ConfigDict, Field

from schemas.capability import HealthFocus


class DashboardLayout(BaseModel):
    """
    Placement plan for the dashboard.

    Widgets are capability ids in ranked order.
    """
    model_config = ConfigDict(frozen=True)

    primary_widgets: List[str] = Field(default_factory=list, description="Top 3 preferred capabilities")
    secondary_widgets: List[str] = Field(default_factory=list, description="Remaining preferred capabilities")
    show_onboarding: bool = Field(..., description="True until onboarding is completed")
    show_quick_search: bool = Field(..., description="True when there is search history")
    focus_theme: HealthFocus = Field(..., description="Theme derived from the health focus")
