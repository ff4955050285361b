"""
Interactions API Route

Thin delegation layer to the session manager.
Contains NO personalization logic; every route calls exactly one manager
method and returns its result.

DESIGN RULE: Invalid values are not HTTP errors where the engine ignores
them (e.g. an unknown health focus returns the unchanged snapshot).
"""

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from app.dependencies import get_session_manager
from schemas.insight import ActivityItem, CapabilityCard, Insight
from schemas.layout import DashboardLayout
from schemas.recommendation import Recommendation
from schemas.snapshot import InteractionSnapshot
from session.manager import SessionManager


router = APIRouter(prefix="/interactions", tags=["interactions"])


# --- Request models ---

class FeatureUsageRequest(BaseModel):
    """Optional context attached to a feature use."""
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Free-form usage context")


class SearchRequest(BaseModel):
    """A search performed by the user."""
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., description="Search text")
    search_type: str = Field(default="general", alias="type", description="Search kind, e.g. 'quick'")
    result_count: int = Field(default=0, ge=0, description="Number of results shown")


class ConditionRequest(BaseModel):
    """A condition the user interacted with."""
    name: str = Field(..., description="Condition name")
    action: str = Field(default="view", description="Interaction kind")


class SymptomsRequest(BaseModel):
    """One or more reported symptoms."""
    symptoms: Union[str, List[str]] = Field(..., description="A symptom name or a list of names")


class FocusRequest(BaseModel):
    """Requested health focus."""
    focus: str = Field(..., description="general, chronic, acute or preventive")


class FavoriteRequest(BaseModel):
    """An item to bookmark."""
    model_config = ConfigDict(populate_by_name=True)

    item: str = Field(..., description="Item identifier or name")
    item_type: str = Field(default="general", alias="type", description="Item kind")


# --- Queries ---

@router.get("/snapshot", response_model=InteractionSnapshot)
def get_snapshot(manager: SessionManager = Depends(get_session_manager)) -> InteractionSnapshot:
    return manager.get_snapshot()


@router.get("/preferences", response_model=List[str])
def get_preferences(manager: SessionManager = Depends(get_session_manager)) -> List[str]:
    return manager.rank()


@router.get("/recommendations", response_model=List[Recommendation])
def get_recommendations(manager: SessionManager = Depends(get_session_manager)) -> List[Recommendation]:
    return manager.recommend()


@router.get("/layout", response_model=DashboardLayout)
def get_layout(manager: SessionManager = Depends(get_session_manager)) -> DashboardLayout:
    return manager.plan_layout()


@router.get("/insights", response_model=List[Insight])
def get_insights(manager: SessionManager = Depends(get_session_manager)) -> List[Insight]:
    return manager.health_insights()


@router.get("/activity", response_model=List[ActivityItem])
def get_activity(limit: int = 4, manager: SessionManager = Depends(get_session_manager)) -> List[ActivityItem]:
    return manager.recent_activity(limit=limit)


@router.get("/discover", response_model=List[CapabilityCard])
def get_unexplored(limit: int = 3, manager: SessionManager = Depends(get_session_manager)) -> List[CapabilityCard]:
    return manager.unexplored_capabilities(limit=limit)


@router.get("/actions", response_model=List[CapabilityCard])
def get_actions(limit: int = 4, manager: SessionManager = Depends(get_session_manager)) -> List[CapabilityCard]:
    return manager.top_actions(limit=limit)


# --- Tracking ---

@router.post("/features/{capability}", response_model=InteractionSnapshot)
def track_feature(
    capability: str,
    request: Optional[FeatureUsageRequest] = None,
    manager: SessionManager = Depends(get_session_manager),
) -> InteractionSnapshot:
    metadata = request.metadata if request else {}
    return manager.record_feature_usage(capability, metadata)


@router.post("/searches", response_model=InteractionSnapshot)
def track_search(request: SearchRequest, manager: SessionManager = Depends(get_session_manager)) -> InteractionSnapshot:
    return manager.record_search(request.query, request.search_type, request.result_count)


@router.delete("/searches", response_model=InteractionSnapshot)
def clear_searches(manager: SessionManager = Depends(get_session_manager)) -> InteractionSnapshot:
    return manager.clear_recent_searches()


@router.post("/conditions", response_model=InteractionSnapshot)
def track_condition(request: ConditionRequest, manager: SessionManager = Depends(get_session_manager)) -> InteractionSnapshot:
    return manager.record_condition_viewed(request.name, request.action)


@router.post("/symptoms", response_model=InteractionSnapshot)
def track_symptoms(request: SymptomsRequest, manager: SessionManager = Depends(get_session_manager)) -> InteractionSnapshot:
    return manager.record_symptoms(request.symptoms)


@router.put("/focus", response_model=InteractionSnapshot)
def set_focus(request: FocusRequest, manager: SessionManager = Depends(get_session_manager)) -> InteractionSnapshot:
    return manager.set_health_focus(request.focus)


@router.post("/favorites", response_model=InteractionSnapshot)
def add_favorite(request: FavoriteRequest, manager: SessionManager = Depends(get_session_manager)) -> InteractionSnapshot:
    return manager.add_favorite(request.item, request.item_type)


@router.post("/onboarding/complete", response_model=InteractionSnapshot)
def complete_onboarding(manager: SessionManager = Depends(get_session_manager)) -> InteractionSnapshot:
    return manager.complete_onboarding()


@router.post("/flush")
def flush(manager: SessionManager = Depends(get_session_manager)) -> Dict[str, Any]:
    manager.flush()
    return {"status": "flushed", "stats": manager.stats.to_dict()}
