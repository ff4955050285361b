"""
Interaction Snapshot

The single root entity of the engine: everything observed about one user
in one runtime instance.

DESIGN RULES:
- Immutable (frozen models, every update is a new instance)
- camelCase on the wire, snake_case in Python
- Timestamps are timezone-aware UTC
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from schemas.capability import CANONICAL_CAPABILITIES, DEFAULT_PREFERRED, HealthFocus


# --- Collection caps ---

MAX_RECENT_SEARCHES = 20
MAX_RECENT_CONDITIONS = 15
MAX_RECENT_SYMPTOMS = 30
MAX_DISCOVERY_LOG = 50
MAX_FAVORITES = 10
MAX_PREFERRED = 5


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_ensure_utc)]


def default_usage_counts() -> Dict[str, int]:
    """A zeroed counter for every canonical capability."""
    return {capability: 0 for capability in CANONICAL_CAPABILITIES}


class SnapshotModel(BaseModel):
    """Shared configuration for snapshot models."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# --- Entries ---

class SearchEntry(SnapshotModel):
    """A search the user performed."""
    query: str
    search_type: str = Field(default="general", alias="type")
    timestamp: UtcDatetime = Field(default_factory=utc_now)
    result_count: int = Field(default=0, ge=0)


class ConditionView(SnapshotModel):
    """A condition the user looked at."""
    name: str
    action: str = "view"
    timestamp: UtcDatetime = Field(default_factory=utc_now)


class SymptomEntry(SnapshotModel):
    """A single symptom mention. Repeats are kept."""
    name: str
    timestamp: UtcDatetime = Field(default_factory=utc_now)


class FeatureDiscovery(SnapshotModel):
    """Most recent use of a capability."""
    capability: str
    timestamp: UtcDatetime = Field(default_factory=utc_now)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class FavoriteItem(SnapshotModel):
    """A bookmarked item, unique by (item, type)."""
    item: str
    item_type: str = Field(default="general", alias="type")
    timestamp: UtcDatetime = Field(default_factory=utc_now)


# --- Root ---

class InteractionSnapshot(SnapshotModel):
    """
    Complete engine state at one point in time.

    Collections are ordered most-recent-first. preferred_features is a
    projection of feature_usage_counts and is never set by tracking events.
    """
    feature_usage_counts: Dict[str, int] = Field(default_factory=default_usage_counts)
    recent_searches: List[SearchEntry] = Field(default_factory=list)
    recent_conditions_viewed: List[ConditionView] = Field(default_factory=list)
    recent_symptoms: List[SymptomEntry] = Field(default_factory=list)
    feature_discovery_log: List[FeatureDiscovery] = Field(default_factory=list)
    preferred_features: List[str] = Field(default_factory=lambda: list(DEFAULT_PREFERRED))
    favorite_items: List[FavoriteItem] = Field(default_factory=list)
    health_focus: HealthFocus = HealthFocus.GENERAL
    onboarding_complete: bool = False

    # Analytics only
    last_visit: UtcDatetime = Field(default_factory=utc_now)
    session_count: int = Field(default=0, ge=0)
    total_time_spent: float = Field(default=0.0, ge=0.0)

    def usage(self, capability: str) -> int:
        """Usage count for a capability id, 0 when absent."""
        return self.feature_usage_counts.get(capability, 0)
