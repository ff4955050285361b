from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class Priority(str, Enum):
    """Coarse urgency label, used by consumers for ordering and styling."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationType(str, Enum):
    CONTINUE_SEARCH = "continue_search"
    RELATED_INFO = "related_info"
    FEATURE_SUGGESTION = "feature_suggestion"


class Recommendation(BaseModel):
    """
    A suggestion derived from the current snapshot.

    Carries no behavior; navigation is decided by the consumer.
    """
    model_config = ConfigDict(frozen=True)

    type: RecommendationType = Field(..., description="Rule that produced the suggestion")
    title: str = Field(..., description="Short heading")
    description: str = Field(..., description="Human-readable detail")
    priority: Priority = Field(..., description="high, medium or low")
