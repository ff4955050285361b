from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class InsightType(str, Enum):
    SYMPTOM = "symptom"
    CONDITION = "condition"


class Insight(BaseModel):
    """An observation about the user's recent health research."""
    model_config = ConfigDict(frozen=True)

    type: InsightType
    title: str
    description: str


class ActivityType(str, Enum):
    SEARCH = "search"
    CONDITION = "condition"
    FEATURE = "feature"


class ActivityItem(BaseModel):
    """One line of the recent activity feed."""
    model_config = ConfigDict(frozen=True)

    type: ActivityType
    title: str
    timestamp: datetime


class CapabilityCard(BaseModel):
    """A capability presented as a shortcut, with its usage count."""
    model_config = ConfigDict(frozen=True)

    capability: str = Field(..., description="Capability id")
    title: str
    description: str
    route: str = Field(..., description="Client-side path of the feature")
    usage: int = Field(default=0, ge=0)
