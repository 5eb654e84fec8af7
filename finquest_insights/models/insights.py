"""Insight models: analyzer drafts and the tagged insight variants shown to users

Every variant shares the base fields below and is selected by its ``type``
literal, so a payload can be parsed back with ``InsightAdapter``.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field

class InsightType(str, Enum):
    TIP = "tip"
    OPPORTUNITY = "opportunity"
    WARNING = "warning"
    ACHIEVEMENT = "achievement"
    PREDICTION = "prediction"
    OPTIMIZATION = "optimization"
    CULTURAL = "cultural"
    PATTERN = "pattern"
    GOAL_SUGGESTION = "goal_suggestion"
    RISK_ALERT = "risk_alert"

class Impact(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class InsightCategory(str, Enum):
    SPENDING = "spending"
    SAVING = "saving"
    INVESTING = "investing"
    BUDGETING = "budgeting"
    GOALS = "goals"
    GENERAL = "general"
    OPTIMIZATION = "optimization"

class InsightAction(BaseModel):
    """Opaque action reference; only the consumer ever invokes it"""
    model_config = ConfigDict(frozen=True)

    label: str
    callback_id: str

class InsightData(BaseModel):
    """Optional figures backing an insight"""
    model_config = ConfigDict(frozen=True)

    amount: Optional[float] = None
    percentage: Optional[float] = None
    timeline: Optional[str] = None
    comparison: Optional[str] = None
    trend: Optional[Literal["up", "down", "stable"]] = None

@dataclass(frozen=True)
class InsightDraft:
    """Analyzer output before the aggregator assigns identity and timestamps"""
    type: InsightType
    title: str
    message: str
    impact: Impact
    confidence: Confidence
    category: InsightCategory
    priority: int
    data: Optional[InsightData] = None
    tags: FrozenSet[str] = field(default_factory=frozenset)
    is_personalized: bool = False
    action: Optional[InsightAction] = None

class BaseInsight(BaseModel):
    """Fields shared by every insight variant"""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    message: str
    impact: Impact
    confidence: Confidence
    category: InsightCategory
    priority: int = Field(..., ge=1, le=10)
    data: Optional[InsightData] = None
    tags: FrozenSet[str] = frozenset()
    created_at: datetime
    expires_at: Optional[datetime] = None
    is_personalized: bool = False
    action: Optional[InsightAction] = None

    @computed_field
    @property
    def actionable(self) -> bool:
        return self.action is not None

class TipInsight(BaseInsight):
    type: Literal["tip"] = "tip"

class OpportunityInsight(BaseInsight):
    type: Literal["opportunity"] = "opportunity"

class WarningInsight(BaseInsight):
    type: Literal["warning"] = "warning"

class AchievementInsight(BaseInsight):
    type: Literal["achievement"] = "achievement"

class PredictionInsight(BaseInsight):
    type: Literal["prediction"] = "prediction"

class OptimizationInsight(BaseInsight):
    type: Literal["optimization"] = "optimization"

class CulturalInsight(BaseInsight):
    """Time-bound insight; always carries an expiry"""
    type: Literal["cultural"] = "cultural"
    expires_at: datetime

class PatternInsight(BaseInsight):
    type: Literal["pattern"] = "pattern"

class GoalSuggestionInsight(BaseInsight):
    type: Literal["goal_suggestion"] = "goal_suggestion"

class RiskAlertInsight(BaseInsight):
    type: Literal["risk_alert"] = "risk_alert"

Insight = Annotated[
    Union[
        TipInsight,
        OpportunityInsight,
        WarningInsight,
        AchievementInsight,
        PredictionInsight,
        OptimizationInsight,
        CulturalInsight,
        PatternInsight,
        GoalSuggestionInsight,
        RiskAlertInsight,
    ],
    Field(discriminator="type"),
]

InsightAdapter = TypeAdapter(Insight)
InsightListAdapter = TypeAdapter(List[Insight])
