"""Insight urgency scoring"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable

from finquest_insights.models.insights import Confidence, Impact, Insight

IMPACT_SCORES: Dict[Impact, int] = {
    Impact.LOW: 1,
    Impact.MEDIUM: 2,
    Impact.HIGH: 3,
    Impact.CRITICAL: 4,
}

CONFIDENCE_SCORES: Dict[Confidence, int] = {
    Confidence.LOW: 1,
    Confidence.MEDIUM: 2,
    Confidence.HIGH: 3,
}

class UrgencyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

@dataclass(frozen=True)
class UrgencyBreakdown:
    """Detailed breakdown of an urgency score"""
    impact_score: int
    confidence_score: int
    priority: int
    urgency: float
    level: UrgencyLevel

@dataclass(frozen=True)
class PriorityDistribution:
    """How many insights fall in each priority band"""
    critical: int
    high: int
    medium: int
    low: int

class UrgencyScorer:
    """Derives alert styling from impact, confidence and priority; results are never stored"""

    def calculate_urgency(self, impact: Impact, confidence: Confidence, priority: int) -> float:
        return IMPACT_SCORES[Impact(impact)] * CONFIDENCE_SCORES[Confidence(confidence)] * priority / 10

    def classify(self, urgency: float) -> UrgencyLevel:
        """Bucket an urgency value"""
        if urgency >= 8:
            return UrgencyLevel.CRITICAL
        elif urgency >= 6:
            return UrgencyLevel.HIGH
        elif urgency >= 4:
            return UrgencyLevel.MEDIUM
        return UrgencyLevel.LOW

    def score(self, insight: Insight) -> UrgencyBreakdown:
        urgency = self.calculate_urgency(insight.impact, insight.confidence, insight.priority)
        return UrgencyBreakdown(
            impact_score=IMPACT_SCORES[Impact(insight.impact)],
            confidence_score=CONFIDENCE_SCORES[Confidence(insight.confidence)],
            priority=insight.priority,
            urgency=urgency,
            level=self.classify(urgency),
        )

    def priority_distribution(self, insights: Iterable[Insight]) -> PriorityDistribution:
        """Count insights per priority band (8+, 6-7, 4-5, below 4)"""
        critical = high = medium = low = 0
        for insight in insights:
            if insight.priority >= 8:
                critical += 1
            elif insight.priority >= 6:
                high += 1
            elif insight.priority >= 4:
                medium += 1
            else:
                low += 1
        return PriorityDistribution(critical=critical, high=high, medium=medium, low=low)
