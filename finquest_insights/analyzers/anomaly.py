"""Unusual expense detection"""
import logging
from typing import List

from finquest_insights.analyzers.base import Analyzer, action, category_tag, format_amount
from finquest_insights.models.insights import (
    Confidence, Impact, InsightCategory, InsightData, InsightDraft, InsightType
)
from finquest_insights.models.profile import AnalysisInput

logger = logging.getLogger(__name__)

class AnomalyDetector(Analyzer):
    name = "anomaly"
    requires_positive_income = True

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        drafts = []
        threshold = data.profile.monthly_income * self.settings.ANOMALY_INCOME_RATIO

        for pattern in data.patterns:
            largest = pattern.largest_anomaly()
            if largest is None or largest.amount <= threshold:
                continue

            tag = category_tag(pattern.category)
            when = largest.date.strftime("%d %b %Y")
            message = (
                f"We detected an unusually large {pattern.category.lower()} expense of "
                f"{format_amount(largest.amount)} on {when}."
            )
            if largest.reason:
                message += f" Reason noted: {largest.reason}."
            message += " Make sure this was intentional."

            drafts.append(InsightDraft(
                type=InsightType.WARNING,
                title=f"Unusual {pattern.category} Expense Detected",
                message=message,
                impact=Impact.MEDIUM,
                confidence=Confidence.HIGH,
                category=InsightCategory.SPENDING,
                priority=6,
                data=InsightData(amount=largest.amount, timeline=largest.date.date().isoformat()),
                tags=frozenset({"anomaly", tag}),
                is_personalized=True,
                action=action("Review Transaction", f"transactions:{tag}"),
            ))

        return drafts
