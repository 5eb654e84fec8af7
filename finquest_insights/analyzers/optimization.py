"""Recurring-cost and rewards optimization"""
import logging
from typing import List

from finquest_insights.analyzers.base import Analyzer, action, category_tag, format_amount
from finquest_insights.models.insights import (
    Confidence, Impact, InsightCategory, InsightData, InsightDraft, InsightType
)
from finquest_insights.models.profile import AnalysisInput

logger = logging.getLogger(__name__)

class OptimizationAnalyzer(Analyzer):
    name = "optimization"
    requires_positive_income = True

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        profile = data.profile
        drafts = []

        for category in self.settings.SUBSCRIPTION_CATEGORIES:
            amount = profile.spending_by_category.get(category, 0)
            if amount > profile.monthly_income * self.settings.SUBSCRIPTION_INCOME_RATIO:
                tag = category_tag(category)
                drafts.append(InsightDraft(
                    type=InsightType.OPTIMIZATION,
                    title="Subscription Audit Needed",
                    message=(
                        f"You're spending {format_amount(amount)} monthly on {category.lower()}. "
                        f"Cancel unused services to free up money for savings or investments."
                    ),
                    impact=Impact.MEDIUM,
                    confidence=Confidence.HIGH,
                    category=InsightCategory.SPENDING,
                    priority=6,
                    data=InsightData(
                        amount=amount,
                        percentage=amount / profile.monthly_income * 100,
                    ),
                    tags=frozenset({tag, "subscriptions", "optimization"}),
                    is_personalized=True,
                    action=action("Audit Subscriptions", f"subscription-manager:{tag}"),
                ))

        cashback = profile.monthly_spending * self.settings.CASHBACK_RATE
        drafts.append(InsightDraft(
            type=InsightType.TIP,
            title="Maximize Credit Card Rewards",
            message=(
                f"Based on your spending, you could earn about {format_amount(cashback)} monthly "
                f"in cashback with the right credit card strategy."
            ),
            impact=Impact.LOW,
            confidence=Confidence.MEDIUM,
            category=InsightCategory.OPTIMIZATION,
            priority=3,
            data=InsightData(amount=cashback),
            tags=frozenset({"cashback", "credit-cards"}),
            action=action("Compare Credit Cards", "compare-credit-cards"),
        ))

        return drafts
