"""Spending trend analysis"""
import logging
from typing import List, Optional

from finquest_insights.analyzers.base import Analyzer, action, category_tag, format_amount
from finquest_insights.models.insights import (
    Confidence, Impact, InsightCategory, InsightData, InsightDraft, InsightType
)
from finquest_insights.models.profile import AnalysisInput, Profile, SpendingPattern, SpendingTrend

logger = logging.getLogger(__name__)

class TrendAnalyzer(Analyzer):
    """Flags rising, volatile and seasonal categories plus month-over-month swings"""
    name = "trend"
    requires_positive_income = True

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        drafts = []
        for pattern in data.patterns:
            drafts.extend(self._analyze_pattern(data.profile, pattern))

        month_over_month = self._month_over_month(data.profile)
        if month_over_month:
            drafts.append(month_over_month)
        return drafts

    def _analyze_pattern(self, profile: Profile, pattern: SpendingPattern) -> List[InsightDraft]:
        drafts = []
        income = profile.monthly_income
        tag = category_tag(pattern.category)

        if (pattern.trend == SpendingTrend.INCREASING
                and pattern.amount > income * self.settings.TREND_WARNING_INCOME_RATIO):
            high = pattern.amount > income * self.settings.TREND_HIGH_IMPACT_INCOME_RATIO
            share = pattern.amount / income * 100
            drafts.append(InsightDraft(
                type=InsightType.WARNING,
                title=f"{pattern.category} Spending Rising",
                message=(
                    f"Your {pattern.category.lower()} expenses keep climbing and now take "
                    f"{share:.0f}% of your income. Consider reviewing your habits in this category."
                ),
                impact=Impact.HIGH if high else Impact.MEDIUM,
                confidence=Confidence.HIGH,
                category=InsightCategory.SPENDING,
                priority=7,
                data=InsightData(amount=pattern.amount, percentage=share, trend="up"),
                tags=frozenset({tag, "trend-analysis"}),
                is_personalized=True,
                action=action(f"Review {pattern.category} Expenses", f"spending-breakdown:{tag}"),
            ))

        if (pattern.trend == SpendingTrend.VOLATILE
                and len(pattern.anomalies) > self.settings.VOLATILE_MIN_ANOMALIES):
            drafts.append(InsightDraft(
                type=InsightType.PATTERN,
                title=f"Irregular {pattern.category} Spending",
                message=(
                    f"Your {pattern.category.lower()} spending shows high volatility with "
                    f"{len(pattern.anomalies)} unusual transactions this month. "
                    f"Consider setting a monthly budget for better control."
                ),
                impact=Impact.MEDIUM,
                confidence=Confidence.HIGH,
                category=InsightCategory.BUDGETING,
                priority=6,
                data=InsightData(amount=pattern.amount, timeline="This month"),
                tags=frozenset({tag, "volatility", "budgeting"}),
                is_personalized=True,
                action=action(f"Set {pattern.category} Budget", f"create-budget:{tag}"),
            ))

        if pattern.seasonality:
            drafts.append(InsightDraft(
                type=InsightType.TIP,
                title=f"Seasonal {pattern.category} Planning",
                message=(
                    f"Based on your history, {pattern.category.lower()} expenses typically increase "
                    f"during this period. Consider setting aside extra funds for the seasonal bump."
                ),
                impact=Impact.LOW,
                confidence=Confidence.MEDIUM,
                category=InsightCategory.BUDGETING,
                priority=4,
                tags=frozenset({tag, "seasonal", "planning"}),
                is_personalized=True,
            ))

        return drafts

    def _month_over_month(self, profile: Profile) -> Optional[InsightDraft]:
        previous = profile.previous_month_data
        if previous is None:
            logger.debug("No previous month data, skipping month-over-month comparison")
            return None
        if previous.spending <= 0:
            return None

        change = profile.monthly_spending - previous.spending
        change_pct = change / previous.spending * 100
        if abs(change_pct) <= self.settings.MONTHLY_CHANGE_THRESHOLD_PCT:
            return None

        increased = change_pct > 0
        impact = Impact.HIGH if abs(change_pct) > self.settings.MONTHLY_CHANGE_HIGH_IMPACT_PCT else Impact.MEDIUM
        if increased:
            return InsightDraft(
                type=InsightType.WARNING,
                title="Spending Increased",
                message=(
                    f"Your spending increased by {change_pct:.1f}% this month "
                    f"({format_amount(change)} more). Let's identify what drove this change."
                ),
                impact=impact,
                confidence=Confidence.HIGH,
                category=InsightCategory.SPENDING,
                priority=6,
                data=InsightData(amount=abs(change), percentage=change_pct, trend="up"),
                tags=frozenset({"month-over-month", "trend-analysis"}),
                is_personalized=True,
                action=action("Analyze Increase", "spending-analysis"),
            )
        return InsightDraft(
            type=InsightType.ACHIEVEMENT,
            title="Spending Reduced",
            message=(
                f"Great job! You reduced spending by {abs(change_pct):.1f}% this month. "
                f"Keep up the good work!"
            ),
            impact=impact,
            confidence=Confidence.HIGH,
            category=InsightCategory.SPENDING,
            priority=6,
            data=InsightData(amount=abs(change), percentage=change_pct, trend="down"),
            tags=frozenset({"month-over-month", "trend-analysis"}),
            is_personalized=True,
        )
