"""Predictive forecasts from cash flow and market context"""
import logging
from typing import List

from finquest_insights.analyzers.base import Analyzer, action, format_amount
from finquest_insights.models.insights import (
    Confidence, Impact, InsightCategory, InsightData, InsightDraft, InsightType
)
from finquest_insights.models.profile import AnalysisInput, MarketContext, Profile

logger = logging.getLogger(__name__)

class PredictiveForecastAnalyzer(Analyzer):
    name = "forecast"

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        drafts = []
        profile = data.profile

        monthly_savings = profile.monthly_income - profile.monthly_spending
        if monthly_savings > 0:
            drafts.append(self._savings_projection(profile, monthly_savings))

        if data.market is not None:
            drafts.extend(self._market_insights(profile, data.market))

        return drafts

    def _savings_projection(self, profile: Profile, monthly_savings: float) -> InsightDraft:
        yearly = monthly_savings * 12
        message = f"At your current pace, you're projected to save {format_amount(yearly)} this year."
        growth_pct = None
        if profile.net_worth > 0:
            growth_pct = yearly / profile.net_worth * 100
            message += f" That would grow your net worth by {growth_pct:.0f}%."

        return InsightDraft(
            type=InsightType.PREDICTION,
            title="Annual Savings Forecast",
            message=message,
            impact=Impact.MEDIUM,
            confidence=Confidence.HIGH,
            category=InsightCategory.SAVING,
            priority=5,
            data=InsightData(amount=yearly, percentage=growth_pct, timeline="12 months"),
            tags=frozenset({"projection", "savings"}),
            is_personalized=True,
        )

    def _market_insights(self, profile: Profile, market: MarketContext) -> List[InsightDraft]:
        drafts = []

        if market.inflation > self.settings.INFLATION_ALERT_PCT:
            drafts.append(InsightDraft(
                type=InsightType.RISK_ALERT,
                title="Inflation Impact Alert",
                message=(
                    f"Current inflation at {market.inflation}% is eroding purchasing power. Consider "
                    f"inflation-protected investments or a higher savings rate to maintain real wealth."
                ),
                impact=Impact.HIGH,
                confidence=Confidence.MEDIUM,
                category=InsightCategory.INVESTING,
                priority=7,
                data=InsightData(percentage=market.inflation),
                tags=frozenset({"inflation", "market-conditions"}),
                action=action("Review Investment Strategy", "investment-strategy"),
            ))

        if (market.interest_rates > self.settings.HIGH_YIELD_RATE_PCT
                and profile.savings > self.settings.HIGH_YIELD_MIN_SAVINGS):
            baseline = self.settings.BASELINE_SAVINGS_RATE_PCT
            extra = profile.savings * (market.interest_rates - baseline) / 100
            drafts.append(InsightDraft(
                type=InsightType.OPPORTUNITY,
                title="High-Yield Savings Opportunity",
                message=(
                    f"With interest rates at {market.interest_rates}%, consider moving your savings "
                    f"to a high-yield account. You could earn an extra {format_amount(extra)} annually."
                ),
                impact=Impact.MEDIUM,
                confidence=Confidence.HIGH,
                category=InsightCategory.SAVING,
                priority=6,
                data=InsightData(
                    amount=extra,
                    percentage=market.interest_rates,
                    comparison=f"{market.interest_rates}% vs {baseline}% baseline",
                ),
                tags=frozenset({"interest-rates", "optimization"}),
                action=action("Compare Savings Accounts", "compare-savings-accounts"),
            ))

        return drafts
