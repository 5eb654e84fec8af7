"""Savings opportunity analysis"""
import logging
from typing import List

from finquest_insights.analyzers.base import Analyzer, action, category_tag, format_amount
from finquest_insights.models.insights import (
    Confidence, Impact, InsightCategory, InsightData, InsightDraft, InsightType
)
from finquest_insights.models.profile import AnalysisInput

logger = logging.getLogger(__name__)

class SavingsOpportunityAnalyzer(Analyzer):
    """Checks savings rate, emergency fund coverage and the biggest spending category"""
    name = "savings"
    requires_positive_income = True

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        profile = data.profile
        drafts = []

        savings_rate = profile.savings / profile.monthly_income * 100
        target_pct = self.settings.SAVINGS_RATE_TARGET_PCT
        if savings_rate < target_pct:
            drafts.append(InsightDraft(
                type=InsightType.OPPORTUNITY,
                title="Boost Your Savings Rate",
                message=(
                    f"Your current savings rate is {savings_rate:.1f}%. Financial experts recommend "
                    f"saving at least {target_pct:.0f}% of your income. Small changes in spending "
                    f"can make a big difference!"
                ),
                impact=Impact.HIGH,
                confidence=Confidence.HIGH,
                category=InsightCategory.SAVING,
                priority=8,
                data=InsightData(
                    percentage=savings_rate,
                    amount=profile.monthly_income * target_pct / 100 - profile.savings,
                ),
                tags=frozenset({"savings-rate", "financial-health"}),
                is_personalized=True,
                action=action("Create Savings Plan", "savings-plan"),
            ))

        emergency_target = profile.monthly_spending * self.settings.EMERGENCY_FUND_MONTHS
        if emergency_target > 0 and profile.savings < emergency_target:
            covered_pct = profile.savings / emergency_target * 100
            drafts.append(InsightDraft(
                type=InsightType.GOAL_SUGGESTION,
                title="Build Emergency Fund",
                message=(
                    f"Your emergency fund should cover {self.settings.EMERGENCY_FUND_MONTHS} months "
                    f"of expenses ({format_amount(emergency_target)}). You currently have "
                    f"{covered_pct:.0f}% of this target."
                ),
                impact=Impact.HIGH,
                confidence=Confidence.HIGH,
                category=InsightCategory.SAVING,
                priority=9,
                data=InsightData(
                    amount=emergency_target - profile.savings,
                    percentage=covered_pct,
                ),
                tags=frozenset({"emergency-fund", "financial-security"}),
                is_personalized=True,
                action=action("Start Emergency Fund Goal", "create-goal:emergency-fund"),
            ))

        top = profile.top_spending_category()
        if top:
            top_category, top_amount = top
            if top_amount > profile.monthly_income * self.settings.TOP_CATEGORY_INCOME_RATIO:
                cut = top_amount * self.settings.TOP_CATEGORY_CUT_RATIO
                cut_pct = self.settings.TOP_CATEGORY_CUT_RATIO * 100
                share = top_amount / profile.monthly_spending * 100 if profile.monthly_spending > 0 else 100.0
                tag = category_tag(top_category)
                drafts.append(InsightDraft(
                    type=InsightType.OPTIMIZATION,
                    title=f"Optimize {top_category} Spending",
                    message=(
                        f"{top_category} represents {share:.0f}% of your total spending. Even a "
                        f"{cut_pct:.0f}% reduction could save you {format_amount(cut)} monthly."
                    ),
                    impact=Impact.MEDIUM,
                    confidence=Confidence.HIGH,
                    category=InsightCategory.SPENDING,
                    priority=6,
                    data=InsightData(amount=cut, percentage=cut_pct),
                    tags=frozenset({tag, "optimization"}),
                    is_personalized=True,
                    action=action(f"Analyze {top_category}", f"spending-breakdown:{tag}"),
                ))

        return drafts
