"""Risk factor analysis"""
import logging
from typing import List

from finquest_insights.analyzers.base import Analyzer, action, format_amount
from finquest_insights.models.insights import (
    Confidence, Impact, InsightCategory, InsightData, InsightDraft, InsightType
)
from finquest_insights.models.profile import AnalysisInput, Profile

logger = logging.getLogger(__name__)

class RiskAnalyzer(Analyzer):
    """
    Debt load, expense ratio, income concentration and retirement readiness.

    Debt payments are estimated as a fixed share of spending and the retirement
    target as ``annual income * age / divisor``; both are placeholders exposed
    through Settings.
    """
    name = "risk"
    requires_positive_income = True

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        profile = data.profile
        drafts = []

        debt_to_income = self.debt_to_income_pct(profile)
        if debt_to_income > self.settings.DEBT_TO_INCOME_LIMIT_PCT:
            drafts.append(InsightDraft(
                type=InsightType.WARNING,
                title="High Debt-to-Income Ratio",
                message=(
                    f"Your estimated debt payments represent {debt_to_income:.0f}% of your income. "
                    f"Advisors recommend keeping this below {self.settings.DEBT_TO_INCOME_LIMIT_PCT:.0f}%."
                ),
                impact=Impact.HIGH,
                confidence=Confidence.MEDIUM,
                category=InsightCategory.BUDGETING,
                priority=8,
                data=InsightData(percentage=debt_to_income),
                tags=frozenset({"debt", "risk-management"}),
                is_personalized=True,
                action=action("Review Debt Strategy", "debt-strategy"),
            ))

        expense_ratio = profile.monthly_spending / profile.monthly_income * 100
        if expense_ratio > self.settings.EXPENSE_RATIO_LIMIT_PCT:
            drafts.append(InsightDraft(
                type=InsightType.WARNING,
                title="High Expense Ratio",
                message=(
                    f"You're spending {expense_ratio:.1f}% of your income. This leaves little room "
                    f"for savings and emergencies."
                ),
                impact=Impact.HIGH,
                confidence=Confidence.HIGH,
                category=InsightCategory.BUDGETING,
                priority=7,
                data=InsightData(percentage=expense_ratio),
                tags=frozenset({"expense-ratio", "risk-management"}),
                is_personalized=True,
                action=action("Create Action Plan", "budget-optimizer"),
            ))

        drafts.append(InsightDraft(
            type=InsightType.TIP,
            title="Diversify Income Sources",
            message=(
                "Consider developing additional income streams to reduce financial risk, such as "
                "freelancing, investments or passive income."
            ),
            impact=Impact.MEDIUM,
            confidence=Confidence.MEDIUM,
            category=InsightCategory.GENERAL,
            priority=4,
            tags=frozenset({"income-diversification", "risk-management"}),
            action=action("Explore Income Options", "income-options"),
        ))

        retirement_target = self.retirement_target(profile)
        if profile.age > self.settings.RETIREMENT_CHECK_MIN_AGE and profile.savings < retirement_target:
            drafts.append(InsightDraft(
                type=InsightType.WARNING,
                title="Retirement Savings Behind Target",
                message=(
                    f"At age {profile.age}, a common rule of thumb puts your retirement savings at "
                    f"{format_amount(retirement_target)}. Consider increasing your retirement contributions."
                ),
                impact=Impact.HIGH,
                confidence=Confidence.HIGH,
                category=InsightCategory.SAVING,
                priority=7,
                data=InsightData(amount=retirement_target - profile.savings),
                tags=frozenset({"retirement", "age-based-planning"}),
                is_personalized=True,
                action=action("Plan Retirement Savings", "retirement-plan"),
            ))

        return drafts

    def debt_to_income_pct(self, profile: Profile) -> float:
        assumed_debt = profile.monthly_spending * self.settings.ASSUMED_DEBT_SPENDING_RATIO
        return assumed_debt / profile.monthly_income * 100

    def retirement_target(self, profile: Profile) -> float:
        annual_income = profile.monthly_income * self.settings.RETIREMENT_INCOME_MONTHS
        return annual_income * profile.age / self.settings.RETIREMENT_AGE_DIVISOR
