"""Goal progress analysis"""
import logging
from datetime import date
from typing import List

from finquest_insights.analyzers.base import Analyzer, action, category_tag, format_amount
from finquest_insights.models.insights import (
    Confidence, Impact, InsightCategory, InsightData, InsightDraft, InsightType
)
from finquest_insights.models.profile import AnalysisInput, Goal

logger = logging.getLogger(__name__)

class GoalProgressAnalyzer(Analyzer):
    """Warns about goals falling behind and celebrates goals close to or past their target"""
    name = "goals"

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        drafts = []
        for goal in data.profile.goals:
            if goal.target_amount <= 0:
                logger.info(f"Skipping goal {goal.id}: target amount is not positive")
                continue
            drafts.extend(self._analyze_goal(goal, data.today))
        return drafts

    def months_remaining(self, goal: Goal, today: date) -> float:
        """Months until the deadline, never less than one"""
        days = (goal.deadline - today).days
        return max(1.0, days / self.settings.DAYS_PER_MONTH)

    def _analyze_goal(self, goal: Goal, today: date) -> List[InsightDraft]:
        drafts = []
        progress = goal.progress_pct
        remaining = goal.remaining
        months = self.months_remaining(goal, today)
        tag = category_tag(goal.category)

        if progress < self.settings.GOAL_BEHIND_PROGRESS_PCT and months < self.settings.GOAL_BEHIND_MAX_MONTHS:
            required_monthly = remaining / months
            drafts.append(InsightDraft(
                type=InsightType.WARNING,
                title=f"{goal.category} Goal Behind Schedule",
                message=(
                    f"To reach your {goal.category.lower()} goal on time, you need to save "
                    f"{format_amount(required_monthly)} monthly. Consider adjusting your timeline "
                    f"or increasing contributions."
                ),
                impact=Impact.HIGH,
                confidence=Confidence.HIGH,
                category=InsightCategory.GOALS,
                priority=8,
                data=InsightData(
                    amount=required_monthly,
                    timeline=f"{months:.0f} months",
                    percentage=progress,
                ),
                tags=frozenset({tag, "goal-tracking"}),
                is_personalized=True,
                action=action("Adjust Goal Plan", f"goal:{goal.id}"),
            ))

        if self.settings.GOAL_NEAR_COMPLETE_PCT <= progress < 100:
            drafts.append(InsightDraft(
                type=InsightType.ACHIEVEMENT,
                title=f"{goal.category} Goal Almost Complete!",
                message=(
                    f"Excellent progress! You're {progress:.0f}% towards your {goal.category.lower()} "
                    f"goal. Just {format_amount(remaining)} more to go!"
                ),
                impact=Impact.MEDIUM,
                confidence=Confidence.HIGH,
                category=InsightCategory.GOALS,
                priority=5,
                data=InsightData(amount=remaining, percentage=progress),
                tags=frozenset({tag, "achievement"}),
                is_personalized=True,
            ))
        elif progress >= 100:
            drafts.append(InsightDraft(
                type=InsightType.ACHIEVEMENT,
                title=f"{goal.category} Goal Achieved!",
                message=(
                    f"Congratulations! You've reached your {goal.category.lower()} goal. "
                    f"Time to celebrate and set your next financial milestone!"
                ),
                impact=Impact.HIGH,
                confidence=Confidence.HIGH,
                category=InsightCategory.GOALS,
                priority=10,
                data=InsightData(percentage=progress),
                tags=frozenset({tag, "completed"}),
                is_personalized=True,
                action=action("Set New Goal", "create-goal"),
            ))

        return drafts
