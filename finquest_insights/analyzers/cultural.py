"""Thai cultural context: festivals, merit-making and family support"""
import calendar
import logging
from datetime import date
from typing import List, Optional, Tuple

from finquest_insights.analyzers.base import Analyzer, action
from finquest_insights.config import Festival
from finquest_insights.models.insights import (
    Confidence, Impact, InsightCategory, InsightData, InsightDraft, InsightType
)
from finquest_insights.models.profile import AnalysisInput, CulturalContext, Profile

logger = logging.getLogger(__name__)

def _festival_date(festival: Festival, year: int) -> date:
    # Feb 29 festivals fall on Feb 28 outside leap years
    _, last_day = calendar.monthrange(year, festival.month)
    return date(year, festival.month, min(festival.day, last_day))

def next_occurrence(festival: Festival, today: date) -> date:
    """Festival date this year, or next year once it has passed"""
    this_year = _festival_date(festival, today.year)
    if this_year >= today:
        return this_year
    return _festival_date(festival, today.year + 1)

class CulturalContextAnalyzer(Analyzer):
    name = "cultural"

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        profile = data.profile
        if profile.cultural_context != CulturalContext.THAI:
            return []

        drafts = []
        upcoming = self.upcoming_festival(data.today)
        if upcoming:
            festival, days_away = upcoming
            drafts.append(InsightDraft(
                type=InsightType.CULTURAL,
                title=f"Get Ready for {festival.name}",
                message=(
                    f"{festival.name} is {days_away} days away! Set aside a special budget for "
                    f"travel, gifts and activities so the celebration doesn't strain your monthly plan."
                ),
                impact=Impact.MEDIUM,
                confidence=Confidence.HIGH,
                category=InsightCategory.BUDGETING,
                priority=6,
                data=InsightData(timeline=f"{days_away} days"),
                tags=frozenset({festival.tag, "festival", "thai-culture"}),
                is_personalized=True,
                action=action(f"Set {festival.name} Budget", f"create-budget:{festival.tag}"),
            ))

        donation = self._donation_insight(profile)
        if donation:
            drafts.append(donation)

        if (profile.age > self.settings.FAMILY_SUPPORT_MIN_AGE
                and profile.monthly_income > self.settings.FAMILY_SUPPORT_MIN_INCOME):
            drafts.append(InsightDraft(
                type=InsightType.CULTURAL,
                title="Planning for Family",
                message=(
                    "Caring for family is central in Thai culture. Consider a dedicated budget for "
                    "supporting your parents or future family expenses."
                ),
                impact=Impact.MEDIUM,
                confidence=Confidence.MEDIUM,
                category=InsightCategory.BUDGETING,
                priority=5,
                tags=frozenset({"family-support", "thai-culture", "planning"}),
                is_personalized=True,
                action=action("Plan Family Budget", "create-budget:family"),
            ))

        return drafts

    def upcoming_festival(self, today: date) -> Optional[Tuple[Festival, int]]:
        """Nearest configured festival strictly after today and inside the lookahead window"""
        candidates = []
        for festival in self.settings.FESTIVALS:
            days_away = (next_occurrence(festival, today) - today).days
            if 0 < days_away < self.settings.FESTIVAL_LOOKAHEAD_DAYS:
                candidates.append((days_away, festival.name, festival))
        if not candidates:
            return None
        days_away, _, festival = min(candidates, key=lambda c: (c[0], c[1]))
        return festival, days_away

    def _donation_insight(self, profile: Profile) -> Optional[InsightDraft]:
        donations = profile.spending_by_category.get(self.settings.DONATION_CATEGORY, 0)
        if donations <= 0 or not profile.has_positive_income:
            return None
        donation_pct = donations / profile.monthly_income * 100
        if donation_pct <= self.settings.DONATION_INCOME_RATIO * 100:
            return None
        return InsightDraft(
            type=InsightType.CULTURAL,
            title="Balanced Merit-Making",
            message=(
                f"You give {donation_pct:.1f}% of your income to merit-making, which shows a generous "
                f"heart. Remember to look after your own financial security as well."
            ),
            impact=Impact.LOW,
            confidence=Confidence.HIGH,
            category=InsightCategory.SPENDING,
            priority=4,
            data=InsightData(amount=donations, percentage=donation_pct),
            tags=frozenset({"merit-making", "donations", "thai-culture"}),
            is_personalized=True,
        )
