"""Consumer-side view over a generation result"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from finquest_insights.config import Settings
from finquest_insights.identity import Clock, system_clock
from finquest_insights.models.insights import Insight
from finquest_insights.models.result import GenerationResult
from finquest_insights.ranking import (
    FilterSpec, InsightPage, SortOption, apply_view, filter_counts, paginate
)
from finquest_insights.scoring import PriorityDistribution, UrgencyBreakdown, UrgencyScorer

logger = logging.getLogger(__name__)

class InsightFeed:
    """
    Active insight set held by a presentation layer.

    The engine keeps no state between passes; dismissals live here and are
    lost with the feed unless the host persists ``dismissed_ids`` itself.
    """

    def __init__(
            self,
            insights: Iterable[Insight],
            settings: Settings,
            clock: Clock = system_clock,
            dismissed: Iterable[str] = ()
    ):
        self.settings = settings
        self.clock = clock
        self.scorer = UrgencyScorer()
        self._insights: List[Insight] = list(insights)
        self._dismissed = set(dismissed)

    @classmethod
    def from_result(cls, result: GenerationResult, settings: Settings, clock: Clock = system_clock) -> "InsightFeed":
        return cls(result.insights, settings, clock)

    @property
    def dismissed_ids(self) -> FrozenSet[str]:
        return frozenset(self._dismissed)

    @property
    def expiring_window(self) -> timedelta:
        return timedelta(hours=self.settings.EXPIRING_WINDOW_HOURS)

    def replace(self, result: GenerationResult) -> None:
        """Swap in a newer pass; dismissed ids are kept and hide any insight that reuses them"""
        self._insights = list(result.insights)

    def dismiss(self, insight_id: str) -> bool:
        """Remove an insight from the active set; False if it was unknown or already dismissed"""
        if insight_id in self._dismissed or not any(i.id == insight_id for i in self._insights):
            return False
        self._dismissed.add(insight_id)
        logger.debug(f"Dismissed insight {insight_id}")
        return True

    def active(self) -> List[Insight]:
        return [i for i in self._insights if i.id not in self._dismissed]

    def view(
            self,
            spec: FilterSpec = FilterSpec(),
            sort: SortOption = SortOption.PRIORITY,
            max_visible: Optional[int] = None,
            show_all: bool = False,
            now: Optional[datetime] = None
    ) -> InsightPage:
        """Filtered, sorted and capped slice of the active set"""
        now = now or self.clock()
        max_visible = self.settings.DEFAULT_MAX_VISIBLE if max_visible is None else max_visible
        ordered = apply_view(self.active(), spec, sort, now, self.expiring_window)
        return paginate(ordered, max_visible, show_all)

    def top(self, count: int = 3, now: Optional[datetime] = None) -> List[Insight]:
        """Compact 'top N' view by priority"""
        return self.view(max_visible=count, now=now).items

    def counts(self, now: Optional[datetime] = None) -> Dict[str, int]:
        return filter_counts(self.active(), now or self.clock(), self.expiring_window)

    def priority_stats(self) -> PriorityDistribution:
        return self.scorer.priority_distribution(self.active())

    def urgency(self, insight: Insight) -> UrgencyBreakdown:
        return self.scorer.score(insight)

    def to_payload(self, page: InsightPage) -> Dict[str, Any]:
        """JSON-ready page for the dashboard, with urgency styling attached"""
        return {
            "items": [
                {**insight.model_dump(mode="json"), "urgency": self.urgency(insight).level.value}
                for insight in page.items
            ],
            "total": page.total,
            "has_more": page.has_more,
        }
