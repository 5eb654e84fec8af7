"""Sorting, filtering and selection of insights for presentation

Everything here is a pure function of its arguments. Expired insights are
dropped before any filter runs, and every sort ends in the same tie-break
chain (priority desc, created_at desc, id asc) so the resulting order is total.
"""
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from finquest_insights.expiration import active_insights, is_expiring_soon
from finquest_insights.models.insights import Insight, InsightCategory, InsightType
from finquest_insights.scoring import CONFIDENCE_SCORES, IMPACT_SCORES

DEFAULT_EXPIRING_WINDOW = timedelta(hours=24)

class SortOption(str, Enum):
    PRIORITY = "priority"
    DATE = "date"
    IMPACT = "impact"
    CONFIDENCE = "confidence"
    CATEGORY = "category"

def id_sort_key(insight_id: str) -> Tuple[Union[str, int], ...]:
    """Split digit runs out of an id so 'insight-2-…' sorts before 'insight-10-…'"""
    # re.split with a capture group puts text at even positions and digits at odd ones
    parts = re.split(r"(\d+)", insight_id)
    return tuple(int(part) if index % 2 else part for index, part in enumerate(parts))

def _tie_break(insight: Insight) -> tuple:
    return -insight.priority, -insight.created_at.timestamp(), id_sort_key(insight.id)

SORT_KEYS: Dict[SortOption, Callable[[Insight], tuple]] = {
    SortOption.PRIORITY: _tie_break,
    SortOption.DATE: lambda i: (-i.created_at.timestamp(),) + _tie_break(i),
    SortOption.IMPACT: lambda i: (-IMPACT_SCORES[i.impact],) + _tie_break(i),
    SortOption.CONFIDENCE: lambda i: (-CONFIDENCE_SCORES[i.confidence],) + _tie_break(i),
    SortOption.CATEGORY: lambda i: (i.category.value,) + _tie_break(i),
}

@dataclass(frozen=True)
class FilterSpec:
    """Conditions an insight must all satisfy; an empty spec matches everything"""
    category: Optional[InsightCategory] = None
    insight_type: Optional[InsightType] = None
    expiring: bool = False
    personalized: bool = False

    @classmethod
    def from_option(cls, option: str) -> "FilterSpec":
        """Build a spec from a dashboard filter option: 'all', 'expiring', 'personalized' or a type"""
        if option == "all":
            return cls()
        if option == "expiring":
            return cls(expiring=True)
        if option == "personalized":
            return cls(personalized=True)
        try:
            return cls(insight_type=InsightType(option))
        except ValueError:
            raise ValueError(f"Unsupported filter option: {option}") from None

    def matches(self, insight: Insight, now: datetime, expiring_window: timedelta = DEFAULT_EXPIRING_WINDOW) -> bool:
        if self.category is not None and insight.category != self.category:
            return False
        if self.insight_type is not None and insight.type != self.insight_type:
            return False
        if self.expiring and not is_expiring_soon(insight, now, expiring_window):
            return False
        if self.personalized and not insight.is_personalized:
            return False
        return True

def filter_insights(
        insights: Sequence[Insight],
        spec: FilterSpec,
        now: datetime,
        expiring_window: timedelta = DEFAULT_EXPIRING_WINDOW
) -> List[Insight]:
    return [i for i in active_insights(insights, now) if spec.matches(i, now, expiring_window)]

def sort_insights(insights: Sequence[Insight], sort: SortOption = SortOption.PRIORITY) -> List[Insight]:
    return sorted(insights, key=SORT_KEYS[SortOption(sort)])

def select_top(insights: Sequence[Insight], limit: int) -> List[Insight]:
    """Keep the ``limit`` highest-priority insights"""
    return sort_insights(insights, SortOption.PRIORITY)[:max(limit, 0)]

def apply_view(
        insights: Sequence[Insight],
        spec: FilterSpec,
        sort: SortOption,
        now: datetime,
        expiring_window: timedelta = DEFAULT_EXPIRING_WINDOW
) -> List[Insight]:
    """Filter then sort; reusable by every presentation view"""
    return sort_insights(filter_insights(insights, spec, now, expiring_window), sort)

def filter_counts(
        insights: Sequence[Insight],
        now: datetime,
        expiring_window: timedelta = DEFAULT_EXPIRING_WINDOW
) -> Dict[str, int]:
    """Number of live insights each dashboard filter option would show"""
    live = active_insights(insights, now)
    counts = {
        "all": len(live),
        "expiring": sum(1 for i in live if is_expiring_soon(i, now, expiring_window)),
        "personalized": sum(1 for i in live if i.is_personalized),
    }
    for insight in live:
        counts[insight.type] = counts.get(insight.type, 0) + 1
    return counts

@dataclass(frozen=True)
class InsightPage:
    """The visible slice of a view"""
    items: List[Insight]
    total: int
    has_more: bool

    @property
    def hidden_count(self) -> int:
        return self.total - len(self.items)

def paginate(insights: Sequence[Insight], max_visible: int, show_all: bool = False) -> InsightPage:
    """Cap a filtered/sorted view to ``max_visible`` unless expanded with 'show more'"""
    has_more = len(insights) > max_visible
    items = list(insights) if show_all else list(insights[:max_visible])
    return InsightPage(items=items, total=len(insights), has_more=has_more)
