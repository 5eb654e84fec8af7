"""Shared analyzer contract"""
import logging
from typing import List

from finquest_insights.config import Settings
from finquest_insights.models.insights import InsightAction, InsightDraft
from finquest_insights.models.profile import AnalysisInput

logger = logging.getLogger(__name__)

class Analyzer:
    """
    Rule module that inspects one pass's input and returns insight drafts.

    Subclasses must not mutate the input or perform I/O; they may run
    concurrently with every other analyzer.
    """
    name: str = "analyzer"
    # Ratio analyzers divide by monthly income and are skipped when it is not positive
    requires_positive_income: bool = False

    def __init__(self, settings: Settings):
        self.settings = settings

    def analyze(self, data: AnalysisInput) -> List[InsightDraft]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

def format_amount(amount: float) -> str:
    """Render a baht amount the way the dashboard copy does"""
    return f"฿{amount:,.0f}"

def action(label: str, callback_id: str) -> InsightAction:
    return InsightAction(label=label, callback_id=callback_id)

def category_tag(category: str) -> str:
    return category.strip().lower().replace(" ", "-")
