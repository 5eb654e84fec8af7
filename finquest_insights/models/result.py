"""GenerationResult model definition"""
from datetime import datetime
from typing import List

from pydantic import BaseModel

from finquest_insights.models.insights import Insight

class AnalyzerFailure(BaseModel):
    """An analyzer that raised during a pass; its drafts were discarded"""
    analyzer: str
    error_type: str
    message: str

class SkippedAnalyzer(BaseModel):
    """An analyzer the profile was ineligible for"""
    analyzer: str
    reason: str

class GenerationResult(BaseModel):
    """
    Represents the outcome of one generation pass.
    Only ``insights`` is meant for the presentation layer; the rest is diagnostics.

    Attributes:
        generation_id: Monotonic pass number, used to discard superseded passes
        generated_at: Clock reading at the start of the pass
        insights: Insights ordered by priority and capped to the global top-N
        total_candidates: Number of insights produced before the cap
        failures: Analyzers that raised, with the error they raised
        skipped: Analyzers skipped because the profile was ineligible
        warnings: Non-fatal data problems, such as missing history
    """
    generation_id: int
    generated_at: datetime
    insights: List[Insight] = []
    total_candidates: int = 0
    failures: List[AnalyzerFailure] = []
    skipped: List[SkippedAnalyzer] = []
    warnings: List[str] = []

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)
