"""Runs analyzers and merges their drafts into identified insights"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from pydantic import ValidationError

from finquest_insights.analyzers.base import Analyzer
from finquest_insights.config import Settings
from finquest_insights.exceptions import AnalyzerError
from finquest_insights.identity import Clock, IdGenerator, SequentialIdGenerator, system_clock
from finquest_insights.models.insights import Insight, InsightAdapter, InsightDraft, InsightType
from finquest_insights.models.profile import AnalysisInput
from finquest_insights.models.result import AnalyzerFailure, SkippedAnalyzer

logger = logging.getLogger(__name__)

@dataclass
class AnalyzerOutcome:
    """What one analyzer produced during a pass"""
    analyzer: str
    drafts: List[InsightDraft] = field(default_factory=list)
    error: Optional[AnalyzerError] = None
    skipped_reason: Optional[str] = None

@dataclass
class AggregationResult:
    """Merged candidates in analyzer order, plus what went wrong"""
    insights: List[Insight]
    failures: List[AnalyzerFailure]
    skipped: List[SkippedAnalyzer]
    completed: List[str] = field(default_factory=list)

class InsightAggregator:
    """Fans a pass out to every analyzer and joins the results.

    A failing analyzer only loses its own drafts. Ids are assigned after the
    join, in analyzer order, so concurrent and sequential passes number their
    insights the same way.
    """

    def __init__(self, settings: Settings, id_generator: IdGenerator = None, clock: Clock = system_clock):
        self.settings = settings
        self.clock = clock
        self.id_generator = id_generator or SequentialIdGenerator(clock)

    def run_analyzer(self, analyzer: Analyzer, data: AnalysisInput) -> AnalyzerOutcome:
        """Run one analyzer, capturing eligibility skips and failures"""
        if analyzer.requires_positive_income and not data.profile.has_positive_income:
            reason = "monthly income is not positive"
            logger.info(f"Skipping analyzer '{analyzer.name}': {reason}")
            return AnalyzerOutcome(analyzer=analyzer.name, skipped_reason=reason)

        try:
            drafts = list(analyzer.analyze(data))
        except Exception as e:
            logger.error(f"Analyzer '{analyzer.name}' failed: {e}")
            return AnalyzerOutcome(analyzer=analyzer.name, error=AnalyzerError(analyzer.name, e))

        logger.debug(f"Analyzer '{analyzer.name}' produced {len(drafts)} drafts")
        return AnalyzerOutcome(analyzer=analyzer.name, drafts=drafts)

    def collect(self, analyzers: Sequence[Analyzer], data: AnalysisInput) -> AggregationResult:
        """Run analyzers one after another and merge"""
        outcomes = [self.run_analyzer(analyzer, data) for analyzer in analyzers]
        return self.merge(outcomes, data.now)

    async def collect_async(self, analyzers: Sequence[Analyzer], data: AnalysisInput) -> AggregationResult:
        """Run analyzers as concurrent tasks and merge once all of them finish"""
        outcomes = await asyncio.gather(
            *[asyncio.to_thread(self.run_analyzer, analyzer, data) for analyzer in analyzers]
        )
        return self.merge(list(outcomes), data.now)

    def merge(self, outcomes: Sequence[AnalyzerOutcome], created_at: datetime) -> AggregationResult:
        insights = []
        failures = []
        skipped = []
        completed = []

        for outcome in outcomes:
            if outcome.skipped_reason:
                skipped.append(SkippedAnalyzer(analyzer=outcome.analyzer, reason=outcome.skipped_reason))
                continue
            if outcome.error:
                failures.append(self._failure(outcome.error))
                continue

            try:
                built = [self.build_insight(draft, created_at) for draft in outcome.drafts]
            except ValidationError as e:
                logger.error(f"Analyzer '{outcome.analyzer}' produced an invalid insight: {e}")
                failures.append(self._failure(AnalyzerError(outcome.analyzer, e)))
                continue
            insights.extend(built)
            completed.append(outcome.analyzer)

        return AggregationResult(insights=insights, failures=failures, skipped=skipped, completed=completed)

    def build_insight(self, draft: InsightDraft, created_at: datetime) -> Insight:
        """Give a draft its id, creation time and, for cultural insights, an expiry"""
        expires_at = None
        if draft.type == InsightType.CULTURAL:
            expires_at = created_at + timedelta(days=self.settings.CULTURAL_EXPIRY_DAYS)

        return InsightAdapter.validate_python({
            "id": self.id_generator(),
            "type": draft.type.value,
            "title": draft.title,
            "message": draft.message,
            "impact": draft.impact,
            "confidence": draft.confidence,
            "category": draft.category,
            "priority": draft.priority,
            "data": draft.data,
            "tags": draft.tags,
            "created_at": created_at,
            "expires_at": expires_at,
            "is_personalized": draft.is_personalized,
            "action": draft.action,
        })

    @staticmethod
    def _failure(error: AnalyzerError) -> AnalyzerFailure:
        return AnalyzerFailure(
            analyzer=error.analyzer,
            error_type=type(error.cause).__name__,
            message=str(error.cause),
        )
