"""Main insight generation logic"""
import itertools
import logging
import threading
from typing import List, Optional, Sequence

from finquest_insights.aggregator import AggregationResult, InsightAggregator
from finquest_insights.analyzers.base import Analyzer
from finquest_insights.analyzers.registry import default_analyzers
from finquest_insights.analyzers.trend import TrendAnalyzer
from finquest_insights.config import Settings
from finquest_insights.exceptions import InvalidProfileError, StaleDataWarning
from finquest_insights.identity import Clock, IdGenerator, system_clock
from finquest_insights.models.profile import (
    AnalysisInput, MarketContext, Profile, SpendingPattern, validate_profile
)
from finquest_insights.models.result import GenerationResult
from finquest_insights.ranking import select_top

logger = logging.getLogger(__name__)

class InsightEngine:
    """Runs generation passes over a profile and returns capped, ordered insights"""

    def __init__(
            self,
            settings: Settings,
            analyzers: Optional[Sequence[Analyzer]] = None,
            id_generator: IdGenerator = None,
            clock: Clock = system_clock
    ):
        """Initialize the engine with settings, an analyzer set and injectable id/clock sources"""
        self.settings = settings
        self.clock = clock
        self.analyzers: List[Analyzer] = list(analyzers) if analyzers is not None else default_analyzers(settings)
        self.aggregator = InsightAggregator(settings, id_generator=id_generator, clock=clock)
        self._generations = itertools.count(1)
        self._generation_lock = threading.Lock()

    def next_generation_id(self) -> int:
        with self._generation_lock:
            return next(self._generations)

    def prepare(
            self,
            profile: Profile,
            patterns: Sequence[SpendingPattern] = (),
            market: Optional[MarketContext] = None
    ) -> AnalysisInput:
        """Validate the profile and freeze the pass input"""
        validate_profile(profile)
        return AnalysisInput(profile=profile, patterns=tuple(patterns), market=market, now=self.clock())

    def generate(
            self,
            profile: Profile,
            patterns: Sequence[SpendingPattern] = (),
            market: Optional[MarketContext] = None,
            generation_id: Optional[int] = None
    ) -> GenerationResult:
        """Run every analyzer sequentially and return the capped result"""
        generation_id = generation_id or self.next_generation_id()
        try:
            data = self.prepare(profile, patterns, market)
            aggregation = self.aggregator.collect(self.analyzers, data)
            return self._finalize(generation_id, data, aggregation)
        except InvalidProfileError as e:
            logger.error(f"Generation {generation_id} aborted: {e}")
            return self._empty(generation_id)
        except Exception as e:
            logger.error(f"Unexpected error in generation {generation_id}: {e}")
            return self._empty(generation_id)

    async def generate_async(
            self,
            profile: Profile,
            patterns: Sequence[SpendingPattern] = (),
            market: Optional[MarketContext] = None,
            generation_id: Optional[int] = None
    ) -> GenerationResult:
        """Same as generate(), with analyzers running as concurrent tasks"""
        generation_id = generation_id or self.next_generation_id()
        try:
            data = self.prepare(profile, patterns, market)
            aggregation = await self.aggregator.collect_async(self.analyzers, data)
            return self._finalize(generation_id, data, aggregation)
        except InvalidProfileError as e:
            logger.error(f"Generation {generation_id} aborted: {e}")
            return self._empty(generation_id)
        except Exception as e:
            logger.error(f"Unexpected error in generation {generation_id}: {e}")
            return self._empty(generation_id)

    def _finalize(self, generation_id: int, data: AnalysisInput, aggregation: AggregationResult) -> GenerationResult:
        insights = select_top(aggregation.insights, self.settings.MAX_INSIGHTS)

        warnings = []
        # Only the trend analyzer compares against the previous month
        if data.profile.previous_month_data is None and TrendAnalyzer.name in aggregation.completed:
            warning = StaleDataWarning("previous month data missing; month-over-month comparisons skipped")
            logger.debug(f"Generation {generation_id}: {warning}")
            warnings.append(str(warning))

        logger.info(
            f"Generation {generation_id} complete: {len(insights)} of {len(aggregation.insights)} insights kept, "
            f"{len(aggregation.failures)} analyzer failures, {len(aggregation.skipped)} skipped"
        )
        return GenerationResult(
            generation_id=generation_id,
            generated_at=data.now,
            insights=insights,
            total_candidates=len(aggregation.insights),
            failures=aggregation.failures,
            skipped=aggregation.skipped,
            warnings=warnings,
        )

    def _empty(self, generation_id: int) -> GenerationResult:
        return GenerationResult(generation_id=generation_id, generated_at=self.clock())
