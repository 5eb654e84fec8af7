# tests/test_aggregator.py
import asyncio
from datetime import timedelta

import pytest

from conftest import make_input, make_profile
from finquest_insights.aggregator import AnalyzerOutcome, InsightAggregator
from finquest_insights.analyzers.base import Analyzer, action
from finquest_insights.analyzers.registry import default_analyzers
from finquest_insights.analyzers.savings import SavingsOpportunityAnalyzer
from finquest_insights.identity import SequentialIdGenerator
from finquest_insights.models.insights import (
    Confidence, CulturalInsight, Impact, InsightCategory, InsightDraft, InsightType
)
from finquest_insights.models.profile import CulturalContext


def draft(insight_type=InsightType.TIP, priority=5, **kwargs):
    return InsightDraft(
        type=insight_type,
        title=kwargs.pop("title", "Title"),
        message="Message",
        impact=Impact.MEDIUM,
        confidence=Confidence.MEDIUM,
        category=InsightCategory.GENERAL,
        priority=priority,
        **kwargs,
    )


class FixedAnalyzer(Analyzer):
    name = "fixed"

    def __init__(self, settings, drafts):
        super().__init__(settings)
        self.drafts = drafts

    def analyze(self, data):
        return list(self.drafts)


class BrokenAnalyzer(Analyzer):
    name = "broken"

    def analyze(self, data):
        raise ZeroDivisionError("division by zero")


class IncomeAnalyzer(FixedAnalyzer):
    name = "income"
    requires_positive_income = True


@pytest.fixture
def aggregator(settings, id_generator, clock):
    return InsightAggregator(settings, id_generator=id_generator, clock=clock)


class TestBuildInsight:

    def test_assigns_id_and_created_at(self, aggregator, fixed_now):
        insight = aggregator.build_insight(draft(), fixed_now)

        millis = int(fixed_now.timestamp() * 1000)
        assert insight.id == f"insight-1-{millis}"
        assert insight.created_at == fixed_now
        assert insight.expires_at is None
        assert insight.type == "tip"

    def test_cultural_insight_expires_after_thirty_days(self, aggregator, fixed_now):
        insight = aggregator.build_insight(draft(InsightType.CULTURAL), fixed_now)

        assert isinstance(insight, CulturalInsight)
        assert insight.expires_at == fixed_now + timedelta(days=30)

    def test_personalized_defaults_to_false(self, aggregator, fixed_now):
        assert aggregator.build_insight(draft(), fixed_now).is_personalized is False

    def test_actionable_follows_action(self, aggregator, fixed_now):
        with_action = aggregator.build_insight(draft(action=action("Go", "go")), fixed_now)
        without_action = aggregator.build_insight(draft(), fixed_now)

        assert with_action.actionable is True
        assert without_action.actionable is False


class TestCollect:

    def test_ids_are_unique_and_in_analyzer_order(self, aggregator, settings):
        analyzers = [
            FixedAnalyzer(settings, [draft(title="a"), draft(title="b")]),
            FixedAnalyzer(settings, [draft(title="c")]),
        ]
        result = aggregator.collect(analyzers, make_input())

        assert [i.title for i in result.insights] == ["a", "b", "c"]
        assert [i.id.split("-")[1] for i in result.insights] == ["1", "2", "3"]

    def test_failing_analyzer_does_not_affect_others(self, aggregator, settings):
        analyzers = [BrokenAnalyzer(settings), FixedAnalyzer(settings, [draft()])]
        result = aggregator.collect(analyzers, make_input())

        assert len(result.insights) == 1
        assert len(result.failures) == 1
        failure = result.failures[0]
        assert failure.analyzer == "broken"
        assert failure.error_type == "ZeroDivisionError"
        assert "division by zero" in failure.message

    def test_out_of_range_priority_is_reported_as_failure(self, aggregator, settings):
        analyzers = [
            FixedAnalyzer(settings, [draft(priority=11)]),
            IncomeAnalyzer(settings, [draft(priority=3)]),
        ]
        result = aggregator.collect(analyzers, make_input())

        assert [i.priority for i in result.insights] == [3]
        assert result.failures[0].analyzer == "fixed"
        assert result.failures[0].error_type == "ValidationError"

    def test_income_analyzers_skipped_for_zero_income(self, aggregator, settings):
        analyzers = [IncomeAnalyzer(settings, [draft()]), FixedAnalyzer(settings, [draft()])]
        result = aggregator.collect(analyzers, make_input(profile=make_profile(monthly_income=0)))

        assert len(result.insights) == 1
        assert [s.analyzer for s in result.skipped] == ["income"]
        assert result.failures == []

    def test_savings_with_zero_spending_does_not_fail(self, aggregator, settings):
        profile = make_profile(savings=-5_000, monthly_spending=0)
        result = aggregator.collect([SavingsOpportunityAnalyzer(settings)], make_input(profile=profile))

        assert result.failures == []
        assert result.completed == ["savings"]
        assert [i.type for i in result.insights] == ["opportunity"]

    def test_run_analyzer_reports_skip_reason(self, aggregator, settings):
        outcome = aggregator.run_analyzer(
            IncomeAnalyzer(settings, [draft()]), make_input(profile=make_profile(monthly_income=-10))
        )
        assert isinstance(outcome, AnalyzerOutcome)
        assert outcome.skipped_reason
        assert outcome.drafts == []


class TestCollectAsync:

    def test_async_matches_sequential(self, settings, clock):
        profile = make_profile(
            cultural_context=CulturalContext.THAI,
            spending_by_category={"Subscriptions": 5_000, "Housing": 25_000},
        )
        data = make_input(profile=profile)
        analyzers = default_analyzers(settings)

        sequential = InsightAggregator(settings, SequentialIdGenerator(clock), clock).collect(analyzers, data)
        concurrent = asyncio.run(
            InsightAggregator(settings, SequentialIdGenerator(clock), clock).collect_async(analyzers, data)
        )

        assert [i.id for i in concurrent.insights] == [i.id for i in sequential.insights]
        assert [i.title for i in concurrent.insights] == [i.title for i in sequential.insights]

    def test_async_isolates_failures(self, aggregator, settings):
        analyzers = [FixedAnalyzer(settings, [draft()]), BrokenAnalyzer(settings)]
        result = asyncio.run(aggregator.collect_async(analyzers, make_input()))

        assert len(result.insights) == 1
        assert [f.analyzer for f in result.failures] == ["broken"]
