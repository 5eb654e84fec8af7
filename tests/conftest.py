# tests/conftest.py
from datetime import date, datetime, timedelta, timezone

import pytest

from finquest_insights.config import Settings
from finquest_insights.identity import FixedClock, SequentialIdGenerator
from finquest_insights.models.insights import InsightAdapter
from finquest_insights.models.profile import AnalysisInput, Profile


def make_profile(**overrides) -> Profile:
    """Profile from the dashboard demo user; override any field."""
    values = dict(
        net_worth=500_000,
        monthly_income=75_000,
        monthly_spending=45_000,
        savings=180_000,
        age=32,
        location="Bangkok",
    )
    values.update(overrides)
    return Profile(**values)


def make_input(profile=None, patterns=(), market=None, now=None) -> AnalysisInput:
    return AnalysisInput(
        profile=profile or make_profile(),
        patterns=tuple(patterns),
        market=market,
        now=now or datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc),
    )


def make_insight(
        insight_id,
        priority=5,
        created_at=None,
        type="tip",
        impact="medium",
        confidence="medium",
        category="general",
        expires_at=None,
        is_personalized=False,
        action=None,
):
    """Build a fully-formed insight without running analyzers."""
    created_at = created_at or datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    if type == "cultural" and expires_at is None:
        expires_at = created_at + timedelta(days=30)
    return InsightAdapter.validate_python({
        "id": insight_id,
        "type": type,
        "title": f"Insight {insight_id}",
        "message": "message",
        "impact": impact,
        "confidence": confidence,
        "category": category,
        "priority": priority,
        "created_at": created_at,
        "expires_at": expires_at,
        "is_personalized": is_personalized,
        "action": action,
    })


@pytest.fixture
def fixed_now():
    """Fixed timestamp for deterministic testing (43 days before Songkran)."""
    return datetime(2025, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    return FixedClock(fixed_now)


@pytest.fixture
def id_generator(clock):
    return SequentialIdGenerator(clock)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def today(fixed_now):
    return fixed_now.date()


@pytest.fixture
def next_year(today):
    return date(today.year + 1, today.month, today.day)
