"""Read-time expiry checks"""
from datetime import datetime, timedelta
from typing import Iterable, List

from finquest_insights.models.insights import Insight

def is_expired(insight: Insight, now: datetime) -> bool:
    return insight.expires_at is not None and insight.expires_at < now

def is_expiring_soon(insight: Insight, now: datetime, window: timedelta) -> bool:
    """Still valid but due to expire within ``window``"""
    if insight.expires_at is None or is_expired(insight, now):
        return False
    return insight.expires_at <= now + window

def active_insights(insights: Iterable[Insight], now: datetime) -> List[Insight]:
    """Drop expired insights; same input and ``now`` always give the same output"""
    return [insight for insight in insights if not is_expired(insight, now)]
