"""Builds domain models from the dashboard data layer's JSON documents"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from finquest_insights.exceptions import InvalidProfileError
from finquest_insights.models.profile import (
    Anomaly, CulturalContext, EconomicIndicators, Goal, InvestmentExperience, MarketContext,
    MarketTrend, PreviousMonthData, Profile, RiskTolerance, SpendingFrequency, SpendingPattern,
    SpendingTrend
)

logger = logging.getLogger(__name__)

def _number(raw: Dict[str, Any], key: str, required: bool = True, default: float = 0.0) -> float:
    value = raw.get(key)
    if value is None:
        if required:
            raise InvalidProfileError(f"Missing required field: {key}", [key])
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidProfileError(f"Field {key} must be numeric, got {type(value).__name__}", [key])
    return value

def _parse_iso(value: Any) -> datetime:
    text = str(value)
    # fromisoformat only accepts a trailing 'Z' from Python 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)

def _date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return _parse_iso(value).date()

def _datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return _parse_iso(value)

def parse_goal(raw: Dict[str, Any]) -> Goal:
    return Goal(
        id=str(raw["id"]),
        target_amount=_number(raw, "target"),
        current_amount=_number(raw, "current"),
        deadline=_date(raw["deadline"]),
        category=raw.get("category", "General"),
    )

def parse_profile(raw: Dict[str, Any]) -> Profile:
    """Convert a camelCase profile document; raises InvalidProfileError on bad numerics"""
    previous = raw.get("previousMonthData")
    previous_month = None
    if previous:
        previous_month = PreviousMonthData(
            spending=_number(previous, "spending"),
            income=_number(previous, "income"),
            savings=_number(previous, "savings"),
        )

    spending_by_category = {}
    for category, amount in (raw.get("spendingByCategory") or {}).items():
        spending_by_category[category] = _number({category: amount}, category)

    try:
        goals = tuple(parse_goal(goal) for goal in raw.get("goals") or [])
    except (KeyError, ValueError) as e:
        raise InvalidProfileError(f"Invalid goal: {e}", ["goals"])

    return Profile(
        net_worth=_number(raw, "netWorth"),
        monthly_income=_number(raw, "monthlyIncome"),
        monthly_spending=_number(raw, "monthlySpending"),
        savings=_number(raw, "savings"),
        age=int(_number(raw, "age")),
        location=raw.get("location", ""),
        goals=goals,
        spending_by_category=spending_by_category,
        previous_month_data=previous_month,
        risk_tolerance=RiskTolerance(raw.get("riskTolerance", "medium")),
        investment_experience=InvestmentExperience(raw.get("investmentExperience", "beginner")),
        cultural_context=CulturalContext(raw.get("culturalContext", "international")),
    )

def parse_pattern(raw: Dict[str, Any]) -> SpendingPattern:
    return SpendingPattern(
        category=raw["category"],
        trend=SpendingTrend(raw["trend"]),
        amount=float(raw["amount"]),
        frequency=SpendingFrequency(raw.get("frequency", "monthly")),
        seasonality=bool(raw.get("seasonality", False)),
        anomalies=tuple(
            Anomaly(date=_datetime(a["date"]), amount=float(a["amount"]), reason=a.get("reason"))
            for a in raw.get("anomalies") or []
        ),
    )

def parse_patterns(raw: List[Dict[str, Any]]) -> List[SpendingPattern]:
    return [parse_pattern(pattern) for pattern in raw]

def parse_market(raw: Optional[Dict[str, Any]]) -> Optional[MarketContext]:
    if not raw:
        return None
    indicators = raw.get("economicIndicators")
    return MarketContext(
        inflation=float(raw["inflation"]),
        interest_rates=float(raw["interestRates"]),
        stock_market_trend=MarketTrend(raw.get("stockMarketTrend", "sideways")),
        economic_indicators=EconomicIndicators(
            gdp_growth=float(indicators["gdpGrowth"]),
            unemployment=float(indicators["unemployment"]),
            consumer_confidence=float(indicators["consumerConfidence"]),
        ) if indicators else None,
    )
