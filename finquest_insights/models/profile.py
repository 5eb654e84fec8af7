"""Domain models describing a user's financial state"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from finquest_insights.exceptions import InvalidProfileError

class RiskTolerance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class InvestmentExperience(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

class CulturalContext(str, Enum):
    THAI = "thai"
    INTERNATIONAL = "international"

class SpendingTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    VOLATILE = "volatile"

class SpendingFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    IRREGULAR = "irregular"

class MarketTrend(str, Enum):
    BULL = "bull"
    BEAR = "bear"
    SIDEWAYS = "sideways"

@dataclass(frozen=True)
class Goal:
    """A savings goal; progress may exceed 100%"""
    id: str
    target_amount: float
    current_amount: float
    deadline: date
    category: str

    @property
    def progress_pct(self) -> float:
        return self.current_amount / self.target_amount * 100

    @property
    def remaining(self) -> float:
        return self.target_amount - self.current_amount

@dataclass(frozen=True)
class PreviousMonthData:
    """Totals for the month before the one being analyzed"""
    spending: float
    income: float
    savings: float

@dataclass(frozen=True)
class Profile:
    """Snapshot of a user's finances, immutable for one generation pass"""
    net_worth: float
    monthly_income: float
    monthly_spending: float
    savings: float
    age: int
    location: str = ""
    goals: Tuple[Goal, ...] = ()
    spending_by_category: Dict[str, float] = field(default_factory=dict)
    previous_month_data: Optional[PreviousMonthData] = None
    risk_tolerance: RiskTolerance = RiskTolerance.MEDIUM
    investment_experience: InvestmentExperience = InvestmentExperience.BEGINNER
    cultural_context: CulturalContext = CulturalContext.INTERNATIONAL

    @property
    def has_positive_income(self) -> bool:
        return self.monthly_income > 0

    def top_spending_category(self) -> Optional[Tuple[str, float]]:
        """Highest-spending category; ties resolve to the first name alphabetically"""
        if not self.spending_by_category:
            return None
        return min(self.spending_by_category.items(), key=lambda item: (-item[1], item[0]))

@dataclass(frozen=True)
class Anomaly:
    """An unusual transaction inside a spending pattern"""
    date: datetime
    amount: float
    reason: Optional[str] = None

@dataclass(frozen=True)
class SpendingPattern:
    """Observed behaviour of one spending category"""
    category: str
    trend: SpendingTrend
    amount: float
    frequency: SpendingFrequency = SpendingFrequency.MONTHLY
    seasonality: bool = False
    anomalies: Tuple[Anomaly, ...] = ()

    def largest_anomaly(self) -> Optional[Anomaly]:
        if not self.anomalies:
            return None
        # max() keeps the first of equal amounts
        return max(self.anomalies, key=lambda anomaly: anomaly.amount)

@dataclass(frozen=True)
class EconomicIndicators:
    gdp_growth: float
    unemployment: float
    consumer_confidence: float

@dataclass(frozen=True)
class MarketContext:
    """Macro conditions, all rates in percent"""
    inflation: float
    interest_rates: float
    stock_market_trend: MarketTrend = MarketTrend.SIDEWAYS
    economic_indicators: Optional[EconomicIndicators] = None

@dataclass(frozen=True)
class AnalysisInput:
    """Everything an analyzer may read during one pass"""
    profile: Profile
    patterns: Tuple[SpendingPattern, ...]
    market: Optional[MarketContext]
    now: datetime

    @property
    def today(self) -> date:
        return self.now.date()

REQUIRED_NUMERIC_FIELDS: List[str] = [
    "net_worth",
    "monthly_income",
    "monthly_spending",
    "savings",
    "age",
]

def validate_profile(profile: Profile) -> None:
    """Raise InvalidProfileError when a required numeric field is missing or not a finite number"""
    invalid = []
    for name in REQUIRED_NUMERIC_FIELDS:
        value = getattr(profile, name, None)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            invalid.append(name)
    if invalid:
        raise InvalidProfileError(f"Profile has missing or non-numeric fields: {', '.join(invalid)}", invalid)
