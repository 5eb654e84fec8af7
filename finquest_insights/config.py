"""Engine configuration and environment settings"""
import calendar
from typing import List, Tuple
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Festival(BaseModel):
    """A fixed-date festival used by the cultural analyzer"""
    name: str = Field(..., description="Festival display name")
    month: int = Field(..., ge=1, le=12, description="Calendar month")
    day: int = Field(..., ge=1, le=31, description="Day of month")
    tag: str = Field(..., description="Tag attached to insights about this festival")

    @model_validator(mode="after")
    def check_day_in_month(self) -> "Festival":
        # Leap year reference so Feb 29 is accepted
        _, last_day = calendar.monthrange(2000, self.month)
        if self.day > last_day:
            raise ValueError(f"{self.name}: month {self.month} has no day {self.day}")
        return self

class Settings(BaseSettings):
    """Engine settings loaded from environment variables"""
    # Generation pass
    MAX_INSIGHTS: int = Field(20, description="Global top-N cap per generation pass")
    CULTURAL_EXPIRY_DAYS: int = Field(30, description="Validity window of cultural insights")
    EXPIRING_WINDOW_HOURS: int = Field(24, description="Window used by the 'expiring' filter")
    DEFAULT_MAX_VISIBLE: int = Field(6, description="Visible insights per view before 'show more'")
    REFRESH_INTERVAL_SECONDS: float = Field(30.0, description="Auto-refresh interval")

    # Trend analyzer
    TREND_WARNING_INCOME_RATIO: float = 0.10
    TREND_HIGH_IMPACT_INCOME_RATIO: float = 0.20
    VOLATILE_MIN_ANOMALIES: int = Field(2, description="Volatile patterns need more anomalies than this")
    MONTHLY_CHANGE_THRESHOLD_PCT: float = 15.0
    MONTHLY_CHANGE_HIGH_IMPACT_PCT: float = 25.0

    # Savings-opportunity analyzer
    SAVINGS_RATE_TARGET_PCT: float = 20.0
    EMERGENCY_FUND_MONTHS: int = 6
    TOP_CATEGORY_INCOME_RATIO: float = 0.25
    TOP_CATEGORY_CUT_RATIO: float = 0.10

    # Goal-progress analyzer
    GOAL_BEHIND_PROGRESS_PCT: float = 50.0
    GOAL_BEHIND_MAX_MONTHS: float = 12.0
    GOAL_NEAR_COMPLETE_PCT: float = 75.0
    DAYS_PER_MONTH: int = 30

    # Predictive-forecast analyzer
    INFLATION_ALERT_PCT: float = 3.0
    HIGH_YIELD_RATE_PCT: float = 4.0
    HIGH_YIELD_MIN_SAVINGS: float = 100_000.0
    BASELINE_SAVINGS_RATE_PCT: float = 1.0

    # Cultural-context analyzer
    FESTIVAL_LOOKAHEAD_DAYS: int = 60
    FESTIVALS: List[Festival] = Field(
        default_factory=lambda: [
            Festival(name="Songkran", month=4, day=13, tag="songkran"),
            Festival(name="Mother's Day", month=8, day=12, tag="mothers-day"),
            Festival(name="Father's Day", month=12, day=5, tag="fathers-day"),
        ],
        description="Fixed-date festivals checked for Thai profiles",
    )
    DONATION_CATEGORY: str = "Donations"
    DONATION_INCOME_RATIO: float = 0.05
    FAMILY_SUPPORT_MIN_AGE: int = 25
    FAMILY_SUPPORT_MIN_INCOME: float = 30_000.0

    # Risk analyzer
    # Debt payments are not part of the profile; they are estimated from spending.
    ASSUMED_DEBT_SPENDING_RATIO: float = 0.30
    DEBT_TO_INCOME_LIMIT_PCT: float = 30.0
    RETIREMENT_CHECK_MIN_AGE: int = 30
    RETIREMENT_INCOME_MONTHS: int = 12
    RETIREMENT_AGE_DIVISOR: float = 2.0
    EXPENSE_RATIO_LIMIT_PCT: float = 80.0

    # Optimization analyzer
    SUBSCRIPTION_CATEGORIES: Tuple[str, ...] = ("Subscriptions", "Subscriptions & Memberships")
    SUBSCRIPTION_INCOME_RATIO: float = 0.05
    CASHBACK_RATE: float = 0.015

    # Anomaly detector
    ANOMALY_INCOME_RATIO: float = 0.10

    # Input/Output directories with defaults
    INPUT_DIR: str = Field("/input", description="Directory containing input files")
    OUTPUT_DIR: str = Field("/output", description="Directory for output files")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True
    )

settings = Settings()
