"""Default analyzer set"""
from typing import List

from finquest_insights.analyzers.anomaly import AnomalyDetector
from finquest_insights.analyzers.base import Analyzer
from finquest_insights.analyzers.cultural import CulturalContextAnalyzer
from finquest_insights.analyzers.forecast import PredictiveForecastAnalyzer
from finquest_insights.analyzers.goals import GoalProgressAnalyzer
from finquest_insights.analyzers.optimization import OptimizationAnalyzer
from finquest_insights.analyzers.risk import RiskAnalyzer
from finquest_insights.analyzers.savings import SavingsOpportunityAnalyzer
from finquest_insights.analyzers.trend import TrendAnalyzer
from finquest_insights.config import Settings

ANALYZER_CLASSES = (
    TrendAnalyzer,
    SavingsOpportunityAnalyzer,
    GoalProgressAnalyzer,
    PredictiveForecastAnalyzer,
    CulturalContextAnalyzer,
    RiskAnalyzer,
    OptimizationAnalyzer,
    AnomalyDetector,
)

def default_analyzers(settings: Settings) -> List[Analyzer]:
    """One instance of every built-in analyzer sharing the given settings"""
    return [analyzer_cls(settings) for analyzer_cls in ANALYZER_CLASSES]
