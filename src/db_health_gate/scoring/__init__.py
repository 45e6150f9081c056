"""Pure scoring engine: risk, recommendations, estimates and baseline trends."""

from .aggregator import ScoreAggregator, count_findings
from .baseline import BaselineComparator
from .estimates import CostTimeEstimator
from .recommendations import RecommendationRanker
from .risk import RiskClassifier

__all__ = [
    "BaselineComparator",
    "CostTimeEstimator",
    "RecommendationRanker",
    "RiskClassifier",
    "ScoreAggregator",
    "count_findings",
]
