"""Exercise intelligence — activity analysis and recommendation ranking."""

from app.intelligence.activity import ActivityAnalyzer, AnalyzerConfig, analyze
from app.intelligence.filters import filter_recommendations
from app.intelligence.ranking import RankerConfig, RecommendationRanker, recommend

__all__ = [
    "ActivityAnalyzer",
    "AnalyzerConfig",
    "RankerConfig",
    "RecommendationRanker",
    "analyze",
    "filter_recommendations",
    "recommend",
]
