"""
Heuristic insights: anomaly detection, forecasts and recommendations.
"""

from .anomalies import detect_anomalies
from .engine import InsightsService, generate_insights
from .forecasts import generate_forecasts
from .recommendations import build_summary, generate_recommendations

__all__ = [
    "InsightsService",
    "build_summary",
    "detect_anomalies",
    "generate_forecasts",
    "generate_insights",
    "generate_recommendations",
]
