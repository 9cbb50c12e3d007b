"""
Recommendations derived from anomalies and forecasts, and the summary line.
"""

from typing import Sequence

from factory_ops.core.models import Anomaly, Forecast, Recommendation
from factory_ops.core.rules import InsightThresholds

SUMMARY_PREFIX = "Factory operations overview: "


def generate_recommendations(
    anomalies: Sequence[Anomaly],
    forecasts: Sequence[Forecast],
    thresholds: InsightThresholds | None = None,
) -> list[Recommendation]:
    """
    Priority 1: every high-severity anomaly.
    Priority 2: inventory forecasts running out within the reorder window.
    Priority 3: a single "all healthy" entry when there is nothing else to report.
    """
    thresholds = thresholds or InsightThresholds()
    recommendations = []

    for anomaly in anomalies:
        if anomaly.severity == "high":
            recommendations.append(Recommendation(
                action=anomaly.immediate_action,
                estimated_impact="Critical - prevent production stoppage",
                difficulty="low",
                priority=1,
            ))

    for forecast in forecasts:
        if forecast.type == "inventory" and forecast.days_to_depletion < thresholds.reorder_within_days:
            recommendations.append(Recommendation(
                action=f"Order {forecast.item} within next 3 days",
                estimated_impact=f"Maintain {forecast.days_to_depletion} days buffer stock",
                difficulty="low",
                priority=2,
            ))

    if not anomalies and not forecasts:
        recommendations.append(Recommendation(
            action="Continue current operations - all metrics healthy",
            estimated_impact="Maintain efficiency and quality standards",
            difficulty="low",
            priority=3,
        ))

    # sorted() is stable: equal priorities keep emission order
    return sorted(recommendations, key=lambda r: r.priority)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def build_summary(anomalies: Sequence[Anomaly], forecasts: Sequence[Forecast]) -> str:
    summary = SUMMARY_PREFIX
    if not anomalies:
        summary += "All systems operating normally. "
    else:
        summary += f"{_plural(len(anomalies), 'issue')} detected requiring attention. "

    if forecasts:
        summary += f"{_plural(len(forecasts), 'forecast alert')} for inventory management. "
    return summary
