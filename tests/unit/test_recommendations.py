"""
Unit tests for recommendations and the summary line.
"""

from factory_ops.core.models import Anomaly, Forecast
from factory_ops.insights import build_summary, generate_recommendations


def anomaly(severity, action="Check the line"):
    return Anomaly(
        issue="Something happened",
        evidence="Numbers",
        likely_causes=[],
        immediate_action=action,
        severity=severity,
    )


def forecast(item, days, type_="inventory"):
    return Forecast(item=item, days_to_depletion=days, confidence=0.75, type=type_)


class TestRecommendations:
    """Tests for generate_recommendations"""

    def test_fallback_when_nothing_to_report(self):
        recommendations = generate_recommendations([], [])

        assert len(recommendations) == 1
        assert recommendations[0].action == "Continue current operations - all metrics healthy"
        assert recommendations[0].estimated_impact == "Maintain efficiency and quality standards"
        assert recommendations[0].priority == 3

    def test_high_anomaly_becomes_priority_one(self):
        recommendations = generate_recommendations([anomaly("high", "Reorder Paint immediately")], [])

        assert len(recommendations) == 1
        assert recommendations[0].action == "Reorder Paint immediately"
        assert recommendations[0].estimated_impact == "Critical - prevent production stoppage"
        assert recommendations[0].difficulty == "low"
        assert recommendations[0].priority == 1

    def test_medium_anomaly_alone_gives_nothing(self):
        assert generate_recommendations([anomaly("medium")], []) == []

    def test_short_inventory_forecast_becomes_priority_two(self):
        recommendations = generate_recommendations([], [forecast("Paint", 8)])

        assert recommendations[0].action == "Order Paint within next 3 days"
        assert recommendations[0].estimated_impact == "Maintain 8 days buffer stock"
        assert recommendations[0].priority == 2

    def test_reorder_window_exclusive(self):
        assert generate_recommendations([], [forecast("Paint", 14)]) == []

    def test_production_forecast_ignored(self):
        assert generate_recommendations([], [forecast("Production Trend", 0, "production")]) == []

    def test_sorted_by_priority_keeping_emission_order(self):
        recommendations = generate_recommendations(
            [anomaly("high", "First"), anomaly("medium"), anomaly("high", "Second")],
            [forecast("Paint", 3), forecast("Screws", 5)],
        )

        assert [r.priority for r in recommendations] == [1, 1, 2, 2]
        assert [r.action for r in recommendations] == [
            "First",
            "Second",
            "Order Paint within next 3 days",
            "Order Screws within next 3 days",
        ]


class TestSummary:
    """Tests for build_summary"""

    def test_all_normal(self):
        assert build_summary([], []) == "Factory operations overview: All systems operating normally. "

    def test_singular(self):
        summary = build_summary([anomaly("high")], [forecast("Paint", 8)])
        assert summary == (
            "Factory operations overview: 1 issue detected requiring attention. "
            "1 forecast alert for inventory management. "
        )

    def test_plural(self):
        summary = build_summary([anomaly("high"), anomaly("medium")], [forecast("Paint", 8), forecast("Glue", 2)])
        assert "2 issues detected requiring attention. " in summary
        assert summary.endswith("2 forecast alerts for inventory management. ")

    def test_forecasts_without_anomalies(self):
        summary = build_summary([], [forecast("Paint", 8)])
        assert summary == (
            "Factory operations overview: All systems operating normally. "
            "1 forecast alert for inventory management. "
        )
