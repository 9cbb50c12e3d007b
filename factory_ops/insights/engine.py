"""
Insights aggregation: anomalies → forecasts → recommendations → summary.
"""

from typing import Sequence

from factory_ops.core.models import (
    DataKind,
    Insights,
    InventoryItem,
    ProductionRecord,
    SaleRecord,
    WorkerRecord,
)
from factory_ops.core.rules import InsightThresholds
from factory_ops.observability import get_logger
from factory_ops.observability.metrics import insights_duration_seconds, record_anomalies
from factory_ops.warehouse.store import CollectionStore

from .anomalies import detect_anomalies
from .forecasts import generate_forecasts
from .recommendations import build_summary, generate_recommendations

logger = get_logger(__name__)


def generate_insights(
    production: Sequence[ProductionRecord],
    inventory: Sequence[InventoryItem],
    sales: Sequence[SaleRecord],
    workers: Sequence[WorkerRecord],
    thresholds: InsightThresholds | None = None,
) -> Insights:
    """
    Compute the full insights report from the four collections.

    Pure: the same inputs always give the same report and nothing is kept
    between calls. Sales are accepted for completeness; no rule reads them.
    """
    thresholds = thresholds or InsightThresholds()

    anomalies = detect_anomalies(production, inventory, workers, thresholds)
    forecasts = generate_forecasts(production, inventory, thresholds)
    recommendations = generate_recommendations(anomalies, forecasts, thresholds)

    return Insights(
        anomalies=anomalies,
        forecasts=forecasts,
        recommendations=recommendations,
        summary=build_summary(anomalies, forecasts),
    )


class InsightsService:
    """
    Reads the collections from a store and produces a fresh report on each call.

    Args:
        store: Collection store to read from
        thresholds: Heuristic constants (defaults when omitted)
    """

    def __init__(self, store: CollectionStore, thresholds: InsightThresholds | None = None):
        self.store = store
        self.thresholds = thresholds or InsightThresholds()

    def refresh(self) -> Insights:
        with insights_duration_seconds.time():
            insights = generate_insights(
                self.store.to_array(DataKind.PRODUCTION),
                self.store.to_array(DataKind.INVENTORY),
                self.store.to_array(DataKind.SALES),
                self.store.to_array(DataKind.WORKERS),
                self.thresholds,
            )

        record_anomalies([a.severity for a in insights.anomalies])
        logger.info(
            f"Insights generated: {len(insights.anomalies)} anomalies, "
            f"{len(insights.forecasts)} forecasts, {len(insights.recommendations)} recommendations"
        )
        return insights
