"""
Anomaly detection over production and inventory records.

Rules, in emission order:
1. Week-over-week production decrease (needs min_history records)
2. Waste ratio increase between the same two windows
3. One critically-low-stock anomaly per item below its minimum
"""

from datetime import datetime
from typing import Sequence

from factory_ops.core.models import Anomaly, InventoryItem, ProductionRecord, WorkerRecord
from factory_ops.core.rules import InsightThresholds

from .numbers import format_quantity, round_half_up

DECREASE_CAUSES = [
    "Material shortage or supply chain issues",
    "Equipment maintenance or downtime",
    "Worker absenteeism or shift changes",
]

WASTE_CAUSES = [
    "Quality control issues",
    "Raw material quality degradation",
    "Operator training needed",
]

LOW_STOCK_CAUSES = [
    "Increased consumption rate",
    "Delayed supplier delivery",
    "Inventory forecasting error",
]


def _date_key(record: ProductionRecord) -> datetime:
    return datetime.fromisoformat(record.date)


def sort_by_date(production: Sequence[ProductionRecord]) -> list[ProductionRecord]:
    """Oldest first; records with equal dates keep their order."""
    return sorted(production, key=_date_key)


def _average_quantity(window: Sequence[ProductionRecord]) -> float:
    return sum(p.quantity for p in window) / len(window)


def waste_ratio(window: Sequence[ProductionRecord]) -> float | None:
    """kg of waste per unit produced; None when nothing was produced."""
    produced = sum(p.quantity for p in window)
    if produced == 0:
        return None
    return sum(p.waste_kg for p in window) / produced


def _production_anomalies(
    production: Sequence[ProductionRecord],
    thresholds: InsightThresholds,
) -> list[Anomaly]:
    ordered = sort_by_date(production)
    if len(ordered) < thresholds.min_history:
        return []

    window = thresholds.trend_window
    recent = ordered[-window:]
    previous = ordered[-2 * window:-window]
    anomalies = []

    recent_avg = _average_quantity(recent)
    previous_avg = _average_quantity(previous)
    if previous_avg > 0:
        change = (recent_avg - previous_avg) / previous_avg * 100
        if change < thresholds.decrease_pct:
            anomalies.append(Anomaly(
                issue=f"Production decreased {abs(change):.1f}% week-over-week",
                evidence=(
                    f"Average daily output: {round_half_up(recent_avg)} units "
                    f"(prev: {round_half_up(previous_avg)} units)"
                ),
                likely_causes=list(DECREASE_CAUSES),
                immediate_action="Review material stock levels and equipment status",
                severity="high" if change < thresholds.severe_decrease_pct else "medium",
            ))

    recent_waste = waste_ratio(recent)
    previous_waste = waste_ratio(previous)
    if recent_waste is not None and previous_waste is not None:
        if recent_waste > previous_waste * thresholds.waste_growth_factor:
            anomalies.append(Anomaly(
                issue="Waste levels increased significantly",
                evidence=(
                    f"Current waste rate: {recent_waste * 100:.1f}kg per 100 units "
                    f"(prev: {previous_waste * 100:.1f}kg)"
                ),
                likely_causes=list(WASTE_CAUSES),
                immediate_action="Conduct quality inspection and operator review",
                severity="medium",
            ))

    return anomalies


def _low_stock_anomaly(item: InventoryItem) -> Anomaly:
    return Anomaly(
        issue=f"{item.item_name} stock critically low",
        evidence=(
            f"Current: {format_quantity(item.stock_kg)}{item.unit}, "
            f"Minimum: {format_quantity(item.min_stock_kg)}{item.unit}"
        ),
        likely_causes=list(LOW_STOCK_CAUSES),
        immediate_action=f"Reorder {item.item_name} immediately - production may be affected",
        severity="high",
    )


def detect_anomalies(
    production: Sequence[ProductionRecord],
    inventory: Sequence[InventoryItem],
    workers: Sequence[WorkerRecord],
    thresholds: InsightThresholds | None = None,
) -> list[Anomaly]:
    """
    Detect anomalies in the current snapshot of the collections.

    Worker records are accepted for future rules but no rule reads them yet.
    """
    thresholds = thresholds or InsightThresholds()

    anomalies = _production_anomalies(production, thresholds)
    anomalies.extend(_low_stock_anomaly(item) for item in inventory if item.below_minimum)
    return anomalies
