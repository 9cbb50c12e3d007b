"""
Inventory depletion and production trend forecasts.
"""

from typing import Literal, Sequence

from factory_ops.core.models import Forecast, InventoryItem, ProductionRecord
from factory_ops.core.rules import InsightThresholds

from .numbers import round_half_up

PRODUCTION_TREND_ITEM = "Production Trend"

Trend = Literal["declining", "stable", "increasing"]


def days_to_depletion(item: InventoryItem, thresholds: InsightThresholds) -> float:
    """
    Days until the stock runs out.

    Daily use is estimated as a fixed share of the minimum stock, never
    below the consumption floor.
    """
    daily_consumption = item.min_stock_kg * thresholds.consumption_rate
    return item.stock_kg / max(daily_consumption, thresholds.consumption_floor)


def trend_slope(quantities: Sequence[float]) -> float:
    """Least-squares slope of quantity against position 0..n-1."""
    n = len(quantities)
    x_mean = (n - 1) / 2
    y_mean = sum(quantities) / n

    numerator = 0.0
    denominator = 0.0
    for x, y in enumerate(quantities):
        numerator += (x - x_mean) * (y - y_mean)
        denominator += (x - x_mean) ** 2
    return numerator / denominator if denominator != 0 else 0.0


def classify_trend(slope: float, threshold: float) -> Trend:
    if slope < -threshold:
        return "declining"
    if slope > threshold:
        return "increasing"
    return "stable"


def production_trend(
    production: Sequence[ProductionRecord],
    thresholds: InsightThresholds,
) -> Trend | None:
    """
    Trend of the last `trend_window` records, or None with too little data.

    The window is taken in the order the records were given, without sorting
    by date.
    """
    window = thresholds.trend_window
    if len(production) < window:
        return None
    quantities = [p.quantity for p in production[-window:]]
    return classify_trend(trend_slope(quantities), thresholds.slope_threshold)


def generate_forecasts(
    production: Sequence[ProductionRecord],
    inventory: Sequence[InventoryItem],
    thresholds: InsightThresholds | None = None,
) -> list[Forecast]:
    """Inventory forecasts in collection order, then the production trend entry."""
    thresholds = thresholds or InsightThresholds()
    forecasts = []

    for item in inventory:
        if item.stock_kg <= 0:
            continue
        days = days_to_depletion(item, thresholds)
        if days < thresholds.depletion_horizon_days:
            forecasts.append(Forecast(
                item=item.item_name,
                days_to_depletion=round_half_up(days),
                confidence=thresholds.inventory_confidence,
                type="inventory",
            ))

    trend = production_trend(production, thresholds)
    if trend is not None and trend != "stable":
        forecasts.append(Forecast(
            item=PRODUCTION_TREND_ITEM,
            days_to_depletion=0,
            confidence=thresholds.trend_confidence,
            type="production",
        ))

    return forecasts
