"""
Dashboard KPIs and chart series computed from the record collections.
"""

from typing import Sequence

from pydantic import BaseModel

from factory_ops.core.models import InventoryItem, ProductionRecord, SaleRecord
from factory_ops.insights.anomalies import sort_by_date


class DashboardKpis(BaseModel):
    total_production: float
    total_revenue: float
    low_stock_items: int
    delivery_rate: float  # percent of sales delivered, one decimal


class DailyProduction(BaseModel):
    day: str  # YYYY-MM-DD
    quantity: float = 0.0
    target: float = 0.0
    waste_kg: float = 0.0


def compute_kpis(
    production: Sequence[ProductionRecord],
    inventory: Sequence[InventoryItem],
    sales: Sequence[SaleRecord],
) -> DashboardKpis:
    delivered = sum(1 for s in sales if s.delivered)
    return DashboardKpis(
        total_production=sum(p.quantity for p in production),
        total_revenue=sum(s.revenue for s in sales),
        low_stock_items=sum(1 for item in inventory if item.below_minimum),
        delivery_rate=round(delivered / len(sales) * 100, 1) if sales else 0.0,
    )


def daily_production(production: Sequence[ProductionRecord], records: int = 7) -> list[DailyProduction]:
    """
    Per-day totals of the most recent `records` production records.

    Several product types share a day, so the series can have fewer points
    than `records`.
    """
    if records <= 0:
        return []

    series: dict[str, DailyProduction] = {}
    for p in sort_by_date(production)[-records:]:
        day = p.date[:10]
        point = series.setdefault(day, DailyProduction(day=day))
        point.quantity += p.quantity
        point.target += p.target
        point.waste_kg += p.waste_kg
    return list(series.values())


def production_by_type(production: Sequence[ProductionRecord]) -> dict[str, float]:
    """Units per product type, in first-seen order."""
    totals: dict[str, float] = {}
    for p in production:
        totals[p.product_type] = totals.get(p.product_type, 0.0) + p.quantity
    return totals


def revenue_by_product(sales: Sequence[SaleRecord]) -> dict[str, float]:
    totals: dict[str, float] = {}
    for s in sales:
        totals[s.product_type] = totals.get(s.product_type, 0.0) + s.revenue
    return totals
