"""
Dashboard aggregates.
"""

from .kpis import (
    DailyProduction,
    DashboardKpis,
    compute_kpis,
    daily_production,
    production_by_type,
    revenue_by_product,
)

__all__ = [
    "DailyProduction",
    "DashboardKpis",
    "compute_kpis",
    "daily_production",
    "production_by_type",
    "revenue_by_product",
]
