"""
Unit tests for demo data seeding.
"""

from datetime import date

import pytest

from factory_ops.analytics import compute_kpis
from factory_ops.core.models import DataKind, ProductionRecord
from factory_ops.core.rules import InsightThresholds
from factory_ops.insights import InsightsService
from factory_ops.warehouse import InMemoryCollectionStore, seed_demo_data

TODAY = date(2025, 10, 31)


class TestSeedDemoData:
    """Tests for seed_demo_data"""

    def test_counts_per_kind(self, memory_store):
        added = seed_demo_data(memory_store, seed=7, today=TODAY)

        assert added[DataKind.PRODUCTION] == 30 * 3
        assert added[DataKind.WORKERS] == 30 * 3 * 3
        assert added[DataKind.INVENTORY] == 5
        assert 0 < added[DataKind.SALES] <= 30 * 3
        assert {kind: memory_store.count(kind) for kind in DataKind} == added

    def test_days_end_today(self, memory_store):
        seed_demo_data(memory_store, days=5, seed=7, today=TODAY)

        days = sorted({p.date[:10] for p in memory_store.to_array(DataKind.PRODUCTION)})
        assert days == ["2025-10-27", "2025-10-28", "2025-10-29", "2025-10-30", "2025-10-31"]

    def test_production_within_target_band(self, memory_store):
        seed_demo_data(memory_store, seed=7, today=TODAY)

        for record in memory_store.to_array(DataKind.PRODUCTION):
            assert int(0.85 * record.target) <= record.quantity <= 1.05 * record.target
            assert 5 <= record.waste_kg <= 14
            assert record.import_batch_id is None

    def test_same_seed_same_data(self):
        first, second = InMemoryCollectionStore(), InMemoryCollectionStore()
        seed_demo_data(first, seed=42, today=TODAY)
        seed_demo_data(second, seed=42, today=TODAY)

        for kind in (DataKind.PRODUCTION, DataKind.SALES, DataKind.WORKERS):
            assert first.to_array(kind) == second.to_array(kind)

    def test_store_with_production_is_left_alone(self, memory_store):
        memory_store.add(DataKind.PRODUCTION, ProductionRecord(date="2025-10-01", product_type="Standard Shutter"))

        assert seed_demo_data(memory_store, seed=7, today=TODAY) == {}
        assert memory_store.count(DataKind.PRODUCTION) == 1
        assert memory_store.count(DataKind.INVENTORY) == 0

    def test_days_must_be_positive(self, memory_store):
        with pytest.raises(ValueError):
            seed_demo_data(memory_store, days=0)


class TestSeededReports:
    """Reports computed over a seeded store"""

    def test_kpis_are_populated(self, memory_store):
        seed_demo_data(memory_store, seed=3, today=TODAY)

        kpis = compute_kpis(
            memory_store.to_array(DataKind.PRODUCTION),
            memory_store.to_array(DataKind.INVENTORY),
            memory_store.to_array(DataKind.SALES),
        )

        assert kpis.total_production > 0
        assert kpis.total_revenue > 0
        assert kpis.low_stock_items == 0
        assert 0 <= kpis.delivery_rate <= 100

    def test_insights_forecast_stock_depletion(self, memory_store):
        seed_demo_data(memory_store, seed=3, today=TODAY)
        thresholds = InsightThresholds(depletion_horizon_days=40)

        insights = InsightsService(memory_store, thresholds).refresh()

        inventory_forecasts = [(f.item, f.days_to_depletion) for f in insights.forecasts if f.type == "inventory"]
        assert inventory_forecasts == [("Paint", 35), ("Packaging Material", 37), ("Lubricants", 38)]
        assert "forecast alert" in insights.summary
