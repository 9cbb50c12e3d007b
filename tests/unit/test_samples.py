"""
Unit tests for sample file generation.
"""

import pytest

from factory_ops.batch import generate_sample, parse_file, sample_file_name
from factory_ops.core.models import DataKind


class TestSamples:
    """Every sample parses cleanly with its own data kind"""

    @pytest.mark.parametrize("kind", list(DataKind))
    def test_sample_round_trip(self, kind):
        text = generate_sample(kind)
        data_lines = len(text.splitlines()) - 1

        result = parse_file(text.encode("utf-8"), kind, file_name=sample_file_name(kind))

        assert result.errors == []
        assert len(result.records) == data_lines

    def test_production_header(self):
        header = generate_sample("production").splitlines()[0]
        assert header == "date,productType,quantity,target,wasteKg,orderId"

    def test_inventory_sample_has_no_warnings(self):
        result = parse_file(generate_sample("inventory").encode(), "inventory", file_name="inventory.csv")
        assert result.warnings == []
        assert [item.unit for item in result.records] == ["kg", "L"]

    def test_sales_delivered_values(self):
        result = parse_file(generate_sample("sales").encode(), "sales", file_name="sales.csv")
        assert [sale.delivered for sale in result.records] == [True, False]

    def test_file_name(self):
        assert sample_file_name(DataKind.WORKERS) == "workers-sample.csv"

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            generate_sample("orders")
