"""
Unit tests for the command-line interface (in-memory store only).
"""

import json

import pytest

from factory_ops.batch import generate_sample
from factory_ops.cli.main import build_parser, main


class TestParser:
    """Tests for argument parsing"""

    def test_no_command_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

    def test_unknown_kind_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["sample", "orders"])
        assert exc_info.value.code == 2

    def test_store_flags(self):
        args = build_parser().parse_args(["batches", "sales", "--db-host", "db.internal", "--db-port", "6543"])
        assert args.db_host == "db.internal"
        assert args.db_port == 6543
        assert not args.memory


class TestCommands:
    """Tests for individual commands"""

    def test_sample_to_stdout(self, capsys):
        main(["sample", "workers"])
        assert capsys.readouterr().out.strip() == generate_sample("workers")

    def test_sample_to_directory(self, tmp_path):
        main(["sample", "inventory", "--output", str(tmp_path)])
        written = (tmp_path / "inventory-sample.csv").read_text(encoding="utf-8")
        assert written.startswith("itemName,stockKg,minStockKg,unit,lastUpdated")

    def test_validate_clean_file(self, write_file, capsys):
        path = write_file("production.csv", generate_sample("production"))

        main(["validate", "production", str(path)])

        assert "production.csv: 2 valid records" in capsys.readouterr().out

    def test_validate_reports_errors(self, write_file, capsys):
        path = write_file("production.csv", "date,productType,quantity\n2025-10-01,,5\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["validate", "production", str(path)])

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "Row 1: Missing required fields (date, productType, quantity)" in out

    def test_validate_rejects_extension(self, write_file):
        path = write_file("production.txt", generate_sample("production"))
        with pytest.raises(SystemExit) as exc_info:
            main(["validate", "production", str(path)])
        assert exc_info.value.code == 1

    def test_import_into_memory(self, write_file, capsys):
        path = write_file("sales.csv", generate_sample("sales"))

        main(["import", "sales", str(path), "--memory"])

        assert "Successfully imported 2 records (batch 1)" in capsys.readouterr().out

    def test_import_blocked(self, write_file, capsys):
        path = write_file("stock.csv", "itemName,stockKg\nPaint,\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["import", "inventory", str(path), "--memory"])

        assert exc_info.value.code == 1
        assert "Import blocked" in capsys.readouterr().out

    def test_batches_empty(self, capsys):
        main(["batches", "production", "--memory"])
        assert "No imports yet for production" in capsys.readouterr().out

    def test_delete_unknown_batch(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["delete-batch", "3", "--memory"])
        assert exc_info.value.code == 1

    def test_delete_batch_id_must_be_positive(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["delete-batch", "0", "--memory"])
        assert exc_info.value.code == 1

    def test_insights_on_empty_store(self, capsys, tmp_path, monkeypatch):
        monkeypatch.delenv("INSIGHTS_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)

        main(["insights", "--memory"])

        report = json.loads(capsys.readouterr().out)
        assert report["summary"] == "Factory operations overview: All systems operating normally. "
        assert report["recommendations"][0]["estimatedImpact"] == "Maintain efficiency and quality standards"

    def test_kpis_on_empty_store(self, capsys):
        main(["kpis", "--memory"])

        report = json.loads(capsys.readouterr().out)
        assert report["kpis"]["total_production"] == 0
        assert report["dailyProduction"] == []

    def test_kpis_with_demo_data(self, capsys):
        main(["kpis", "--memory", "--demo"])

        report = json.loads(capsys.readouterr().out)
        assert report["kpis"]["total_production"] > 0
        assert len(report["dailyProduction"]) == 3

    def test_demo_flag_leaves_imports_working(self, write_file, capsys):
        path = write_file("sales.csv", generate_sample("sales"))

        main(["import", "sales", str(path), "--memory", "--demo"])

        assert "Successfully imported 2 records (batch 1)" in capsys.readouterr().out
