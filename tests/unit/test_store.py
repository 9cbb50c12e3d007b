"""
Unit tests for the in-memory collection store.
"""

import pytest

from factory_ops.core.models import DataKind, ImportBatch, ProductionRecord, WorkerRecord
from factory_ops.warehouse import BatchNotFoundError, RecordNotFoundError
from factory_ops.warehouse.store import attribute_name, field_alias


def worker(name, shift="morning"):
    return WorkerRecord(date="2025-10-01", name=name, shift=shift, tasks_done=10)


class TestRecords:
    """Tests for record operations"""

    def test_ids_are_per_collection(self, memory_store, paint_item):
        assert memory_store.add(DataKind.WORKERS, worker("John Doe")) == 1
        assert memory_store.add(DataKind.WORKERS, worker("Jane Smith")) == 2
        assert memory_store.add(DataKind.INVENTORY, paint_item) == 1

    def test_add_does_not_modify_argument(self, memory_store):
        record = worker("John Doe")
        memory_store.add(DataKind.WORKERS, record)
        assert record.id is None

    def test_wrong_record_type(self, memory_store):
        with pytest.raises(TypeError):
            memory_store.add(DataKind.PRODUCTION, worker("John Doe"))

    def test_bulk_add_is_all_or_nothing(self, memory_store, make_production):
        records = make_production([1, 2]) + [worker("John Doe")]
        with pytest.raises(TypeError):
            memory_store.bulk_add(DataKind.PRODUCTION, records)
        assert memory_store.count(DataKind.PRODUCTION) == 0

    def test_get_returns_copy(self, memory_store):
        record_id = memory_store.add(DataKind.WORKERS, worker("John Doe"))
        fetched = memory_store.get(DataKind.WORKERS, record_id)
        fetched.name = "Someone Else"

        assert memory_store.get(DataKind.WORKERS, record_id).name == "John Doe"

    def test_get_unknown(self, memory_store):
        with pytest.raises(RecordNotFoundError):
            memory_store.get(DataKind.SALES, 5)

    def test_update_accepts_both_spellings(self, memory_store):
        record_id = memory_store.add(DataKind.WORKERS, worker("John Doe"))

        memory_store.update(DataKind.WORKERS, record_id, {"tasksDone": 20})
        memory_store.update(DataKind.WORKERS, record_id, {"shift": "night"})

        stored = memory_store.get(DataKind.WORKERS, record_id)
        assert stored.tasks_done == 20
        assert stored.shift == "night"
        assert stored.id == record_id

    def test_delete(self, memory_store):
        record_id = memory_store.add(DataKind.WORKERS, worker("John Doe"))
        memory_store.delete(DataKind.WORKERS, record_id)

        assert memory_store.to_array(DataKind.WORKERS) == []
        with pytest.raises(RecordNotFoundError):
            memory_store.delete(DataKind.WORKERS, record_id)

    def test_where_equals_and_delete_where(self, memory_store):
        memory_store.bulk_add(
            DataKind.WORKERS, [worker("John Doe"), worker("Jane Smith", "night"), worker("Ann Lee", "night")]
        )

        night = memory_store.where_equals(DataKind.WORKERS, "shift", "night")
        assert [w.name for w in night] == ["Jane Smith", "Ann Lee"]

        assert memory_store.delete_where(DataKind.WORKERS, "shift", "night") == 2
        assert [w.name for w in memory_store.to_array(DataKind.WORKERS)] == ["John Doe"]

    def test_unknown_field(self, memory_store):
        with pytest.raises(ValueError):
            memory_store.where_equals(DataKind.WORKERS, "salary", 10)


class TestBatches:
    """Tests for import batch operations"""

    def test_batches_filtered_by_kind_newest_first(self, memory_store):
        first = memory_store.add_batch(ImportBatch(file_name="a.csv", data_type="sales", record_count=1))
        memory_store.add_batch(ImportBatch(file_name="b.csv", data_type="workers", record_count=1))
        third = memory_store.add_batch(ImportBatch(file_name="c.csv", data_type="sales", record_count=1))

        assert [b.id for b in memory_store.batches_for(DataKind.SALES)] == [third, first]

    def test_delete_batch_record(self, memory_store):
        batch_id = memory_store.add_batch(ImportBatch(file_name="a.csv", data_type="sales", record_count=1))
        memory_store.delete_batch_record(batch_id)

        with pytest.raises(BatchNotFoundError):
            memory_store.get_batch(batch_id)
        with pytest.raises(BatchNotFoundError):
            memory_store.delete_batch_record(batch_id)


class TestFieldNames:
    """Tests for field name mapping"""

    def test_alias_and_attribute(self):
        assert field_alias(DataKind.PRODUCTION, "waste_kg") == "wasteKg"
        assert field_alias(DataKind.PRODUCTION, "wasteKg") == "wasteKg"
        assert attribute_name(DataKind.PRODUCTION, "importBatchId") == "import_batch_id"
        assert attribute_name(DataKind.PRODUCTION, "quantity") == "quantity"

    def test_unknown(self):
        with pytest.raises(ValueError):
            attribute_name(DataKind.INVENTORY, "color")
        with pytest.raises(ValueError):
            field_alias(DataKind.INVENTORY, "color")


class TestProductionRecordUpdate:
    """Updates are validated by the record model"""

    def test_invalid_update_rejected(self, memory_store):
        record_id = memory_store.add(
            DataKind.PRODUCTION, ProductionRecord(date="2025-10-01", product_type="Standard Shutter", quantity=5)
        )
        with pytest.raises(ValueError):
            memory_store.update(DataKind.PRODUCTION, record_id, {"quantity": -3})

        assert memory_store.get(DataKind.PRODUCTION, record_id).quantity == 5
