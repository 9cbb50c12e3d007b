"""
Collection store contract and the in-memory implementation.

The store keeps the four record collections plus import batches. Import
and insights code receive a store explicitly; any implementation honoring
CollectionStore can be substituted.
"""

from abc import ABC, abstractmethod
from itertools import count
from typing import Any, Iterable

from factory_ops.core.models import DataKind, FactoryRecord, ImportBatch, record_model


class RecordNotFoundError(KeyError):
    """Raised when a record id does not exist in its collection."""

    def __init__(self, kind: DataKind, record_id: int):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"No {kind.value} record with id {record_id}")


class BatchNotFoundError(KeyError):
    """Raised when an import batch id does not exist."""

    def __init__(self, batch_id: int):
        self.batch_id = batch_id
        super().__init__(f"No import batch with id {batch_id}")


def field_alias(kind: DataKind, field_name: str) -> str:
    """Stored (camelCase) name of a record attribute; aliases pass through."""
    model = record_model(kind)
    info = model.model_fields.get(field_name)
    if info is not None:
        return info.alias or field_name
    aliases = {f.alias for f in model.model_fields.values()}
    if field_name in aliases:
        return field_name
    raise ValueError(f"Unknown {kind.value} field '{field_name}'")


def attribute_name(kind: DataKind, field_name: str) -> str:
    """Python attribute name of a record field given either spelling."""
    model = record_model(kind)
    if field_name in model.model_fields:
        return field_name
    for name, info in model.model_fields.items():
        if info.alias == field_name:
            return name
    raise ValueError(f"Unknown {kind.value} field '{field_name}'")


class CollectionStore(ABC):
    """
    Key-indexed record collections, one per DataKind, plus import batches.

    Records handed to add/bulk_add are not modified; stored copies carry the
    id assigned by the store. Updates take field changes keyed by attribute
    or stored name.
    """

    @abstractmethod
    def add(self, kind: DataKind, record: FactoryRecord) -> int:
        """Insert one record and return its id."""

    @abstractmethod
    def bulk_add(self, kind: DataKind, records: Iterable[FactoryRecord]) -> list[int]:
        """Insert many records at once (all or nothing) and return their ids."""

    @abstractmethod
    def get(self, kind: DataKind, record_id: int) -> FactoryRecord:
        """Raises RecordNotFoundError when the id is unknown."""

    @abstractmethod
    def update(self, kind: DataKind, record_id: int, changes: dict[str, Any]) -> None:
        """Raises RecordNotFoundError when the id is unknown."""

    @abstractmethod
    def delete(self, kind: DataKind, record_id: int) -> None:
        """Raises RecordNotFoundError when the id is unknown."""

    @abstractmethod
    def to_array(self, kind: DataKind) -> list[FactoryRecord]:
        """All records of a collection in insertion order."""

    @abstractmethod
    def where_equals(self, kind: DataKind, field_name: str, value: Any) -> list[FactoryRecord]:
        """Records whose field equals value, in insertion order."""

    @abstractmethod
    def delete_where(self, kind: DataKind, field_name: str, value: Any) -> int:
        """Delete records whose field equals value; returns how many were removed."""

    @abstractmethod
    def add_batch(self, batch: ImportBatch) -> int:
        """Insert an import batch and return its id."""

    @abstractmethod
    def get_batch(self, batch_id: int) -> ImportBatch:
        """Raises BatchNotFoundError when the id is unknown."""

    @abstractmethod
    def batches_for(self, kind: DataKind) -> list[ImportBatch]:
        """Import batches of one kind, newest first."""

    @abstractmethod
    def delete_batch_record(self, batch_id: int) -> None:
        """Remove the batch entry itself (records are removed by the caller)."""

    def count(self, kind: DataKind) -> int:
        return len(self.to_array(kind))


class InMemoryCollectionStore(CollectionStore):
    """
    Dict-backed store with per-collection auto-increment ids.

    Used by tests and by the CLI's ephemeral mode.
    """

    def __init__(self):
        self._collections: dict[DataKind, dict[int, FactoryRecord]] = {kind: {} for kind in DataKind}
        self._ids = {kind: count(1) for kind in DataKind}
        self._batches: dict[int, ImportBatch] = {}
        self._batch_ids = count(1)

    def add(self, kind: DataKind, record: FactoryRecord) -> int:
        kind = DataKind.parse(kind)
        model = record_model(kind)
        if not isinstance(record, model):
            raise TypeError(f"Expected {model.__name__}, got {type(record).__name__}")
        record_id = next(self._ids[kind])
        self._collections[kind][record_id] = record.model_copy(update={"id": record_id})
        return record_id

    def bulk_add(self, kind: DataKind, records: Iterable[FactoryRecord]) -> list[int]:
        kind = DataKind.parse(kind)
        records = list(records)
        model = record_model(kind)
        # Check everything first so a bad record leaves the collection untouched
        for record in records:
            if not isinstance(record, model):
                raise TypeError(f"Expected {model.__name__}, got {type(record).__name__}")
        return [self.add(kind, record) for record in records]

    def get(self, kind: DataKind, record_id: int) -> FactoryRecord:
        kind = DataKind.parse(kind)
        try:
            return self._collections[kind][record_id].model_copy()
        except KeyError:
            raise RecordNotFoundError(kind, record_id) from None

    def update(self, kind: DataKind, record_id: int, changes: dict[str, Any]) -> None:
        kind = DataKind.parse(kind)
        current = self.get(kind, record_id)
        updates = {attribute_name(kind, name): value for name, value in changes.items()}
        updates.pop("id", None)
        payload = {**current.model_dump(), **updates, "id": record_id}
        self._collections[kind][record_id] = record_model(kind).model_validate(payload)

    def delete(self, kind: DataKind, record_id: int) -> None:
        kind = DataKind.parse(kind)
        if self._collections[kind].pop(record_id, None) is None:
            raise RecordNotFoundError(kind, record_id)

    def to_array(self, kind: DataKind) -> list[FactoryRecord]:
        kind = DataKind.parse(kind)
        return [record.model_copy() for record in self._collections[kind].values()]

    def where_equals(self, kind: DataKind, field_name: str, value: Any) -> list[FactoryRecord]:
        kind = DataKind.parse(kind)
        attribute = attribute_name(kind, field_name)
        return [
            record.model_copy()
            for record in self._collections[kind].values()
            if getattr(record, attribute) == value
        ]

    def delete_where(self, kind: DataKind, field_name: str, value: Any) -> int:
        kind = DataKind.parse(kind)
        doomed = [record.id for record in self.where_equals(kind, field_name, value)]
        for record_id in doomed:
            del self._collections[kind][record_id]
        return len(doomed)

    def add_batch(self, batch: ImportBatch) -> int:
        batch_id = next(self._batch_ids)
        self._batches[batch_id] = batch.model_copy(update={"id": batch_id})
        return batch_id

    def get_batch(self, batch_id: int) -> ImportBatch:
        try:
            return self._batches[batch_id].model_copy()
        except KeyError:
            raise BatchNotFoundError(batch_id) from None

    def batches_for(self, kind: DataKind) -> list[ImportBatch]:
        kind = DataKind.parse(kind)
        batches = [b.model_copy() for b in self._batches.values() if b.data_type == kind]
        return sorted(batches, key=lambda b: (b.imported_at, b.id), reverse=True)

    def delete_batch_record(self, batch_id: int) -> None:
        if self._batches.pop(batch_id, None) is None:
            raise BatchNotFoundError(batch_id)
