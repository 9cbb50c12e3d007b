"""
Inline record edits.

Edited values are validated through the record model before they reach the
store, so a record never holds a value of the wrong type.
"""

from typing import Any

from factory_ops.core.models import DataKind, FactoryRecord, record_model
from factory_ops.observability import get_logger

from .store import CollectionStore, attribute_name

logger = get_logger(__name__)

# Fields managed by the store, never edited directly
READ_ONLY_FIELDS = frozenset({"id", "import_batch_id"})


class RecordEditor:
    """
    Applies field edits and deletions to single records.

    Args:
        store: Collection store holding the records
    """

    def __init__(self, store: CollectionStore):
        self.store = store

    def update_record(self, kind: DataKind | str, record_id: int, changes: dict[str, Any]) -> FactoryRecord:
        """
        Merge changes into a stored record and save it.

        Args:
            kind: Collection of the record
            record_id: Record id
            changes: New values keyed by attribute name or file column name

        Returns:
            The updated record

        Raises:
            RecordNotFoundError: If the record does not exist
            ValueError: If a field is unknown or read-only
            pydantic.ValidationError: If a value does not fit the field type
        """
        kind = DataKind.parse(kind)
        updates = {attribute_name(kind, name): value for name, value in changes.items()}
        read_only = READ_ONLY_FIELDS & updates.keys()
        if read_only:
            raise ValueError(f"Fields cannot be edited: {', '.join(sorted(read_only))}")

        current = self.store.get(kind, record_id)
        updated = record_model(kind).model_validate({**current.model_dump(), **updates})
        changed = {name: getattr(updated, name) for name in updates}

        self.store.update(kind, record_id, changed)
        logger.info(
            f"Updated {kind.value} record {record_id}",
            extra={"data_kind": kind.value, "record_id": record_id, "fields": sorted(changed)},
        )
        return updated

    def delete_record(self, kind: DataKind | str, record_id: int) -> None:
        kind = DataKind.parse(kind)
        self.store.delete(kind, record_id)
        logger.info(f"Deleted {kind.value} record {record_id}", extra={"data_kind": kind.value})
