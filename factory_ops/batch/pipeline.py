"""
Import pipeline orchestration.

Flow: read file → validate rows → (no errors) create batch → tag records → bulk write
"""

from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from factory_ops.batch.readers import FileDecodeError, FileReader
from factory_ops.core.models import DataKind, ImportBatch, ParseResult
from factory_ops.core.rules import RowValidator
from factory_ops.observability import get_logger, log_operation
from factory_ops.observability.metrics import record_import, record_parse_result
from factory_ops.warehouse.store import CollectionStore

logger = get_logger(__name__)


def parse_rows(rows: Iterable[Mapping[str, Any]], kind: DataKind | str) -> ParseResult:
    """Validate already-decoded rows for a data kind."""
    kind = DataKind.parse(kind)
    result = RowValidator(kind).validate_rows(rows)
    record_parse_result(kind.value, len(result.records), len(result.errors), len(result.warnings))
    return result


def parse_file(
    source: str | Path | bytes,
    kind: DataKind | str,
    file_name: str | None = None,
    reader: FileReader | None = None,
) -> ParseResult:
    """
    Decode and validate a file. Never raises for bad input.

    A file that cannot be read as a table gives an empty result with a
    single error.
    """
    kind = DataKind.parse(kind)
    reader = reader or FileReader()
    try:
        rows = reader.read_rows(source, file_name=file_name)
    except FileDecodeError as e:
        logger.warning(f"Failed to decode file: {e}", extra={"data_kind": kind.value})
        record_import(kind.value, "decode_error")
        return ParseResult(errors=[f"Failed to parse file: {e}"])
    return parse_rows(rows, kind)


class ImportOutcome(BaseModel):
    """
    Result of an import attempt.

    Attributes:
        result: Validation result of the file
        batch: Created import batch (None when the import was blocked)
        imported: Number of records written
    """

    result: ParseResult
    batch: ImportBatch | None = None
    imported: int = 0

    @property
    def blocked(self) -> bool:
        return self.batch is None


class ImportPipeline:
    """
    Imports files into a collection store and manages import batches.

    Args:
        store: Collection store receiving the records
        reader: File reader (default FileReader())
    """

    def __init__(self, store: CollectionStore, reader: FileReader | None = None):
        self.store = store
        self.reader = reader or FileReader()

    def import_file(
        self,
        source: str | Path | bytes,
        kind: DataKind | str,
        file_name: str | None = None,
    ) -> ImportOutcome:
        """
        Parse a file and, if it has no errors, write its records as one batch.

        Args:
            source: Path or raw bytes of the file
            kind: Target collection
            file_name: Name recorded on the batch (required for raw bytes)

        Returns:
            ImportOutcome; `blocked` is True when errors prevented the write
        """
        kind = DataKind.parse(kind)
        if file_name is None and not isinstance(source, bytes):
            file_name = Path(source).name
        result = parse_file(source, kind, file_name=file_name, reader=self.reader)
        return self.import_result(result, kind, file_name or "upload")

    def import_result(self, result: ParseResult, kind: DataKind | str, file_name: str) -> ImportOutcome:
        """Write an already validated result as a new batch."""
        kind = DataKind.parse(kind)

        if result.has_errors:
            logger.warning(
                f"Import of {file_name} blocked by {len(result.errors)} errors",
                extra={"data_kind": kind.value, "file_name": file_name},
            )
            record_import(kind.value, "blocked")
            return ImportOutcome(result=result)

        with log_operation("Importing records", logger=logger, data_kind=kind.value, file_name=file_name):
            batch = ImportBatch(file_name=file_name, data_type=kind, record_count=len(result.records))
            batch.id = self.store.add_batch(batch)

            tagged = [record.model_copy(update={"import_batch_id": batch.id}) for record in result.records]
            try:
                self.store.bulk_add(kind, tagged)
            except Exception:
                # Records were not written; drop the empty batch
                self.store.delete_batch_record(batch.id)
                raise

        record_import(kind.value, "imported")
        return ImportOutcome(result=result, batch=batch, imported=len(tagged))

    def list_batches(self, kind: DataKind | str) -> list[ImportBatch]:
        """Import batches of one kind, newest first."""
        return self.store.batches_for(DataKind.parse(kind))

    def delete_batch(self, batch_id: int) -> int:
        """
        Delete an import batch together with every record it created.

        Returns:
            Number of records removed

        Raises:
            BatchNotFoundError: If the batch does not exist
        """
        batch = self.store.get_batch(batch_id)
        removed = self.store.delete_where(batch.data_type, "import_batch_id", batch_id)
        self.store.delete_batch_record(batch_id)
        logger.info(
            f"Deleted import batch {batch_id} ({batch.file_name}): {removed} records",
            extra={"data_kind": batch.data_type.value, "batch_id": batch_id},
        )
        return removed
