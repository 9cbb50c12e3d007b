"""
PostgreSQL-backed collection store.

Each record collection is a table with a serial id, the import batch
reference, and the record's fields as a JSONB document. Import batches get
their own table. All statements go through DatabaseConnectionPool.
"""

from typing import Any, Iterable

from psycopg import sql
from psycopg.types.json import Jsonb

from factory_ops.core.models import DataKind, FactoryRecord, ImportBatch, record_model
from factory_ops.observability import get_logger

from .connection import DatabaseConnectionPool
from .store import (
    BatchNotFoundError,
    CollectionStore,
    RecordNotFoundError,
    attribute_name,
    field_alias,
)

logger = get_logger(__name__)

BATCH_TABLE = "import_batches"

_BATCH_REFERENCE = "importBatchId"

_CREATE_COLLECTION = """
    CREATE TABLE IF NOT EXISTS {table} (
        id SERIAL PRIMARY KEY,
        import_batch_id INTEGER,
        data JSONB NOT NULL
    )
"""

_CREATE_COLLECTION_INDEX = "CREATE INDEX IF NOT EXISTS {index} ON {table} (import_batch_id)"

_CREATE_BATCHES = f"""
    CREATE TABLE IF NOT EXISTS {BATCH_TABLE} (
        id SERIAL PRIMARY KEY,
        file_name TEXT NOT NULL,
        data_type TEXT NOT NULL,
        record_count INTEGER NOT NULL CHECK (record_count >= 0),
        imported_at TIMESTAMPTZ NOT NULL
    )
"""


def _table(kind: DataKind) -> sql.Identifier:
    return sql.Identifier(DataKind.parse(kind).value)


class PostgresCollectionStore(CollectionStore):
    """
    CollectionStore persisted in PostgreSQL.

    Args:
        pool: An opened DatabaseConnectionPool
    """

    def __init__(self, pool: DatabaseConnectionPool):
        self.pool = pool

    def ensure_schema(self) -> None:
        """Create the collection and batch tables if they do not exist."""
        with self.pool.transaction() as cur:
            for kind in DataKind:
                cur.execute(sql.SQL(_CREATE_COLLECTION).format(table=_table(kind)))
                cur.execute(
                    sql.SQL(_CREATE_COLLECTION_INDEX).format(
                        index=sql.Identifier(f"{kind.value}_import_batch_idx"),
                        table=_table(kind),
                    )
                )
            cur.execute(_CREATE_BATCHES)
        logger.info("Collection tables ready")

    # =======================
    # RECORDS
    # =======================

    @staticmethod
    def _split(record: FactoryRecord) -> tuple[int | None, Jsonb]:
        payload = record.to_payload()
        batch_id = payload.pop(_BATCH_REFERENCE, None)
        return batch_id, Jsonb(payload)

    @staticmethod
    def _to_record(kind: DataKind, row: dict) -> FactoryRecord:
        return record_model(kind).model_validate(
            {**row["data"], "id": row["id"], _BATCH_REFERENCE: row["import_batch_id"]}
        )

    def add(self, kind: DataKind, record: FactoryRecord) -> int:
        return self.bulk_add(kind, [record])[0]

    def bulk_add(self, kind: DataKind, records: Iterable[FactoryRecord]) -> list[int]:
        kind = DataKind.parse(kind)
        records = list(records)
        model = record_model(kind)
        for record in records:
            if not isinstance(record, model):
                raise TypeError(f"Expected {model.__name__}, got {type(record).__name__}")
        if not records:
            return []

        query = sql.SQL("INSERT INTO {table} (import_batch_id, data) VALUES (%s, %s) RETURNING id").format(
            table=_table(kind)
        )
        ids = []
        # One connection block: committed together or rolled back together
        with self.pool.transaction() as cur:
            for record in records:
                cur.execute(query, self._split(record))
                ids.append(cur.fetchone()["id"])
        return ids

    def get(self, kind: DataKind, record_id: int) -> FactoryRecord:
        kind = DataKind.parse(kind)
        rows = self.pool.fetch_all(
            sql.SQL("SELECT id, import_batch_id, data FROM {table} WHERE id = %s").format(table=_table(kind)),
            (record_id,),
        )
        if not rows:
            raise RecordNotFoundError(kind, record_id)
        return self._to_record(kind, rows[0])

    def update(self, kind: DataKind, record_id: int, changes: dict[str, Any]) -> None:
        kind = DataKind.parse(kind)
        current = self.get(kind, record_id)
        updates = {attribute_name(kind, name): value for name, value in changes.items()}
        updates.pop("id", None)
        merged = record_model(kind).model_validate({**current.model_dump(), **updates, "id": record_id})

        batch_id, payload = self._split(merged)
        self.pool.execute(
            sql.SQL("UPDATE {table} SET import_batch_id = %s, data = %s WHERE id = %s").format(
                table=_table(kind)
            ),
            (batch_id, payload, record_id),
        )

    def delete(self, kind: DataKind, record_id: int) -> None:
        kind = DataKind.parse(kind)
        deleted = self.pool.execute(
            sql.SQL("DELETE FROM {table} WHERE id = %s").format(table=_table(kind)),
            (record_id,),
        )
        if deleted == 0:
            raise RecordNotFoundError(kind, record_id)

    def to_array(self, kind: DataKind) -> list[FactoryRecord]:
        kind = DataKind.parse(kind)
        rows = self.pool.fetch_all(
            sql.SQL("SELECT id, import_batch_id, data FROM {table} ORDER BY id").format(table=_table(kind))
        )
        return [self._to_record(kind, row) for row in rows]

    def _field_condition(self, kind: DataKind, field_name: str, value: Any) -> tuple[sql.Composable, tuple]:
        alias = field_alias(kind, field_name)
        if alias == _BATCH_REFERENCE:
            return sql.SQL("import_batch_id = %s"), (value,)
        if alias == "id":
            return sql.SQL("id = %s"), (value,)
        return sql.SQL("data -> %s = %s"), (alias, Jsonb(value))

    def where_equals(self, kind: DataKind, field_name: str, value: Any) -> list[FactoryRecord]:
        kind = DataKind.parse(kind)
        condition, params = self._field_condition(kind, field_name, value)
        rows = self.pool.fetch_all(
            sql.SQL("SELECT id, import_batch_id, data FROM {table} WHERE {condition} ORDER BY id").format(
                table=_table(kind), condition=condition
            ),
            params,
        )
        return [self._to_record(kind, row) for row in rows]

    def delete_where(self, kind: DataKind, field_name: str, value: Any) -> int:
        kind = DataKind.parse(kind)
        condition, params = self._field_condition(kind, field_name, value)
        return self.pool.execute(
            sql.SQL("DELETE FROM {table} WHERE {condition}").format(table=_table(kind), condition=condition),
            params,
        )

    def count(self, kind: DataKind) -> int:
        rows = self.pool.fetch_all(
            sql.SQL("SELECT COUNT(*) AS n FROM {table}").format(table=_table(kind))
        )
        return rows[0]["n"]

    # =======================
    # IMPORT BATCHES
    # =======================

    def add_batch(self, batch: ImportBatch) -> int:
        rows = self.pool.fetch_all(
            f"""
            INSERT INTO {BATCH_TABLE} (file_name, data_type, record_count, imported_at)
            VALUES (%(file_name)s, %(data_type)s, %(record_count)s, %(imported_at)s)
            RETURNING id
            """,
            {
                "file_name": batch.file_name,
                "data_type": batch.data_type.value,
                "record_count": batch.record_count,
                "imported_at": batch.imported_at,
            },
        )
        return rows[0]["id"]

    def get_batch(self, batch_id: int) -> ImportBatch:
        rows = self.pool.fetch_all(f"SELECT * FROM {BATCH_TABLE} WHERE id = %s", (batch_id,))
        if not rows:
            raise BatchNotFoundError(batch_id)
        return ImportBatch.model_validate(rows[0])

    def batches_for(self, kind: DataKind) -> list[ImportBatch]:
        rows = self.pool.fetch_all(
            f"SELECT * FROM {BATCH_TABLE} WHERE data_type = %s ORDER BY imported_at DESC, id DESC",
            (DataKind.parse(kind).value,),
        )
        return [ImportBatch.model_validate(row) for row in rows]

    def delete_batch_record(self, batch_id: int) -> None:
        deleted = self.pool.execute(f"DELETE FROM {BATCH_TABLE} WHERE id = %s", (batch_id,))
        if deleted == 0:
            raise BatchNotFoundError(batch_id)
