"""
ImportBatch model grouping the records created from one uploaded file.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .data_kind import DataKind


class ImportBatch(BaseModel):
    """
    One uploaded file's worth of records, deletable as a unit.

    Records point at their batch through import_batch_id; the batch never
    holds its records.

    Attributes:
        id: Assigned by the store on insert
        file_name: Name of the uploaded file
        data_type: Collection the records were written to
        record_count: Number of records written
        imported_at: When the import completed
    """

    id: int | None = None
    file_name: str = Field(..., min_length=1)
    data_type: DataKind
    record_count: int = Field(..., ge=0)
    imported_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": 3,
                "fileName": "production-october.csv",
                "dataType": "production",
                "recordCount": 42,
                "importedAt": "2025-10-31T17:02:11Z",
            }
        }

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})
