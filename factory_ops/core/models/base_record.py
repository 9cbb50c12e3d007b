"""
Common configuration shared by all stored record models.
"""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator
from pydantic.alias_generators import to_camel

from factory_ops.core.validators.coercion import to_iso_instant

# Dates are always stored as UTC instants: 2025-10-01T00:00:00.000Z
IsoInstant = Annotated[str, BeforeValidator(to_iso_instant)]


class FactoryRecord(BaseModel):
    """
    Base for records kept in the collection store.

    Attribute names are snake_case; the camelCase names used in uploaded
    files (productType, wasteKg, ...) are the aliases, and both spellings are
    accepted on input.

    Attributes:
        id: Assigned by the store on insert, absent until persisted
        import_batch_id: Batch the record was imported with (lookup only)
    """

    id: int | None = None
    import_batch_id: int | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        validate_assignment = True

    def to_payload(self) -> dict:
        """Serialize to the camelCase mapping stored by the warehouse, without the id."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})
