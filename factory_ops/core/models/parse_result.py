"""
ParseResult model: the outcome of validating one uploaded file (ephemeral).
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from .base_record import FactoryRecord

RecordT = TypeVar("RecordT", bound=FactoryRecord)


class ParseResult(BaseModel, Generic[RecordT]):
    """
    Typed records plus the messages collected while validating rows.

    Note: ParseResult is ephemeral and never persisted. Messages keep the
    order in which rows were read, so truncated displays show the first
    problems found.

    Attributes:
        records: Rows that passed validation, converted to records
        errors: One message per rejected row (or one per undecodable file)
        warnings: Soft-rule messages for rows that were still accepted
    """

    records: list[RecordT] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @staticmethod
    def truncate(messages: list[str], limit: int) -> list[str]:
        """First `limit` messages, followed by "...and N more" when some were cut."""
        if len(messages) <= limit:
            return list(messages)
        return messages[:limit] + [f"...and {len(messages) - limit} more"]

    def summarize(self, error_limit: int = 5, warning_limit: int = 3) -> dict[str, Any]:
        return {
            "records": len(self.records),
            "errors": self.truncate(self.errors, error_limit),
            "warnings": self.truncate(self.warnings, warning_limit),
        }
