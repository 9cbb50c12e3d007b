"""
Row validator: applies a data kind's row schema to every uploaded row.

Rows are processed in source order. A row failing a required-field rule is
rejected with one error; a row that builds but breaks a soft rule is kept
and reported as a warning. Nothing raised while handling a row escapes.
"""

from typing import Any, Iterable, Mapping

from pydantic import ValidationError as ModelValidationError

from factory_ops.core.models import DataKind, FactoryRecord, ParseResult
from factory_ops.core.validators import (
    BaseValidator,
    NumberValidator,
    RequiredFieldValidator,
    ValidationError,
)
from factory_ops.core.validators.coercion import CoercionError
from factory_ops.observability import get_logger

from .row_schema import RowSchema, get_row_schema

logger = get_logger(__name__)


class RowRejected(Exception):
    """A row that cannot become a record; the message is shown to the user."""


class RowValidator:
    """
    Validates and converts raw rows for one data kind.

    Rule definitions of the kind's schema are instantiated once through
    VALIDATOR_REGISTRY and applied to each row in order.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "number": NumberValidator,
    }

    def __init__(self, kind: DataKind | str):
        self.schema: RowSchema = get_row_schema(kind)
        self.kind = self.schema.kind
        self.validators: list[BaseValidator] = []
        self._build_validators()

    def _build_validators(self) -> None:
        for rule in self.schema.rules:
            validator_class = self.VALIDATOR_REGISTRY.get(rule["rule_type"])
            if not validator_class:
                raise ValueError(f"Unknown rule type: {rule['rule_type']}")
            self.validators.append(validator_class(rule["field_name"], rule.get("parameters")))

    def convert_row(self, row: Mapping[str, Any]) -> tuple[FactoryRecord, list[str]]:
        """
        Convert one row.

        Returns:
            The record and its soft-rule messages (without row prefix)

        Raises:
            RowRejected: If the row cannot become a record
        """
        for validator in self.validators:
            try:
                validator.validate(row.get(validator.field_name), row)
            except ValidationError as e:
                logger.debug(f"Row rule failed: {e}")
                raise RowRejected(self.schema.missing_fields_message) from e

        try:
            record = self.schema.build(row)
        except CoercionError as e:
            raise RowRejected(f"Invalid date '{row.get('date')}'") from e
        except ModelValidationError as e:
            raise RowRejected(f"Invalid values ({e.error_count()} field errors)") from e

        warnings = []
        for rule in self.schema.warning_rules:
            message = rule(record)
            if message:
                warnings.append(message)
        return record, warnings

    def validate_rows(self, rows: Iterable[Mapping[str, Any]]) -> ParseResult:
        """
        Validate a sequence of rows.

        Row numbers in messages are 1-indexed in input order.
        """
        result = ParseResult()

        for index, row in enumerate(rows, start=1):
            try:
                record, warnings = self.convert_row(row)
            except RowRejected as e:
                result.errors.append(f"Row {index}: {e}")
                continue

            result.records.append(record)
            result.warnings.extend(f"Row {index}: {message}" for message in warnings)

        logger.info(
            f"Validated {self.kind.value} rows: {len(result.records)} accepted, "
            f"{len(result.errors)} rejected, {len(result.warnings)} warnings",
            extra={"data_kind": self.kind.value},
        )
        return result
