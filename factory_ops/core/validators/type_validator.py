"""
NumberValidator - a required numeric field must parse as a number.
"""

from typing import Any, Mapping

from .base_validator import BaseValidator, ValidationError
from .coercion import CoercionError, parse_number


class NumberValidator(BaseValidator):
    """
    Validates that a field parses as a finite number.

    Parameters:
    - min: Minimum accepted value (inclusive), optional
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.min_value = self.parameters.get("min")

    def validate(self, value: Any, row: Mapping[str, Any]) -> None:
        try:
            number = parse_number(value)
        except CoercionError as e:
            raise ValidationError(
                rule_name="number",
                field_name=self.field_name,
                message=str(e),
            ) from e

        if self.min_value is not None and number < self.min_value:
            raise ValidationError(
                rule_name="number",
                field_name=self.field_name,
                message=f"Value {number} is less than minimum {self.min_value}",
            )

    @property
    def rule_type(self) -> str:
        return "number"
