"""
RequiredFieldValidator - ensures a row field is present and not blank.
"""

import math
from typing import Any, Mapping

from .base_validator import BaseValidator, ValidationError


def is_blank(value: Any) -> bool:
    """
    True for values that count as missing in an uploaded row.

    None, NaN (empty spreadsheet cells) and whitespace-only strings are
    blank; numeric zero and False are real values.
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is present and not blank.

    Fails if:
    - Field is missing from the row
    - Field value is None or NaN
    - Field value is a whitespace-only string
    """

    def validate(self, value: Any, row: Mapping[str, Any]) -> None:
        if self.field_name not in row:
            raise ValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message="Field is missing from row",
            )

        if is_blank(value):
            raise ValidationError(
                rule_name="required_field",
                field_name=self.field_name,
                message="Field value is empty",
            )

    @property
    def rule_type(self) -> str:
        return "required_field"
