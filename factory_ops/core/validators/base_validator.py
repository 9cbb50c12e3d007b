"""
Field rules applied to raw rows before they are converted to records.

Each validator reads one key of the row and raises ValidationError when
the cell does not satisfy its rule.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class ValidationError(Exception):
    """A field rule failed for one cell."""

    def __init__(self, rule_name: str, field_name: str, message: str):
        super().__init__(f"{field_name} ({rule_name}): {message}")
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message


class BaseValidator(ABC):
    """
    One rule bound to one row field.

    Args:
        field_name: Row key (file column name) to check
        parameters: Rule options, e.g. {"min": 0}
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        self.field_name = field_name
        self.parameters = dict(parameters or {})

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Registry key of the rule ("required_field", "number", ...)."""

    @abstractmethod
    def validate(self, value: Any, row: Mapping[str, Any]) -> None:
        """
        Check one cell.

        Args:
            value: Cell value, None when the key is absent
            row: The whole raw row

        Raises:
            ValidationError: If the cell breaks the rule
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.rule_type} on {self.field_name!r}>"
