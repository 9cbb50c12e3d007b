"""
Field rules and value coercion for uploaded rows.
"""

from .base_validator import BaseValidator, ValidationError
from .coercion import (
    CoercionError,
    format_instant,
    now_instant,
    parse_number,
    to_delivered,
    to_float,
    to_int,
    to_iso_instant,
)
from .required_field_validator import RequiredFieldValidator, is_blank
from .type_validator import NumberValidator

__all__ = [
    "BaseValidator",
    "CoercionError",
    "NumberValidator",
    "RequiredFieldValidator",
    "ValidationError",
    "format_instant",
    "is_blank",
    "now_instant",
    "parse_number",
    "to_delivered",
    "to_float",
    "to_int",
    "to_iso_instant",
]
