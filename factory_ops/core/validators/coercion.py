"""
Value coercion for loosely typed row cells.

Cells arrive as strings (CSV) or as native spreadsheet values (float, bool,
datetime). Numeric helpers never raise: an unparseable optional number
becomes its default. Dates raise CoercionError so the caller can decide
whether the row survives.
"""

import math
from datetime import date, datetime, timezone
from typing import Any

# Accepted in addition to ISO-8601 (checked first)
ALLOWED_DATE_FORMATS = ["%Y/%m/%d", "%Y%m%d", "%m/%d/%Y"]


class CoercionError(ValueError):
    """Raised when a value cannot be converted to the requested type."""


def parse_number(value: Any) -> float:
    """
    Strict decimal parse.

    Raises:
        CoercionError: For blanks, booleans, non-numeric text and NaN/infinity
    """
    if value is None or isinstance(value, bool):
        raise CoercionError(f"Cannot parse {value!r} as a number")

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise CoercionError("Cannot parse an empty string as a number")
        try:
            number = float(text)
        except ValueError:
            raise CoercionError(f"Cannot parse '{value}' as a number") from None
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise CoercionError(f"Cannot parse {type(value).__name__} as a number") from None

    if not math.isfinite(number):
        raise CoercionError(f"Number must be finite, got {value!r}")
    return number


def to_float(value: Any, default: float = 0.0) -> float:
    try:
        return parse_number(value)
    except CoercionError:
        return default


def to_int(value: Any, default: int = 0) -> int:
    """Integer parse; decimal input truncates toward zero ("15.7" -> 15)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    try:
        return int(parse_number(value))
    except CoercionError:
        return default


def to_delivered(value: Any) -> bool:
    """Only boolean True or the exact string "true" mean delivered."""
    return value is True or value == "true"


def format_instant(moment: datetime) -> str:
    """UTC instant with millisecond precision: 2025-10-01T00:00:00.000Z"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    # %Y is not zero-padded below year 1000 on every platform
    return f"{moment.year:04d}" + moment.strftime("-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _parse_moment(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if not isinstance(value, str) or not value.strip():
        raise CoercionError(f"Cannot parse {value!r} as a date")

    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in ALLOWED_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise CoercionError(f"Cannot parse '{value}' as a date")


def to_iso_instant(value: Any) -> str:
    """
    Normalize a calendar date or date-time to a full ISO-8601 instant.

    Naive values are read as UTC.

    Raises:
        CoercionError: If the value is blank, not a recognizable date, or
            falls outside years 1-9999 once converted to UTC
    """
    moment = _parse_moment(value)
    try:
        return format_instant(moment)
    except OverflowError as e:
        raise CoercionError(f"Date '{value}' is out of range in UTC") from e


def now_instant() -> str:
    return format_instant(datetime.now(timezone.utc))
