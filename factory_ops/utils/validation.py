"""
Input validation for uploads and identifiers supplied by callers.

The import pipeline itself accepts any bytes; these checks run at the
caller boundary (CLI) before a file is handed over.
"""

import os
from pathlib import Path

ALLOWED_UPLOAD_EXTENSIONS = (".csv", ".xlsx", ".xls")
DEFAULT_MAX_UPLOAD_MB = 10.0


class InputValidationError(ValueError):
    """Raised when caller input is rejected before processing."""


def max_upload_mb() -> float:
    """Upload size limit in MB (env var MAX_UPLOAD_MB, default 10)."""
    raw = os.getenv("MAX_UPLOAD_MB")
    if raw is None:
        return DEFAULT_MAX_UPLOAD_MB
    try:
        limit = float(raw)
    except ValueError:
        raise InputValidationError(f"MAX_UPLOAD_MB must be a number, got '{raw}'") from None
    if limit <= 0:
        raise InputValidationError(f"MAX_UPLOAD_MB must be positive, got {limit}")
    return limit


def validate_upload_name(file_name: str, field_name: str = "file_name") -> str:
    """
    Check that a file name carries an accepted extension.

    Examples:
        >>> validate_upload_name("october.xlsx")
        'october.xlsx'
        >>> validate_upload_name("notes.txt")  # doctest: +SKIP
        InputValidationError: Please select a CSV or Excel file (.csv, .xlsx, .xls)
    """
    if not file_name or not isinstance(file_name, str) or not file_name.strip():
        raise InputValidationError(f"{field_name} must be a non-empty string")

    file_name = file_name.strip()
    if "\x00" in file_name:
        raise InputValidationError(f"{field_name} contains null bytes")

    if Path(file_name).suffix.lower() not in ALLOWED_UPLOAD_EXTENSIONS:
        raise InputValidationError(
            f"Please select a CSV or Excel file ({', '.join(ALLOWED_UPLOAD_EXTENSIONS)})"
        )
    return file_name


def validate_upload_path(file_path: str | Path, max_size_mb: float | None = None) -> Path:
    """
    Check an upload on disk: existing regular file, allowed extension, size limit.

    Returns:
        The path as a Path

    Raises:
        InputValidationError: If any check fails
    """
    path = Path(file_path)
    validate_upload_name(path.name, field_name="file_path")

    if not path.is_file():
        raise InputValidationError(f"Input file not found: {path}")

    limit = max_size_mb if max_size_mb is not None else max_upload_mb()
    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > limit:
        raise InputValidationError(
            f"File too large ({size_mb:.1f}MB). Maximum allowed size is {limit:g}MB."
        )
    return path


def validate_record_id(record_id: int, field_name: str = "id") -> int:
    """
    Identifiers assigned by the store are positive integers.

    Examples:
        >>> validate_record_id(3)
        3
        >>> validate_record_id(0)  # doctest: +SKIP
        InputValidationError: id must be a positive integer, got 0
    """
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise InputValidationError(f"{field_name} must be an integer, got {type(record_id).__name__}")
    if record_id <= 0:
        raise InputValidationError(f"{field_name} must be a positive integer, got {record_id}")
    return record_id
