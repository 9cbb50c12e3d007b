"""
Caller-side input validation.
"""

from .validation import (
    ALLOWED_UPLOAD_EXTENSIONS,
    InputValidationError,
    validate_record_id,
    validate_upload_name,
    validate_upload_path,
)

__all__ = [
    "ALLOWED_UPLOAD_EXTENSIONS",
    "InputValidationError",
    "validate_record_id",
    "validate_upload_name",
    "validate_upload_path",
]
