"""
Reader exceptions.
"""


class FileDecodeError(Exception):
    """Raised when a file cannot be decoded as a header + rows table."""
