"""
Readers decoding uploaded files into raw rows.
"""

from .csv_reader import CSVReader
from .errors import FileDecodeError
from .file_reader import SUPPORTED_EXTENSIONS, FileReader, frame_to_rows

__all__ = [
    "CSVReader",
    "FileDecodeError",
    "FileReader",
    "SUPPORTED_EXTENSIONS",
    "frame_to_rows",
]
