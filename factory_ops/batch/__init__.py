"""
File import: decoding, validation, batch writes and sample files.
"""

from .pipeline import ImportOutcome, ImportPipeline, parse_file, parse_rows
from .readers import FileDecodeError, FileReader
from .samples import generate_sample, sample_file_name

__all__ = [
    "FileDecodeError",
    "FileReader",
    "ImportOutcome",
    "ImportPipeline",
    "generate_sample",
    "parse_file",
    "parse_rows",
    "sample_file_name",
]
