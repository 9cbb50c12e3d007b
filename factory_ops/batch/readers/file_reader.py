"""
File reader turning uploaded CSV and Excel files into raw row mappings.
"""

import io
import math
from pathlib import Path
from typing import Any

import pandas as pd

from factory_ops.observability import get_logger

from .csv_reader import CSVReader
from .errors import FileDecodeError

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xls")

Row = dict[str, Any]


def _plain_value(value: Any) -> Any:
    """Convert pandas/numpy cell values to plain Python values."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _is_empty_row(row: Row) -> bool:
    return all(value is None or (isinstance(value, str) and not value.strip()) for value in row.values())


def frame_to_rows(df: pd.DataFrame) -> list[Row]:
    """
    Convert a DataFrame to row mappings in source order.

    Header names are stripped; rows where every cell is empty are skipped.
    """
    columns = [str(column).strip() for column in df.columns]
    rows: list[Row] = []
    for values in df.itertuples(index=False, name=None):
        row = {column: _plain_value(value) for column, value in zip(columns, values)}
        if not _is_empty_row(row):
            rows.append(row)
    return rows


class FileReader:
    """
    Reads CSV and spreadsheet files into row mappings.

    The format is chosen by file extension. Spreadsheets are read from their
    first sheet with the first row as header; cells keep their native types
    (numbers, booleans, dates). CSV cells are kept as strings.
    """

    def __init__(self):
        self.csv_reader = CSVReader()

    def read_rows(self, source: str | Path | bytes, file_name: str | None = None) -> list[Row]:
        """
        Decode a file into rows.

        Args:
            source: Path to the file, or its raw bytes
            file_name: Name used to pick the format when `source` is bytes

        Returns:
            Row mappings in source order

        Raises:
            FileDecodeError: If the file cannot be read as a table
        """
        if isinstance(source, bytes):
            if not file_name:
                raise FileDecodeError("A file name is required to read raw bytes")
            contents = source
        else:
            path = Path(source)
            file_name = file_name or path.name
            try:
                contents = path.read_bytes()
            except OSError as e:
                raise FileDecodeError(f"Cannot read {path}: {e}") from e

        extension = Path(file_name).suffix.lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise FileDecodeError(
                f"Unsupported file type '{extension or file_name}'. "
                f"Expected one of: {', '.join(SUPPORTED_EXTENSIONS)}"
            )

        if extension == ".csv":
            df = self.csv_reader.read(contents)
        else:
            df = self._read_excel(contents, file_name)

        rows = frame_to_rows(df)
        logger.debug(f"Decoded {len(rows)} rows from {file_name}")
        return rows

    def _read_excel(self, contents: bytes, file_name: str) -> pd.DataFrame:
        try:
            # sheet_name=0: first sheet only
            return pd.read_excel(io.BytesIO(contents), sheet_name=0)
        except Exception as e:  # noqa: BLE001 - engines raise many unrelated types
            raise FileDecodeError(f"Cannot read spreadsheet {file_name}: {e}") from e
