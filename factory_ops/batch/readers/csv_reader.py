"""
CSV reader using pandas, keeping every cell as text.
"""

import io

import pandas as pd

from .errors import FileDecodeError


class CSVReader:
    """
    Reads comma-delimited text with a header row.

    All values are read as strings and empty cells stay empty strings, so
    type coercion happens in one place (the row validator).
    """

    def __init__(self, delimiter: str = ",", encodings: tuple[str, ...] = ("utf-8-sig", "latin1")):
        self.delimiter = delimiter
        self.encodings = encodings

    def read(self, contents: bytes) -> pd.DataFrame:
        """
        Parse CSV bytes into a DataFrame.

        Raises:
            FileDecodeError: If the text is not a CSV table
        """
        last_error: Exception | None = None
        for encoding in self.encodings:
            try:
                return pd.read_csv(
                    io.BytesIO(contents),
                    sep=self.delimiter,
                    dtype=str,
                    keep_default_na=False,
                    skip_blank_lines=True,
                    # Trailing delimiters must not turn the first column into the index
                    index_col=False,
                    encoding=encoding,
                )
            except UnicodeDecodeError as e:
                last_error = e
                continue
            except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
                raise FileDecodeError(f"Invalid CSV: {e}") from e
        raise FileDecodeError(f"Cannot decode CSV text: {last_error}")
