"""
DataKind enumeration naming the four record collections.
"""

from enum import Enum


class DataKind(str, Enum):
    """
    Tag identifying which collection a file, batch or record belongs to.

    The value doubles as the storage collection name.
    """

    PRODUCTION = "production"
    INVENTORY = "inventory"
    SALES = "sales"
    WORKERS = "workers"

    @classmethod
    def parse(cls, value: "str | DataKind") -> "DataKind":
        """Resolve a kind from its value, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown data kind '{value}'. Expected one of: {allowed}") from None
