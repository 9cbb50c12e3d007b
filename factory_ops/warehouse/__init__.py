"""
Record storage: the collection store contract, its in-memory and
PostgreSQL implementations, and inline record editing.
"""

from .demo import seed_demo_data
from .editing import RecordEditor
from .store import (
    BatchNotFoundError,
    CollectionStore,
    InMemoryCollectionStore,
    RecordNotFoundError,
)

__all__ = [
    "BatchNotFoundError",
    "CollectionStore",
    "InMemoryCollectionStore",
    "RecordEditor",
    "RecordNotFoundError",
    "seed_demo_data",
]
