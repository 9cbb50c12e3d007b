"""
Core data models for factory-ops.

All models use Pydantic for runtime validation and type safety.
"""

from .base_record import FactoryRecord
from .data_kind import DataKind
from .import_batch import ImportBatch
from .insights import Anomaly, Forecast, Insights, Recommendation
from .inventory_item import InventoryItem
from .parse_result import ParseResult
from .production_record import ProductionRecord
from .sale_record import SaleRecord
from .worker_record import WorkerRecord

# Single dispatch table from data kind to record model
RECORD_MODELS: dict[DataKind, type[FactoryRecord]] = {
    DataKind.PRODUCTION: ProductionRecord,
    DataKind.INVENTORY: InventoryItem,
    DataKind.SALES: SaleRecord,
    DataKind.WORKERS: WorkerRecord,
}


def record_model(kind: DataKind | str) -> type[FactoryRecord]:
    return RECORD_MODELS[DataKind.parse(kind)]


__all__ = [
    "Anomaly",
    "DataKind",
    "FactoryRecord",
    "Forecast",
    "ImportBatch",
    "Insights",
    "InventoryItem",
    "ParseResult",
    "ProductionRecord",
    "RECORD_MODELS",
    "Recommendation",
    "SaleRecord",
    "WorkerRecord",
    "record_model",
]
