"""
Row schemas: how a raw row becomes a typed record for each data kind.

Each schema lists the fields a row must carry, the rule set checking them,
a builder converting the raw cells, and the soft business rules that only
produce warnings.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from factory_ops.core.models import (
    DataKind,
    FactoryRecord,
    InventoryItem,
    ProductionRecord,
    SaleRecord,
    WorkerRecord,
)
from factory_ops.core.validators import (
    is_blank,
    now_instant,
    to_delivered,
    to_float,
    to_int,
    to_iso_instant,
)
from factory_ops.core.validators.coercion import CoercionError

Row = Mapping[str, Any]


@dataclass(frozen=True)
class RowSchema:
    """
    Validation contract of one data kind.

    Attributes:
        kind: Target collection
        required_fields: Fields listed in the rejection message, in order
        rules: Rule definitions (rule_type, field_name, parameters) that must all pass
        build: Converts a row that passed the rules into a record
        warning_rules: Soft checks returning a message (without row prefix) or None
    """

    kind: DataKind
    required_fields: tuple[str, ...]
    rules: tuple[dict[str, Any], ...]
    build: Callable[[Row], FactoryRecord]
    warning_rules: tuple[Callable[[FactoryRecord], str | None], ...] = field(default_factory=tuple)

    @property
    def missing_fields_message(self) -> str:
        return f"Missing required fields ({', '.join(self.required_fields)})"


def _text(value: Any) -> str:
    return str(value).strip()


def _non_negative(value: Any) -> float:
    number = to_float(value)
    return number if number >= 0 else 0.0


def _required(*field_names: str) -> tuple[dict[str, Any], ...]:
    return tuple({"rule_type": "required_field", "field_name": name} for name in field_names)


# =======================
# PRODUCTION
# =======================

def build_production(row: Row) -> ProductionRecord:
    order_id = row.get("orderId")
    return ProductionRecord(
        date=to_iso_instant(row["date"]),
        product_type=_text(row["productType"]),
        quantity=to_float(row["quantity"]),
        target=_non_negative(row.get("target")),
        waste_kg=_non_negative(row.get("wasteKg")),
        order_id=None if is_blank(order_id) else to_int(order_id),
    )


def quantity_exceeds_target(record: ProductionRecord) -> str | None:
    if record.target > 0 and record.quantity > record.target:
        return "Quantity exceeds target"
    return None


# =======================
# INVENTORY
# =======================

def build_inventory(row: Row) -> InventoryItem:
    unit = row.get("unit")
    last_updated = row.get("lastUpdated")
    try:
        last_updated = now_instant() if is_blank(last_updated) else to_iso_instant(last_updated)
    except CoercionError:
        last_updated = now_instant()

    return InventoryItem(
        item_name=_text(row["itemName"]),
        stock_kg=to_float(row["stockKg"]),
        min_stock_kg=to_float(row.get("minStockKg")),
        unit="kg" if is_blank(unit) else _text(unit),
        last_updated=last_updated,
    )


def below_minimum_stock(record: InventoryItem) -> str | None:
    if record.below_minimum:
        return f"{record.item_name} is below minimum stock"
    return None


# =======================
# SALES
# =======================

def build_sale(row: Row) -> SaleRecord:
    return SaleRecord(
        date=to_iso_instant(row["date"]),
        customer=_text(row["customer"]),
        product_type=_text(row["productType"]),
        amount=to_float(row.get("amount")),
        revenue=to_float(row.get("revenue")),
        delivered=to_delivered(row.get("delivered")),
    )


# =======================
# WORKERS
# =======================

def build_worker(row: Row) -> WorkerRecord:
    return WorkerRecord(
        date=to_iso_instant(row["date"]),
        name=_text(row["name"]),
        shift=_text(row["shift"]),
        tasks_done=to_int(row.get("tasksDone")),
    )


ROW_SCHEMAS: dict[DataKind, RowSchema] = {
    DataKind.PRODUCTION: RowSchema(
        kind=DataKind.PRODUCTION,
        required_fields=("date", "productType", "quantity"),
        rules=_required("date", "productType", "quantity") + (
            {"rule_type": "number", "field_name": "quantity", "parameters": {"min": 0}},
        ),
        build=build_production,
        warning_rules=(quantity_exceeds_target,),
    ),
    DataKind.INVENTORY: RowSchema(
        kind=DataKind.INVENTORY,
        required_fields=("itemName", "stockKg"),
        rules=_required("itemName", "stockKg") + (
            {"rule_type": "number", "field_name": "stockKg"},
        ),
        build=build_inventory,
        warning_rules=(below_minimum_stock,),
    ),
    DataKind.SALES: RowSchema(
        kind=DataKind.SALES,
        required_fields=("date", "customer", "productType"),
        rules=_required("date", "customer", "productType"),
        build=build_sale,
    ),
    DataKind.WORKERS: RowSchema(
        kind=DataKind.WORKERS,
        required_fields=("date", "name", "shift"),
        rules=_required("date", "name", "shift"),
        build=build_worker,
    ),
}


def get_row_schema(kind: DataKind | str) -> RowSchema:
    return ROW_SCHEMAS[DataKind.parse(kind)]
