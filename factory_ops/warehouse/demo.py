"""
Demo data for an empty store.

Fills the production, sales, workers and inventory collections with a
month of plausible shutter-factory activity so KPIs and insights have
something to show before the first real import. Seeded records belong to
no import batch.
"""

import random
from datetime import date, datetime, timedelta, timezone

from factory_ops.core.models import DataKind, InventoryItem, ProductionRecord, SaleRecord, WorkerRecord
from factory_ops.observability import get_logger

from .store import CollectionStore

logger = get_logger(__name__)

# Product type -> daily target
PRODUCT_TARGETS = {
    "Standard Shutter": 200,
    "Premium Shutter": 150,
    "Custom Shutter": 200,
}

CUSTOMERS = ["Nile Builders", "Cairo Construction", "Delta Projects", "Pyramid Developments", "Sphinx Properties"]

WORKER_NAMES = ["Mohamed Ali", "Ahmed Hassan", "Fatima Nasser", "Omar Khaled", "Sarah Ibrahim"]

SHIFTS = ("morning", "afternoon", "night")

WORKERS_PER_SHIFT = 3

# (item name, stock, minimum, unit)
STOCK_LEVELS = [
    ("Aluminum Sheets", 1200, 500, "kg"),
    ("Paint", 350, 200, "L"),
    ("Screws & Fasteners", 450, 100, "kg"),
    ("Packaging Material", 280, 150, "kg"),
    ("Lubricants", 95, 50, "L"),
]


def generate_production(day: date, rng: random.Random) -> list[ProductionRecord]:
    """One record per product type, between 85% and 105% of target."""
    records = []
    for product_type, target in PRODUCT_TARGETS.items():
        records.append(ProductionRecord(
            date=day,
            product_type=product_type,
            quantity=int(target * (0.85 + rng.random() * 0.2)),
            target=target,
            waste_kg=rng.randint(5, 14),
        ))
    return records


def generate_sales(day: date, rng: random.Random) -> list[SaleRecord]:
    """Each product type sells on roughly 70% of days; most sales are delivered."""
    sales = []
    for product_type in PRODUCT_TARGETS:
        if rng.random() <= 0.3:
            continue
        sales.append(SaleRecord(
            date=day,
            customer=rng.choice(CUSTOMERS),
            product_type=product_type,
            amount=rng.randint(10, 39),
            revenue=rng.randint(10000, 29999),
            delivered=rng.random() > 0.2,
        ))
    return sales


def generate_workers(day: date, rng: random.Random) -> list[WorkerRecord]:
    return [
        WorkerRecord(date=day, name=rng.choice(WORKER_NAMES), shift=shift, tasks_done=rng.randint(10, 24))
        for shift in SHIFTS
        for _ in range(WORKERS_PER_SHIFT)
    ]


def generate_inventory(counted_at: datetime) -> list[InventoryItem]:
    return [
        InventoryItem(item_name=name, stock_kg=stock, min_stock_kg=minimum, unit=unit, last_updated=counted_at)
        for name, stock, minimum, unit in STOCK_LEVELS
    ]


def seed_demo_data(
    store: CollectionStore,
    days: int = 30,
    seed: int | None = None,
    today: date | None = None,
) -> dict[DataKind, int]:
    """
    Populate an empty store with `days` days of demo activity ending today.

    Nothing is written when the production collection already has records.

    Args:
        store: Target store
        days: Number of consecutive days to generate
        seed: Random seed; the same seed and day give the same data
        today: Last generated day (default: current UTC date)

    Returns:
        Number of records added per data kind (empty when nothing was seeded)
    """
    if days < 1:
        raise ValueError(f"days must be at least 1, got {days}")

    if store.count(DataKind.PRODUCTION) > 0:
        logger.info("Store already has production data; demo data not added")
        return {}

    rng = random.Random(seed)
    today = today or datetime.now(timezone.utc).date()

    production, sales, workers = [], [], []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        production.extend(generate_production(day, rng))
        sales.extend(generate_sales(day, rng))
        workers.extend(generate_workers(day, rng))
    inventory = generate_inventory(datetime.now(timezone.utc))

    added = {}
    for kind, records in (
        (DataKind.PRODUCTION, production),
        (DataKind.SALES, sales),
        (DataKind.WORKERS, workers),
        (DataKind.INVENTORY, inventory),
    ):
        added[kind] = len(store.bulk_add(kind, records))

    logger.info(
        "Demo data initialized",
        extra={"days": days, **{kind.value: n for kind, n in added.items()}},
    )
    return added
