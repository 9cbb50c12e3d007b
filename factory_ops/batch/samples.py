"""
Canonical sample files, one per data kind.

Users download these to see the expected columns; each parses without
errors.
"""

from factory_ops.core.models import DataKind

SAMPLE_TEMPLATES: dict[DataKind, str] = {
    DataKind.PRODUCTION: (
        "date,productType,quantity,target,wasteKg,orderId\n"
        "2025-10-01,Standard Shutter,180,200,7.5,\n"
        "2025-10-02,Premium Shutter,95,100,3.2,"
    ),
    DataKind.INVENTORY: (
        "itemName,stockKg,minStockKg,unit,lastUpdated\n"
        "Aluminum Sheets,1200,500,kg,2025-10-01T08:00:00Z\n"
        "Paint,150,100,L,2025-10-01T08:00:00Z"
    ),
    DataKind.SALES: (
        "date,customer,productType,amount,revenue,delivered\n"
        "2025-10-01,ABC Corp,Standard Shutter,50,6000,true\n"
        "2025-10-02,XYZ Ltd,Premium Shutter,30,4500,false"
    ),
    DataKind.WORKERS: (
        "date,name,shift,tasksDone\n"
        "2025-10-01,John Doe,morning,15\n"
        "2025-10-01,Jane Smith,afternoon,18"
    ),
}


def generate_sample(kind: DataKind | str) -> str:
    """Sample CSV text (header plus example rows) for a data kind."""
    return SAMPLE_TEMPLATES[DataKind.parse(kind)]


def sample_file_name(kind: DataKind | str) -> str:
    return f"{DataKind.parse(kind).value}-sample.csv"
