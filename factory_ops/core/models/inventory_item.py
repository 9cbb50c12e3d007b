"""
InventoryItem model: current stock of one raw material.
"""

from pydantic import Field

from .base_record import FactoryRecord, IsoInstant


class InventoryItem(FactoryRecord):
    """
    Stock level of one material.

    Attributes:
        item_name: Material name
        stock_kg: Quantity on hand, expressed in `unit`
        min_stock_kg: Reorder threshold, expressed in `unit`
        unit: Unit label ("kg", "L", ...)
        last_updated: ISO-8601 instant of the last stock count
    """

    item_name: str = Field(..., min_length=1)
    stock_kg: float = 0.0
    min_stock_kg: float = 0.0
    unit: str = "kg"
    last_updated: IsoInstant

    @property
    def below_minimum(self) -> bool:
        return self.stock_kg < self.min_stock_kg

    class Config:
        json_schema_extra = {
            "example": {
                "itemName": "Paint",
                "stockKg": 150,
                "minStockKg": 100,
                "unit": "L",
                "lastUpdated": "2025-10-01T08:00:00.000Z",
            }
        }
