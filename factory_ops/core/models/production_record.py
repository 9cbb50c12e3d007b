"""
ProductionRecord model: one production run of a product type on a date.
"""

from pydantic import Field

from .base_record import FactoryRecord, IsoInstant


class ProductionRecord(FactoryRecord):
    """
    Output of one product type on one date.

    Attributes:
        date: ISO-8601 instant
        product_type: Product name (e.g. "Standard Shutter")
        quantity: Units produced
        target: Planned units (0 when unknown)
        waste_kg: Scrap weight
        order_id: Optional customer order reference
    """

    date: IsoInstant
    product_type: str = Field(..., min_length=1)
    quantity: float = Field(0.0, ge=0)
    target: float = Field(0.0, ge=0)
    waste_kg: float = Field(0.0, ge=0)
    order_id: int | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2025-10-01T00:00:00.000Z",
                "productType": "Standard Shutter",
                "quantity": 180,
                "target": 200,
                "wasteKg": 7.5,
                "orderId": None,
            }
        }
