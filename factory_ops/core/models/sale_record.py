"""
SaleRecord model: one sale to a customer.
"""

from pydantic import Field

from .base_record import FactoryRecord, IsoInstant


class SaleRecord(FactoryRecord):
    date: IsoInstant
    customer: str = Field(..., min_length=1)
    product_type: str = Field(..., min_length=1)
    amount: float = 0.0
    revenue: float = 0.0
    delivered: bool = False
