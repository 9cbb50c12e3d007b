"""
WorkerRecord model: tasks completed by one worker on one shift.
"""

from pydantic import Field

from .base_record import FactoryRecord, IsoInstant


class WorkerRecord(FactoryRecord):
    date: IsoInstant
    name: str = Field(..., min_length=1)
    # Conventionally morning, afternoon or night; other names are stored as given
    shift: str = Field(..., min_length=1)
    tasks_done: int = 0
