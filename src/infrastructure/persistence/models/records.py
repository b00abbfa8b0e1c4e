from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, model_validator

from src.domain.common import SlotStatus
from src.domain.entities import Slot


class SlotRecord(BaseModel):
    """Persisted shape of one slot, keyed the way the browser build stored it."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    id: StrictInt = Field(..., ge=1)
    status: SlotStatus
    vehicle_number: str = Field(..., alias="vehicleNumber")
    owner_name: str = Field(..., alias="ownerName")
    vehicle_type: str = Field(..., alias="vehicleType")
    entry_time: str = Field(..., alias="entryTime")

    @model_validator(mode="after")
    def check_vehicle_fields(self):
        vehicle_fields = [self.vehicle_number, self.owner_name, self.vehicle_type]
        if self.status == SlotStatus.OCCUPIED:
            if not all(vehicle_fields):
                raise ValueError(f"occupied slot {self.id} is missing vehicle details")
        elif any(vehicle_fields) or self.entry_time:
            raise ValueError(f"{self.status.value} slot {self.id} carries vehicle details")
        return self

    @classmethod
    def from_slot(cls, slot: Slot) -> "SlotRecord":
        return cls(
            id=slot.id,
            status=slot.status,
            vehicle_number=slot.vehicle_number,
            owner_name=slot.owner_name,
            vehicle_type=slot.vehicle_type,
            entry_time=slot.entry_time,
        )

    def to_slot(self) -> Slot:
        return Slot(
            id=self.id,
            status=self.status,
            vehicle_number=self.vehicle_number,
            owner_name=self.owner_name,
            vehicle_type=self.vehicle_type,
            entry_time=self.entry_time,
        )


SlotSnapshot = TypeAdapter(List[SlotRecord])
