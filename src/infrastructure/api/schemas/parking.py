from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List

from src.domain.common import SlotStatus, SelectionChange, DurationAnomaly
from src.domain.entities import VehicleData


class SlotResponse(BaseModel):
    id: int
    status: SlotStatus
    vehicle_number: str
    owner_name: str
    vehicle_type: str
    entry_time: str

    model_config = ConfigDict(from_attributes=True)


class SlotListResponse(BaseModel):
    slots: List[SlotResponse]
    selected_slot_id: Optional[int] = None


class SelectionResponse(BaseModel):
    slot_id: int
    change: SelectionChange
    selected_slot_id: Optional[int] = None


class BookingRequest(BaseModel):
    vehicle_number: str = Field(default="", max_length=50)
    owner_name: str = Field(default="", max_length=100)
    vehicle_type: str = Field(default="", max_length=50)
    entry_time: Optional[str] = None

    @field_validator('vehicle_number', 'owner_name')
    def strip_text(cls, v):  # pylint: disable=no-self-argument
        return v.strip()

    def to_vehicle_data(self) -> VehicleData:
        return VehicleData(
            vehicle_number=self.vehicle_number,
            owner_name=self.owner_name,
            vehicle_type=self.vehicle_type,
            entry_time=self.entry_time or None,
        )


class TicketResponse(BaseModel):
    slot_id: int
    vehicle_number: str
    owner_name: str
    vehicle_type: str
    entry_time: str

    model_config = ConfigDict(from_attributes=True)


class ExitResponse(BaseModel):
    slot_id: int
    vehicle_number: str
    duration_minutes: Optional[int] = None
    anomaly: Optional[DurationAnomaly] = None


class SlotStats(BaseModel):
    total: int
    available: int
    occupied: int
    occupancy_rate: float


class DefaultEntryTime(BaseModel):
    entry_time: str
