from typing import Optional

from src.domain.common import SlotStatus


class VehicleData:
    def __init__(
        self, vehicle_number: str, owner_name: str, vehicle_type: str, entry_time: Optional[str] = None
    ):
        self.vehicle_number = vehicle_number
        self.owner_name = owner_name
        self.vehicle_type = vehicle_type
        self.entry_time = entry_time


class Slot:
    def __init__(
        self,
        id: int,
        status: SlotStatus = SlotStatus.AVAILABLE,
        vehicle_number: str = "",
        owner_name: str = "",
        vehicle_type: str = "",
        entry_time: str = "",
    ):
        self.id = id
        self.status = status
        self.vehicle_number = vehicle_number
        self.owner_name = owner_name
        self.vehicle_type = vehicle_type
        self.entry_time = entry_time

    @property
    def is_occupied(self) -> bool:
        return self.status == SlotStatus.OCCUPIED

    def occupy(self, vehicle: VehicleData, entry_time: str):
        self.status = SlotStatus.OCCUPIED
        self.vehicle_number = vehicle.vehicle_number
        self.owner_name = vehicle.owner_name
        self.vehicle_type = vehicle.vehicle_type
        self.entry_time = entry_time

    def vacate(self):
        self.status = SlotStatus.AVAILABLE
        self.vehicle_number = ""
        self.owner_name = ""
        self.vehicle_type = ""
        self.entry_time = ""

    def copy(self) -> "Slot":
        return Slot(
            id=self.id,
            status=self.status,
            vehicle_number=self.vehicle_number,
            owner_name=self.owner_name,
            vehicle_type=self.vehicle_type,
            entry_time=self.entry_time,
        )

    def __repr__(self):
        return f"<Slot {self.id}: {self.status.value}>"


class Ticket:
    def __init__(self, slot_id: int, vehicle_number: str, owner_name: str, vehicle_type: str, entry_time: str):
        self.slot_id = slot_id
        self.vehicle_number = vehicle_number
        self.owner_name = owner_name
        self.vehicle_type = vehicle_type
        self.entry_time = entry_time

    @classmethod
    def from_slot(cls, slot: Slot) -> "Ticket":
        return cls(
            slot_id=slot.id,
            vehicle_number=slot.vehicle_number,
            owner_name=slot.owner_name,
            vehicle_type=slot.vehicle_type,
            entry_time=slot.entry_time,
        )
