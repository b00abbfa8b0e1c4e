from typing import Optional

from src.domain.common import RegistryError, SelectionChange, DurationAnomaly
from src.domain.entities import Slot, Ticket


class OperationResult:
    """Outcome of a registry operation. ``error`` is None on success."""

    def __init__(self, error: Optional[RegistryError] = None):
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None


class SelectResult(OperationResult):
    def __init__(
        self, slot_id: int, change: Optional[SelectionChange] = None, error: Optional[RegistryError] = None
    ):
        super().__init__(error)
        self.slot_id = slot_id
        self.change = change


class BookResult(OperationResult):
    def __init__(
        self, slot_id: int, slot: Optional[Slot] = None, ticket: Optional[Ticket] = None, error: Optional[RegistryError] = None
    ):
        super().__init__(error)
        self.slot_id = slot_id
        self.slot = slot
        self.ticket = ticket


class ExitResult(OperationResult):
    def __init__(
        self,
        slot_id: int,
        vehicle_number: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        anomaly: Optional[DurationAnomaly] = None,
        error: Optional[RegistryError] = None,
    ):
        super().__init__(error)
        self.slot_id = slot_id
        self.vehicle_number = vehicle_number
        self.duration_minutes = duration_minutes
        self.anomaly = anomaly


class SlotDetailsResult(OperationResult):
    def __init__(self, slot_id: int, slot: Optional[Slot] = None, error: Optional[RegistryError] = None):
        super().__init__(error)
        self.slot_id = slot_id
        self.slot = slot
