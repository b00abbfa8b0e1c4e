import math
from datetime import datetime
from typing import Dict, List, Optional

from loguru import logger

from src.application.repositories import AbstractSlotRepository
from src.domain.common import SlotStatus, RegistryError, SelectionChange, DurationAnomaly
from src.domain.entities import Slot, Ticket, VehicleData
from src.domain.results import SelectResult, BookResult, ExitResult, SlotDetailsResult
from src.shared.clock import AbstractClock, SystemClock, format_entry_time

DEFAULT_TOTAL_SLOTS = 20


class SlotRegistry:
    """
    Owns the fixed, ordered set of parking slots and every transition between
    their states: available -> selected -> occupied -> available, plus
    selected -> available when a selection is dropped.

    Selection lives in memory only. Bookings and exits are written through to
    the repository as a full snapshot.
    """

    def __init__(
        self,
        slot_repo: AbstractSlotRepository,
        clock: Optional[AbstractClock] = None,
        total_slots: int = DEFAULT_TOTAL_SLOTS,
    ):
        if total_slots < 1:
            raise ValueError(f"total_slots must be positive, got {total_slots}")

        self.slot_repo = slot_repo
        self.clock = clock or SystemClock()
        self.total_slots = total_slots
        self.selected_slot_id: Optional[int] = None
        self._slots: List[Slot] = self._restore_or_create()

    def _restore_or_create(self) -> List[Slot]:
        stored = self.slot_repo.load()
        if stored is not None:
            expected_ids = list(range(1, self.total_slots + 1))
            if [slot.id for slot in stored] == expected_ids:
                for slot in stored:
                    # Selection never survives a reload
                    if slot.status == SlotStatus.SELECTED:
                        slot.status = SlotStatus.AVAILABLE
                logger.info(f"Restored {len(stored)} parking slots from storage")
                return stored
            logger.warning(
                f"Stored snapshot has {len(stored)} slots, expected ids 1..{self.total_slots}; starting fresh"
            )

        logger.info(f"Initialized {self.total_slots} available parking slots")
        return [Slot(id=slot_id) for slot_id in range(1, self.total_slots + 1)]

    @property
    def slots(self) -> List[Slot]:
        return [slot.copy() for slot in self._slots]

    def _find(self, slot_id: int) -> Optional[Slot]:
        if 1 <= slot_id <= len(self._slots):
            return self._slots[slot_id - 1]
        return None

    def get_slot(self, slot_id: int) -> Optional[Slot]:
        slot = self._find(slot_id)
        return slot.copy() if slot else None

    def _persist(self):
        self.slot_repo.save(self._slots)

    def select(self, slot_id: int) -> SelectResult:
        slot = self._find(slot_id)
        if not slot:
            logger.debug(f"Select ignored: slot {slot_id} does not exist")
            return SelectResult(slot_id, error=RegistryError.NOT_FOUND)

        if slot.is_occupied:
            logger.debug(f"Select ignored: slot {slot_id} is occupied")
            return SelectResult(slot_id, error=RegistryError.UNAVAILABLE)

        # Clicking the current selection again toggles it off
        if slot.status == SlotStatus.SELECTED and self.selected_slot_id == slot_id:
            slot.status = SlotStatus.AVAILABLE
            self.selected_slot_id = None
            return SelectResult(slot_id, change=SelectionChange.DESELECTED)

        for other in self._slots:
            if other.status == SlotStatus.SELECTED and other.id != slot_id:
                other.status = SlotStatus.AVAILABLE

        slot.status = SlotStatus.SELECTED
        self.selected_slot_id = slot_id
        return SelectResult(slot_id, change=SelectionChange.SELECTED)

    def clear_selection(self) -> None:
        for slot in self._slots:
            if slot.status == SlotStatus.SELECTED:
                slot.status = SlotStatus.AVAILABLE
        self.selected_slot_id = None

    def default_entry_time(self) -> str:
        return format_entry_time(self.clock.now())

    def book(self, slot_id: int, vehicle: VehicleData) -> BookResult:
        """
        Occupy a selected slot with already-validated vehicle data.

        A slot that is missing or no longer selected yields STALE_SELECTION and
        only drops the remembered selection id.
        """
        slot = self._find(slot_id)
        if not slot or slot.status != SlotStatus.SELECTED:
            logger.warning(f"Booking rejected: slot {slot_id} is no longer selected")
            self.selected_slot_id = None
            return BookResult(slot_id, error=RegistryError.STALE_SELECTION)

        entry_time = vehicle.entry_time or self.default_entry_time()
        slot.occupy(vehicle, entry_time)
        self.selected_slot_id = None
        self._persist()

        logger.info(f"Vehicle {slot.vehicle_number} booked into slot {slot_id} at {entry_time}")
        return BookResult(slot_id, slot=slot.copy(), ticket=Ticket.from_slot(slot))

    def exit(self, slot_id: int) -> ExitResult:
        slot = self._find(slot_id)
        if not slot:
            return ExitResult(slot_id, error=RegistryError.NOT_FOUND)
        if not slot.is_occupied:
            logger.debug(f"Exit ignored: slot {slot_id} is {slot.status.value}")
            return ExitResult(slot_id, error=RegistryError.NOT_OCCUPIED)

        vehicle_number = slot.vehicle_number
        entry_time = slot.entry_time
        duration_minutes, anomaly = self._parking_duration(entry_time)

        slot.vacate()
        self._persist()

        if anomaly:
            logger.warning(f"Slot {slot_id} exit has duration anomaly {anomaly.value} (entry time {entry_time!r})")
        logger.info(f"Vehicle {vehicle_number} exited slot {slot_id} after {duration_minutes} minutes")
        return ExitResult(
            slot_id, vehicle_number=vehicle_number, duration_minutes=duration_minutes, anomaly=anomaly
        )

    def _parking_duration(self, entry_time: str):
        try:
            entered = datetime.fromisoformat(entry_time)
        except (TypeError, ValueError):
            return None, DurationAnomaly.UNPARSEABLE_ENTRY

        exited = self.clock.now()
        # Compare aware to aware; naive values are taken as local time
        if entered.tzinfo is None and exited.tzinfo is not None:
            entered = entered.astimezone()
        elif entered.tzinfo is not None and exited.tzinfo is None:
            exited = exited.astimezone()

        minutes = math.floor((exited - entered).total_seconds() / 60 + 0.5)
        anomaly = DurationAnomaly.FUTURE_ENTRY if minutes < 0 else None
        return minutes, anomaly

    def slot_details(self, slot_id: int) -> SlotDetailsResult:
        slot = self._find(slot_id)
        if not slot:
            return SlotDetailsResult(slot_id, error=RegistryError.NOT_FOUND)
        if not slot.is_occupied:
            return SlotDetailsResult(slot_id, error=RegistryError.NOT_OCCUPIED)
        return SlotDetailsResult(slot_id, slot=slot.copy())

    def stats(self) -> Dict:
        available = sum(1 for s in self._slots if s.status == SlotStatus.AVAILABLE)
        occupied = sum(1 for s in self._slots if s.is_occupied)
        occupancy_rate = occupied / self.total_slots * 100

        return {
            "total": self.total_slots,
            "available": available,
            "occupied": occupied,
            "occupancy_rate": round(occupancy_rate, 2),
        }
