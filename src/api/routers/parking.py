from fastapi import APIRouter, Depends, HTTPException, Request

from src.application.services.slot_registry import SlotRegistry
from src.domain.common import RegistryError
from src.domain.results import OperationResult
from src.domain.validation import validate_vehicle_data
from src.infrastructure.api.schemas.parking import (
    SlotResponse, SlotListResponse, SelectionResponse, BookingRequest,
    TicketResponse, ExitResponse, SlotStats, DefaultEntryTime
)

# Handlers stay async so every registry call runs on the event loop thread, one at a time
router = APIRouter(prefix="/api/parking", tags=["parking"])

ERROR_STATUS_CODES = {
    RegistryError.NOT_FOUND: 404,
    RegistryError.UNAVAILABLE: 409,
    RegistryError.STALE_SELECTION: 409,
    RegistryError.NOT_OCCUPIED: 409,
    RegistryError.VALIDATION_FAILED: 422,
}

ERROR_MESSAGES = {
    RegistryError.NOT_FOUND: "Slot {slot_id} does not exist",
    RegistryError.UNAVAILABLE: "Slot {slot_id} is occupied",
    RegistryError.STALE_SELECTION: "Slot {slot_id} is no longer available. Please select another slot.",
    RegistryError.NOT_OCCUPIED: "Slot {slot_id} is not occupied",
}


def get_registry(request: Request) -> SlotRegistry:
    return request.app.state.registry


def raise_for_error(result: OperationResult, slot_id: int):
    if result.ok:
        return
    raise HTTPException(
        status_code=ERROR_STATUS_CODES[result.error],
        detail={"error": result.error.value, "message": ERROR_MESSAGES[result.error].format(slot_id=slot_id)},
    )


@router.get("/slots", response_model=SlotListResponse)
async def list_slots(registry: SlotRegistry = Depends(get_registry)):
    return SlotListResponse(
        slots=[SlotResponse.model_validate(slot) for slot in registry.slots],
        selected_slot_id=registry.selected_slot_id,
    )


@router.get("/slots/{slot_id}", response_model=SlotResponse)
async def get_slot_details(slot_id: int, registry: SlotRegistry = Depends(get_registry)):
    result = registry.slot_details(slot_id)
    raise_for_error(result, slot_id)
    return SlotResponse.model_validate(result.slot)


@router.post("/slots/{slot_id}/select", response_model=SelectionResponse)
async def select_slot(slot_id: int, registry: SlotRegistry = Depends(get_registry)):
    result = registry.select(slot_id)
    raise_for_error(result, slot_id)
    return SelectionResponse(
        slot_id=slot_id, change=result.change, selected_slot_id=registry.selected_slot_id
    )


@router.delete("/selection", status_code=204)
async def clear_selection(registry: SlotRegistry = Depends(get_registry)):
    registry.clear_selection()


@router.post("/slots/{slot_id}/book", response_model=TicketResponse)
async def book_slot(
    slot_id: int,
    booking: BookingRequest,
    registry: SlotRegistry = Depends(get_registry)
):
    vehicle = booking.to_vehicle_data()
    errors = validate_vehicle_data(vehicle)
    if errors:
        raise HTTPException(
            status_code=ERROR_STATUS_CODES[RegistryError.VALIDATION_FAILED],
            detail={
                "error": RegistryError.VALIDATION_FAILED.value,
                "fields": {field.value: message for field, message in errors.items()},
            },
        )

    result = registry.book(slot_id, vehicle)
    raise_for_error(result, slot_id)
    return TicketResponse.model_validate(result.ticket)


@router.post("/slots/{slot_id}/exit", response_model=ExitResponse)
async def exit_vehicle(slot_id: int, registry: SlotRegistry = Depends(get_registry)):
    result = registry.exit(slot_id)
    raise_for_error(result, slot_id)
    return ExitResponse(
        slot_id=slot_id,
        vehicle_number=result.vehicle_number,
        duration_minutes=result.duration_minutes,
        anomaly=result.anomaly,
    )


@router.get("/stats", response_model=SlotStats)
async def get_stats(registry: SlotRegistry = Depends(get_registry)):
    return registry.stats()


@router.get("/entry-time/default", response_model=DefaultEntryTime)
async def get_default_entry_time(registry: SlotRegistry = Depends(get_registry)):
    return DefaultEntryTime(entry_time=registry.default_entry_time())
