from enum import Enum


class SlotStatus(str, Enum):
    AVAILABLE = "available"
    SELECTED = "selected"
    OCCUPIED = "occupied"


class RegistryError(str, Enum):
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"
    STALE_SELECTION = "stale_selection"
    NOT_OCCUPIED = "not_occupied"
    VALIDATION_FAILED = "validation_failed"


class SelectionChange(str, Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"


class DurationAnomaly(str, Enum):
    FUTURE_ENTRY = "future_entry"
    UNPARSEABLE_ENTRY = "unparseable_entry"
