import re
from enum import Enum
from typing import Callable, Dict

from src.domain.entities import VehicleData

VEHICLE_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9\- ]{3,15}$")
OWNER_NAME_MIN_LENGTH = 2


class FieldName(str, Enum):
    VEHICLE_NUMBER = "vehicleNumber"
    OWNER_NAME = "ownerName"
    VEHICLE_TYPE = "vehicleType"


class ValidationResult:
    def __init__(self, valid: bool, message: str = ""):
        self.valid = valid
        self.message = message

    def __repr__(self):
        return f"<ValidationResult valid={self.valid} message={self.message!r}>"


def validate_vehicle_number(value: str) -> ValidationResult:
    value = (value or "").strip()
    if not value:
        return ValidationResult(False, "Vehicle number is required")
    if not VEHICLE_NUMBER_PATTERN.match(value):
        return ValidationResult(False, "Invalid vehicle number format")
    return ValidationResult(True)


def validate_owner_name(value: str) -> ValidationResult:
    value = (value or "").strip()
    if not value:
        return ValidationResult(False, "Owner name is required")
    if len(value) < OWNER_NAME_MIN_LENGTH:
        return ValidationResult(False, f"Name must be at least {OWNER_NAME_MIN_LENGTH} characters")
    return ValidationResult(True)


def validate_vehicle_type(value: str) -> ValidationResult:
    if not value:
        return ValidationResult(False, "Please select a vehicle type")
    return ValidationResult(True)


FIELD_VALIDATORS: Dict[FieldName, Callable[[str], ValidationResult]] = {
    FieldName.VEHICLE_NUMBER: validate_vehicle_number,
    FieldName.OWNER_NAME: validate_owner_name,
    FieldName.VEHICLE_TYPE: validate_vehicle_type,
}


def validate(field: FieldName, value: str) -> ValidationResult:
    return FIELD_VALIDATORS[FieldName(field)](value)


def validate_vehicle_data(data: VehicleData) -> Dict[FieldName, str]:
    """Run every field validator and return the messages of the failing fields."""
    values = {
        FieldName.VEHICLE_NUMBER: data.vehicle_number,
        FieldName.OWNER_NAME: data.owner_name,
        FieldName.VEHICLE_TYPE: data.vehicle_type,
    }
    errors = {}
    for field, value in values.items():
        result = validate(field, value)
        if not result.valid:
            errors[field] = result.message
    return errors
