"""Battery parameter checks shared by both calculators."""

from __future__ import annotations

from ..models.data_models import ValidationError, ValidationErrorKind

MSG_INVALID_BATTERY_SIZE = "Please enter a valid battery size"
MSG_NEGATIVE_CURRENT_LEVEL = "Current battery level cannot be negative"


def validate_battery(
    current_level_kwh: float, capacity_kwh: float
) -> ValidationError | None:
    """Return the first validation failure, or None if the battery is usable.

    Capacity is checked before the current level.
    """
    if capacity_kwh <= 0:
        return ValidationError(
            ValidationErrorKind.INVALID_BATTERY_SIZE, MSG_INVALID_BATTERY_SIZE
        )
    if current_level_kwh < 0:
        return ValidationError(
            ValidationErrorKind.NEGATIVE_CURRENT_LEVEL, MSG_NEGATIVE_CURRENT_LEVEL
        )
    return None
