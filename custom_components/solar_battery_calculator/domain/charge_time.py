"""Pure charge time logic.

Works out how long the battery takes to fill from the current solar
generation and when it will be full. No Home Assistant dependencies.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from ..models.data_models import (
    BatteryParameters,
    ChargeInput,
    ChargeResult,
    ChargeState,
    StatusLevel,
    ValidationError,
)
from .validation import validate_battery

MSG_ALREADY_FULL = "Battery is already full!"
MSG_NO_GENERATION = "No solar generation - battery will not charge"
MSG_TOO_SLOW = "Solar generation too low - battery will not fill"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


class ChargeTimeEngine:
    """Charging time calculator."""

    @staticmethod
    def compute(
        params: BatteryParameters,
        charge_input: ChargeInput,
        now: datetime,
    ) -> ChargeResult | ValidationError:
        """Dataclass form of compute_charge_time."""
        return ChargeTimeEngine.compute_charge_time(
            params.current_level_kwh,
            params.capacity_kwh,
            charge_input.solar_generation_kw,
            now,
        )

    @staticmethod
    def compute_charge_time(
        current_level_kwh: float,
        capacity_kwh: float,
        solar_rate_kw: float,
        now: datetime,
    ) -> ChargeResult | ValidationError:
        """Calculate the time until the battery is full.

        Order of checks (first match wins):
        1. Invalid battery size / negative level -> ValidationError
        2. Level at or above capacity -> full
        3. No generation -> not charging, infinite time
        4. Otherwise remaining capacity / generation

        A time too long to represent counts as not charging, and a
        completion time past the end of the calendar is left out.

        Args:
            current_level_kwh: Energy currently stored
            capacity_kwh: Battery capacity
            solar_rate_kw: Current solar generation
            now: Reference time for the completion timestamp

        Returns:
            ChargeResult, or ValidationError for unusable battery parameters
        """
        error = validate_battery(current_level_kwh, capacity_kwh)
        if error is not None:
            return error

        if current_level_kwh >= capacity_kwh:
            return ChargeTimeEngine._full()

        remaining = capacity_kwh - current_level_kwh
        if solar_rate_kw <= 0:
            return ChargeTimeEngine._never(remaining, MSG_NO_GENERATION)

        if remaining <= 0:
            return ChargeTimeEngine._full()

        hours_to_full = remaining / solar_rate_kw
        if not math.isfinite(hours_to_full * 60):
            return ChargeTimeEngine._never(remaining, MSG_TOO_SLOW)

        try:
            completion_time = now + timedelta(hours=hours_to_full)
        except OverflowError:
            completion_time = None

        return ChargeResult(
            state=ChargeState.CHARGING,
            hours_to_full=hours_to_full,
            minutes_to_full=round_half_up(hours_to_full * 60),
            completion_time=completion_time,
            remaining_capacity_kwh=remaining,
            message=f"{remaining:.2f} kWh remaining to charge",
            level=StatusLevel.INFO,
        )

    @staticmethod
    def _never(remaining: float, message: str) -> ChargeResult:
        return ChargeResult(
            state=ChargeState.NOT_CHARGING,
            hours_to_full=math.inf,
            minutes_to_full=math.inf,
            completion_time=None,
            remaining_capacity_kwh=remaining,
            message=message,
            level=StatusLevel.WARNING,
        )

    @staticmethod
    def _full() -> ChargeResult:
        return ChargeResult(
            state=ChargeState.FULL,
            hours_to_full=0.0,
            minutes_to_full=0,
            completion_time=None,
            remaining_capacity_kwh=0.0,
            message=MSG_ALREADY_FULL,
            level=StatusLevel.SUCCESS,
        )
